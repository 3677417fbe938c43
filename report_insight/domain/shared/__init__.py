"""Shared domain primitives and exceptions."""
