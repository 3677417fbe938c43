"""Generative text adapters."""
