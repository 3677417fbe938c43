"""Report use cases."""
