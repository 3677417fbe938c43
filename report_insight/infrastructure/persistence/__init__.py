"""Report repositories."""
