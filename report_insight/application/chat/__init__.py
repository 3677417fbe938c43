"""Report chat use case."""
