"""PDF text extraction adapters."""
