"""Infrastructure adapters: OpenAI, PDF parsing, persistence, configuration."""
