"""Cross-cutting concerns: configuration, logging, extensions and HTTP errors."""
