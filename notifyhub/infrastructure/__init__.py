"""Infrastructure adapters: database, templates and delivery providers."""
