"""Route-driven multi-channel notification dispatch service."""
