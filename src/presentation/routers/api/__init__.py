"""API support modules (dependencies, error handlers)."""
