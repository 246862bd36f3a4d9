"""ASGI-level HTTP concerns (middleware)."""
