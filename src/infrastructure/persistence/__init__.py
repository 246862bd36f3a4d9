"""Persistence adapters."""

from src.infrastructure.persistence.in_memory_user_repository import (
    InMemoryUserRepository,
)

__all__ = ["InMemoryUserRepository"]
