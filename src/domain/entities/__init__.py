"""Domain entities (mutable, have identity)."""

from src.domain.entities.user import User

__all__ = ["User"]
