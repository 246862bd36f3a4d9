"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from src.core.enums import Environment
"""

from src.core.enums.environment import Environment

__all__ = ["Environment"]
