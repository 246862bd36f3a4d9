"""Application-specific configuration tables.

Build-time constants (not environment settings). Environment-driven
settings live in src/core/config.py.
"""

from src.config.permissions import DEFAULT_ACCESS_POLICY

__all__ = ["DEFAULT_ACCESS_POLICY"]
