"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Application settings
- Dependency container (composition root)

The core module has NO dependencies on the presentation layer.
"""

from src.core.enums import Environment
from src.core.result import Failure, Result, Success

__all__ = [
    "Environment",
    "Failure",
    "Result",
    "Success",
]
