"""Result types for railway-oriented programming.

Operations that can fail for expected reasons (bad credentials, invalid
session token) return a Result instead of raising. Callers branch on the
outcome with structural pattern matching.

Usage:
    result = token_service.validate_session_token(token)
    match result:
        case Success(value=claims):
            identity = build_identity(claims)
        case Failure(error=error):
            logger.info("session_token_rejected", reason=error)
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: Payload produced by the operation.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Error value (usually a string constant from src.domain.errors).
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
