"""Result types for railway-oriented programming.

ACL operations that can fail (identity resolution, ACL provisioning,
permission reconciliation) return a Result instead of raising. Callers
branch on the variant with structural pattern matching.

Usage:
    result = resolve_security_identity("ROLE_ADMIN")
    match result:
        case Success(value=identity):
            manager.add_security_identity(identity)
        case Failure(error=error):
            logger.warning("identity_rejected", error=str(error))
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The produced value (None for operations with no payload).
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error describing why the operation failed.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
