"""Result types for railway-oriented programming.

Operations that can fail in expected ways (bad credentials, invalid refresh
token, duplicate identity) return a Result instead of raising. Unexpected
failures (database down, signing error) still raise.

Usage:
    result = await facade.login(request, metadata)
    match result:
        case Success(value=session):
            print(session.access_token)
        case Failure(error=error):
            print(error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result = Success[T] | Failure[E]
