"""Result types for railway-oriented error handling.

Authorization and synchronization code returns ``Result`` values instead of
raising: a denied request, a missing role assignment or an unreachable
policy service are all expected outcomes that callers must handle
explicitly.

Usage:
    def resolve(role_id: str) -> Result[Role, ValidationError]:
        role = lookup(role_id)
        if role is None:
            return Failure(error=ValidationError(...))
        return Success(value=role)

    match resolve(role_id):
        case Success(value=role):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
