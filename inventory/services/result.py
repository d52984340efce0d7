"""
Outcome of a command or query handler.

A handler either finds what it was asked for, finds nothing, or rejects the
request because a business rule was broken. Persistence failures are not
results; they propagate as exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from inventory.core.exceptions import InventoryError

T = TypeVar("T")


class Outcome(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(frozen=True)
class Result(Generic[T]):
    outcome: Outcome
    value: Optional[T] = None
    error: Optional[InventoryError] = None

    @classmethod
    def found(cls, value: T) -> "Result[T]":
        return cls(Outcome.FOUND, value=value)

    @classmethod
    def not_found(cls) -> "Result[T]":
        return cls(Outcome.NOT_FOUND)

    @classmethod
    def invalid(cls, error: InventoryError) -> "Result[T]":
        return cls(Outcome.INVALID, error=error)

    @property
    def is_found(self) -> bool:
        return self.outcome is Outcome.FOUND

    @property
    def is_not_found(self) -> bool:
        return self.outcome is Outcome.NOT_FOUND

    @property
    def is_invalid(self) -> bool:
        return self.outcome is Outcome.INVALID

    def unwrap(self) -> Optional[T]:
        """
        Return the value, None when nothing was found, or raise the carried error.
        """
        if self.error is not None:
            raise self.error
        return self.value
