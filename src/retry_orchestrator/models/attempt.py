"""
Per-attempt data: the outcome of one call and its classified record.

Both types are created once per loop iteration and never mutated.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Optional, TypeVar

from retry_orchestrator.models.enums import Classification

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of one call to the operation.

    Exactly one side is meaningful: ``value`` on success, ``error`` on
    failure (``value`` is then None).
    """

    value: Optional[T] = None
    error: Optional[Exception] = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise ValueError("Outcome cannot carry both a value and an error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome[T]":
        return cls(error=error)


@dataclass(frozen=True)
class Attempt(Generic[T]):
    """
    One execution of the operation plus its classified outcome.

    Attributes:
        index: 1-based ordinal within the run
        outcome: What the operation produced (after status normalization)
        classification: Verdict for this outcome
        timestamp: When the attempt was recorded (UTC)
    """

    index: int
    outcome: Outcome[T]
    classification: Classification
    timestamp: datetime

    def __post_init__(self) -> None:
        if self.index < 1:
            raise ValueError("index must be >= 1")
