"""
Enumerations for retry orchestration data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class Classification(str, Enum):
    """
    Verdict on whether a failed outcome warrants another attempt.

    Produced once per attempt and never changed afterwards.
    """

    RECOVERABLE = "recoverable"
    UNRECOVERABLE = "unrecoverable"


class RunState(str, Enum):
    """
    State of a single RetryExecutor run.

    RUNNING is the only non-terminal state. A run never leaves a terminal
    state; the next run starts again from RUNNING.
    """

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED_PERMANENT = "failed_permanent"
    FAILED_EXHAUSTED = "failed_exhausted"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """True for every state except RUNNING."""
        return self is not RunState.RUNNING
