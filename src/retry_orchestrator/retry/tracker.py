"""
Per-run attempt history.

An AttemptTracker belongs to exactly one run at a time. The executor resets
it before each run so that counts never leak between independent calls.
"""

from retry_orchestrator.models.attempt import Attempt


class AttemptTracker:
    """Records the attempts of a single run in order."""

    def __init__(self) -> None:
        self._attempts: list[Attempt] = []

    def reset(self) -> None:
        self._attempts.clear()

    def record(self, attempt: Attempt) -> None:
        """
        Append an attempt.

        Raises:
            ValueError: If the attempt index is not the next in sequence
        """
        expected = len(self._attempts) + 1
        if attempt.index != expected:
            raise ValueError(f"Expected attempt index {expected}, got {attempt.index}")
        self._attempts.append(attempt)

    def count(self) -> int:
        """Number of retries performed (the first attempt is not a retry)."""
        return max(len(self._attempts) - 1, 0)

    def history(self) -> tuple[Attempt, ...]:
        return tuple(self._attempts)

    def last(self) -> Attempt | None:
        return self._attempts[-1] if self._attempts else None
