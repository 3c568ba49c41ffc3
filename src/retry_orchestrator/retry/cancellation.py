"""
Cancellation signal for the backoff wait.

The executor only suspends between attempts, and it does so on a
CancelToken so another thread (or an overall deadline) can cut the wait
short. A running operation is never preempted.
"""

import threading
import time

from retry_orchestrator.retry.exceptions import DeadlineExceeded


class CancelToken:
    """
    Thread-safe cancellation flag with an optional deadline.

    Args:
        deadline_seconds: Overall budget measured from construction; once it
            passes, the token counts as cancelled with a DeadlineExceeded cause
    """

    def __init__(self, deadline_seconds: float | None = None):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._cause: BaseException | str | None = None
        self._deadline_seconds = deadline_seconds
        self._deadline = None if deadline_seconds is None else time.monotonic() + deadline_seconds

    def cancel(self, cause: BaseException | str = "cancelled") -> None:
        """Fire the token. The first cause wins."""
        with self._lock:
            if self._cause is None:
                self._cause = cause
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._expire()
            return True
        return False

    @property
    def cause(self) -> BaseException | str | None:
        return self._cause

    def remaining(self) -> float | None:
        """Seconds until the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def wait(self, seconds: float) -> bool:
        """
        Sleep for ``seconds`` unless the token fires first.

        Returns:
            True if the token was (or became) cancelled, False if the full
            wait elapsed
        """
        if self.cancelled:
            return True

        remaining = self.remaining()
        if remaining is not None and remaining <= seconds:
            if self._event.wait(remaining):
                return True
            self._expire()
            return True

        return self._event.wait(seconds)

    def _expire(self) -> None:
        assert self._deadline_seconds is not None
        self.cancel(DeadlineExceeded(self._deadline_seconds))
