"""
Retry policy and backoff delegates.

A RetryPolicy is created by the caller and is immutable for the duration
of a run. Backoff is a plain callable ``(attempt_index) -> seconds``; the
two helpers below cover the common cases, any other callable works too.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from retry_orchestrator.config import Settings, settings as default_settings
from retry_orchestrator.models.attempt import Outcome
from retry_orchestrator.models.enums import Classification

BackoffFn = Callable[[int], float]
ClassifyFn = Callable[[Outcome], Classification]


def fixed_delay(seconds: float) -> BackoffFn:
    """Wait the same amount after every attempt."""
    if seconds < 0:
        raise ValueError("seconds must be >= 0")

    def _backoff(attempt: int) -> float:
        return seconds

    return _backoff


def exponential_backoff(initial: float, base: float = 2.0, max_delay: float = 30.0) -> BackoffFn:
    """Wait ``initial * base ** (attempt - 1)`` seconds, capped at ``max_delay``."""
    if initial < 0 or max_delay < 0:
        raise ValueError("delays must be >= 0")
    if base < 1:
        raise ValueError("base must be >= 1")

    def _backoff(attempt: int) -> float:
        if initial == 0:
            return 0.0
        try:
            delay = initial * base ** max(attempt - 1, 0)
        except OverflowError:
            # float power past ~1e308; long runs sit at the cap anyway
            return max_delay
        return min(max_delay, delay)

    return _backoff


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for one run.

    Attributes:
        max_attempts: Upper bound on calls to the operation (>= 1)
        backoff: Seconds to wait after the given 1-based attempt
        classify: Optional override for the classifier's verdict
    """

    max_attempts: int = 10
    backoff: BackoffFn = field(default_factory=lambda: fixed_delay(0.1))
    classify: Optional[ClassifyFn] = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RetryPolicy":
        """Build the default policy (exponential backoff) from application settings."""
        s = settings or default_settings
        return cls(
            max_attempts=s.RETRY_MAX_ATTEMPTS,
            backoff=exponential_backoff(
                initial=s.RETRY_INITIAL_DELAY,
                base=s.RETRY_BACKOFF_BASE,
                max_delay=s.RETRY_MAX_DELAY,
            ),
        )
