"""
Retry executor: the loop that ties classification, tracking and backoff.

Each run is a small state machine:

    RUNNING -> SUCCEEDED          value returned
            -> FAILED_PERMANENT   unrecoverable outcome, error raised at once
            -> FAILED_EXHAUSTED   recoverable outcome on the last attempt
            -> CANCELLED          cancel token fired during a backoff wait

The error raised is always the most recent attempt's error (or
RetryCancelled), never an aggregate; the full history stays available on
the executor until its next run.

Usage:
    executor = RetryExecutor()
    response = executor.run(lambda: client.get(url), RetryPolicy(max_attempts=5))
    retries = executor.count()
"""

import functools
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Generic, TypeVar

import structlog

from retry_orchestrator.config import settings
from retry_orchestrator.models.attempt import Attempt, Outcome
from retry_orchestrator.models.enums import Classification, RunState
from retry_orchestrator.monitoring.metrics import (
    retry_attempts_total,
    retry_backoff_seconds,
    retry_runs_total,
)
from retry_orchestrator.retry.cancellation import CancelToken
from retry_orchestrator.retry.classifier import Classifier
from retry_orchestrator.retry.exceptions import ConcurrentRunError, RetryCancelled
from retry_orchestrator.retry.policy import RetryPolicy
from retry_orchestrator.retry.tracker import AttemptTracker

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class RetryExecutor(Generic[T]):
    """
    Runs an operation until success, permanent failure, exhaustion or cancellation.

    The executor owns its tracker. Overlapping runs on one executor are
    rejected with ConcurrentRunError; use one executor per concurrent caller
    (or the module-level :func:`retry`, which does that for you).

    Attributes:
        classifier: Classifier used to normalize and classify outcomes
        tracker: Attempt history of the latest run
        state: State of the latest run (None before the first run)
    """

    def __init__(
        self,
        classifier: Classifier | None = None,
        tracker: AttemptTracker | None = None,
        metrics_enabled: bool | None = None,
    ):
        self.classifier = classifier or Classifier()
        self.tracker = tracker or AttemptTracker()
        self.state: RunState | None = None
        self._metrics_enabled = (
            settings.PROMETHEUS_ENABLED if metrics_enabled is None else metrics_enabled
        )
        self._run_lock = threading.Lock()

    def count(self) -> int:
        """Retries performed by the latest run (0 when the first attempt decided it)."""
        return self.tracker.count()

    def history(self) -> tuple[Attempt[T], ...]:
        return self.tracker.history()

    def run(
        self,
        operation: Callable[[], T],
        policy: RetryPolicy | None = None,
        cancel: CancelToken | None = None,
    ) -> T:
        """
        Execute ``operation`` under ``policy``.

        Args:
            operation: Zero-argument callable; its return value or raised
                exception is the attempt's outcome
            policy: Retry policy (defaults to RetryPolicy.from_settings())
            cancel: Token that aborts the backoff wait when fired

        Returns:
            The value produced by the first successful attempt

        Raises:
            ConcurrentRunError: Another run is using this executor
            RetryCancelled: The token fired while waiting between attempts
            Exception: The last attempt's error on permanent failure or
                exhaustion (ClientError/ServerError for mapped status codes)
        """
        if not self._run_lock.acquire(blocking=False):
            raise ConcurrentRunError(
                "RetryExecutor is already running; use a separate executor per concurrent run"
            )
        try:
            return self._run(operation, policy or RetryPolicy.from_settings(), cancel or CancelToken())
        finally:
            self._run_lock.release()

    def _run(self, operation: Callable[[], T], policy: RetryPolicy, cancel: CancelToken) -> T:
        self.tracker.reset()
        self.state = RunState.RUNNING
        classify = policy.classify or self.classifier.classify

        for index in range(1, policy.max_attempts + 1):
            outcome = self.classifier.check(self._call(operation))
            classification = classify(outcome)
            self.tracker.record(
                Attempt(
                    index=index,
                    outcome=outcome,
                    classification=classification,
                    timestamp=datetime.now(timezone.utc),
                )
            )
            if self._metrics_enabled:
                retry_attempts_total.labels(
                    classification=classification.value, ok=str(outcome.ok).lower()
                ).inc()

            if outcome.ok:
                self._finish(RunState.SUCCEEDED)
                logger.debug("Operation succeeded", attempt=index, retries=self.count())
                return outcome.value  # type: ignore[return-value]

            error = outcome.error
            assert error is not None

            if classification is Classification.UNRECOVERABLE:
                self._finish(RunState.FAILED_PERMANENT)
                logger.error(
                    "Unrecoverable error, not retrying",
                    attempt=index,
                    error_type=type(error).__name__,
                    error=str(error),
                )
                raise error

            if index == policy.max_attempts:
                self._finish(RunState.FAILED_EXHAUSTED)
                logger.error(
                    "Retries exhausted",
                    attempts=index,
                    error_type=type(error).__name__,
                    error=str(error),
                )
                raise error

            delay = max(float(policy.backoff(index)), 0.0)
            if self._metrics_enabled:
                retry_backoff_seconds.observe(delay)
            logger.warning(
                f"Attempt {index}/{policy.max_attempts} failed, retrying",
                attempt=index,
                max_attempts=policy.max_attempts,
                backoff_seconds=delay,
                error_type=type(error).__name__,
                error=str(error),
            )

            if cancel.wait(delay):
                self._finish(RunState.CANCELLED)
                cause = cancel.cause if cancel.cause is not None else "cancelled"
                logger.warning("Retry cancelled during backoff", attempts=index, cause=str(cause))
                raise RetryCancelled(
                    cause=cause, attempts=index, last_error=error
                ) from (cause if isinstance(cause, BaseException) else None)

        # range() is non-empty (max_attempts >= 1) and every iteration returns or raises
        raise AssertionError("unreachable")

    @staticmethod
    def _call(operation: Callable[[], T]) -> Outcome[T]:
        try:
            return Outcome.success(operation())
        except Exception as e:
            return Outcome.failure(e)

    def _finish(self, state: RunState) -> None:
        self.state = state
        if self._metrics_enabled:
            retry_runs_total.labels(state=state.value).inc()


def retry(
    operation: Callable[[], T],
    policy: RetryPolicy | None = None,
    cancel: CancelToken | None = None,
    classifier: Classifier | None = None,
) -> T:
    """Run ``operation`` on a fresh executor, so concurrent callers never share state."""
    return RetryExecutor(classifier=classifier).run(operation, policy, cancel)


def retrying(
    policy: RetryPolicy | None = None,
    classifier: Classifier | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator form of :func:`retry`.

    Usage:
        @retrying(RetryPolicy(max_attempts=3))
        def load_profile(user_id: str) -> httpx.Response:
            return client.get(f"/users/{user_id}")
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return retry(lambda: func(*args, **kwargs), policy, classifier=classifier)

        return wrapper

    return decorator
