"""
Retry orchestration core.

Components:
    - Classifier: Maps each outcome to Recoverable/Unrecoverable using an
      ErrorMapping (status codes) and the unrecoverable() escape hatch
    - AttemptTracker: Per-run attempt history; count() excludes the first try
    - RetryExecutor: The retry loop, with four terminal states
      (succeeded, failed permanent, failed exhausted, cancelled)

Usage:
    >>> from retry_orchestrator.retry import RetryExecutor, RetryPolicy, fixed_delay
    >>> executor = RetryExecutor()
    >>> response = executor.run(fetch_page, RetryPolicy(max_attempts=5, backoff=fixed_delay(0.5)))
    >>> executor.count()
    2
"""

from retry_orchestrator.retry.cancellation import CancelToken
from retry_orchestrator.retry.classifier import Classifier
from retry_orchestrator.retry.exceptions import (
    ClientError,
    ConcurrentRunError,
    DeadlineExceeded,
    ErrorMappingConflict,
    RetryCancelled,
    RetryOrchestratorError,
    ServerError,
    StatusError,
    UnclassifiedError,
    unrecoverable,
)
from retry_orchestrator.retry.executor import RetryExecutor, retry, retrying
from retry_orchestrator.retry.mapping import DEFAULT_ERROR_MAPPING, ErrorMapping
from retry_orchestrator.retry.policy import RetryPolicy, exponential_backoff, fixed_delay
from retry_orchestrator.retry.tracker import AttemptTracker

__all__ = [
    "AttemptTracker",
    "CancelToken",
    "Classifier",
    "ClientError",
    "ConcurrentRunError",
    "DEFAULT_ERROR_MAPPING",
    "DeadlineExceeded",
    "ErrorMapping",
    "ErrorMappingConflict",
    "RetryCancelled",
    "RetryExecutor",
    "RetryOrchestratorError",
    "RetryPolicy",
    "ServerError",
    "StatusError",
    "UnclassifiedError",
    "exponential_backoff",
    "fixed_delay",
    "retry",
    "retrying",
    "unrecoverable",
]
