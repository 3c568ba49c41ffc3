"""
Error taxonomy for the retry orchestrator.

Status errors are produced by the classifier when a structured response
carries a mapped failure code. UnclassifiedError lets an operation veto
retries for errors the classifier cannot recognize structurally. The
remaining exceptions describe how a run (or its configuration) went wrong.
"""

from typing import Any

from retry_orchestrator.models.enums import Classification


class RetryOrchestratorError(Exception):
    """
    Base exception for all retry orchestrator errors.

    Attributes:
        message: Human-readable error description
        details: Structured error data for logging/metrics
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class StatusError(RetryOrchestratorError):
    """
    A structured response carried a status code mapped to a failure.

    Attributes:
        status_code: Discriminant that matched
        identity: Stable error name from the mapping (e.g. "bad request")
        classification: Verdict from the matching rule
        response: The structured response itself (e.g. httpx.Response)
    """

    def __init__(
        self,
        status_code: int,
        identity: str,
        classification: Classification,
        response: Any = None,
    ):
        self.status_code = status_code
        self.identity = identity
        self.classification = classification
        self.response = response
        super().__init__(f"HTTP failed: {identity} - Status Code: {status_code}")

    def __str__(self) -> str:
        return self.message


class ClientError(StatusError):
    """
    Request-class failure (4xx-equivalent, plus 501).

    Retrying the identical request will not fix it.
    """


class ServerError(StatusError):
    """Server-side transient failure (5xx-equivalent). Retried."""


class UnclassifiedError(RetryOrchestratorError):
    """
    Raw error with no structured response.

    Recoverable unless the operation marked it unrecoverable. Operations
    normally build the marked variant with :func:`unrecoverable`.
    """

    def __init__(self, cause: BaseException, unrecoverable: bool = False):
        self.cause = cause
        self.unrecoverable = unrecoverable
        super().__init__(
            f"{type(cause).__name__}: {cause}",
            {"unrecoverable": unrecoverable},
        )


def unrecoverable(error: BaseException) -> UnclassifiedError:
    """
    Mark an error as permanent so the executor stops retrying.

    Usage:
        try:
            payload = parse(raw)
        except ValueError as e:
            raise unrecoverable(e) from e
    """
    return UnclassifiedError(error, unrecoverable=True)


class DeadlineExceeded(RetryOrchestratorError):
    """Cancellation cause recorded when a CancelToken's deadline passes."""

    def __init__(self, deadline_seconds: float):
        self.deadline_seconds = deadline_seconds
        super().__init__(f"Deadline of {deadline_seconds}s exceeded")


class RetryCancelled(RetryOrchestratorError):
    """
    Raised when a run is cancelled while waiting between attempts.

    Distinct from the operation's own errors: the last attempt's error is
    kept on ``last_error`` for diagnostics, the cancellation cause on
    ``cause``.

    Attributes:
        cause: What cancelled the run (exception or reason string)
        attempts: Number of attempts recorded before cancellation
        last_error: Error of the last recorded attempt
    """

    def __init__(
        self,
        cause: BaseException | str,
        attempts: int,
        last_error: BaseException | None = None,
    ):
        self.cause = cause
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Retry cancelled after {attempts} attempt(s): {cause}",
            {"attempts": attempts},
        )


class ErrorMappingConflict(RetryOrchestratorError, ValueError):
    """An error mapping rule is ambiguous: an earlier rule already claims all of its codes."""


class ConcurrentRunError(RetryOrchestratorError, RuntimeError):
    """A RetryExecutor was asked to start a run while another run holds its state."""
