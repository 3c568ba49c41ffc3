"""
Outcome classification.

The Classifier turns each attempt's outcome into a Classification using an
ErrorMapping for structured responses (anything exposing an integer
``status_code``, such as ``httpx.Response``) and the UnclassifiedError
marker for raw errors. It is a pure function of its input and mapping and
never raises.
"""

from typing import Any

from retry_orchestrator.models.attempt import Outcome
from retry_orchestrator.models.enums import Classification
from retry_orchestrator.models.mapping import StatusRule
from retry_orchestrator.retry.exceptions import (
    ClientError,
    ConcurrentRunError,
    ServerError,
    StatusError,
    UnclassifiedError,
)
from retry_orchestrator.retry.mapping import DEFAULT_ERROR_MAPPING, ErrorMapping


class Classifier:
    """
    Maps outcomes to Recoverable/Unrecoverable.

    Attributes:
        mapping: Ordered status rules (first match wins)
    """

    def __init__(self, mapping: ErrorMapping = DEFAULT_ERROR_MAPPING):
        self.mapping = mapping

    @staticmethod
    def discriminant(value: Any) -> int | None:
        """Return the status code of a structured response, or None."""
        status = getattr(value, "status_code", None)
        if isinstance(status, int) and not isinstance(status, bool):
            return status
        return None

    def _rule_for(self, value: Any) -> StatusRule | None:
        status = self.discriminant(value)
        if status is None:
            return None
        return self.mapping.lookup(status)

    def _status_error(self, rule: StatusRule, response: Any) -> StatusError:
        error_cls = ClientError if rule.classification is Classification.UNRECOVERABLE else ServerError
        status = self.discriminant(response)
        assert status is not None
        return error_cls(
            status_code=status,
            identity=rule.identity,
            classification=rule.classification,
            response=response,
        )

    def check(self, outcome: Outcome) -> Outcome:
        """
        Normalize an outcome before classification.

        A successful call whose response carries a mapped status code is
        really a failure: it becomes an Outcome holding a ClientError or
        ServerError. An exception that carries such a response itself (e.g.
        httpx.HTTPStatusError from raise_for_status()) is wrapped the same
        way, chained to the original. Everything else is returned unchanged.
        """
        if not outcome.ok:
            error = outcome.error
            if isinstance(error, (StatusError, UnclassifiedError)):
                return outcome
            response = getattr(error, "response", None)
            rule = self._rule_for(response)
            if rule is None:
                return outcome
            wrapped = self._status_error(rule, response)
            wrapped.__cause__ = error
            return Outcome.failure(wrapped)

        rule = self._rule_for(outcome.value)
        if rule is None:
            return outcome
        return Outcome.failure(self._status_error(rule, outcome.value))

    def classify(self, outcome: Outcome) -> Classification:
        """
        Classify an outcome.

        For successful outcomes the verdict is irrelevant (the loop ends)
        and defaults to RECOVERABLE unless the value carries a mapped status.
        """
        if outcome.ok:
            rule = self._rule_for(outcome.value)
            return rule.classification if rule else Classification.RECOVERABLE

        error = outcome.error
        if isinstance(error, ConcurrentRunError):
            # executor reused from inside its own operation
            return Classification.UNRECOVERABLE

        if isinstance(error, StatusError):
            return error.classification

        if isinstance(error, UnclassifiedError):
            if error.unrecoverable:
                return Classification.UNRECOVERABLE
            return Classification.RECOVERABLE

        # e.g. httpx.HTTPStatusError raised by raise_for_status()
        rule = self._rule_for(getattr(error, "response", None))
        if rule is not None:
            return rule.classification

        return Classification.RECOVERABLE
