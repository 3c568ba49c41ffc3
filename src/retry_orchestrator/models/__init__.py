"""Data models shared by the retry components."""

from retry_orchestrator.models.attempt import Attempt, Outcome
from retry_orchestrator.models.enums import Classification, RunState
from retry_orchestrator.models.mapping import StatusRule

__all__ = [
    "Attempt",
    "Classification",
    "Outcome",
    "RunState",
    "StatusRule",
]
