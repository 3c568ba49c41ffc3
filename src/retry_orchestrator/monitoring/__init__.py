"""Monitoring and metrics instrumentation for the retry orchestrator."""

from retry_orchestrator.monitoring.metrics import (
    retry_attempts_total,
    retry_backoff_seconds,
    retry_runs_total,
)

__all__ = [
    "retry_attempts_total",
    "retry_backoff_seconds",
    "retry_runs_total",
]
