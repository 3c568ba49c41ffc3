"""Prometheus metrics for the retry orchestrator.

Recorded by RetryExecutor when PROMETHEUS_ENABLED is set. Useful alerts:
- retry_runs_total{state="failed_exhausted"} (dependency persistently failing)
- retry_attempts_total{ok="false"} rate (high retry pressure)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

retry_attempts_total = Counter(
    "retry_attempts_total",
    "Total operation attempts by classification and success",
    ["classification", "ok"],
)
"""
Attempts counter.

Labels:
- classification: recoverable, unrecoverable
- ok: true (attempt succeeded), false (attempt failed)
"""

# === Run Metrics ===

retry_runs_total = Counter(
    "retry_runs_total",
    "Total completed runs by terminal state",
    ["state"],
)
"""
Runs counter by terminal state.

Labels:
- state: succeeded, failed_permanent, failed_exhausted, cancelled
"""

retry_backoff_seconds = Histogram(
    "retry_backoff_seconds",
    "Backoff delay requested between attempts",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60],
)
