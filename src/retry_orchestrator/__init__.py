"""
Retry orchestration engine.

Runs a caller-supplied operation until it succeeds, exhausts its retry
budget, or fails in a way classified as permanent:
- 2xx/3xx responses and plain return values: success, no retry
- 4xx responses (and 501): unrecoverable, no retry
- 5xx responses and raw errors: recoverable, retried with backoff

Architecture: Classifier + AttemptTracker composed by RetryExecutor,
with an httpx convenience client and a typer CLI on top.
"""

__version__ = "0.1.0"
