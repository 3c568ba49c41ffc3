"""
HTTP GET with retries on top of httpx.

Status codes are classified by the executor's mapping (4xx and 501 stop
immediately, 5xx are retried); transport failures such as connection
errors and timeouts surface as raw recoverable errors.
"""

import httpx
import structlog

from retry_orchestrator.config import settings
from retry_orchestrator.retry.cancellation import CancelToken
from retry_orchestrator.retry.executor import RetryExecutor
from retry_orchestrator.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)


def fetch(
    url: str,
    *,
    policy: RetryPolicy | None = None,
    cancel: CancelToken | None = None,
    client: httpx.Client | None = None,
    executor: RetryExecutor[httpx.Response] | None = None,
    timeout: float | None = None,
) -> httpx.Response:
    """
    GET ``url`` until a non-error response arrives or retries stop.

    Args:
        url: Absolute URL to fetch
        policy: Retry policy (defaults to RetryPolicy.from_settings())
        cancel: Token that aborts waiting between attempts
        client: httpx client to reuse; one is created (and closed) if omitted
        executor: Executor to run on, so the caller can inspect count()/history()
        timeout: Request timeout in seconds for a created client

    Returns:
        The successful httpx.Response (body already read)

    Raises:
        ClientError: 4xx (or 501) response
        ServerError: 5xx response on the last attempt
        httpx.TransportError: Network failure on the last attempt
        RetryCancelled: Cancelled while waiting between attempts
    """
    executor = executor or RetryExecutor()
    owns_client = client is None
    http = client or httpx.Client(
        timeout=httpx.Timeout(timeout if timeout is not None else settings.HTTP_TIMEOUT),
        follow_redirects=True,
    )

    try:
        response = executor.run(lambda: http.get(url), policy, cancel)
    finally:
        if owns_client:
            http.close()

    logger.info(
        "Fetched URL",
        url=url,
        status_code=response.status_code,
        retries=executor.count(),
        content_length=len(response.content),
    )
    return response
