"""retry-orchestrator CLI.

Commands:
    fetch     GET a URL with retries and print the body
    version   Show the package version

Exit codes for fetch:
    0  success
    1  retries exhausted
    2  permanent failure (4xx, 501)
    3  cancelled (deadline reached while waiting to retry)
"""

from pathlib import Path
from typing import Annotated, Optional

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from retry_orchestrator import __version__
from retry_orchestrator.config import settings
from retry_orchestrator.http.client import fetch as http_fetch
from retry_orchestrator.logging_config import configure_logging
from retry_orchestrator.models.enums import RunState
from retry_orchestrator.retry.cancellation import CancelToken
from retry_orchestrator.retry.classifier import Classifier
from retry_orchestrator.retry.exceptions import RetryCancelled
from retry_orchestrator.retry.executor import RetryExecutor
from retry_orchestrator.retry.mapping import DEFAULT_ERROR_MAPPING, ErrorMapping
from retry_orchestrator.retry.policy import RetryPolicy, exponential_backoff

app = typer.Typer(
    name="retry-orchestrator",
    help="Run HTTP requests with status-aware retries.",
    no_args_is_help=True,
)
err_console = Console(stderr=True)

EXIT_EXHAUSTED = 1
EXIT_PERMANENT = 2
EXIT_CANCELLED = 3


@app.callback()
def main() -> None:
    """Retry orchestration engine."""


@app.command()
def version() -> None:
    """Show the package version."""
    typer.echo(__version__)


@app.command()
def fetch(
    url: Annotated[str, typer.Argument(help="URL to GET")],
    max_attempts: Annotated[
        int, typer.Option("--max-attempts", "-n", min=1, help="Attempts including the first")
    ] = settings.RETRY_MAX_ATTEMPTS,
    delay: Annotated[
        float, typer.Option("--delay", min=0.0, help="Initial backoff delay in seconds")
    ] = settings.RETRY_INITIAL_DELAY,
    timeout: Annotated[
        float, typer.Option("--timeout", min=0.0, help="Per-request timeout in seconds")
    ] = settings.HTTP_TIMEOUT,
    deadline: Annotated[
        Optional[float], typer.Option("--deadline", min=0.0, help="Give up after this many seconds")
    ] = settings.RETRY_DEADLINE,
    mapping_file: Annotated[
        Optional[Path], typer.Option("--mapping", help="JSON error mapping replacing the default")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging and retry summary")] = False,
) -> None:
    """GET URL with retries and print the response body."""
    configure_logging("DEBUG" if verbose else settings.LOG_LEVEL, settings.ENVIRONMENT)

    mapping_path = mapping_file or (Path(settings.ERROR_MAPPING_PATH) if settings.ERROR_MAPPING_PATH else None)
    mapping = ErrorMapping.from_file(mapping_path) if mapping_path else DEFAULT_ERROR_MAPPING

    executor: RetryExecutor[httpx.Response] = RetryExecutor(classifier=Classifier(mapping))
    policy = RetryPolicy(
        max_attempts=max_attempts,
        backoff=exponential_backoff(
            initial=delay,
            base=settings.RETRY_BACKOFF_BASE,
            max_delay=settings.RETRY_MAX_DELAY,
        ),
    )

    try:
        response = http_fetch(
            url,
            policy=policy,
            cancel=CancelToken(deadline_seconds=deadline),
            executor=executor,
            timeout=timeout,
        )
    except RetryCancelled as e:
        err_console.print(f"[yellow]Cancelled:[/yellow] {escape(e.message)}")
        raise typer.Exit(code=EXIT_CANCELLED)
    except Exception as e:
        if executor.state is None:
            # Failed before the first attempt
            raise
        failed_permanently = executor.state is RunState.FAILED_PERMANENT
        label = "Failed" if failed_permanently else "Retries exhausted"
        err_console.print(f"[red]{label}:[/red] {escape(str(e))} (retries: {executor.count()})")
        raise typer.Exit(code=EXIT_PERMANENT if failed_permanently else EXIT_EXHAUSTED)
    finally:
        if verbose:
            err_console.print(f"attempts: {len(executor.history())}, retries: {executor.count()}")

    typer.echo(response.text)
