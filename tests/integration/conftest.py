"""Integration test fixtures.

Provides an in-process HTTP service whose status codes are scripted per
path. Traffic from any httpx client is routed to it with respx.
"""

import threading
from collections import defaultdict

import httpx
import pytest
import respx

BASE_URL = "https://service.test"


class ScriptedService:
    """Thread-safe fake service: each path replays its own list of status codes."""

    def __init__(self, scripts: dict[str, list[int]]):
        self.scripts = scripts
        self.hits: dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        with self._lock:
            script = self.scripts[path]
            status = script[min(self.hits[path], len(script) - 1)]
            self.hits[path] += 1
        return httpx.Response(status, content=f"{path} {status}".encode())

    def client(self) -> httpx.Client:
        return httpx.Client(base_url=BASE_URL)


@pytest.fixture
def scripted_service():
    """Factory fixture for ScriptedService, active for the whole test.

    Usage:
        def test_something(scripted_service):
            service = scripted_service({"/a": [500, 200]})
    """
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:

        def _create(scripts: dict[str, list[int]]) -> ScriptedService:
            service = ScriptedService(scripts)
            router.route().mock(side_effect=service.handler)
            return service

        yield _create
