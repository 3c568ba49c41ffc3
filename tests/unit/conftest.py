"""Unit test fixtures (operation stubs).

Provides scripted operations so the retry loop can be driven without I/O.
"""

from typing import Any, Callable

import pytest


class ScriptedOperation:
    """
    Zero-argument callable that replays a script of outcomes.

    Exceptions in the script are raised, anything else is returned. The
    last entry repeats once the script runs out.
    """

    def __init__(self, script: list[Any]):
        if not script:
            raise ValueError("script must not be empty")
        self.script = script
        self.calls = 0

    def __call__(self) -> Any:
        item = self.script[min(self.calls, len(self.script) - 1)]
        self.calls += 1
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def scripted() -> Callable[..., ScriptedOperation]:
    """Factory fixture for ScriptedOperation.

    Usage:
        def test_something(scripted, make_response):
            op = scripted(make_response(500), make_response(200))
    """
    def _create(*script: Any) -> ScriptedOperation:
        return ScriptedOperation(list(script))

    return _create
