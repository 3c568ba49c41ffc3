"""
Unit tests for CancelToken.
"""

import threading
import time

from retry_orchestrator.retry.cancellation import CancelToken
from retry_orchestrator.retry.exceptions import DeadlineExceeded


def test_wait_elapses_without_cancellation():
    token = CancelToken()

    assert token.wait(0.01) is False
    assert not token.cancelled
    assert token.cause is None
    assert token.remaining() is None


def test_cancel_before_wait_returns_immediately():
    token = CancelToken()
    token.cancel("shutdown")

    started = time.monotonic()
    assert token.wait(10) is True
    assert time.monotonic() - started < 1
    assert token.cause == "shutdown"


def test_first_cause_wins():
    token = CancelToken()
    first = KeyboardInterrupt()

    token.cancel(first)
    token.cancel("later")

    assert token.cause is first


def test_cancel_from_another_thread_wakes_wait():
    token = CancelToken()
    timer = threading.Timer(0.05, token.cancel, args=("stop",))
    timer.start()
    try:
        started = time.monotonic()
        assert token.wait(10) is True
        assert time.monotonic() - started < 5
    finally:
        timer.cancel()


def test_deadline_cuts_wait_short():
    token = CancelToken(deadline_seconds=0.05)

    started = time.monotonic()
    assert token.wait(10) is True
    assert time.monotonic() - started < 5
    assert token.cancelled
    assert isinstance(token.cause, DeadlineExceeded)
    assert token.cause.deadline_seconds == 0.05


def test_deadline_not_reached():
    token = CancelToken(deadline_seconds=60)

    assert token.wait(0) is False
    assert 0 < token.remaining() <= 60
