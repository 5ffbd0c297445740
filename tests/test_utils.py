"""Tests for CLI error handling helpers."""

import concurrent.futures

import pytest
from typer import Exit

from wiki.engine import ExtractionFailure, FetchHandle, NavigationTimeout
from wiki.utils import handle_fetch_errors, wait_for_result


@pytest.mark.parametrize(
    "exc,message",
    [
        (NavigationTimeout("too slow", "https://example.com"), "did not settle"),
        (ExtractionFailure("no <main>"), "Unexpected page layout"),
        (concurrent.futures.CancelledError(), "was cancelled"),
    ],
)
def test_handle_fetch_errors_exits(capsys, exc, message):
    with pytest.raises(Exit):
        with handle_fetch_errors("weapon page"):
            raise exc

    assert message in capsys.readouterr().err


def test_handle_fetch_errors_lets_other_errors_through():
    with pytest.raises(KeyError):
        with handle_fetch_errors("weapon page"):
            raise KeyError("bug")


def test_wait_for_result_returns_value():
    future: concurrent.futures.Future[str] = concurrent.futures.Future()
    future.set_result("value")

    handle = FetchHandle("https://example.com", future=future)

    assert wait_for_result(handle, 1, "page") == "value"


def test_wait_for_result_times_out_and_cancels(capsys):
    future: concurrent.futures.Future[str] = concurrent.futures.Future()
    handle = FetchHandle("https://example.com", future=future)

    with pytest.raises(Exit):
        wait_for_result(handle, 0.01, "page")

    assert future.cancelled()
    assert "Timed out" in capsys.readouterr().err
