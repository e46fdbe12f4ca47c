from __future__ import annotations

import logging
import threading
import time

import pytest

from sailtact.runtime.scheduler import PeriodicTicker


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_ticker_runs_callback_periodically() -> None:
    ticker = PeriodicTicker()
    calls: list[float] = []
    handle = ticker.start(0.01, lambda: calls.append(time.monotonic()), name="test-ticker")

    try:
        assert handle.name == "test-ticker"
        assert _wait_for(lambda: len(calls) >= 3)
        assert handle.active
    finally:
        ticker.stop(handle, wait=True)

    assert not handle.active
    assert handle.ticks >= 3


def test_stop_prevents_further_ticks() -> None:
    ticker = PeriodicTicker()
    calls: list[int] = []
    handle = ticker.start(0.01, lambda: calls.append(1))
    assert _wait_for(lambda: len(calls) >= 1)

    ticker.stop(handle, wait=True)
    observed = len(calls)
    time.sleep(0.05)

    assert len(calls) == observed


def test_stop_is_idempotent_and_accepts_none() -> None:
    ticker = PeriodicTicker()
    handle = ticker.start(10.0, lambda: None)

    ticker.stop(handle, wait=True)
    ticker.stop(handle, wait=True)
    ticker.stop(None)

    assert not handle.active
    assert handle.ticks == 0


def test_stop_from_inside_callback() -> None:
    ticker = PeriodicTicker()
    done = threading.Event()
    holder: dict[str, object] = {}
    ready = threading.Event()

    def _callback() -> None:
        ready.wait(5.0)
        ticker.stop(holder["handle"], wait=True)  # type: ignore[arg-type]
        done.set()

    holder["handle"] = ticker.start(0.01, _callback)
    ready.set()

    assert done.wait(5.0)
    handle = holder["handle"]
    handle.join(5.0)  # type: ignore[attr-defined]
    assert handle.ticks == 1  # type: ignore[attr-defined]


def test_in_flight_tick_completes_after_stop() -> None:
    ticker = PeriodicTicker()
    started = threading.Event()
    release = threading.Event()
    finished = threading.Event()

    def _slow() -> None:
        started.set()
        release.wait(5.0)
        finished.set()

    handle = ticker.start(0.01, _slow)
    assert started.wait(5.0)
    ticker.stop(handle)
    release.set()
    handle.join(5.0)

    assert finished.is_set()
    assert handle.ticks == 1


def test_failing_callback_is_logged_and_ticker_keeps_running(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.ERROR, logger="sailtact")
    ticker = PeriodicTicker()
    calls: list[int] = []

    def _flaky() -> None:
        calls.append(1)
        raise RuntimeError("tick failed")

    handle = ticker.start(0.01, _flaky, name="flaky")
    try:
        assert _wait_for(lambda: len(calls) >= 2)
    finally:
        ticker.stop(handle, wait=True)

    failures = [r for r in caplog.records if getattr(r, "event", None) == "scheduler.tick_failed"]
    assert failures
    assert failures[0].task == "flaky"


@pytest.mark.parametrize("interval", [0.0, -1.0, float("nan")])
def test_non_positive_interval_rejected(interval: float) -> None:
    with pytest.raises(ValueError):
        PeriodicTicker().start(interval, lambda: None)
