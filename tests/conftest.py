"""Shared pytest fixtures and configuration for the webutil test suite.

Guidelines
----------
* No internet access in any test.
* Timers run on :class:`FakeScheduler` — a manual clock — unless a test
  deliberately exercises a real asyncio loop.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state; files live under ``tmp_path``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from concurrent.futures import Future
from pathlib import Path
from typing import Any

import pytest

# Timers due within this tolerance of the target time fire; absorbs
# float rounding when tests step the clock in milliseconds.
_EPSILON = 1e-9


class FakeTimer:
    """Handle returned by :meth:`FakeScheduler.call_later`."""

    def __init__(
        self,
        when: float,
        seq: int,
        callback: Callable[..., object],
        args: tuple[Any, ...],
    ) -> None:
        self.when = when
        self.seq = seq
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Deterministic :class:`~webutil.core.protocols.Scheduler`.

    Time only moves when :meth:`advance` is called; due timers then fire
    in order, each seeing the clock set to its own due time.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[FakeTimer] = []
        self._seq = 0

    def time(self) -> float:
        return self.now

    def call_later(
        self,
        delay: float,
        callback: Callable[..., object],
        *args: Any,
    ) -> FakeTimer:
        self._seq += 1
        timer = FakeTimer(self.now + max(0.0, delay), self._seq, callback, args)
        self._timers.append(timer)
        return timer

    def create_future(self) -> Future[Any]:
        return Future()

    @property
    def live_timers(self) -> int:
        return sum(1 for timer in self._timers if not timer.cancelled)

    def advance_ms(self, ms: float) -> None:
        """Move the clock forward by *ms* milliseconds, firing due timers."""
        self.advance(ms / 1000.0)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            self._timers = [timer for timer in self._timers if not timer.cancelled]
            due = [timer for timer in self._timers if timer.when <= target + _EPSILON]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self._timers.remove(timer)
            self.now = max(self.now, timer.when)
            timer.callback(*timer.args)
        self.now = max(self.now, target)


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture()
def write_json(tmp_path: Path) -> Callable[[str, object], Path]:
    """Return a helper that dumps an object to ``tmp_path/<name>``."""

    def _write(name: str, payload: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
