"""Event-loop timing wrappers: debounce, throttle and poll-until-success.

Every helper schedules work through a
:class:`~webutil.core.protocols.Scheduler`.  When none is passed, the
running asyncio loop is looked up on first use, so the helpers must be
driven from inside a coroutine or loop callback in that case.

Durations are given in milliseconds and converted to the scheduler's
seconds internally.  Each instance owns at most one live timer handle;
it is cancelled or replaced before a new one is armed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Generator
from typing import Any, Generic, TypeVar

from webutil.core.protocols import Scheduler, TimerHandle
from webutil.exceptions import PollTimeoutError
from webutil.utils.constants import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_THROTTLE_MS,
)

log = logging.getLogger(__name__)

R = TypeVar("R")


class _Timed:
    """Scheduler resolution and single-handle bookkeeping."""

    def __init__(self, scheduler: Scheduler | None) -> None:
        self._scheduler: Scheduler | None = scheduler
        self._handle: TimerHandle | None = None

    @property
    def scheduler(self) -> Scheduler:
        if self._scheduler is None:
            self._scheduler = asyncio.get_running_loop()
        return self._scheduler

    @property
    def pending(self) -> bool:
        """True while a timer is armed."""
        return self._handle is not None

    def cancel(self) -> None:
        """Withdraw the armed timer, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


# ---------------------------------------------------------------------------
# Debounce
# ---------------------------------------------------------------------------

class Debouncer(_Timed, Generic[R]):
    """Run *func* only after *wait_ms* of silence since the last call.

    With ``immediate=True`` the leading call of a burst runs at once and
    the trailing run is suppressed; the next burst may only start after
    a full quiet period.

    Calling the debouncer returns the result of the most recent run,
    which is ``None`` until *func* has run at least once and may be
    stale while a run is pending.
    """

    def __init__(
        self,
        func: Callable[..., R],
        wait_ms: float = DEFAULT_DEBOUNCE_MS,
        immediate: bool = False,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(scheduler)
        self._func = func
        self._wait = wait_ms / 1000.0
        self._immediate = immediate
        self._args: tuple[Any, ...] | None = None
        self._kwargs: dict[str, Any] | None = None
        self._deadline = 0.0
        self._result: R | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> R | None:
        scheduler = self.scheduler
        self._args, self._kwargs = args, kwargs
        self._deadline = scheduler.time() + self._wait
        call_now = self._immediate and self._handle is None
        if self._handle is None:
            self._handle = scheduler.call_later(self._wait, self._later)
        if call_now:
            self._args = self._kwargs = None
            self._result = self._func(*args, **kwargs)
        return self._result

    def cancel(self) -> None:
        """Drop the pending run and forget the recorded arguments."""
        super().cancel()
        self._args = self._kwargs = None

    def _later(self) -> None:
        remaining = self._deadline - self.scheduler.time()
        if remaining > 0:
            # Called again while waiting: push the run out to the new deadline.
            self._handle = self.scheduler.call_later(remaining, self._later)
            return

        self._handle = None
        if self._immediate or self._args is None:
            return
        args, kwargs = self._args, self._kwargs or {}
        self._args = self._kwargs = None
        self._result = self._func(*args, **kwargs)


def debounce(
    func: Callable[..., R],
    wait_ms: float = DEFAULT_DEBOUNCE_MS,
    immediate: bool = False,
    *,
    scheduler: Scheduler | None = None,
) -> Debouncer[R]:
    """Wrap *func* in a :class:`Debouncer`."""
    return Debouncer(func, wait_ms, immediate, scheduler=scheduler)


# ---------------------------------------------------------------------------
# Throttle
# ---------------------------------------------------------------------------

class Throttler(_Timed):
    """Run *func* at most once per *delay_ms* window.

    A call inside the window does not run immediately; it replaces any
    deferred call and is scheduled to run once when the window closes,
    with the newest arguments.  The very first call always runs at once.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        delay_ms: float = DEFAULT_THROTTLE_MS,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(scheduler)
        self._func = func
        self._delay = delay_ms / 1000.0
        self._last_exec: float | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        scheduler = self.scheduler
        self.cancel()
        if self._last_exec is None:
            self._exec(args, kwargs)
            return
        elapsed = scheduler.time() - self._last_exec
        if elapsed > self._delay:
            self._exec(args, kwargs)
        else:
            self._handle = scheduler.call_later(
                self._delay - elapsed, self._exec, args, kwargs,
            )

    def _exec(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._handle = None
        self._last_exec = self.scheduler.time()
        self._func(*args, **kwargs)


def throttle(
    func: Callable[..., Any],
    delay_ms: float = DEFAULT_THROTTLE_MS,
    *,
    scheduler: Scheduler | None = None,
) -> Throttler:
    """Wrap *func* in a :class:`Throttler`."""
    return Throttler(func, delay_ms, scheduler=scheduler)


# ---------------------------------------------------------------------------
# Poll until success
# ---------------------------------------------------------------------------

class Poller(_Timed):
    """Re-check a condition on a fixed interval until it holds.

    The outcome is published on :attr:`future`: it resolves with
    ``None`` once *success* returns True (after *callback* ran), fails
    with :class:`~webutil.exceptions.PollTimeoutError` once the check
    ran *max_try_time* times on the interval without success, and fails
    with whatever *success* or *callback* raised.  ``max_try_time``
    below 1 polls forever.  The initial check does not count against
    the budget.

    On asyncio the poller can be awaited directly.
    """

    def __init__(
        self,
        success: Callable[[], bool],
        callback: Callable[[], object] | None = None,
        interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
        max_try_time: int = 0,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(scheduler)
        self._success = success
        self._callback = callback
        self._interval = interval_ms / 1000.0
        self._max_try_time = max_try_time
        self._count = 0
        self.future: Any = self.scheduler.create_future()

    @property
    def attempts(self) -> int:
        """Number of interval checks performed so far."""
        return self._count

    def start(self) -> Poller:
        """Run the initial check and arm the interval if it failed."""
        if not self._check():
            self._handle = self.scheduler.call_later(self._interval, self._tick)
        return self

    def cancel(self) -> None:
        """Stop polling and cancel :attr:`future`."""
        super().cancel()
        if not self.future.done():
            self.future.cancel()

    def __await__(self) -> Generator[Any, None, None]:
        return self.future.__await__()

    def _tick(self) -> None:
        self._handle = None
        if self.future.done() or self._check():
            return
        if self._max_try_time >= 1:
            self._count += 1
            if self._count >= self._max_try_time:
                log.debug("poll gave up after %d attempts", self._count)
                self.future.set_exception(PollTimeoutError(self._count))
                return
        self._handle = self.scheduler.call_later(self._interval, self._tick)

    def _check(self) -> bool:
        """Return True once the future is settled by this check."""
        try:
            if not self._success():
                return False
            if callable(self._callback):
                self._callback()
        except Exception as exc:
            self.future.set_exception(exc)
            return True
        self.future.set_result(None)
        return True


def wait_until_success(
    success: Callable[[], bool],
    callback: Callable[[], object] | None = None,
    interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
    max_try_time: int = 0,
    *,
    scheduler: Scheduler | None = None,
) -> Poller:
    """Start polling *success*; see :class:`Poller`."""
    return Poller(
        success,
        callback,
        interval_ms,
        max_try_time,
        scheduler=scheduler,
    ).start()
