"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from webutil.core.models import StoreState


class StateProvider(Protocol):
    """Read-only accessor for the application state tree.

    Implementations may return a fresh snapshot on every call; callers
    must not cache the result across decisions.
    """

    def get_state(self) -> StoreState:
        """Return the current :class:`~webutil.core.models.StoreState`."""
        ...  # pragma: no cover


class TimerHandle(Protocol):
    """A scheduled callback that can be withdrawn before it fires."""

    def cancel(self) -> None:
        ...  # pragma: no cover


class Scheduler(Protocol):
    """Clock plus one-shot timers, as offered by an event loop.

    :class:`asyncio.AbstractEventLoop` satisfies this protocol
    structurally, which makes a running loop the default scheduler for
    every timing helper.
    """

    def time(self) -> float:
        """Return the scheduler's monotonic clock in seconds."""
        ...  # pragma: no cover

    def call_later(
        self,
        delay: float,
        callback: Callable[..., object],
        *args: Any,
    ) -> TimerHandle:
        """Run ``callback(*args)`` once after *delay* seconds."""
        ...  # pragma: no cover

    def create_future(self) -> Any:
        """Return a new pending future bound to this scheduler.

        The object must support ``set_result``, ``set_exception``,
        ``cancel`` and ``done``.
        """
        ...  # pragma: no cover


class Location(Protocol):
    """The browser's current location together with its history stack."""

    @property
    def href(self) -> str:
        """Full URL of the current history entry."""
        ...  # pragma: no cover

    def replace_state(self, url: str) -> None:
        """Swap the current history entry for *url* without navigating."""
        ...  # pragma: no cover
