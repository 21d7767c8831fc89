"""In-memory browser location — an adapter for :class:`~webutil.core.protocols.Location`.

Mirrors the subset of ``window.location`` / ``window.history`` the URL
helpers rely on, for server-side rendering, scripting and tests.
"""

from __future__ import annotations


class InMemoryLocation:
    """A location backed by a list of history entries.

    Parameters
    ----------
    href:
        URL of the initial history entry.
    """

    def __init__(self, href: str) -> None:
        self._entries: list[str] = [href]

    @property
    def href(self) -> str:
        return self._entries[-1]

    @property
    def entries(self) -> tuple[str, ...]:
        """All history entries, oldest first."""
        return tuple(self._entries)

    def push_state(self, url: str) -> None:
        """Add *url* as a new history entry."""
        self._entries.append(url)

    def replace_state(self, url: str) -> None:
        """Overwrite the current history entry with *url*."""
        self._entries[-1] = url
