"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two proxies are exported: :data:`console` renders diagnostics on
stderr with Rich markup; :data:`stdout` emits command results and reports
verbatim (no markup, no highlighting, no emoji shortcodes) so they can
be piped.
"""

from __future__ import annotations

import sys
from typing import Any

from webutil.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    if stderr:
        return console_class(stderr=True)
    return console_class(
        markup=False, highlight=False, emoji=False, soft_wrap=True,
    )


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain print."""
        stream = sys.stderr if self._stderr else sys.stdout
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except EnvironmentError:
            print(*objects, file=stream)
            return
        rich_console.print(*objects)


console = _ConsoleProxy(stderr=True)
stdout = _ConsoleProxy(stderr=False)
