"""Logging setup for the console script.

Library modules only create ``logging.getLogger(__name__)`` loggers and
never install handlers; the CLI decides where records go.  With Rich
available records are rendered by :class:`rich.logging.RichHandler` on
stderr, otherwise by the standard stream handler.
"""

from __future__ import annotations

import logging

from webutil.cli.console import get_rich_console
from webutil.exceptions import EnvironmentError

_FORMAT = "%(name)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """Install a root handler at DEBUG (*verbose*) or WARNING level.

    Only the level is adjusted when the root logger already has a
    handler, so embedding applications keep their configuration.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    try:
        rich_console = get_rich_console(stderr=True)
    except EnvironmentError:
        logging.basicConfig(level=level, format="%(levelname)s " + _FORMAT)
        return

    from rich.logging import RichHandler

    logging.basicConfig(
        level=level,
        format=_FORMAT,
        datefmt="[%X]",
        handlers=[RichHandler(console=rich_console, show_path=False)],
    )
