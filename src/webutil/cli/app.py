"""CLI application entry point and command routing for webutil.

This module is the **sole error boundary** for the entire application.
It catches :class:`~webutil.exceptions.WebUtilError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core and
  infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; the console proxies
  are used exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from webutil.cli import exit_codes
from webutil.cli.console import console, stdout
from webutil.cli.logs import configure_logging
from webutil.exceptions import WebUtilError
from webutil.utils.constants import DEFAULT_TIME_FORMAT
from webutil.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _iso_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 date: {value!r}") from exc


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands:
    * ``webutil time``         — render a date with the token formatter
    * ``webutil auth PATH``    — check one resource against a state file
    * ``webutil perms``        — table of ``can<Name>`` flags for an API map
    * ``webutil strip-query``  — drop the query string from a URL
    """
    parser = argparse.ArgumentParser(
        prog="webutil",
        description="Front-end utility helpers: permissions, formatting, URLs.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr.",
    )
    commands = parser.add_subparsers(dest="command")

    time_cmd = commands.add_parser("time", help="Format a date.")
    time_cmd.add_argument(
        "-f",
        "--format",
        dest="fmt",
        default=DEFAULT_TIME_FORMAT,
        help=f"Token pattern (default: {DEFAULT_TIME_FORMAT!r}).",
    )
    time_cmd.add_argument(
        "--at",
        type=_iso_datetime,
        default=None,
        help="ISO-8601 date to format instead of now.",
    )

    auth_cmd = commands.add_parser("auth", help="Check access to a resource path.")
    auth_cmd.add_argument("path", help="Resource path, e.g. /api/user/list.")
    auth_cmd.add_argument(
        "-s", "--state", type=Path, required=True, help="JSON dump of the store.",
    )

    perms_cmd = commands.add_parser("perms", help="Evaluate can<Name> flags.")
    perms_cmd.add_argument(
        "-s", "--state", type=Path, required=True, help="JSON dump of the store.",
    )
    perms_cmd.add_argument(
        "-a", "--apis", type=Path, required=True, help="JSON map of name -> {url}.",
    )

    strip_cmd = commands.add_parser("strip-query", help="Remove a URL's query string.")
    strip_cmd.add_argument("url")

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_time(fmt: str, at: datetime | None) -> int:
    from webutil.core.formatting import time_format

    stdout.print(time_format(fmt, at))
    return exit_codes.SUCCESS


def _handle_auth(path: str, state_path: Path) -> int:
    from webutil.core.auth import Authorizer
    from webutil.infra.state import StaticStateProvider, load_state

    authorizer = Authorizer(StaticStateProvider(load_state(state_path)))
    if authorizer.auth(path):
        stdout.print("allowed")
        return exit_codes.SUCCESS
    stdout.print("denied")
    return exit_codes.ACCESS_DENIED


def _handle_perms(state_path: Path, apis_path: Path) -> int:
    from webutil.cli.perms import run_perms

    return run_perms(state_path, apis_path)


def _handle_strip_query(url: str) -> int:
    from webutil.core.url import del_all_url_param
    from webutil.infra.history import InMemoryLocation

    location = InMemoryLocation(url)
    del_all_url_param(location)
    stdout.print(location.href)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the webutil CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(verbose=args.verbose)

    if args.command == "time":
        return _handle_time(args.fmt, args.at)
    if args.command == "auth":
        return _handle_auth(args.path, args.state)
    if args.command == "perms":
        return _handle_perms(args.state, args.apis)
    return _handle_strip_query(args.url)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except WebUtilError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
