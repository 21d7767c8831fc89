"""``webutil perms`` — permission flag report.

Evaluates the ``can<Name>`` flag of every entry in an API map against a
state file and renders them as a Rich table on stdout (plain text
without Rich).

This module lives in the CLI layer — it may import from ``infra`` and
``core``, and it renders via Rich.  The permission decisions themselves
are made in the core.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from webutil.cli import exit_codes
from webutil.cli.console import stdout
from webutil.core.auth import Authorizer, api_url
from webutil.core.formatting import uppercase_first
from webutil.exceptions import StateFormatError
from webutil.infra.state import JsonFileStateProvider, read_json


# ---------------------------------------------------------------------------
# Row collection
# ---------------------------------------------------------------------------

def collect_rows(
    api_map: Mapping[str, Mapping[str, object]],
    authorizer: Authorizer,
) -> list[tuple[str, str, bool]]:
    """Return ``(flag, url, allowed)`` for each API, in map order."""
    rows: list[tuple[str, str, bool]] = []
    for name, api in api_map.items():
        # ``list`` and ``List`` share a flag, so each row checks its own URL.
        url = api_url(name, api)
        rows.append((f"can{uppercase_first(name)}", url, authorizer.auth(url)))
    return rows


def _load_api_map(path: Path) -> Mapping[str, Mapping[str, object]]:
    raw = read_json(path)
    if not isinstance(raw, Mapping) or not all(
        isinstance(api, Mapping) for api in raw.values()
    ):
        raise StateFormatError(
            f"{path}: expected an object of {{name: {{url: ...}}}} entries.",
        )
    return raw


def _status(allowed: bool) -> Any:
    from rich.text import Text

    return Text("allowed", style="green") if allowed else Text("denied", style="red")


def _print_plain_table(rows: list[tuple[str, str, bool]]) -> None:
    """Render the report without Rich."""
    print("\nwebutil perms")
    print("=" * 64)
    print(f"{'Flag':<24} {'URL':<30} {'Status':<8}")
    print("-" * 64)
    for flag, url, allowed in rows:
        status = "allowed" if allowed else "denied"
        print(f"{flag:<24} {url:<30} {status:<8}")
    print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_perms(state_path: Path, apis_path: Path) -> int:
    """Evaluate and render every permission flag.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS`; denied flags are reported, not
        treated as failures.
    """
    api_map = _load_api_map(apis_path)
    authorizer = Authorizer(JsonFileStateProvider(state_path))
    rows = collect_rows(api_map, authorizer)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(rows)
        return exit_codes.SUCCESS

    table = Table(
        title="webutil perms",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Flag", style="bold", min_width=12)
    table.add_column("URL", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for flag, url, allowed in rows:
        table.add_row(flag, url, _status(allowed))

    stdout.print()
    stdout.print(table)
    stdout.print()
    return exit_codes.SUCCESS
