"""Regression tests for the optional Rich dependency.

These tests verify every command still works with plain output when
Rich cannot be imported, since the console proxies, the logging setup
and the permission report all import Rich lazily.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from webutil.cli import exit_codes
from webutil.cli.app import main
from webutil.cli.console import get_rich_console
from webutil.cli.logs import configure_logging
from webutil.exceptions import EnvironmentError

WriteJson = Callable[[str, object], Path]


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_rich_console_raises_environment_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(EnvironmentError, match="rich is not installed"):
        get_rich_console()


def test_time_prints_plain_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["time", "-f", "yyyy", "--at", "2020-06-01T00:00:00"])

    assert code == exit_codes.SUCCESS
    assert capsys.readouterr().out == "2020\n"


def test_perms_plain_table_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    write_json: WriteJson,
) -> None:
    _hide_rich(monkeypatch)
    state = write_json("state.json", {"user": {"admin": True}})
    apis = write_json("apis.json", {"list": {"url": "/api/user/list"}})

    code = main(["perms", "--state", str(state), "--apis", str(apis)])

    assert code == exit_codes.SUCCESS
    out = capsys.readouterr().out
    assert "webutil perms" in out
    assert "canList" in out
    assert "allowed" in out


def test_logging_falls_back_to_stream_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setattr(root, "handlers", [])

    configure_logging(verbose=True)

    assert root.level == logging.DEBUG
    assert [type(handler) for handler in root.handlers] == [logging.StreamHandler]
