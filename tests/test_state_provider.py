"""Tests for the state providers (infra/state.py).

Files are written under ``tmp_path``; OS and JSON errors must surface
as :class:`StateFileError`, shape errors as :class:`StateFormatError`.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from webutil.core.models import StoreState, UserState
from webutil.exceptions import StateFileError, StateFormatError
from webutil.infra.state import (
    JsonFileStateProvider,
    StaticStateProvider,
    load_state,
    read_json,
)

WriteJson = Callable[[str, object], Path]


class TestReadJson:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(StateFileError, match="Cannot read") as exc_info:
            read_json(tmp_path / "nope.json")
        assert exc_info.value.hint is not None

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StateFileError, match="not valid JSON"):
            read_json(path)


class TestLoadState:
    def test_loads_store(self, write_json: WriteJson) -> None:
        path = write_json(
            "state.json",
            {
                "user": {"admin": True, "resources": []},
                "resource": {"resourceMap": {"/api/x": {}}},
            },
        )
        state = load_state(path)
        assert state.user.admin is True
        assert "/api/x" in state.resource.resource_map

    def test_top_level_must_be_object(self, write_json: WriteJson) -> None:
        path = write_json("state.json", ["not", "an", "object"])
        with pytest.raises(StateFormatError):
            load_state(path)


class TestStaticStateProvider:
    def test_default_state(self) -> None:
        assert StaticStateProvider().get_state() == StoreState()

    def test_set_state(self) -> None:
        provider = StaticStateProvider()
        new_state = StoreState(user=UserState(admin=True))
        provider.set_state(new_state)
        assert provider.get_state() is new_state


class TestJsonFileStateProvider:
    def test_rereads_file(self, write_json: WriteJson) -> None:
        path = write_json("state.json", {"user": {"admin": False}})
        provider = JsonFileStateProvider(path)
        assert provider.path == path
        assert provider.get_state().user.admin is False

        write_json("state.json", {"user": {"admin": True}})
        assert provider.get_state().user.admin is True
