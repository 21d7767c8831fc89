"""Tests for domain models (core/models.py).

All models are frozen dataclasses — these tests verify immutability,
defaults, and parsing from the camelCase mappings the front end uses.
"""

from __future__ import annotations

from typing import Any

import pytest

from webutil.core.models import (
    ApiDescriptor,
    ResourceState,
    Route,
    RouteMeta,
    StoreState,
    UserState,
)
from webutil.exceptions import StateFormatError


def _raw_state(**overrides: Any) -> dict[str, Any]:
    """Factory for a raw store dump with sensible defaults."""
    raw: dict[str, Any] = {
        "user": {"admin": False, "resources": ["/api/user/list"]},
        "resource": {"resourceMap": {"/api/user/list": {"name": "List users"}}},
    }
    raw.update(overrides)
    return raw


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

class TestRoute:
    def test_meta_defaults_to_none(self) -> None:
        assert Route(path="/").meta is None

    def test_from_mapping_camel_case(self) -> None:
        route = Route.from_mapping(
            {"path": "/users", "meta": {"noAuth": True, "title": "Users", "dynamicTitle": "x"}}
        )
        assert route == Route(
            path="/users",
            meta=RouteMeta(no_auth=True, title="Users", dynamic_title="x"),
        )

    def test_from_mapping_without_meta(self) -> None:
        assert Route.from_mapping({"path": "/"}) == Route(path="/")

    def test_from_mapping_requires_path(self) -> None:
        with pytest.raises(StateFormatError, match="path"):
            Route.from_mapping({"meta": {}})

    def test_from_mapping_rejects_bad_meta(self) -> None:
        with pytest.raises(StateFormatError):
            Route.from_mapping({"path": "/", "meta": "oops"})

    def test_frozen(self) -> None:
        route = Route(path="/")
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# StoreState
# ---------------------------------------------------------------------------

class TestStoreState:
    def test_defaults(self) -> None:
        state = StoreState()
        assert state.user == UserState(admin=False, resources=None)
        assert dict(state.resource.resource_map) == {}

    def test_from_mapping(self) -> None:
        state = StoreState.from_mapping(_raw_state())
        assert state.user.admin is False
        assert state.user.resources == frozenset({"/api/user/list"})
        assert "/api/user/list" in state.resource.resource_map

    def test_admin_must_be_literal_true(self) -> None:
        state = StoreState.from_mapping(_raw_state(user={"admin": "yes"}))
        assert state.user.admin is False

    def test_null_resources_preserved(self) -> None:
        state = StoreState.from_mapping(_raw_state(user={"resources": None}))
        assert state.user.resources is None

    def test_object_as_set_resources(self) -> None:
        state = StoreState.from_mapping(_raw_state(user={"resources": {"/a": True}}))
        assert state.user.resources == frozenset({"/a"})

    def test_missing_sections(self) -> None:
        state = StoreState.from_mapping({})
        assert state == StoreState()

    def test_snake_case_resource_map(self) -> None:
        state = StoreState.from_mapping({"resource": {"resource_map": {"/a": 1}}})
        assert "/a" in state.resource.resource_map

    def test_resource_map_is_read_only(self) -> None:
        state = StoreState.from_mapping(_raw_state())
        with pytest.raises(TypeError):
            state.resource.resource_map["/new"] = {}  # type: ignore[index]

    @pytest.mark.parametrize(
        "raw",
        [
            {"user": []},
            {"user": {"resources": 5}},
            {"resource": {"resourceMap": ["/a"]}},
        ],
    )
    def test_bad_shapes_raise(self, raw: dict[str, Any]) -> None:
        with pytest.raises(StateFormatError):
            StoreState.from_mapping(raw)

    def test_frozen(self) -> None:
        state = StoreState()
        with pytest.raises(AttributeError):
            state.user = UserState(admin=True)  # type: ignore[misc]


class TestResourceState:
    def test_each_instance_has_own_default(self) -> None:
        assert ResourceState().resource_map is not ResourceState().resource_map


class TestApiDescriptor:
    def test_equality(self) -> None:
        assert ApiDescriptor("/api/x") == ApiDescriptor(url="/api/x")
