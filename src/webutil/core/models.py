"""Domain models for webutil.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and parsing from the loosely typed
mappings a web front end hands around.  They carry zero I/O and zero
dependencies on external packages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from webutil.exceptions import StateFormatError


# ---------------------------------------------------------------------------
# Route descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RouteMeta:
    """Authorization-relevant metadata attached to a route."""

    no_auth: bool = False
    """Route opts into the permission check only when this is set."""

    title: str | None = None
    """Static page title."""

    dynamic_title: str | None = None
    """Title computed at render time."""


@dataclass(frozen=True, slots=True)
class Route:
    """A route descriptor as consumed by :func:`~webutil.core.auth.need_auth`."""

    path: str
    meta: RouteMeta | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> Route:
        """Build a route from a ``{path, meta: {noAuth, title, dynamicTitle}}`` dict."""
        path = raw.get("path")
        if not isinstance(path, str):
            raise StateFormatError("Route descriptor requires a string 'path'.")
        raw_meta = raw.get("meta")
        if raw_meta is None:
            return cls(path=path)
        if not isinstance(raw_meta, Mapping):
            raise StateFormatError(f"Route meta for {path!r} must be a mapping.")
        meta = RouteMeta(
            no_auth=bool(raw_meta.get("noAuth", raw_meta.get("no_auth", False))),
            title=raw_meta.get("title"),
            dynamic_title=raw_meta.get("dynamicTitle", raw_meta.get("dynamic_title")),
        )
        return cls(path=path, meta=meta)


# ---------------------------------------------------------------------------
# Application state
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UserState:
    """The signed-in user as seen by the permission predicates."""

    admin: bool = False
    """Administrators bypass every resource check."""

    resources: frozenset[str] | None = None
    """Resource paths granted to the user, or ``None`` before login."""


@dataclass(frozen=True, slots=True)
class ResourceState:
    """Registry of every resource path that is subject to a check."""

    resource_map: Mapping[str, object] = field(
        default_factory=lambda: MappingProxyType({}),
    )


@dataclass(frozen=True, slots=True)
class StoreState:
    """Read-only snapshot of the application state tree."""

    user: UserState = field(default_factory=UserState)
    resource: ResourceState = field(default_factory=ResourceState)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> StoreState:
        """Parse ``{user: {admin, resources}, resource: {resourceMap}}``.

        Missing sections fall back to a non-admin user without resources
        and an empty resource map.

        Raises
        ------
        StateFormatError
            If a section is present but has the wrong shape.
        """
        if not isinstance(raw, Mapping):
            raise StateFormatError("State must be a mapping.")

        raw_user = _section(raw, "user")
        raw_resources = raw_user.get("resources")
        resources: frozenset[str] | None
        if raw_resources is None:
            resources = None
        elif isinstance(raw_resources, (list, tuple, set, frozenset)):
            resources = frozenset(str(item) for item in raw_resources)
        elif isinstance(raw_resources, Mapping):
            # Object-as-set form: {"/api/x": true, ...}
            resources = frozenset(str(key) for key in raw_resources)
        else:
            raise StateFormatError(
                "'user.resources' must be a list of paths.",
                hint="Use null when the user has not loaded permissions yet.",
            )

        raw_resource = _section(raw, "resource")
        raw_map = raw_resource.get("resourceMap", raw_resource.get("resource_map", {}))
        if raw_map is None:
            raw_map = {}
        if not isinstance(raw_map, Mapping):
            raise StateFormatError("'resource.resourceMap' must be a mapping.")

        return cls(
            user=UserState(admin=raw_user.get("admin") is True, resources=resources),
            resource=ResourceState(resource_map=MappingProxyType(dict(raw_map))),
        )


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise StateFormatError(f"State section {name!r} must be a mapping.")
    return value


# ---------------------------------------------------------------------------
# API descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ApiDescriptor:
    """A backend endpoint whose URL doubles as its permission resource."""

    url: str
