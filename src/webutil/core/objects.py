"""Helpers for plain nested data — dicts, lists and tuples of scalars.

``dict`` plays the role of a plain object and ``list`` the role of an
array.  ``bool`` is never treated as a number even though it subclasses
``int``.

Every recursive helper tracks the containers on its current descent
path and raises :class:`~webutil.exceptions.CycleDetectedError` instead
of recursing forever.  Diamond-shaped sharing is fine; only a container
that contains itself (directly or indirectly) is rejected.
"""

from __future__ import annotations

import types
from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar

from webutil.exceptions import CycleDetectedError

T = TypeVar("T")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _enter(value: object, ancestors: set[int], helper: str) -> int:
    key = id(value)
    if key in ancestors:
        raise CycleDetectedError(
            f"{helper}() found a reference cycle through {type(value).__name__}.",
            hint="Only finite, tree-shaped data can be traversed.",
        )
    ancestors.add(key)
    return key


# ---------------------------------------------------------------------------
# Emptiness
# ---------------------------------------------------------------------------

def is_empty(*values: object) -> bool:
    """Return True if any of *values* is ``None`` or the empty string.

    ``0`` and ``False`` are not empty.
    """
    return any(value is None or value == "" for value in values)


def empty_or_default(value: T | None, default: Any = "") -> T | Any:
    """Return *default* when *value* is empty, else *value* unchanged."""
    return default if is_empty(value) else value


def initial_value(value: object) -> object:
    """Return the blank value for *value*'s type.

    ``None`` → ``None``, ``str`` → ``""``, ``bool`` → ``False``,
    numbers → ``0``, ``list`` → ``[]``, mappings → ``{}``; anything
    else has no meaningful blank and maps to ``None``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return ""
    if isinstance(value, bool):
        return False
    if _is_number(value):
        return 0
    if isinstance(value, list):
        return []
    if isinstance(value, Mapping):
        return {}
    return None


# ---------------------------------------------------------------------------
# Reset / merge
# ---------------------------------------------------------------------------

def reset_obj(obj: MutableMapping[str, Any] | None) -> None:
    """Blank every value of *obj* in place.

    Lists become ``[]``, numbers ``0``, booleans ``False``, nested
    mappings are reset recursively and everything else becomes
    ``None``.  Does nothing when *obj* is empty per :func:`is_empty`.
    """
    if is_empty(obj):
        return
    _reset(obj, set())  # type: ignore[arg-type]


def _reset(obj: MutableMapping[str, Any], ancestors: set[int]) -> None:
    key_id = _enter(obj, ancestors, "reset_obj")
    for key in list(obj.keys()):
        value = obj[key]
        if isinstance(value, list):
            obj[key] = []
        elif isinstance(value, bool):
            obj[key] = False
        elif _is_number(value):
            obj[key] = 0
        elif isinstance(value, MutableMapping):
            _reset(value, ancestors)
        else:
            obj[key] = None
    ancestors.discard(key_id)


def merge_obj(
    target: MutableMapping[str, Any] | None,
    source: Mapping[str, Any] | None,
) -> None:
    """Copy values from *source* into the existing keys of *target*.

    The merge is driven by *target*'s shape: keys missing from *source*
    are left alone and keys only present in *source* are ignored.

    * lists are replaced wholesale with ``source[key] or []``;
    * numbers are replaced with ``source[key] or 0`` (NaN passes through);
    * nested mappings are merged recursively;
    * anything else is assigned directly.

    Raises
    ------
    TypeError
        If a nested mapping in *target* meets a non-mapping in *source*.
    """
    _merge(target, source, set())


def _merge(
    target: MutableMapping[str, Any] | None,
    source: Mapping[str, Any] | None,
    ancestors: set[int],
) -> None:
    if is_empty(target, source):
        return
    if not isinstance(source, Mapping):
        raise TypeError(
            f"merge_obj() source must be a mapping, not {type(source).__name__}",
        )
    key_id = _enter(target, ancestors, "merge_obj")
    for key in list(target.keys()):
        if key not in source:
            continue
        current = target[key]
        incoming = source[key]

        # Shallow: the source list object is shared.
        if isinstance(current, list):
            target[key] = incoming or []
        elif _is_number(current):
            target[key] = incoming or 0
        elif isinstance(current, MutableMapping):
            _merge(current, incoming, ancestors)
        else:
            target[key] = incoming
    ancestors.discard(key_id)


# ---------------------------------------------------------------------------
# Clone / bind
# ---------------------------------------------------------------------------

def deep_clone(source: T) -> T:
    """Return a recursive copy of the dicts, lists and tuples in *source*.

    Any other object (futures, coroutines, sets, class instances) is
    returned by reference, as are scalars and ``None``.
    """
    return _clone(source, set())


def _clone(source: Any, ancestors: set[int]) -> Any:
    if not isinstance(source, (dict, list, tuple)):
        return source
    key_id = _enter(source, ancestors, "deep_clone")
    if isinstance(source, dict):
        result: Any = {key: _clone(value, ancestors) for key, value in source.items()}
    elif isinstance(source, list):
        result = [_clone(item, ancestors) for item in source]
    else:
        result = tuple(_clone(item, ancestors) for item in source)
    ancestors.discard(key_id)
    return result


def bind_this(obj: T, root: object = None) -> T | None:
    """Bind every plain function reachable from *obj* to *root*.

    Walks the dict/list graph of *obj* and replaces each plain function
    with a bound method whose first argument is *root* (defaults to
    *obj* itself).  Already-bound callables are kept as they are.
    Mutates *obj* in place and returns it; returns ``None`` when *obj*
    is not a dict or list.
    """
    if not isinstance(obj, (dict, list)):
        return None
    _bind(obj, obj if root is None else root, set())
    return obj


def _bind(obj: Any, root: object, ancestors: set[int]) -> None:
    if not isinstance(obj, (dict, list)):
        return
    key_id = _enter(obj, ancestors, "bind_this")
    keys = obj.keys() if isinstance(obj, dict) else range(len(obj))
    for key in list(keys):
        value = obj[key]
        if isinstance(value, types.FunctionType):
            obj[key] = types.MethodType(value, root)
        else:
            _bind(value, root, ancestors)
    ancestors.discard(key_id)
