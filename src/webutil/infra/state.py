"""State providers — adapters for :class:`~webutil.core.protocols.StateProvider`.

:class:`StaticStateProvider` serves a fixed snapshot (tests, embedding
applications that push state in).  :class:`JsonFileStateProvider` reads
a JSON dump of the store on every access, so edits to the file are seen
by the next permission check.

All OS and decoding errors are re-raised as
:class:`~webutil.exceptions.StateFileError`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from webutil.core.models import StoreState
from webutil.exceptions import StateFileError, StateFormatError

log = logging.getLogger(__name__)


def read_json(path: Path | str) -> Any:
    """Read and decode the JSON document at *path*.

    Raises
    ------
    StateFileError
        When the file is missing, unreadable or not valid JSON.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StateFileError(
            f"Cannot read {file_path}: {exc.strerror or exc}",
            hint="Check the path and file permissions.",
        ) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise StateFileError(
            f"{file_path} is not valid JSON (line {exc.lineno}, column {exc.colno}).",
        ) from exc


def load_state(path: Path | str) -> StoreState:
    """Load a :class:`StoreState` from the JSON file at *path*.

    Raises
    ------
    StateFileError
        When the file cannot be read or decoded.
    StateFormatError
        When the document does not have the store's shape.
    """
    raw = read_json(path)
    if not isinstance(raw, Mapping):
        raise StateFormatError(f"{path}: top-level JSON value must be an object.")
    state = StoreState.from_mapping(raw)
    log.debug(
        "loaded state from %s (admin=%s, %d registered resources)",
        path,
        state.user.admin,
        len(state.resource.resource_map),
    )
    return state


class StaticStateProvider:
    """Serve one fixed :class:`StoreState`; swap it with :meth:`set_state`."""

    def __init__(self, state: StoreState | None = None) -> None:
        self._state: StoreState = state if state is not None else StoreState()

    def get_state(self) -> StoreState:
        return self._state

    def set_state(self, state: StoreState) -> None:
        self._state = state


class JsonFileStateProvider:
    """Re-read the store from a JSON file on every :meth:`get_state` call."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_state(self) -> StoreState:
        return load_state(self._path)
