"""Infrastructure layer — adapters for the core protocols.

This layer owns file access and environment emulation.  Every raw OS
or decoder exception must be caught here and re-raised as a
:class:`~webutil.exceptions.WebUtilError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from webutil.infra.history import InMemoryLocation
from webutil.infra.state import (
    JsonFileStateProvider,
    StaticStateProvider,
    load_state,
    read_json,
)

__all__: list[str] = [
    "InMemoryLocation",
    "JsonFileStateProvider",
    "StaticStateProvider",
    "load_state",
    "read_json",
]
