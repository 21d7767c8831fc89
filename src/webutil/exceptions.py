"""Custom exception hierarchy for webutil.

All exceptions raised deliberately by the library inherit from
:class:`WebUtilError`.  Raw OS and parser exceptions (e.g. from reading
a state file) must NEVER propagate beyond the infrastructure layer —
they must be caught and re-raised as a typed subclass defined here.
Plain type mismatches on recursive helpers surface as the built-in
:class:`TypeError`.

Hierarchy
---------
WebUtilError
├── CycleDetectedError
├── PollTimeoutError
├── StateFormatError
├── StateFileError
└── EnvironmentError
"""

from __future__ import annotations


class WebUtilError(Exception):
    """Base exception for all webutil errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Object traversal ------------------------------------------------------

class CycleDetectedError(WebUtilError):
    """Raised when a recursive object helper re-enters its own ancestry."""


# --- Polling ---------------------------------------------------------------

class PollTimeoutError(WebUtilError):
    """Raised when :func:`wait_until_success` exhausts its retry budget."""

    def __init__(self, attempts: int, *, hint: str | None = None) -> None:
        super().__init__(
            f"Condition not met after {attempts} attempt(s).",
            hint=hint,
        )
        self.attempts: int = attempts


# --- Application state -----------------------------------------------------

class StateFormatError(WebUtilError):
    """Raised when state or api-map data does not have the expected shape."""


class StateFileError(WebUtilError):
    """Raised when a state file cannot be read or decoded."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(WebUtilError):
    """Raised when a required runtime dependency is not available."""
