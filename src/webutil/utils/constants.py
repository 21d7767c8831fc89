"""Default values shared across layers.

Durations are expressed in milliseconds to match the browser timer
API the helpers mirror.
"""

from __future__ import annotations

DEFAULT_TIME_FORMAT: str = "yyyy-MM-dd HH:mm:ss"
"""Pattern used by :func:`~webutil.core.formatting.time_format` when none is given."""

DEFAULT_DEBOUNCE_MS: float = 100
DEFAULT_THROTTLE_MS: float = 100
DEFAULT_POLL_INTERVAL_MS: float = 1000

REDIRECT_PREFIX: str = "/redirect"
"""Routes under this prefix never require authorization."""
