"""URL helpers operating on strings or on a :class:`Location`."""

from __future__ import annotations

from webutil.core.protocols import Location


def strip_url_params(url: str) -> str:
    """Return *url* without its query string.

    Everything from the first ``?`` onwards is dropped, including any
    fragment that follows it.
    """
    return url.split("?", 1)[0]


def del_all_url_param(location: Location) -> None:
    """Remove the query string from *location* without navigating.

    The current history entry is replaced in place; nothing happens
    when the URL carries no query string.
    """
    href = location.href
    if "?" in href:
        location.replace_state(strip_url_params(href))
