"""webutil — front-end utility helpers for web applications.

Permission predicates, plain-data object helpers, a date formatter,
event-loop timing wrappers and URL helpers, arranged in a strict
layered architecture.
"""

from webutil.version import __version__

__all__: list[str] = ["__version__"]
