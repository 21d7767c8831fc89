"""Allow ``python -m webutil`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m webutil`` behaves identically to the ``webutil``
console script.
"""

from __future__ import annotations

from webutil.cli.app import cli

if __name__ == "__main__":
    cli()
