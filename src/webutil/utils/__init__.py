"""Shared utilities — constants and cross-cutting defaults.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""
