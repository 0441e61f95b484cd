"""Shared utilities — logging setup and other cross-cutting concerns.

Rules
-----
* No business logic.
* No network or filesystem I/O.
* Importable by any layer.
"""
