"""Shared utilities — constants and identifier helpers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""
