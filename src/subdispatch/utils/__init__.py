"""Shared utilities: cross-cutting helpers importable by any layer.

Rules
-----
* No business logic.
* No imports from ``cli``.
"""
