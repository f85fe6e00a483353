"""Core layer: subcommand models, the handler protocol, the registry
and pure usage rendering.

Rules
-----
* No ``print()`` calls and no stream or process access.
* No imports from ``cli``.
* Flag sets are referenced for typing and read-only rendering only.
"""

from subdispatch.core.models import DispatchState, SubcommandDefinition
from subdispatch.core.protocols import Command
from subdispatch.core.registry import Registry
from subdispatch.core.usage import (
    NAME_COLUMN_WIDTH,
    render_subcommand_usage,
    render_top_level_usage,
)

__all__: list[str] = [
    "NAME_COLUMN_WIDTH",
    "Command",
    "DispatchState",
    "Registry",
    "SubcommandDefinition",
    "render_subcommand_usage",
    "render_top_level_usage",
]
