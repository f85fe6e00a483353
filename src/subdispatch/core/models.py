"""Domain models for subdispatch.

:class:`SubcommandDefinition` is a frozen value object created once per
registration.  :class:`DispatchState` is the outcome of one parse cycle and
is replaced, never edited, by the dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from subdispatch.core.protocols import Command
    from subdispatch.infra.flagset import FlagSet


# ---------------------------------------------------------------------------
# Registered subcommand
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SubcommandDefinition:
    """A registered subcommand."""

    name: str
    """Matched verbatim against the first argument."""

    description: str
    """One-line summary shown in usage listings."""

    command: Command
    """Handler defining the flags and doing the work."""

    required_flags: tuple[str, ...] = ()
    """Flags that must be explicitly supplied, in declaration order."""


# ---------------------------------------------------------------------------
# Parse outcome
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class DispatchState:
    """Result of a parse cycle, consumed by exactly one run."""

    matched: SubcommandDefinition | None = None
    args: tuple[str, ...] = ()
    help_requested: bool = False
    flags: FlagSet | None = field(default=None, repr=False)
    """Flag set used for the real parse; read parsed values from here."""
