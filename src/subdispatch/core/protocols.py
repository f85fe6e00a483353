"""Protocols (interfaces) implemented by subcommand handlers.

Handlers satisfy :class:`Command` structurally; no base class is needed.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from subdispatch.infra.flagset import FlagSet


@runtime_checkable
class Command(Protocol):
    """Contract for a subcommand handler.

    Any object implementing :meth:`define_flags` and :meth:`run` can be
    registered with a :class:`~subdispatch.cli.dispatcher.Dispatcher`.
    """

    def define_flags(self, flags: FlagSet) -> FlagSet:
        """Define this subcommand's flags on *flags* and return it.

        Called once for the real parse and again, on a fresh flag set,
        every time usage is rendered.  Must therefore have no effect
        beyond defining flags.
        """
        ...  # pragma: no cover

    def run(self, args: Sequence[str]) -> None:
        """Execute the subcommand with the leftover positional *args*.

        Raises
        ------
        CommandError
            To fail with a specific exit code, optionally showing usage.
            Any other exception fails with exit code ``-1``.
        """
        ...  # pragma: no cover
