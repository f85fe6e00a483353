"""Ordered registry of subcommand definitions.

Names are unique and matched verbatim: no case folding, no prefix or fuzzy
resolution.  Insertion order is preserved because it is the order of the
usage listing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from subdispatch.core.models import SubcommandDefinition
from subdispatch.core.protocols import Command
from subdispatch.exceptions import CommandDefinitionError, DuplicateCommandError

logger = logging.getLogger(__name__)


class Registry:
    """Append-only sequence of :class:`SubcommandDefinition`."""

    def __init__(self) -> None:
        self._definitions: list[SubcommandDefinition] = []

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[SubcommandDefinition]:
        return iter(self._definitions)

    def __contains__(self, name: object) -> bool:
        return any(definition.name == name for definition in self._definitions)

    def register(
        self,
        name: str,
        description: str,
        command: Command,
        required_flags: Iterable[str] = (),
    ) -> SubcommandDefinition:
        """Append a subcommand.

        Raises
        ------
        DuplicateCommandError
            When *name* is already registered.
        CommandDefinitionError
            When *name* is empty or *command* does not implement
            :class:`~subdispatch.core.protocols.Command`.
        """
        if not name:
            raise CommandDefinitionError("command name must not be empty")
        if name in self:
            raise DuplicateCommandError(name)
        if not isinstance(command, Command):
            raise CommandDefinitionError(
                f"command {name!r} must define 'define_flags' and 'run'",
            )

        if isinstance(required_flags, str):
            required_flags = (required_flags,)

        definition = SubcommandDefinition(
            name=name,
            description=description,
            command=command,
            required_flags=tuple(dict.fromkeys(required_flags)),
        )
        self._definitions.append(definition)
        logger.debug("registered command %r (required=%s)", name, definition.required_flags)
        return definition

    def lookup(self, name: str) -> SubcommandDefinition | None:
        """Return the definition registered as exactly *name*, if any."""
        for definition in self._definitions:
            if definition.name == name:
                return definition
        return None

    def names(self) -> list[str]:
        return [definition.name for definition in self._definitions]
