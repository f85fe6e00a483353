"""Custom exception hierarchy for subdispatch.

Every error raised by the library inherits from :class:`SubdispatchError`.
Configuration errors signal a mistake in the embedding program and are not
meant to be caught; usage errors and command errors are reported to the
caller, which decides how the process exits.

Hierarchy
---------
SubdispatchError
├── CommandDefinitionError
│   └── DuplicateCommandError
├── FlagDefinitionError
├── FlagError
│   └── HelpRequested
├── UsageError
│   ├── NoCommandError
│   ├── UnknownCommandError
│   ├── FlagSyntaxError
│   └── MissingRequiredFlagsError
└── CommandError
"""

from __future__ import annotations

from collections.abc import Iterable


class SubdispatchError(Exception):
    """Base exception for all subdispatch errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""

    @property
    def message(self) -> str:
        return str(self)


# --- Configuration ---------------------------------------------------------

class CommandDefinitionError(SubdispatchError):
    """Raised when a subcommand is registered with an invalid definition."""


class DuplicateCommandError(CommandDefinitionError):
    """Raised when a subcommand name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"command {name!r} already exists",
            hint="Each subcommand name may only be registered once.",
        )
        self.name: str = name


class FlagDefinitionError(SubdispatchError):
    """Raised when a flag is defined twice or with an unusable name."""


# --- Flag parsing ----------------------------------------------------------

class FlagError(SubdispatchError):
    """Raised by a flag set in ``CONTINUE`` mode when parsing fails."""


class HelpRequested(FlagError):
    """Raised when ``-h`` or ``-help`` is given but not defined as a flag."""

    def __init__(self) -> None:
        super().__init__("flag: help requested")


# --- Usage -----------------------------------------------------------------

class UsageError(SubdispatchError):
    """An invocation that does not match the registered subcommands.

    Usage has already been written to the error sink when this is raised;
    callers only need to pick the exit code.
    """

    code: int = 1


class NoCommandError(UsageError):
    """Raised when subcommands exist but none was named."""


class UnknownCommandError(UsageError):
    """Raised when the first argument names no registered subcommand."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown command: {name}")
        self.name: str = name


class FlagSyntaxError(UsageError):
    """Raised when a subcommand's flags cannot be parsed."""

    def __init__(self, message: str, *, command: str) -> None:
        super().__init__(message)
        self.command: str = command


class MissingRequiredFlagsError(UsageError):
    """Raised when required flags were not explicitly supplied."""

    def __init__(self, missing: Iterable[str], *, command: str) -> None:
        self.missing: tuple[str, ...] = tuple(missing)
        self.command: str = command
        super().__init__(
            "missing required flags: " + ", ".join(f"-{name}" for name in self.missing),
        )


# --- Command execution -----------------------------------------------------

class CommandError(SubdispatchError):
    """Raised by a command's ``run`` to report failure.

    Parameters
    ----------
    message:
        Printed after ``FATAL:`` on the error sink.
    code:
        Process exit code requested by the command.
    show_help:
        When true the subcommand usage is printed after the message.
    """

    def __init__(
        self,
        message: str,
        *,
        code: int = -1,
        show_help: bool = False,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.code: int = code
        self.show_help: bool = show_help
