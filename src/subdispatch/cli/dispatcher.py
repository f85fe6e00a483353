"""Subcommand matching, validation and invocation.

:class:`Dispatcher` owns a :class:`~subdispatch.core.registry.Registry`
and drives one parse/run cycle at a time:

``parse(argv)``
    Match ``argv[0]`` to a registered subcommand, parse the remaining
    tokens with a fresh :class:`~subdispatch.infra.flagset.FlagSet`,
    check required flags and store the outcome.  Usage errors are written
    to the error sink and raised as
    :class:`~subdispatch.exceptions.UsageError` (exit code ``1``).

``run()``
    Invoke the matched command, or show its usage when help was asked
    for.  Command failures are printed as ``FATAL: <message>`` and turned
    into the returned exit code.

Neither method exits the process; see :mod:`subdispatch.cli.default`
for the process-wide wrapper that does.

When a help flag and a missing required flag occur together, help wins:
the required-flag check is skipped and ``run`` shows the usage.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from subdispatch.cli import exit_codes
from subdispatch.utils.console import Output
from subdispatch.utils.console import output as default_output
from subdispatch.core.models import DispatchState, SubcommandDefinition
from subdispatch.core.protocols import Command
from subdispatch.core.registry import Registry
from subdispatch.core.usage import render_subcommand_usage, render_top_level_usage
from subdispatch.exceptions import (
    CommandError,
    FlagError,
    FlagSyntaxError,
    MissingRequiredFlagsError,
    NoCommandError,
    UnknownCommandError,
    UsageError,
)
from subdispatch.infra.flagset import ErrorHandling, FlagSet

logger = logging.getLogger(__name__)

HELP_FLAG_NAMES: tuple[str, ...] = ("h", "?", "help")
"""Boolean flags added to every subcommand to request its usage."""


class Dispatcher:
    """Registry of subcommands plus the parse/run state machine.

    Parameters
    ----------
    program:
        Program name shown in usage lines.
    global_flags:
        Flags of the whole program, only read when rendering top-level
        usage.  Parsing them is the caller's job.
    output:
        Sinks for usage and error text.  Defaults to the process-wide
        :data:`subdispatch.utils.console.output`.
    """

    def __init__(
        self,
        program: str,
        global_flags: FlagSet | None = None,
        *,
        output: Output | None = None,
    ) -> None:
        self.program = program
        self.output = output if output is not None else default_output
        self.global_flags = (
            global_flags if global_flags is not None else FlagSet(program, output=self.output)
        )
        self.registry = Registry()
        self.state = DispatchState()

    # -- registration -------------------------------------------------------

    def register(
        self,
        name: str,
        description: str,
        command: Command,
        required_flags: Iterable[str] = (),
    ) -> SubcommandDefinition:
        """Register *command* under *name*; see :meth:`Registry.register`."""
        return self.registry.register(name, description, command, required_flags)

    # -- usage --------------------------------------------------------------

    def usage(self) -> None:
        """Write the program usage listing every subcommand."""
        self.output.usage(
            render_top_level_usage(self.program, self.registry, self.global_flags),
        )

    def subcommand_usage(self, definition: SubcommandDefinition) -> None:
        """Write the usage of *definition*.

        The flags are re-derived on a throwaway flag set so that the
        flag set of the real parse is never touched.
        """
        fresh = FlagSet(definition.name, ErrorHandling.CONTINUE, output=self.output)
        flags = self._define_flags(definition, fresh)
        self.output.usage(render_subcommand_usage(self.program, definition, flags))

    @staticmethod
    def _define_flags(definition: SubcommandDefinition, flags: FlagSet) -> FlagSet:
        defined = definition.command.define_flags(flags)
        return flags if defined is None else defined

    # -- parse --------------------------------------------------------------

    def parse(self, argv: Sequence[str]) -> DispatchState:
        """Match *argv* to a subcommand and parse its flags.

        Returns the new :attr:`state`.  With no subcommands registered this
        is a silent no-op.

        Raises
        ------
        NoCommandError
            *argv* is empty.
        UnknownCommandError
            ``argv[0]`` is not a registered name.
        FlagSyntaxError
            The subcommand's flags could not be parsed.
        MissingRequiredFlagsError
            A required flag was not explicitly supplied.
        """
        self.state = DispatchState()
        if not self.registry:
            return self.state

        if not argv:
            self.usage()
            raise NoCommandError("no command given")

        name = argv[0]
        definition = self.registry.lookup(name)
        if definition is None:
            logger.debug("no command registered as %r", name)
            self.output.error(f"unknown command: {name}")
            self.usage()
            raise UnknownCommandError(name)

        flags = self._define_flags(
            definition,
            FlagSet(name, ErrorHandling.CONTINUE, output=self.output),
        )
        help_flags = [alias for alias in HELP_FLAG_NAMES if alias not in flags]
        for alias in help_flags:
            flags.boolean(alias, False, "show help for this command")
        flags.usage = lambda: self.subcommand_usage(definition)

        try:
            flags.parse(argv[1:])
        except FlagError as exc:
            raise FlagSyntaxError(str(exc), command=name) from exc

        help_requested = any(flags.value(alias) for alias in help_flags)
        if not help_requested:
            self._check_required(definition, flags)

        self.state = DispatchState(
            matched=definition,
            args=tuple(flags.args),
            help_requested=help_requested,
            flags=flags,
        )
        logger.debug(
            "matched command %r (args=%s, help=%s)",
            name, self.state.args, help_requested,
        )
        return self.state

    def _check_required(self, definition: SubcommandDefinition, flags: FlagSet) -> None:
        supplied = flags.actual
        missing = [name for name in definition.required_flags if name not in supplied]
        if not missing:
            return

        undefined = [name for name in missing if name not in flags]
        if undefined:
            logger.warning(
                "command %r requires flags it never defines: %s",
                definition.name, ", ".join(undefined),
            )
        error = MissingRequiredFlagsError(missing, command=definition.name)
        self.output.error(str(error))
        self.subcommand_usage(definition)
        raise error

    # -- run ----------------------------------------------------------------

    def run(self) -> int:
        """Run the matched command and return the exit code.

        Returns ``0`` without doing anything when nothing was matched, and
        after showing usage when help was requested.
        """
        state, self.state = self.state, DispatchState()
        definition = state.matched
        if definition is None:
            return exit_codes.SUCCESS

        if state.help_requested:
            self.subcommand_usage(definition)
            return exit_codes.SUCCESS

        try:
            definition.command.run(list(state.args))
        except CommandError as exc:
            code, show_help, message = exc.code, exc.show_help, str(exc)
        except Exception as exc:  # noqa: BLE001
            logger.debug("command %r raised", definition.name, exc_info=True)
            code, show_help, message = exit_codes.HANDLER_FAILURE, False, str(exc)
        else:
            return exit_codes.SUCCESS

        logger.debug("command %r failed with code %d", definition.name, code)
        self.output.fatal(message)
        if show_help:
            self.subcommand_usage(definition)
        return code

    def parse_and_run(self, argv: Sequence[str]) -> int:
        """Parse *argv* then run; usage errors become their exit code."""
        try:
            self.parse(argv)
        except UsageError as exc:
            return exc.code
        return self.run()
