"""Process-wide default dispatcher and its free-function interface.

For small programs that do not want to construct a
:class:`~subdispatch.cli.dispatcher.Dispatcher` themselves::

    from subdispatch.cli import default

    default.global_flags.boolean("v", False, "verbose output")
    default.register("serve", "Start the server", ServeCommand(), ["port"])
    default.parse_and_run()

Unlike the dispatcher, these functions are a process boundary: usage
errors and command failures end the process through :func:`sys.exit`.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from subdispatch.cli import exit_codes
from subdispatch.utils.console import output
from subdispatch.cli.dispatcher import Dispatcher
from subdispatch.core.models import DispatchState, SubcommandDefinition
from subdispatch.core.protocols import Command
from subdispatch.exceptions import UsageError
from subdispatch.infra.flagset import ErrorHandling, FlagSet

program: str = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "program"

global_flags = FlagSet(program, ErrorHandling.EXIT)
"""Flags of the whole program, parsed by :func:`parse` before dispatch.

Errors and usage go to the process default
:data:`subdispatch.utils.console.output`, so
:func:`~subdispatch.utils.console.set_streams` redirects them.
"""

dispatcher = Dispatcher(program, global_flags)

_default_command: str | None = None
_post_parse_hook: Callable[[], None] | None = None


def set_default_command(name: str | None) -> None:
    """Dispatch to *name* when no subcommand is given on the command line."""
    global _default_command
    _default_command = name


def set_post_parse_hook(hook: Callable[[], None] | None) -> None:
    """Call *hook* after the global flags are parsed, before dispatch."""
    global _post_parse_hook
    _post_parse_hook = hook


def register(
    name: str,
    description: str,
    command: Command,
    required_flags: Iterable[str] = (),
) -> SubcommandDefinition:
    return dispatcher.register(name, description, command, required_flags)


def usage() -> None:
    dispatcher.usage()


def parse(argv: Sequence[str] | None = None) -> DispatchState:
    """Parse the global flags, then dispatch the remaining arguments.

    *argv* defaults to ``sys.argv[1:]``.  Exits with
    :data:`exit_codes.USAGE_ERROR` on a usage error.
    """
    arguments = list(sys.argv[1:] if argv is None else argv)
    global_flags.usage = dispatcher.usage
    global_flags.parse(arguments)

    remaining = global_flags.args
    if not remaining and _default_command:
        remaining = [_default_command]
    if _post_parse_hook is not None:
        _post_parse_hook()

    try:
        return dispatcher.parse(remaining)
    except UsageError as exc:
        sys.exit(exc.code)


def run() -> None:
    """Run the parsed subcommand, exiting with its code on failure."""
    code = dispatcher.run()
    if code != exit_codes.SUCCESS:
        sys.exit(code)


def parse_and_run(argv: Sequence[str] | None = None) -> None:
    """:func:`parse` then :func:`run`; Ctrl+C exits with code 130."""
    try:
        parse(argv)
        run()
    except KeyboardInterrupt:
        output.error("Aborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
