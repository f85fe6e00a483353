"""Demo program and console-script entry point for subdispatch.

``subdispatch`` is a small program built the way embedding programs are
expected to use the library: an explicit
:class:`~subdispatch.cli.dispatcher.Dispatcher`, a global flag set parsed
first, then subcommand dispatch.

* ``subdispatch [-v] version [-short]``
* ``subdispatch [-v] echo -times N [-sep S] [-upper] words...``

:func:`cli` is the error boundary: it is the only place in this module
that translates exceptions into the OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from subdispatch.cli import exit_codes
from subdispatch.utils.console import Output, output
from subdispatch.cli.dispatcher import Dispatcher
from subdispatch.exceptions import CommandError, FlagError, HelpRequested, SubdispatchError
from subdispatch.infra.flagset import ErrorHandling, FlagSet
from subdispatch.utils.log import configure_logging
from subdispatch.version import __version__

PROGRAM = "subdispatch"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class VersionCommand:
    """Print the installed version."""

    def __init__(self, out: Output) -> None:
        self.out = out
        self.short = False

    def define_flags(self, flags: FlagSet) -> FlagSet:
        flags.boolean("short", False, "print the version number only", bind=self)
        return flags

    def run(self, args: Sequence[str]) -> None:
        if args:
            raise CommandError(
                f"unexpected arguments: {' '.join(args)}",
                code=exit_codes.USAGE_ERROR,
                show_help=True,
            )
        self.out.println(__version__ if self.short else f"{PROGRAM} {__version__}")


class EchoCommand:
    """Print the positional arguments, joined by a separator."""

    def __init__(self, out: Output) -> None:
        self.out = out
        self.sep = " "
        self.upper = False
        self.times = 0

    def define_flags(self, flags: FlagSet) -> FlagSet:
        flags.string("sep", " ", "separator placed between arguments", bind=self)
        flags.boolean("upper", False, "convert the line to upper case", bind=self)
        flags.integer("times", 0, "number of times to print the line", bind=self)
        return flags

    def run(self, args: Sequence[str]) -> None:
        if self.times < 1:
            raise CommandError(
                f"-times must be at least 1, got {self.times}",
                code=exit_codes.USAGE_ERROR,
                show_help=True,
            )
        line = self.sep.join(args)
        if self.upper:
            line = line.upper()
        for _ in range(self.times):
            self.out.println(line)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def build_dispatcher(out: Output | None = None) -> Dispatcher:
    """Create the demo dispatcher with its global flags and commands."""
    global_flags = FlagSet(PROGRAM, ErrorHandling.CONTINUE)
    global_flags.boolean("v", False, "log debug output to stderr")

    dispatcher = Dispatcher(PROGRAM, global_flags, output=out)
    global_flags.output = dispatcher.output
    global_flags.usage = dispatcher.usage

    dispatcher.register("version", "Print the subdispatch version", VersionCommand(dispatcher.output))
    dispatcher.register(
        "echo",
        "Print the arguments",
        EchoCommand(dispatcher.output),
        required_flags=["times"],
    )
    return dispatcher


def main(argv: Sequence[str] | None = None, *, out: Output | None = None) -> int:
    """Run the demo program.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    out:
        Output sinks; the process default when ``None``.

    Returns
    -------
    int
        OS process exit code.
    """
    dispatcher = build_dispatcher(out)
    global_flags = dispatcher.global_flags
    try:
        global_flags.parse(sys.argv[1:] if argv is None else argv)
    except HelpRequested:
        return exit_codes.SUCCESS
    except FlagError:
        return exit_codes.USAGE_ERROR

    if global_flags.value("v"):
        configure_logging(verbose=True, stream=dispatcher.output.err_file)
    return dispatcher.parse_and_run(global_flags.args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except SubdispatchError as exc:
        output.error(f"Error: {exc}")
        if exc.hint:
            output.error(f"Hint: {exc.hint}")
        sys.exit(exit_codes.USAGE_ERROR)
    except KeyboardInterrupt:
        output.error("Aborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        output.error(
            "Unexpected error. Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
