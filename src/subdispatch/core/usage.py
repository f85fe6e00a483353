"""Pure usage-text rendering.

Every function returns text and performs no I/O; the dispatcher decides
where the text goes.  Flag sets passed in are only read.

Layout of the top-level usage::

    Usage: prog [options] <command> [options]

    Commands:
      build           Build the project
      test            Run the tests

    Options:
      -v
            verbose output

    Run 'prog <command> -h' for help on a command.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from subdispatch.core.models import SubcommandDefinition

if TYPE_CHECKING:
    from subdispatch.infra.flagset import FlagSet

NAME_COLUMN_WIDTH: int = 15
"""Width the command names are padded to in the listing."""


def format_command_line(name: str, description: str) -> str:
    """``"  name            description"`` with the name left-justified."""
    return f"  {name:<{NAME_COLUMN_WIDTH}} {description}".rstrip()


def render_top_level_usage(
    program: str,
    definitions: Iterable[SubcommandDefinition],
    global_flags: FlagSet | None = None,
) -> str:
    """Render the program usage, listing *definitions* in the given order."""
    definitions = list(definitions)
    global_defaults = global_flags.format_defaults() if global_flags is not None else ""

    if not definitions:
        return f"Usage: {program} [options]\n{global_defaults}"

    lines = [
        f"Usage: {program} [options] <command> [options]",
        "",
        "Commands:",
    ]
    lines.extend(format_command_line(d.name, d.description) for d in definitions)
    text = "\n".join(lines) + "\n"

    if global_defaults:
        text += f"\nOptions:\n{global_defaults}"
    text += f"\nRun '{program} <command> -h' for help on a command.\n"
    return text


def render_subcommand_usage(
    program: str,
    definition: SubcommandDefinition,
    flags: FlagSet,
) -> str:
    """Render help for one subcommand.

    *flags* must be a fresh flag set on which the command defined its
    flags; the usage block is only shown when it holds at least one flag.
    """
    text = f"{definition.description}\n"
    if not flags.flags():
        return text

    text += f"Usage: {program} {definition.name} [options]\n"
    text += flags.format_defaults()
    if definition.required_flags:
        required = ", ".join(f"-{name}" for name in definition.required_flags)
        text += f"Required flags: {required}\n"
    return text
