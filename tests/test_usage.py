"""Tests for usage rendering (core/usage.py).

Rendering is pure, so these tests compare complete texts.

Coverage:
* Top-level usage with and without subcommands and global flags.
* Fixed-column alignment of command descriptions.
* Subcommand usage with and without flags and required flags.
"""

from __future__ import annotations

from collections.abc import Sequence

from subdispatch.core.models import SubcommandDefinition
from subdispatch.core.usage import (
    NAME_COLUMN_WIDTH,
    format_command_line,
    render_subcommand_usage,
    render_top_level_usage,
)
from subdispatch.infra.flagset import FlagSet


class _Noop:
    def define_flags(self, flags: FlagSet) -> FlagSet:
        return flags

    def run(self, args: Sequence[str]) -> None:
        pass


def _definition(name: str, description: str = "", required: tuple[str, ...] = ()) -> SubcommandDefinition:
    return SubcommandDefinition(
        name=name,
        description=description,
        command=_Noop(),
        required_flags=required,
    )


def _verbose_flags() -> FlagSet:
    flags = FlagSet("prog")
    flags.boolean("v", False, "verbose output")
    return flags


# ---------------------------------------------------------------------------
# Top-level usage
# ---------------------------------------------------------------------------

class TestTopLevelUsage:
    def test_without_subcommands(self) -> None:
        text = render_top_level_usage("prog", [], _verbose_flags())
        assert text == (
            "Usage: prog [options]\n"
            "  -v\n"
            "        verbose output\n"
        )

    def test_with_subcommands_and_global_flags(self) -> None:
        definitions = [_definition("build", "Build it"), _definition("test", "Test it")]
        text = render_top_level_usage("prog", definitions, _verbose_flags())
        assert text == (
            "Usage: prog [options] <command> [options]\n"
            "\n"
            "Commands:\n"
            "  build           Build it\n"
            "  test            Test it\n"
            "\n"
            "Options:\n"
            "  -v\n"
            "        verbose output\n"
            "\n"
            "Run 'prog <command> -h' for help on a command.\n"
        )

    def test_options_block_omitted_without_global_flags(self) -> None:
        text = render_top_level_usage("prog", [_definition("build", "Build it")], FlagSet("prog"))
        assert "Options:" not in text
        assert text.endswith("Run 'prog <command> -h' for help on a command.\n")

    def test_global_flags_optional(self) -> None:
        text = render_top_level_usage("prog", [_definition("build", "Build it")])
        assert "Options:" not in text

    def test_lists_every_name_in_order(self) -> None:
        names = ["zeta", "alpha", "mid", "beta"]
        text = render_top_level_usage("prog", [_definition(n, f"{n} cmd") for n in names])
        positions = [text.index(f"  {name} ") for name in names]
        assert positions == sorted(positions)
        assert sum(text.count(f"{name} cmd") for name in names) == len(names)

    def test_descriptions_start_at_same_column(self) -> None:
        text = render_top_level_usage(
            "prog",
            [_definition("a", "First"), _definition("much-longer", "Second")],
        )
        lines = text.splitlines()
        first = next(line for line in lines if line.endswith("First"))
        second = next(line for line in lines if line.endswith("Second"))
        assert first.index("First") == second.index("Second") == NAME_COLUMN_WIDTH + 3

    def test_command_line_without_description(self) -> None:
        assert format_command_line("build", "") == "  build"


# ---------------------------------------------------------------------------
# Subcommand usage
# ---------------------------------------------------------------------------

class TestSubcommandUsage:
    def test_description_only_without_flags(self) -> None:
        text = render_subcommand_usage("prog", _definition("build", "Build it"), FlagSet("build"))
        assert text == "Build it\n"

    def test_with_flags(self) -> None:
        flags = FlagSet("build")
        flags.string("out", "dist", "output directory")
        text = render_subcommand_usage("prog", _definition("build", "Build it"), flags)
        assert text == (
            "Build it\n"
            "Usage: prog build [options]\n"
            "  -out string\n"
            '        output directory (default "dist")\n'
        )

    def test_required_flags_line(self) -> None:
        flags = FlagSet("build")
        flags.string("a")
        flags.string("b")
        definition = _definition("build", "Build it", required=("b", "a"))
        text = render_subcommand_usage("prog", definition, flags)
        assert text.endswith("Required flags: -b, -a\n")

    def test_required_line_needs_flags(self) -> None:
        definition = _definition("build", "Build it", required=("a",))
        text = render_subcommand_usage("prog", definition, FlagSet("build"))
        assert "Required" not in text
