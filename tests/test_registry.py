"""Tests for the subcommand registry (core/registry.py).

Coverage:
* Registration preserves insertion order.
* Duplicate and invalid registrations are rejected immediately.
* Lookup is exact and case-sensitive.
* Required flags are stored de-duplicated, in order.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from subdispatch.core.models import SubcommandDefinition
from subdispatch.core.registry import Registry
from subdispatch.exceptions import CommandDefinitionError, DuplicateCommandError
from subdispatch.infra.flagset import FlagSet


class _Noop:
    def define_flags(self, flags: FlagSet) -> FlagSet:
        return flags

    def run(self, args: Sequence[str]) -> None:
        pass


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

class TestRegister:
    def test_returns_definition(self) -> None:
        command = _Noop()
        definition = Registry().register("build", "Build it", command, ["out"])
        assert definition == SubcommandDefinition(
            name="build",
            description="Build it",
            command=command,
            required_flags=("out",),
        )

    def test_preserves_insertion_order(self) -> None:
        registry = Registry()
        for name in ["zeta", "alpha", "mid"]:
            registry.register(name, f"{name} command", _Noop())
        assert registry.names() == ["zeta", "alpha", "mid"]
        assert [d.name for d in registry] == ["zeta", "alpha", "mid"]
        assert len(registry) == 3

    def test_duplicate_name_raises(self) -> None:
        registry = Registry()
        registry.register("build", "first", _Noop())
        with pytest.raises(DuplicateCommandError) as exc_info:
            registry.register("build", "second", _Noop())
        assert exc_info.value.name == "build"
        assert len(registry) == 1
        assert registry.lookup("build").description == "first"  # type: ignore[union-attr]

    def test_empty_name_raises(self) -> None:
        with pytest.raises(CommandDefinitionError):
            Registry().register("", "nothing", _Noop())

    def test_non_command_raises(self) -> None:
        with pytest.raises(CommandDefinitionError, match="define_flags"):
            Registry().register("build", "Build it", object())  # type: ignore[arg-type]

    def test_required_flags_deduplicated_in_order(self) -> None:
        definition = Registry().register("build", "", _Noop(), ["b", "a", "b"])
        assert definition.required_flags == ("b", "a")

    def test_single_string_required_flag(self) -> None:
        definition = Registry().register("build", "", _Noop(), "out")
        assert definition.required_flags == ("out",)

    def test_definition_is_frozen(self) -> None:
        definition = Registry().register("build", "", _Noop())
        with pytest.raises(AttributeError):
            definition.name = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

class TestLookup:
    def test_exact_match(self) -> None:
        registry = Registry()
        registry.register("build", "", _Noop())
        registry.register("test", "", _Noop())
        assert registry.lookup("test").name == "test"  # type: ignore[union-attr]

    @pytest.mark.parametrize("name", ["Build", "buil", "build ", "builds", ""])
    def test_no_fuzzy_match(self, name: str) -> None:
        registry = Registry()
        registry.register("build", "", _Noop())
        assert registry.lookup(name) is None

    def test_contains(self) -> None:
        registry = Registry()
        registry.register("build", "", _Noop())
        assert "build" in registry
        assert "test" not in registry

    def test_empty_registry_is_falsy(self) -> None:
        assert not Registry()
