"""Infrastructure: named, typed flag sets built on :mod:`argparse`.

A :class:`FlagSet` is the flag primitive the dispatcher consumes.  It
defines named flags with types and defaults, parses a token list against
them, reports which flags the caller explicitly supplied, and renders the
per-flag default text used in usage output.

Token syntax
------------
* ``-name``, ``--name``, ``-name=value``, ``--name=value``, ``-name value``.
* Boolean flags never consume the next token; ``-name=false`` is accepted.
* Flag parsing stops at the first non-flag token; ``--`` ends it and is
  dropped.

Tokenisation is done here; value conversion, storage and invalid-value
messages are delegated to an :class:`argparse.ArgumentParser` built for
each parse.  A flag set is append-only: flags cannot be removed or
redefined.
"""

from __future__ import annotations

import argparse
import enum
import json
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, NoReturn

from subdispatch.exceptions import FlagDefinitionError, FlagError, HelpRequested
from subdispatch.utils import console
from subdispatch.utils.console import Output

logger = logging.getLogger(__name__)

HELP_EXIT_CODE = 0
"""Process exit code after help is shown in ``EXIT`` mode."""

PARSE_ERROR_EXIT_CODE = 2
"""Process exit code after a parse error in ``EXIT`` mode."""

_USAGE_INDENT = "        "

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _parse_bool(text: str) -> bool:
    """Convert a boolean flag value the way ``-name=false`` expects."""
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {text!r}")


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value {text!r}") from None


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid float value {text!r}") from None


_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "string": str,
    "int": _parse_int,
    "float": _parse_float,
    "bool": _parse_bool,
}


# ---------------------------------------------------------------------------
# Public types
# ---------------------------------------------------------------------------

class ErrorHandling(enum.Enum):
    """What :meth:`FlagSet.parse` does after reporting a parse error."""

    CONTINUE = "continue"
    """Raise :class:`~subdispatch.exceptions.FlagError`."""

    EXIT = "exit"
    """Exit the process with :data:`PARSE_ERROR_EXIT_CODE`."""


@dataclass(frozen=True, slots=True)
class Flag:
    """Definition of a single flag."""

    name: str
    kind: str
    """One of ``"string"``, ``"int"``, ``"float"`` or ``"bool"``."""

    default: Any
    usage: str = ""

    @property
    def is_bool(self) -> bool:
        return self.kind == "bool"

    @property
    def type_name(self) -> str:
        """Placeholder shown after the flag name; empty for booleans."""
        return "" if self.is_bool else self.kind

    @property
    def default_text(self) -> str:
        """Rendered default, or ``""`` when the default is the zero value."""
        if not self.default:
            return ""
        if self.kind == "string":
            return json.dumps(self.default)
        if self.is_bool:
            return "true"
        return str(self.default)


class _FlagParser(argparse.ArgumentParser):
    """Argument parser that raises instead of printing and exiting."""

    def error(self, message: str) -> NoReturn:
        raise FlagError(message)


# ---------------------------------------------------------------------------
# Flag set
# ---------------------------------------------------------------------------

class FlagSet:
    """A named set of flags scoped to a program or to one subcommand.

    Parameters
    ----------
    name:
        Used in error messages and in the default usage text.
    error_handling:
        Behaviour of :meth:`parse` on malformed input.
    output:
        Sink receiving error messages and the default usage.  ``None``
        means the process default :data:`subdispatch.utils.console.output`,
        so :func:`~subdispatch.utils.console.set_streams` redirects it.
    """

    def __init__(
        self,
        name: str,
        error_handling: ErrorHandling = ErrorHandling.CONTINUE,
        *,
        output: Output | None = None,
    ) -> None:
        self._name = name
        self.error_handling = error_handling
        self.output = output
        self.usage: Callable[[], None] = self._default_usage
        """Called after a parse error is reported; replaceable."""

        self._flags: dict[str, Flag] = {}
        self._bindings: dict[str, tuple[object, str]] = {}
        self._actual: dict[str, Any] = {}
        self._args: list[str] = []
        self._parsed = False

    def __repr__(self) -> str:
        return f"FlagSet({self._name!r}, flags={sorted(self._flags)!r})"

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __getitem__(self, name: str) -> Any:
        return self.value(name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def parsed(self) -> bool:
        return self._parsed

    @property
    def args(self) -> list[str]:
        """Positional arguments left over after flag parsing."""
        return list(self._args)

    @property
    def actual(self) -> frozenset[str]:
        """Names of the flags explicitly supplied in the last parse."""
        return frozenset(self._actual)

    # -- definition ---------------------------------------------------------

    def string(
        self,
        name: str,
        default: str = "",
        usage: str = "",
        *,
        bind: object | None = None,
        attr: str | None = None,
    ) -> Flag:
        return self._define(name, "string", default, usage, bind, attr)

    def integer(
        self,
        name: str,
        default: int = 0,
        usage: str = "",
        *,
        bind: object | None = None,
        attr: str | None = None,
    ) -> Flag:
        return self._define(name, "int", default, usage, bind, attr)

    def number(
        self,
        name: str,
        default: float = 0.0,
        usage: str = "",
        *,
        bind: object | None = None,
        attr: str | None = None,
    ) -> Flag:
        return self._define(name, "float", default, usage, bind, attr)

    def boolean(
        self,
        name: str,
        default: bool = False,
        usage: str = "",
        *,
        bind: object | None = None,
        attr: str | None = None,
    ) -> Flag:
        return self._define(name, "bool", default, usage, bind, attr)

    def _define(
        self,
        name: str,
        kind: str,
        default: Any,
        usage: str,
        bind: object | None,
        attr: str | None,
    ) -> Flag:
        if not name or name.startswith("-") or "=" in name:
            raise FlagDefinitionError(
                f"flag {name!r} is empty, begins with '-' or contains '='",
            )
        if name in self._flags:
            raise FlagDefinitionError(f"{self._name} flag redefined: {name}")

        flag = Flag(name=name, kind=kind, default=default, usage=usage)
        self._flags[name] = flag
        if bind is not None:
            target = attr or name.replace("-", "_")
            setattr(bind, target, default)
            self._bindings[name] = (bind, target)
        return flag

    def flags(self) -> tuple[Flag, ...]:
        """All defined flags, sorted by name."""
        return tuple(self._flags[name] for name in sorted(self._flags))

    def lookup(self, name: str) -> Flag | None:
        return self._flags.get(name)

    # -- values -------------------------------------------------------------

    def value(self, name: str) -> Any:
        """Parsed value of *name*, or its default when it was not supplied."""
        if name not in self._flags:
            raise KeyError(name)
        return self._actual.get(name, self._flags[name].default)

    def values(self) -> dict[str, Any]:
        return {flag.name: self.value(flag.name) for flag in self.flags()}

    # -- parsing ------------------------------------------------------------

    def parse(self, arguments: Sequence[str]) -> None:
        """Parse *arguments* against the defined flags.

        Raises
        ------
        FlagError
            In ``CONTINUE`` mode, after the message and usage were written.
        """
        self._parsed = True
        try:
            tokens, rest = self._tokenize(arguments)
            namespace = self._build_parser().parse_args(tokens)
        except FlagError as exc:
            self._fail(exc)

        self._actual = dict(vars(namespace))
        self._args = rest
        for name, value in self._actual.items():
            if name in self._bindings:
                target, attr = self._bindings[name]
                setattr(target, attr, value)
        logger.debug(
            "flag set %r parsed: set=%s args=%s",
            self._name, sorted(self._actual), self._args,
        )

    def _tokenize(self, arguments: Sequence[str]) -> tuple[list[str], list[str]]:
        """Split *arguments* into ``-name=value`` tokens and positionals."""
        tokens = list(arguments)
        normalized: list[str] = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if len(token) < 2 or not token.startswith("-"):
                break
            index += 1
            if token == "--":
                break

            body = token[2:] if token.startswith("--") else token[1:]
            if not body or body[0] in "-=":
                raise FlagError(f"bad flag syntax: {token}")

            name, sep, value = body.partition("=")
            flag = self._flags.get(name)
            if flag is None:
                if name in ("h", "help"):
                    raise HelpRequested()
                raise FlagError(f"flag provided but not defined: -{name}")

            if not sep and not flag.is_bool:
                if index >= len(tokens):
                    raise FlagError(f"flag needs an argument: -{name}")
                sep, value = "=", tokens[index]
                index += 1
            normalized.append(f"-{name}{sep}{value}")
        return normalized, tokens[index:]

    def _build_parser(self) -> _FlagParser:
        parser = _FlagParser(prog=self._name, add_help=False, allow_abbrev=False)
        for flag in self._flags.values():
            option = f"-{flag.name}"
            if flag.is_bool:
                parser.add_argument(
                    option,
                    dest=flag.name,
                    nargs="?",
                    const=True,
                    type=_parse_bool,
                    default=argparse.SUPPRESS,
                )
            else:
                parser.add_argument(
                    option,
                    dest=flag.name,
                    type=_CONVERTERS[flag.kind],
                    default=argparse.SUPPRESS,
                )
        return parser

    @property
    def sink(self) -> Output:
        """Where errors and the default usage go right now."""
        return self.output if self.output is not None else console.output

    def _fail(self, exc: FlagError) -> NoReturn:
        if not isinstance(exc, HelpRequested):
            self.sink.error(str(exc))
        self.usage()
        if self.error_handling is ErrorHandling.EXIT:
            if isinstance(exc, HelpRequested):
                sys.exit(HELP_EXIT_CODE)
            sys.exit(PARSE_ERROR_EXIT_CODE)
        raise exc

    # -- usage --------------------------------------------------------------

    def format_defaults(self) -> str:
        """Render one entry per flag: the name line, then its usage."""
        lines: list[str] = []
        for flag in self.flags():
            head = f"  -{flag.name}"
            if flag.type_name:
                head += f" {flag.type_name}"
            lines.append(head)

            text = flag.usage.replace("\n", "\n" + _USAGE_INDENT)
            if flag.default_text:
                text += f" (default {flag.default_text})"
            if text.strip():
                lines.append(_USAGE_INDENT + text.strip())
        return "".join(f"{line}\n" for line in lines)

    def _default_usage(self) -> None:
        self.sink.usage(f"Usage of {self._name}:\n{self.format_defaults()}")
