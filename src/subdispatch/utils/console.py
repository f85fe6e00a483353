"""Swappable output sinks backed by Rich consoles.

An :class:`Output` pairs a console for normal output with a console for
usage and error text.  Either stream can be redirected, e.g. to an
:class:`io.StringIO` in tests.  Consoles are created with markup, emoji
and highlighting off so that command descriptions and usage text are
written exactly as given.  A console handed an explicit file never emits
terminal control codes, even when ``FORCE_COLOR`` is set.

The module-level :data:`output` is the process default used by the
convenience entry points and by flag sets without their own sink;
:func:`set_streams` redirects it in place.
"""

from __future__ import annotations

from typing import TextIO

from rich.console import Console
from rich.text import Text


def _make_console(file: TextIO | None, *, stderr: bool) -> Console:
    """Create a console writing to *file*, or to the live std stream.

    Only the live std streams may be treated as terminals.
    """
    return Console(
        file=file,
        stderr=stderr,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
        force_terminal=None if file is None else False,
    )


class Output:
    """Normal and error sinks.

    Parameters
    ----------
    out:
        Stream for normal output.  ``None`` follows ``sys.stdout``.
    err:
        Stream for usage and error text.  ``None`` follows ``sys.stderr``.
    """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.redirect(out, err)

    def redirect(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = _make_console(out, stderr=False)
        self._err = _make_console(err, stderr=True)

    @property
    def out_file(self) -> TextIO:
        return self._out.file

    @property
    def err_file(self) -> TextIO:
        return self._err.file

    def println(self, *objects: object) -> None:
        """Write *objects* separated by spaces, then a newline."""
        self._out.print(*objects)

    def printf(self, template: str, *args: object) -> None:
        """Write ``template % args`` without adding a newline."""
        self._out.print(template % args if args else template, end="")

    def error(self, message: str) -> None:
        """Write one line to the error sink."""
        self._err.print(message)

    def fatal(self, message: str) -> None:
        """Write ``FATAL: <message>`` to the error sink."""
        self._err.print(Text.assemble(("FATAL:", "bold red"), " ", message))

    def usage(self, text: str) -> None:
        """Write pre-rendered usage text to the error sink verbatim."""
        self._err.print(text, end="")


output = Output()


def set_streams(out: TextIO | None = None, err: TextIO | None = None) -> None:
    """Redirect the process default :data:`output`; ``None`` restores std."""
    output.redirect(out, err)


def println(*objects: object) -> None:
    output.println(*objects)


def printf(template: str, *args: object) -> None:
    output.printf(template, *args)


def err_output(message: str) -> None:
    output.error(message)
