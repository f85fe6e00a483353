"""Shared pytest fixtures and configuration for the subdispatch test suite.

Guidelines
----------
* No test may exit the process; only the ``cli.default`` and ``cli.app``
  boundaries are exercised through ``pytest.raises(SystemExit)``.
* Output is captured through :class:`io.StringIO` sinks, not the real
  std streams.
"""

from __future__ import annotations

import io
from dataclasses import dataclass

import pytest

from subdispatch.utils.console import Output


@dataclass
class CapturedOutput:
    """An :class:`Output` whose two streams can be read back."""

    output: Output
    out: io.StringIO
    err: io.StringIO

    @property
    def stdout(self) -> str:
        return self.out.getvalue()

    @property
    def stderr(self) -> str:
        return self.err.getvalue()


@pytest.fixture
def captured() -> CapturedOutput:
    out = io.StringIO()
    err = io.StringIO()
    return CapturedOutput(output=Output(out, err), out=out, err=err)
