"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit: command completed, or help was shown."""

USAGE_ERROR: int = 1
"""No command, unknown command, bad flags or a missing required flag."""

FLAG_PARSE_ERROR: int = 2
"""A flag set in ``EXIT`` mode could not parse its arguments."""

HANDLER_FAILURE: int = -1
"""A command failed without choosing its own exit code."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
