"""Infrastructure layer: the flag primitive.

Wraps :mod:`argparse` behind the :class:`FlagSet` API consumed by the
dispatcher.  Nothing here knows about subcommands.

Rules
-----
* No imports from ``cli``.
* Errors and usage are written through :mod:`subdispatch.utils.console`,
  never with ``print()``.
"""

from subdispatch.infra.flagset import ErrorHandling, Flag, FlagSet

__all__: list[str] = [
    "ErrorHandling",
    "Flag",
    "FlagSet",
]
