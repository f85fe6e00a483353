"""subdispatch: subcommand dispatch for command-line programs.

Register named subcommands, each with its own flag set and required
flags, then parse process arguments into a matched subcommand and run it.
"""

import logging

from subdispatch.cli.dispatcher import Dispatcher
from subdispatch.core.models import DispatchState, SubcommandDefinition
from subdispatch.core.protocols import Command
from subdispatch.exceptions import CommandError, SubdispatchError, UsageError
from subdispatch.infra.flagset import ErrorHandling, FlagSet
from subdispatch.utils.console import Output
from subdispatch.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = [
    "Command",
    "CommandError",
    "DispatchState",
    "Dispatcher",
    "ErrorHandling",
    "FlagSet",
    "Output",
    "SubcommandDefinition",
    "SubdispatchError",
    "UsageError",
    "__version__",
]
