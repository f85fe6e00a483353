"""Logging setup for programs built on subdispatch.

The library emits records through module loggers under the
``subdispatch`` namespace and otherwise stays silent.  Embedding programs
call :func:`configure_logging`, typically after reacting to a verbosity
flag.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def configure_logging(verbose: bool = False, *, stream: TextIO | None = None) -> logging.Handler:
    """Attach a stream handler to the ``subdispatch`` logger.

    ``verbose`` selects ``DEBUG``; otherwise only warnings are shown.
    Calling it again replaces the handler installed by the previous call.
    """
    global _handler
    logger = logging.getLogger("subdispatch")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return _handler
