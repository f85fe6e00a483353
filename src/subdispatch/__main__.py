"""Allow ``python -m subdispatch`` invocation.

Delegates to the demo CLI error boundary so that ``python -m subdispatch``
behaves identically to the ``subdispatch`` console script.
"""

from __future__ import annotations

from subdispatch.cli.app import cli

if __name__ == "__main__":
    cli()
