"""CLI layer: exit codes, subcommand dispatch and the process boundary.

This package is the outermost layer.  It may import from ``core``,
``infra`` and ``utils``.  Within it, only :mod:`subdispatch.cli.default`
and :mod:`subdispatch.cli.app` terminate the process.
"""
