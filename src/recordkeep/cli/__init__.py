"""
CLI layer for recordkeep.

Provides a Typer application that runs the save/load round trip against the
configured data directory and inspects stored files. All persistence logic
lives in ``recordkeep.core``; this package handles argument parsing, coloured
output and table formatting.

Entry point::

    recordkeep --help
"""

from recordkeep.cli.app import app

__all__ = ["app"]
