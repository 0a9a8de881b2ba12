"""textnum CLI.

Registers all commands on the main group.
"""

from textnum.cli.formats import formats
from textnum.cli.main import cli
from textnum.cli.render import render

__all__ = [
    "cli",
    "formats",
    "render",
]
