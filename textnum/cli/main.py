"""Main CLI command group for textnum."""

from __future__ import annotations

import click

import textnum


@click.group()
@click.version_option(version=textnum.__version__, prog_name="textnum")
def cli() -> None:
    """textnum: filtered text with a formatted number."""
