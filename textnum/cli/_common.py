"""Helpers shared by CLI commands."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from textnum.config.formats import FormatsFile
from textnum.config.settings import get_settings
from textnum.exceptions import ConfigError
from textnum.filters.format import InMemoryFormatRepository, builtin_formats

if TYPE_CHECKING:
    from pathlib import Path


def load_repository(formats_file: Path | None) -> InMemoryFormatRepository:
    """Formats from the given file, the configured file, or the built-in set."""
    path = formats_file or get_settings().cli.formats_path
    if path is None:
        return InMemoryFormatRepository(builtin_formats())

    try:
        return FormatsFile.from_yaml_path(path).to_repository()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


formats_file_option = click.option(
    "--formats-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML file with text format definitions (default: built-in formats).",
)
