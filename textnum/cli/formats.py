"""`textnum formats` command: lists text formats and their filter chains."""

from __future__ import annotations

from pathlib import Path

import click

from textnum.cli._common import formats_file_option, load_repository
from textnum.cli.main import cli


@cli.command()
@formats_file_option
def formats(formats_file: str | None) -> None:
    """Lists text formats with their filters in application order."""
    repository = load_repository(Path(formats_file) if formats_file else None)
    text_formats = repository.all()

    if not text_formats:
        click.echo("No text formats defined.")
        return

    for text_format in text_formats:
        status = "enabled" if text_format.status else "disabled"
        click.echo(f"{text_format.format_id} ({text_format.name}) [{status}]")
        for text_filter in text_format.filters():
            marker = " " if text_filter.status else "-"
            click.echo(
                f"  {marker} {text_filter.plugin_id:<20} "
                f"{text_filter.filter_type.value:<24} weight={text_filter.weight}"
            )
