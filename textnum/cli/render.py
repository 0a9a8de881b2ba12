"""`textnum render` command: renders one text-with-number item."""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

import click
from pydantic import ValidationError

from textnum._types import CompositeValue, FilterType, Number
from textnum.cli._common import formats_file_option, load_repository
from textnum.cli.main import cli
from textnum.config.display import NumberDisplayConfig, NumberFieldSettings
from textnum.config.filter_config import FilterConfigSnapshot
from textnum.config.settings import get_settings
from textnum.filters.resolver import FormatResolver
from textnum.formatter import TextDefaultWithDecimalFormatter, TextDefaultWithIntegerFormatter
from textnum.render import TextWithNumberRenderer


def _parse_number(raw: str) -> Number:
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise click.BadParameter(f"not a number: {raw!r}", param_hint="NUMBER") from None
    if not value.is_finite():
        raise click.BadParameter(f"not a finite number: {raw!r}", param_hint="NUMBER")
    return value


@cli.command()
@click.argument("text")
@click.argument("number")
@click.option(
    "--format",
    "format_id",
    default=None,
    help="Text format id. Defaults to the fallback format.",
)
@formats_file_option
@click.option(
    "--skip",
    "skip_types",
    multiple=True,
    type=click.Choice([t.value for t in FilterType]),
    help="Filter type to skip (repeatable). Restricting filters always run.",
)
@click.option("--separator", default=None, help="Thousand separator.")
@click.option("--scale", type=int, default=None, help="Render the number with decimals.")
@click.option("--prefix", default="", help="Number prefix ('singular|plural' allowed).")
@click.option("--suffix", default="", help="Number suffix ('singular|plural' allowed).")
@click.option("--no-affixes", is_flag=True, default=False, help="Hide prefix and suffix.")
@click.option("--langcode", default=None, help="Language code of the text.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON with cache metadata.")
def render(
    text: str,
    number: str,
    format_id: str | None,
    formats_file: str | None,
    skip_types: tuple[str, ...],
    separator: str | None,
    scale: int | None,
    prefix: str,
    suffix: str,
    no_affixes: bool,
    langcode: str | None,
    as_json: bool,
) -> None:
    """Renders TEXT through a text format beside NUMBER."""
    settings = get_settings()

    try:
        display = NumberDisplayConfig(
            thousand_separator=(
                separator if separator is not None else settings.render.thousand_separator
            ),
            prefix_suffix=not no_affixes,
            scale=scale if scale is not None else 2,
        )
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--separator/--scale") from None

    value = CompositeValue(
        text_value=text,
        number_value=_parse_number(number),
        text_format_id=format_id,
        text_filter_types_to_skip=frozenset(FilterType(t) for t in skip_types),
        langcode=langcode if langcode is not None else settings.render.default_langcode,
    )

    repository = load_repository(Path(formats_file) if formats_file else None)
    resolver = FormatResolver(repository, FilterConfigSnapshot.from_settings(settings))
    renderer = TextWithNumberRenderer(resolver)

    formatter_cls = (
        TextDefaultWithDecimalFormatter if scale is not None else TextDefaultWithIntegerFormatter
    )
    formatter = formatter_cls(renderer, display=display)
    result = renderer.render(
        value,
        display,
        NumberFieldSettings(prefix=prefix, suffix=suffix),
        number_formatter=formatter.number_formatter(),
    )

    if result.diagnostic is not None:
        click.echo(f"Warning: {result.diagnostic.formatted()}", err=True)

    if as_json:
        click.echo(json.dumps(result.as_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(result.markup)
