"""Number formatting with optional pluralized prefix and suffix.

Usage::

    formatter = NumberFormatter(thousand_separator=",")
    formatter.format(1234567)                          # "1,234,567"
    formatter.with_affixes("1,000", 1000, "$|$", "", include_affixes=True).markup
                                                       # "$1,000"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING

from textnum._constants import THOUSAND_SEPARATORS
from textnum.cache import EMPTY, CacheableMetadata
from textnum.exceptions import InvalidSeparatorError, NonFiniteNumberError
from textnum.filters.html import parse_allowed_html, strip_disallowed_tags
from textnum.plural import DefaultPluralizer

if TYPE_CHECKING:
    from textnum._types import Number
    from textnum.plural import Pluralizer

# Affixes are administrator-entered markup; only inline tags survive.
AFFIX_ALLOWED_HTML = parse_allowed_html(
    "<em> <strong> <span class> <sup> <sub> <small> <abbr title>"
)


def _to_decimal(value: Number) -> Decimal:
    # str() keeps floats at their shortest repr (1234.12 rather than 1234.11999...).
    return value if isinstance(value, Decimal) else Decimal(str(value))


def raw_value_string(value: Number) -> str:
    """The unformatted value as machine-readable text."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class AffixSpec:
    """A prefix or suffix: nothing, one form, or singular and plural forms."""

    forms: tuple[str, ...] = ()

    @classmethod
    def parse(cls, raw: str | None) -> AffixSpec:
        """Parse the ``singular|plural`` syntax.

        Empty input, or input whose forms are all empty, means no affix.
        Segments after the second ``|`` are ignored.
        """
        if not raw:
            return cls()
        forms = tuple(
            strip_disallowed_tags(form, AFFIX_ALLOWED_HTML) for form in raw.split("|")[:2]
        )
        if not any(forms):
            return cls()
        return cls(forms)

    @property
    def is_empty(self) -> bool:
        return not self.forms

    @property
    def is_plural(self) -> bool:
        return len(self.forms) > 1

    def select(self, value: Number, pluralizer: Pluralizer) -> str:
        if not self.forms:
            return ""
        if len(self.forms) == 1:
            return self.forms[0]
        return pluralizer.plural_select(value, self.forms[0], self.forms[1])


@dataclass(frozen=True, slots=True)
class FormattedNumber:
    """A number ready for display.

    ``content_attribute`` holds the raw value whenever the displayed text
    differs from it, for machine-readable consumers.
    """

    original_value: Number
    formatted_value: str
    markup: str
    prefix: str = ""
    suffix: str = ""
    content_attribute: str | None = None
    cacheability: CacheableMetadata = field(default=EMPTY)


class NumberFormatter:
    """Formats numbers with a thousand separator and fixed decimals.

    Args:
        thousand_separator: One of the supported thousand markers; empty
            means no grouping.
        decimals: Digits after the decimal separator (0 for integers).
        decimal_separator: Separator between integer and fraction.

    Raises:
        InvalidSeparatorError: If the thousand separator is not supported.
        NonFiniteNumberError: From ``format()`` for NaN or infinite values.
    """

    def __init__(
        self,
        thousand_separator: str = "",
        decimals: int = 0,
        decimal_separator: str = ".",
    ) -> None:
        if thousand_separator not in THOUSAND_SEPARATORS:
            raise InvalidSeparatorError(thousand_separator)
        if decimals < 0:
            msg = f"decimals must be >= 0, got {decimals}"
            raise ValueError(msg)
        self.thousand_separator = thousand_separator
        self.decimals = decimals
        self.decimal_separator = decimal_separator

    def _group(self, digits: str) -> str:
        if not self.thousand_separator or len(digits) <= 3:
            return digits
        head = len(digits) % 3 or 3
        groups = [digits[:head]]
        groups.extend(digits[i : i + 3] for i in range(head, len(digits), 3))
        return self.thousand_separator.join(groups)

    def format(self, value: Number) -> str:
        """Round half away from zero to ``decimals`` places and group digits.

        Raises:
            NonFiniteNumberError: If the value is NaN or infinite.
        """
        number = _to_decimal(value)
        if not number.is_finite():
            raise NonFiniteNumberError(value)
        quantum = Decimal(1).scaleb(-self.decimals)
        with localcontext() as ctx:
            # Room for every integer digit plus the requested decimals.
            ctx.prec = max(ctx.prec, max(number.adjusted(), 0) + self.decimals + 2)
            rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)

        sign = "-" if rounded < 0 else ""
        integer_part, _, fraction = f"{abs(rounded):f}".partition(".")
        formatted = sign + self._group(integer_part)
        if self.decimals:
            formatted += self.decimal_separator + fraction
        return formatted

    def with_affixes(
        self,
        formatted: str,
        value: Number,
        prefix: AffixSpec | str | None = None,
        suffix: AffixSpec | str | None = None,
        include_affixes: bool = True,
        pluralizer: Pluralizer | None = None,
    ) -> FormattedNumber:
        """Attach prefix and suffix to an already formatted number.

        Args:
            formatted: Output of ``format()``.
            value: Raw value; decides singular or plural affix forms.
            prefix: Prefix spec or its ``singular|plural`` source string.
            suffix: Suffix spec or its ``singular|plural`` source string.
            include_affixes: When False the markup is the bare number.
            pluralizer: Form selector; defaults to DefaultPluralizer.

        Returns:
            FormattedNumber with the markup and any cache metadata the
            pluralizer contributed.
        """
        prefix_spec = prefix if isinstance(prefix, AffixSpec) else AffixSpec.parse(prefix)
        suffix_spec = suffix if isinstance(suffix, AffixSpec) else AffixSpec.parse(suffix)
        selector = pluralizer if pluralizer is not None else DefaultPluralizer()

        selected_prefix = prefix_spec.select(value, selector)
        selected_suffix = suffix_spec.select(value, selector)

        cacheability = EMPTY
        if prefix_spec.is_plural or suffix_spec.is_plural:
            cacheability = selector.cacheability

        markup = formatted
        if include_affixes:
            markup = f"{selected_prefix}{formatted}{selected_suffix}"

        raw = raw_value_string(value)
        return FormattedNumber(
            original_value=value,
            formatted_value=formatted,
            markup=markup,
            prefix=selected_prefix,
            suffix=selected_suffix,
            content_attribute=raw if raw != markup else None,
            cacheability=cacheability,
        )

    def format_with_affixes(
        self,
        value: Number,
        prefix: AffixSpec | str | None = None,
        suffix: AffixSpec | str | None = None,
        include_affixes: bool = True,
        pluralizer: Pluralizer | None = None,
    ) -> FormattedNumber:
        """``format()`` followed by ``with_affixes()``."""
        return self.with_affixes(
            self.format(value), value, prefix, suffix, include_affixes, pluralizer
        )
