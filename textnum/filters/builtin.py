"""Built-in filter plugins.

Plugin ids follow the usual CMS names so format definitions can be
shared: ``filter_html``, ``filter_html_escape``, ``filter_autop``,
``filter_url`` and ``filter_code_escape``.
"""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING, Any

from textnum._types import FilterType
from textnum.exceptions import FilterPluginNotFoundError
from textnum.filters.base import Filter, FilterResult
from textnum.filters.html import escape_html, parse_allowed_html, strip_disallowed_tags

if TYPE_CHECKING:
    from textnum.filters.html import AllowedHtml

DEFAULT_ALLOWED_HTML = (
    "<a href hreflang> <em> <strong> <cite> <blockquote cite> <code> "
    "<ul type> <ol start type> <li> <dl> <dt> <dd> "
    "<h2 id> <h3 id> <h4 id> <h5 id> <h6 id> <p> <br>"
)


class HtmlRestrictorFilter(Filter):
    """Limit markup to an allow-list of tags and attributes."""

    plugin_id = "filter_html"
    filter_type = FilterType.HTML_RESTRICTOR
    default_settings = {"allowed_html": DEFAULT_ALLOWED_HTML}

    @property
    def allowed_html(self) -> AllowedHtml:
        return parse_allowed_html(self.settings["allowed_html"])

    def process(self, text: str, langcode: str) -> FilterResult:
        return FilterResult(strip_disallowed_tags(text, self.allowed_html))


class HtmlEscapeFilter(Filter):
    """Display any markup as plain text."""

    plugin_id = "filter_html_escape"
    filter_type = FilterType.HTML_RESTRICTOR

    def process(self, text: str, langcode: str) -> FilterResult:
        return FilterResult(escape_html(text))


_BLOCK_START_RE = re.compile(
    r"^<(?:table|thead|tfoot|caption|colgroup|tbody|tr|td|th|div|dl|dd|dt|ul|ol|li|pre"
    r"|select|form|blockquote|address|p|h[1-6]|hr)\b",
    re.IGNORECASE,
)
_PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t]*\n+")


class LineBreakFilter(Filter):
    """Convert line breaks into HTML (``<p>`` and ``<br />``)."""

    plugin_id = "filter_autop"
    filter_type = FilterType.MARKUP_LANGUAGE

    def process(self, text: str, langcode: str) -> FilterResult:
        paragraphs: list[str] = []
        for chunk in _PARAGRAPH_SPLIT_RE.split(text):
            chunk = chunk.strip()
            if not chunk:
                continue
            if _BLOCK_START_RE.match(chunk):
                paragraphs.append(chunk)
                continue
            paragraphs.append("<p>" + "<br />\n".join(chunk.split("\n")) + "</p>")
        return FilterResult("\n".join(paragraphs))


_TAG_SPLIT_RE = re.compile(r"(<[^>]*>)")
_TAG_NAME_RE = re.compile(r"^<\s*(/?)\s*([a-zA-Z][a-zA-Z0-9]*)")
_LINK_RE = re.compile(
    r"(?P<url>\b(?:https?|ftp)://[^\s<>\"']*[^\s<>\"'.,;:!?)\]])"
    r"|(?P<www>\bwww\.[^\s<>\"']*[^\s<>\"'.,;:!?)\]])"
    r"|(?P<email>\b[\w.%+\-]+@[\w\-]+(?:\.[\w\-]+)*\.[A-Za-z]{2,}\b)"
)
# Text inside these tags is never linked.
_NO_LINK_TAGS = frozenset({"a", "code", "pre", "script", "style"})


class UrlFilter(Filter):
    """Turn web and e-mail addresses into links."""

    plugin_id = "filter_url"
    filter_type = FilterType.MARKUP_LANGUAGE
    default_settings = {"filter_url_length": 72}

    def _trim(self, text: str) -> str:
        # Length and cut point are measured on the unescaped text so an
        # entity such as &amp; is never split.
        limit = int(self.settings["filter_url_length"])
        plain = html.unescape(text)
        if len(plain) <= limit:
            return text
        return escape_html(plain[: max(limit - 3, 0)]) + "..."

    def _link(self, match: re.Match[str]) -> str:
        if match.group("url"):
            target = match.group("url")
            href = target
        elif match.group("www"):
            target = match.group("www")
            href = f"http://{target}"
        else:
            target = match.group("email")
            href = f"mailto:{target}"
        return f'<a href="{href}">{self._trim(target)}</a>'

    def process(self, text: str, langcode: str) -> FilterResult:
        parts: list[str] = []
        ignore_depth = 0
        for token in _TAG_SPLIT_RE.split(text):
            tag = _TAG_NAME_RE.match(token)
            if tag is not None:
                if tag.group(2).lower() in _NO_LINK_TAGS:
                    ignore_depth += -1 if tag.group(1) else 1
                    ignore_depth = max(ignore_depth, 0)
                parts.append(token)
            elif ignore_depth:
                parts.append(token)
            else:
                parts.append(_LINK_RE.sub(self._link, token))
        return FilterResult("".join(parts))


_CODE_RE = re.compile(r"<code>(.*?)</code>", re.IGNORECASE | re.DOTALL)
_CODE_PLACEHOLDER_RE = re.compile(r"\[codefilter_code\](.*?)\[/codefilter_code\]", re.DOTALL)


class CodeEscapeFilter(Filter):
    """Show the contents of ``<code>`` spans literally.

    ``prepare()`` swaps each span for an escaped placeholder so restricting
    filters leave its contents alone; ``process()`` restores the span.
    """

    plugin_id = "filter_code_escape"
    filter_type = FilterType.MARKUP_LANGUAGE

    def prepare(self, text: str, langcode: str) -> str:
        return _CODE_RE.sub(
            lambda m: f"[codefilter_code]{html.escape(m.group(1), quote=False)}[/codefilter_code]",
            text,
        )

    def process(self, text: str, langcode: str) -> FilterResult:
        return FilterResult(_CODE_PLACEHOLDER_RE.sub(r"<code>\1</code>", text))


FILTER_PLUGINS: dict[str, type[Filter]] = {
    plugin.plugin_id: plugin
    for plugin in (
        HtmlRestrictorFilter,
        HtmlEscapeFilter,
        LineBreakFilter,
        UrlFilter,
        CodeEscapeFilter,
    )
}


def create_filter(
    plugin_id: str,
    *,
    status: bool = True,
    weight: int = 0,
    settings: dict[str, Any] | None = None,
) -> Filter:
    """Instantiate a registered filter plugin.

    Raises:
        FilterPluginNotFoundError: If no plugin has that id.
    """
    try:
        plugin = FILTER_PLUGINS[plugin_id]
    except KeyError:
        raise FilterPluginNotFoundError(plugin_id) from None
    return plugin(status=status, weight=weight, settings=settings)
