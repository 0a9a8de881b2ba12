"""HTML helpers shared by the restricting filters and the affix sanitizer.

``strip_disallowed_tags`` re-serializes markup through ``html.parser``,
keeping only allow-listed tags and attributes. Text nodes are always
re-escaped, so entities that were decoded while parsing cannot turn into
live markup on output.
"""

from __future__ import annotations

import html
import re
from html.parser import HTMLParser
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

# Tags whose text content is dropped along with the tag itself.
_DROP_CONTENT_TAGS = frozenset({"script", "style"})

_VOID_TAGS = frozenset({"br", "hr", "img", "wbr", "source", "col", "area"})

_URL_ATTRIBUTES = frozenset({"href", "src", "cite", "action", "longdesc"})

ALLOWED_PROTOCOLS = frozenset(
    {"http", "https", "ftp", "news", "nntp", "tel", "telnet", "mailto", "irc", "ssh", "sftp"}
)

_SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.\-]*):", re.IGNORECASE)
_CONTROL_RE = re.compile(r"[\x00-\x20]+")
_ALLOWED_TAG_RE = re.compile(r"<\s*([a-zA-Z][a-zA-Z0-9]*)([^>]*)>")

AllowedHtml = dict[str, frozenset[str]]


def parse_allowed_html(spec: str) -> AllowedHtml:
    """Parse ``"<a href hreflang> <em> <strong>"`` into a tag -> attributes map."""
    allowed: AllowedHtml = {}
    for match in _ALLOWED_TAG_RE.finditer(spec):
        tag = match.group(1).lower()
        attributes = frozenset(a.lower() for a in match.group(2).split())
        allowed[tag] = allowed.get(tag, frozenset()) | attributes
    return allowed


def is_safe_url(value: str) -> bool:
    """True for relative URLs and URLs with an allowed protocol."""
    collapsed = _CONTROL_RE.sub("", html.unescape(value))
    match = _SCHEME_RE.match(collapsed)
    if match is None:
        return True
    return match.group(1).lower() in ALLOWED_PROTOCOLS


class _RestrictingParser(HTMLParser):
    def __init__(self, allowed: Mapping[str, Iterable[str]]) -> None:
        super().__init__(convert_charrefs=True)
        self._allowed = {tag: frozenset(attrs) for tag, attrs in allowed.items()}
        self._out: list[str] = []
        self._drop_depth = 0

    @property
    def output(self) -> str:
        return "".join(self._out)

    def _render_attributes(self, tag: str, attrs: list[tuple[str, str | None]]) -> str:
        permitted = self._allowed[tag]
        rendered: list[str] = []
        for name, value in attrs:
            if name not in permitted or name.startswith("on") or name == "style":
                continue
            if value is None:
                rendered.append(f" {name}")
                continue
            if name in _URL_ATTRIBUTES and not is_safe_url(value):
                continue
            rendered.append(f' {name}="{html.escape(value, quote=True)}"')
        return "".join(rendered)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in _DROP_CONTENT_TAGS:
            self._drop_depth += 1
            return
        if self._drop_depth or tag not in self._allowed:
            return
        closing = " /" if tag in _VOID_TAGS else ""
        self._out.append(f"<{tag}{self._render_attributes(tag, attrs)}{closing}>")

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self._drop_depth or tag not in self._allowed:
            return
        self._out.append(f"<{tag}{self._render_attributes(tag, attrs)} />")

    def handle_endtag(self, tag: str) -> None:
        if tag in _DROP_CONTENT_TAGS:
            self._drop_depth = max(0, self._drop_depth - 1)
            return
        if self._drop_depth or tag not in self._allowed or tag in _VOID_TAGS:
            return
        self._out.append(f"</{tag}>")

    def handle_data(self, data: str) -> None:
        if not self._drop_depth:
            self._out.append(html.escape(data, quote=False))


def strip_disallowed_tags(text: str, allowed: Mapping[str, Iterable[str]]) -> str:
    """Remove every tag and attribute not in ``allowed``.

    Comments, processing instructions and doctypes are always removed.
    ``on*`` and ``style`` attributes are removed even when allow-listed,
    as are URL attributes with a disallowed protocol.
    """
    parser = _RestrictingParser(allowed)
    parser.feed(text)
    parser.close()
    return parser.output


def escape_html(text: str) -> str:
    """Escape all markup so it displays as plain text."""
    return html.escape(text, quote=True)
