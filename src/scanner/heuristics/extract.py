"""Regex-based extraction from raw, possibly malformed HTML.

Nothing here parses a DOM. Every function is total: a pattern that is not
found yields ``None`` / ``0`` / ``False``, never an exception.
"""

from __future__ import annotations

import re
from functools import lru_cache

from .text import collapse_whitespace

_TAG_NAME_RE = re.compile(r"^<\s*[A-Za-z][A-Za-z0-9:-]*")
_ATTRIBUTE_RE = re.compile(
    r"""([A-Za-z_:][A-Za-z0-9_:.-]*)\s*(?:=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>`]+)))?"""
)


# An opening tag stops at the next "<" so an unterminated tag fails fast
# instead of scanning to the end of the document.
@lru_cache(maxsize=None)
def _open_tag_re(tag: str) -> re.Pattern[str]:
    return re.compile(rf"<{tag}\b[^<>]*>", re.IGNORECASE)


@lru_cache(maxsize=None)
def _close_tag_re(tag: str) -> re.Pattern[str]:
    return re.compile(rf"</{tag}\s*>", re.IGNORECASE)


def parse_tag_attributes(tag: str) -> dict[str, str]:
    """Tokenize the attributes of a single opening tag.

    Accepts double-quoted, single-quoted, unquoted and bare (valueless)
    attributes in any order. Keys are lower-cased; the first occurrence of a
    key wins, as in browsers.
    """
    body = _TAG_NAME_RE.sub("", tag, count=1)
    attrs: dict[str, str] = {}
    for match in _ATTRIBUTE_RE.finditer(body):
        key = match.group(1).lower()
        value = next((v for v in match.group(2, 3, 4) if v is not None), "")
        attrs.setdefault(key, value)
    return attrs


def iter_tags(html: str, tag: str):
    """Yield the attribute dict of every ``<tag ...>`` opening tag."""
    for match in _open_tag_re(tag).finditer(html):
        yield parse_tag_attributes(match.group(0))


def find_tag_content(html: str, tag: str) -> str | None:
    """Whitespace-collapsed text of the first ``<tag>...</tag>``, or ``None`` if empty/absent.

    Only the first opening tag is considered; if it is never closed the
    element is treated as absent.
    """
    opening = _open_tag_re(tag).search(html)
    if not opening:
        return None
    closing = _close_tag_re(tag).search(html, opening.end())
    if not closing:
        return None
    content = collapse_whitespace(html[opening.end():closing.start()])
    return content or None


def find_meta_content(html: str, *, name: str | None = None, property: str | None = None) -> str | None:
    """Return the ``content`` of the first ``<meta>`` matching *name* or *property*."""
    attr, target = ("name", name) if name else ("property", property)
    if not target:
        return None
    target = target.lower()

    for attrs in iter_tags(html, "meta"):
        if attrs.get(attr, "").strip().lower() != target:
            continue
        content = attrs.get("content", "").strip()
        if content:
            return content
    return None


def find_link_rel_href(html: str, rel: str) -> str | None:
    """Return the ``href`` of the first ``<link>`` whose ``rel`` tokens include *rel*."""
    wanted = rel.lower()
    for attrs in iter_tags(html, "link"):
        if wanted not in attrs.get("rel", "").lower().split():
            continue
        href = attrs.get("href", "").strip()
        if href:
            return href
    return None


def count_headings(html: str, level: int) -> int:
    return sum(1 for _ in _open_tag_re(f"h{level}").finditer(html))


def count_images_missing_alt(html: str) -> int:
    """Count ``<img>`` tags without a non-empty ``alt`` attribute."""
    return sum(1 for attrs in iter_tags(html, "img") if not attrs.get("alt", "").strip())


def has_html_lang(html: str) -> bool:
    attrs = next(iter_tags(html, "html"), None)
    return attrs is not None and bool(attrs.get("lang", "").strip())
