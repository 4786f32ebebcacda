"""Audit rules — each inspects the page once and yields at most one Finding."""

from __future__ import annotations

from typing import Callable

from src.api.schemas import Category, Finding, Severity
from src.scanner.models import FetchOutcome

from .extract import (
    count_headings,
    count_images_missing_alt,
    find_link_rel_href,
    find_meta_content,
    find_tag_content,
    has_html_lang,
)
from .text import normalized_text_length

TITLE_LENGTH_RANGE = (10, 70)
DESCRIPTION_LENGTH_RANGE = (50, 170)
MISSING_ALT_HIGH_THRESHOLD = 5

SLOW_RESPONSE_MS = 800
VERY_SLOW_RESPONSE_MS = 2000
LARGE_HTML_BYTES = 500_000
VERY_LARGE_HTML_BYTES = 900_000

DocumentRule = Callable[[str], Finding | None]
ResponseRule = Callable[[FetchOutcome], Finding | None]


def _finding(
    rule_id: str,
    category: Category,
    severity: Severity,
    title: str,
    description: str,
) -> Finding:
    return Finding(
        id=rule_id,
        category=category,
        title=title,
        description=description,
        severity=severity,
        is_premium=False,
    )


# ---------- SEO ----------

def check_title(html: str) -> Finding | None:
    if find_tag_content(html, "title"):
        return None
    return _finding(
        "seo-title", "SEO", "High",
        "Add a page title",
        "No <title> tag detected. Add a concise, descriptive title for better search visibility.",
    )


def check_title_length(html: str) -> Finding | None:
    title = find_tag_content(html, "title")
    if not title:
        return None
    length = normalized_text_length(title)
    low, high = TITLE_LENGTH_RANGE
    if low <= length <= high:
        return None
    return _finding(
        "seo-title-length", "SEO", "Low",
        "Optimize title length",
        f"Your <title> length is {length} characters. Aim for {low}-{high} characters.",
    )


def check_meta_description(html: str) -> Finding | None:
    if find_meta_content(html, name="description"):
        return None
    return _finding(
        "seo-meta-description", "SEO", "High",
        "Add a meta description",
        "Missing meta description. Add a clear summary to improve click-through rate from search results.",
    )


def check_meta_description_length(html: str) -> Finding | None:
    description = find_meta_content(html, name="description")
    if not description:
        return None
    length = normalized_text_length(description)
    low, high = DESCRIPTION_LENGTH_RANGE
    if low <= length <= high:
        return None
    return _finding(
        "seo-meta-description-length", "SEO", "Low",
        "Optimize meta description length",
        f"Meta description is {length} characters. Aim for {low}-{high} characters.",
    )


def check_canonical(html: str) -> Finding | None:
    if find_link_rel_href(html, "canonical"):
        return None
    return _finding(
        "seo-canonical", "SEO", "Medium",
        "Add a canonical URL",
        'No canonical link detected. Add <link rel="canonical"> to help prevent duplicate-content issues.',
    )


def check_viewport(html: str) -> Finding | None:
    if find_meta_content(html, name="viewport"):
        return None
    return _finding(
        "seo-viewport", "SEO", "High",
        "Add a viewport meta tag",
        "Missing viewport meta tag. This can hurt mobile friendliness and SEO rankings.",
    )


def check_open_graph(html: str) -> Finding | None:
    og_title = find_meta_content(html, property="og:title")
    og_description = find_meta_content(html, property="og:description")
    if og_title and og_description:
        return None
    return _finding(
        "seo-open-graph", "SEO", "Low",
        "Add Open Graph tags",
        "Missing Open Graph tags (og:title and/or og:description). These improve link previews in social apps.",
    )


def check_h1(html: str) -> Finding | None:
    count = count_headings(html, 1)
    if count == 0:
        return _finding(
            "seo-h1", "SEO", "Medium",
            "Add an H1 heading",
            "No <h1> detected. Add a single, descriptive H1 to clarify the page topic "
            "for users and search engines.",
        )
    if count > 1:
        return _finding(
            "seo-h1-multiple", "SEO", "Low",
            "Use a single H1 heading",
            f"Detected {count} <h1> tags. Prefer a single H1 per page for clearer structure.",
        )
    return None


# ---------- Accessibility ----------

def check_image_alt(html: str) -> Finding | None:
    missing = count_images_missing_alt(html)
    if missing == 0:
        return None
    return _finding(
        "a11y-image-alt", "Accessibility",
        "High" if missing >= MISSING_ALT_HIGH_THRESHOLD else "Medium",
        "Add missing image alt text",
        f"Found {missing} image(s) missing alt text, which can block screen reader users.",
    )


def check_html_lang(html: str) -> Finding | None:
    if has_html_lang(html):
        return None
    return _finding(
        "a11y-html-lang", "Accessibility", "Medium",
        "Declare the document language",
        'Missing <html lang="...">. Add the language to improve screen reader pronunciation and accessibility.',
    )


# ---------- Performance ----------

def check_response_time(fetch: FetchOutcome) -> Finding | None:
    elapsed = fetch.elapsed_ms
    if elapsed > VERY_SLOW_RESPONSE_MS:
        return _finding(
            "perf-response-time", "Performance", "High",
            "Reduce initial server response time",
            f"Initial response time is {elapsed}ms. Aim for under 500ms for a faster first impression.",
        )
    if elapsed > SLOW_RESPONSE_MS:
        return _finding(
            "perf-response-time", "Performance", "Medium",
            "Improve initial server response time",
            f"Initial response time is {elapsed}ms. Aim for under 500ms where possible.",
        )
    return None


def check_html_size(fetch: FetchOutcome) -> Finding | None:
    size = fetch.byte_count
    if size <= LARGE_HTML_BYTES:
        return None
    return _finding(
        "perf-html-size", "Performance",
        "High" if size > VERY_LARGE_HTML_BYTES else "Medium",
        "Reduce HTML document size",
        f"The HTML payload is {round(size / 1024)}KB. Large documents can slow down parsing and rendering.",
    )


def check_cache_control(fetch: FetchOutcome) -> Finding | None:
    if fetch.cache_control:
        return None
    return _finding(
        "perf-cache-control", "Performance", "Low",
        "Add caching headers",
        "No Cache-Control header detected. Proper caching improves repeat visits and reduces server load.",
    )


DOCUMENT_RULES: tuple[DocumentRule, ...] = (
    check_title,
    check_title_length,
    check_meta_description,
    check_meta_description_length,
    check_canonical,
    check_viewport,
    check_open_graph,
    check_h1,
    check_image_alt,
    check_html_lang,
)

RESPONSE_RULES: tuple[ResponseRule, ...] = (
    check_response_time,
    check_html_size,
    check_cache_control,
)
