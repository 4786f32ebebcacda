"""HTML heuristics submodule — pure extraction functions and the audit rules built on them."""

from __future__ import annotations

import logging

from src.api.schemas import Finding
from src.scanner.models import FetchOutcome

from .extract import (
    count_headings,
    count_images_missing_alt,
    find_link_rel_href,
    find_meta_content,
    find_tag_content,
    has_html_lang,
    parse_tag_attributes,
)
from .rules import DOCUMENT_RULES, RESPONSE_RULES
from .text import decode_entities, normalized_text_length

__all__ = [
    "count_headings",
    "count_images_missing_alt",
    "decode_entities",
    "evaluate_document",
    "evaluate_response",
    "find_link_rel_href",
    "find_meta_content",
    "find_tag_content",
    "has_html_lang",
    "normalized_text_length",
    "parse_tag_attributes",
    "run_heuristics",
]

logger = logging.getLogger(__name__)


def evaluate_document(html: str) -> list[Finding]:
    """Run the SEO and accessibility rules against raw HTML."""
    return [f for f in (rule(html) for rule in DOCUMENT_RULES) if f is not None]


def evaluate_response(fetch: FetchOutcome) -> list[Finding]:
    """Run the performance rules against response timing, size and headers."""
    return [f for f in (rule(fetch) for rule in RESPONSE_RULES) if f is not None]


def run_heuristics(fetch: FetchOutcome) -> list[Finding]:
    """All findings for a fetched page: document rules first, then response rules."""
    findings = evaluate_document(fetch.html) + evaluate_response(fetch)
    logger.debug(
        "heuristics complete",
        extra={"finding_count": len(findings), "rule_ids": [f.id for f in findings]},
    )
    return findings
