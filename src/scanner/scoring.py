"""Fold findings into per-category and overall scores."""

from __future__ import annotations

from collections.abc import Iterable

from src.api.schemas import CATEGORIES, Category, Finding, ScanMetrics, ScanSummary, Severity
from src.scanner.models import FetchOutcome, SafeURL

SEVERITY_WEIGHTS: dict[Severity, int] = {
    "High": 25,
    "Medium": 12,
    "Low": 5,
}

MAX_SCORE = 100


def score_findings(findings: Iterable[Finding]) -> tuple[int, dict[Category, int]]:
    """Return ``(overall_score, category_scores)`` for *findings*.

    Premium findings are ignored. Each category starts at 100 and is clamped
    to 0-100 after every penalty.
    """
    scores: dict[Category, int] = {category: MAX_SCORE for category in CATEGORIES}
    for finding in findings:
        if finding.is_premium:
            continue
        penalized = scores[finding.category] - SEVERITY_WEIGHTS[finding.severity]
        scores[finding.category] = max(0, min(MAX_SCORE, penalized))

    # a mean of three integers never lands on .5, so round() needs no tie rule
    overall = round(sum(scores.values()) / len(scores))
    return overall, scores


def build_summary(target: SafeURL, fetch: FetchOutcome, findings: list[Finding]) -> ScanSummary:
    overall, scores = score_findings(findings)
    return ScanSummary(
        overall_score=overall,
        scores=scores,
        metrics=ScanMetrics(
            scanned_url=target.url,
            final_url=fetch.final_url or target.url,
            status=fetch.status,
            response_time_ms=fetch.elapsed_ms,
            content_type=fetch.content_type,
            content_bytes=fetch.byte_count,
        ),
    )
