"""Request/response Pydantic models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Category = Literal["Performance", "SEO", "Accessibility"]
Severity = Literal["Low", "Medium", "High"]

CATEGORIES: tuple[Category, ...] = ("Performance", "SEO", "Accessibility")


class _CamelModel(BaseModel):
    """Serialized with camelCase keys, constructed with snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScanRequest(BaseModel):
    url: str | None = None


class Finding(_CamelModel):
    id: str
    category: Category
    title: str
    description: str
    severity: Severity
    is_premium: bool = False


class ScanMetrics(_CamelModel):
    scanned_url: str
    final_url: str
    status: int
    response_time_ms: int
    content_type: str | None = None
    content_bytes: int = 0


class ScanSummary(_CamelModel):
    overall_score: int
    scores: dict[Category, int]
    metrics: ScanMetrics


class ScanResponse(_CamelModel):
    results: list[Finding] = []
    summary: ScanSummary


class ErrorResponse(BaseModel):
    error: str
