"""Value objects passed between the scan pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SafeURL:
    """A URL that passed scheme, host and private-network validation."""

    url: str
    scheme: str
    hostname: str
    port: int | None = None
    addresses: tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a single bounded page fetch."""

    html: str
    byte_count: int
    status: int
    final_url: str
    content_type: str | None = None
    cache_control: str | None = None
    elapsed_ms: int = 0
