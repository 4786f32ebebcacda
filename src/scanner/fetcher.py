"""Bounded page fetcher — one GET with a deadline, a byte cap and re-validated redirects."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from urllib.parse import urljoin

import httpx

from src.config import Settings

from .errors import FetchFailedError, PayloadTooLargeError, ScanTimeoutError
from .models import FetchOutcome, SafeURL
from .validator import validate_url

logger = logging.getLogger(__name__)

_REDIRECT_STATUSES = {301, 302, 303, 307, 308}


@dataclass(frozen=True)
class FetchPolicy:
    """Limits and headers applied to every outbound page request."""

    timeout_seconds: float = 12.0
    max_bytes: int = 1024 * 1024
    max_redirects: int = 5
    user_agent: str = "site-audit-scanner/0.1 (+https://example.com/scanner)"
    accept: str = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

    @classmethod
    def from_settings(cls, settings: Settings) -> FetchPolicy:
        return cls(
            timeout_seconds=settings.fetch_timeout_seconds,
            max_bytes=settings.max_html_bytes,
            max_redirects=settings.max_redirects,
            user_agent=settings.user_agent,
            accept=settings.accept_header,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": self.accept}


def create_client(
    policy: FetchPolicy,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build a per-scan client. Redirects are walked manually by :func:`fetch_page`."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(policy.timeout_seconds),
        headers=policy.headers,
        follow_redirects=False,
        transport=transport,
    )


async def _read_body(response: httpx.Response, max_bytes: int) -> bytes:
    """Accumulate the streamed body, failing as soon as it exceeds *max_bytes*."""
    chunks: list[bytes] = []
    total = 0
    async for chunk in response.aiter_bytes():
        total += len(chunk)
        if total > max_bytes:
            logger.warning(
                "response body exceeds cap",
                extra={"url": str(response.url), "bytes_read": total, "max_bytes": max_bytes},
            )
            raise PayloadTooLargeError()
        chunks.append(chunk)
    return b"".join(chunks)


async def _fetch(client: httpx.AsyncClient, target: SafeURL, policy: FetchPolicy) -> FetchOutcome:
    start = time.perf_counter()
    url = target.url
    hops = 0

    while True:
        async with client.stream("GET", url) as response:
            location = response.headers.get("location")
            if response.status_code in _REDIRECT_STATUSES and location:
                if hops >= policy.max_redirects:
                    raise FetchFailedError("Too many redirects.")
                hops += 1
                next_url = urljoin(str(response.url), location.strip())
                logger.debug("following redirect", extra={"from_url": url, "to_url": next_url})
                # every hop goes back through the safety checks
                url = (await validate_url(next_url)).url
                continue

            body = await _read_body(response, policy.max_bytes)
            elapsed_ms = round((time.perf_counter() - start) * 1000)
            return FetchOutcome(
                html=body.decode("utf-8", errors="replace"),
                byte_count=len(body),
                status=response.status_code,
                final_url=str(response.url),
                content_type=response.headers.get("content-type"),
                cache_control=response.headers.get("cache-control"),
                elapsed_ms=elapsed_ms,
            )


async def fetch_page(
    target: SafeURL,
    policy: FetchPolicy,
    client: httpx.AsyncClient | None = None,
) -> FetchOutcome:
    """Fetch *target* once and return the decoded page with response metadata.

    The whole exchange, redirects and body included, runs under
    ``policy.timeout_seconds``. Raises :class:`ScanTimeoutError`,
    :class:`PayloadTooLargeError`, :class:`FetchFailedError`, or a validation
    error when a redirect points somewhere unsafe.
    """
    if client is None:
        async with create_client(policy) as owned:
            return await fetch_page(target, policy, owned)

    try:
        return await asyncio.wait_for(_fetch(client, target, policy), timeout=policy.timeout_seconds)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.warning(
            "fetch timed out",
            extra={"url": target.url, "timeout_seconds": policy.timeout_seconds},
        )
        raise ScanTimeoutError() from None
    except httpx.HTTPError as exc:
        logger.warning("fetch failed", extra={"url": target.url, "error": str(exc)})
        raise FetchFailedError(str(exc) or type(exc).__name__) from exc
