"""Scan engine — validate -> fetch -> heuristics -> score, once per request."""

from __future__ import annotations

import asyncio
import logging
import uuid

import httpx

from src.api.schemas import ScanResponse
from src.config import Settings
from src.scanner.errors import ScanError, ScanTimeoutError
from src.scanner.fetcher import FetchPolicy, create_client, fetch_page
from src.scanner.heuristics import run_heuristics
from src.scanner.scoring import build_summary
from src.scanner.validator import validate_url

logger = logging.getLogger(__name__)


class ScanEngine:
    """Runs the single-page audit pipeline.

    Holds configuration only; every call to :meth:`run` uses its own HTTP
    client so nothing is shared between scans.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._policy = FetchPolicy.from_settings(settings)
        self._transport = transport

    @property
    def policy(self) -> FetchPolicy:
        return self._policy

    async def run(self, url: str) -> ScanResponse:
        """Scan *url* (already absolute) and return the scored report.

        Raises :class:`~src.scanner.errors.ScanError` on any terminal failure.
        """
        scan_id = uuid.uuid4().hex[:12]
        logger.info("scan started", extra={"scan_id": scan_id, "url": url[:200]})

        try:
            try:
                target = await asyncio.wait_for(validate_url(url), timeout=self._policy.timeout_seconds)
            except asyncio.TimeoutError:
                raise ScanTimeoutError() from None
            async with create_client(self._policy, self._transport) as client:
                fetch = await fetch_page(target, self._policy, client)
        except ScanError as exc:
            logger.warning(
                "scan rejected",
                extra={"scan_id": scan_id, "url": url[:200], "error_kind": exc.kind, "error": exc.message},
            )
            raise

        # regex work on up to max_html_bytes stays off the event loop
        findings = await asyncio.to_thread(run_heuristics, fetch)
        summary = build_summary(target, fetch, findings)

        logger.info(
            "scan completed",
            extra={
                "scan_id": scan_id,
                "host": target.hostname,
                "status": fetch.status,
                "elapsed_ms": fetch.elapsed_ms,
                "content_bytes": fetch.byte_count,
                "finding_count": len(findings),
                "overall_score": summary.overall_score,
            },
        )
        return ScanResponse(results=findings, summary=summary)
