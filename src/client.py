"""Async client for the scan endpoint."""

from __future__ import annotations

import logging

import httpx

from src.api.schemas import ScanResponse

logger = logging.getLogger(__name__)

SCAN_PATH = "/api/scan"


class ScanClientError(Exception):
    """The scan endpoint answered with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or "Scan failed."
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return "Scan failed."


async def scan_website(
    url: str,
    *,
    base_url: str = "",
    client: httpx.AsyncClient | None = None,
    timeout: float = 30.0,
) -> ScanResponse:
    """POST *url* to the scan endpoint and return the parsed report.

    Raises :class:`ScanClientError` carrying the server's ``error`` message
    (or the raw body when it is not JSON) on a non-2xx answer.
    """
    if client is None:
        async with httpx.AsyncClient(base_url=base_url, timeout=timeout) as owned:
            return await scan_website(url, client=owned)

    response = await client.post(SCAN_PATH, json={"url": url})
    if response.is_error:
        message = _error_message(response)
        logger.debug("scan request failed", extra={"status": response.status_code, "error": message})
        raise ScanClientError(message, status_code=response.status_code)
    return ScanResponse.model_validate(response.json())
