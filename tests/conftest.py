"""Fixtures — settings, public-DNS stub, mocked page transports."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from src.config import Settings

PUBLIC_ADDRESS = "93.184.216.34"

MINIMAL_HTML = "<html><body>hi</body></html>"

COMPLETE_HTML = """<!doctype html>
<html lang="en">
<head>
  <title>Acme Widgets - Handmade Widgets</title>
  <meta name="description" content="Acme builds handmade widgets for homes and offices, shipped worldwide within a week.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta property="og:title" content="Acme Widgets">
  <meta property="og:description" content="Handmade widgets for homes and offices.">
  <link rel="canonical" href="https://acme.example/">
</head>
<body>
  <h1>Acme Widgets</h1>
  <img src="/hero.png" alt="A widget on a desk">
</body>
</html>
"""


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        fetch_timeout_seconds=2.0,
        max_html_bytes=1024 * 1024,
        max_redirects=3,
    )


@pytest.fixture
def public_dns():
    """Resolve every hostname to a public address."""
    with patch(
        "src.scanner.validator.resolve_host",
        new=AsyncMock(return_value=[PUBLIC_ADDRESS]),
    ) as mock_resolve:
        yield mock_resolve


def html_transport(
    html: str = COMPLETE_HTML,
    *,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.MockTransport:
    """Transport answering every request with the same HTML page."""
    response_headers = {"content-type": "text/html; charset=utf-8", "cache-control": "max-age=60"}
    if headers is not None:
        response_headers = headers

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, headers=response_headers, content=html.encode("utf-8"))

    return httpx.MockTransport(handler)
