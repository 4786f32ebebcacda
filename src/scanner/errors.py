"""Scan failure taxonomy.

Every failure the pipeline can report is a :class:`ScanError`. The HTTP layer
only ever shows the message; ``kind`` keeps the failures distinguishable in
logs and tests.
"""

from __future__ import annotations


class ScanError(Exception):
    """Base class for terminal scan failures."""

    kind = "scan_failed"
    default_message = "Scan failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class UrlValidationError(ScanError):
    """Raised when a URL is rejected before any request is made."""

    kind = "invalid_url"
    default_message = "Invalid URL."


class InvalidUrlError(UrlValidationError):
    kind = "invalid_url"
    default_message = "Invalid URL."


class UnsupportedSchemeError(UrlValidationError):
    kind = "unsupported_scheme"
    default_message = "Only http/https URLs are supported."


class DisallowedHostError(UrlValidationError):
    kind = "disallowed_host"
    default_message = "Localhost URLs are not allowed."


class PrivateNetworkError(UrlValidationError):
    kind = "private_network"
    default_message = "Private network URLs are not allowed."


class UnresolvableHostError(UrlValidationError):
    kind = "unresolvable_host"
    default_message = "Unable to resolve hostname."


class FetchError(ScanError):
    """Raised when the page could not be retrieved."""

    kind = "fetch_failed"
    default_message = "Unable to fetch the page."


class ScanTimeoutError(FetchError):
    kind = "scan_timeout"
    default_message = "Scan timed out."


class PayloadTooLargeError(FetchError):
    kind = "payload_too_large"
    default_message = "Page is too large to scan."


class FetchFailedError(FetchError):
    kind = "fetch_failed"
    default_message = "Unable to fetch the page."
