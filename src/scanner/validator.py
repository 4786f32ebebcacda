"""URL safety validation — scheme, host and private-network checks before any fetch."""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import re
import socket
from urllib.parse import urlsplit, urlunsplit

from .errors import (
    DisallowedHostError,
    InvalidUrlError,
    PrivateNetworkError,
    UnresolvableHostError,
    UnsupportedSchemeError,
)
from .models import SafeURL

logger = logging.getLogger(__name__)

_VALID_SCHEMES = {"http", "https"}

# Hostnames made only of digits and dots are treated as IPv4 literals,
# valid or not.
_DOTTED_NUMERIC_RE = re.compile(r"^[0-9.]+$")
_HOSTNAME_RE = re.compile(r"^[a-z0-9_-]+(\.[a-z0-9_-]+)*$")


def is_private_ipv4(address: str) -> bool:
    """Return ``True`` for loopback, link-local and RFC 1918 IPv4 addresses.

    Anything that is not four dotted decimal octets in 0-255 also counts as
    private so that ambiguous input is never fetched.
    """
    parts = address.split(".")
    if len(parts) != 4 or not all(p.isascii() and p.isdigit() for p in parts):
        return True
    octets = [int(p) for p in parts]
    if any(o > 255 for o in octets):
        return True

    a, b = octets[0], octets[1]
    if a == 10 or a == 127:
        return True
    if a == 169 and b == 254:
        return True
    if a == 172 and 16 <= b <= 31:
        return True
    if a == 192 and b == 168:
        return True
    return False


def is_private_ipv6(address: str) -> bool:
    """Return ``True`` for loopback, link-local and unique-local IPv6 addresses."""
    try:
        parsed = ipaddress.IPv6Address(address.split("%", 1)[0])
    except ValueError:
        return True

    if parsed.ipv4_mapped is not None:
        return is_private_ipv4(str(parsed.ipv4_mapped))

    normalized = parsed.compressed.lower()
    if normalized == "::1":
        return True
    if normalized.startswith("fe80:"):
        return True
    return normalized.startswith("fc") or normalized.startswith("fd")


def is_private_address(address: str) -> bool:
    """Dispatch on the address family; unparseable addresses are private."""
    if ":" in address:
        return is_private_ipv6(address)
    return is_private_ipv4(address)


async def resolve_host(hostname: str) -> list[str]:
    """Resolve *hostname* to every A/AAAA address, or ``[]`` on failure."""
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError):
        return []
    return list(dict.fromkeys(info[4][0] for info in infos))


def _split(raw_url: str):
    try:
        parts = urlsplit(raw_url)
        port = parts.port
    except ValueError:
        raise InvalidUrlError() from None
    return parts, port


def _canonical_hostname(hostname: str) -> str:
    """Lower-case, strip the root dot and IDNA-encode a non-literal hostname."""
    host = hostname.lower().rstrip(".")
    if ":" in host or host.isascii():
        return host
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError:
        raise InvalidUrlError() from None


async def validate_url(raw_url: str) -> SafeURL:
    """Validate an absolute http(s) URL and return it as a :class:`SafeURL`.

    Performs at most one DNS lookup. Raises a
    :class:`~src.scanner.errors.UrlValidationError` subclass on rejection.
    """
    candidate = (raw_url or "").strip()
    if not candidate:
        raise InvalidUrlError()

    parts, port = _split(candidate)

    scheme = parts.scheme.lower()
    if not scheme:
        raise InvalidUrlError()
    if scheme not in _VALID_SCHEMES:
        raise UnsupportedSchemeError()

    if not parts.hostname:
        raise InvalidUrlError()
    if parts.username is not None or parts.password is not None:
        raise InvalidUrlError("URLs with embedded credentials are not allowed.")

    hostname = _canonical_hostname(parts.hostname)
    if not hostname:
        raise InvalidUrlError()

    if hostname == "localhost" or hostname.endswith(".localhost") or hostname.endswith(".local"):
        raise DisallowedHostError()

    if ":" in hostname:
        if is_private_ipv6(hostname):
            raise PrivateNetworkError()
        addresses = (hostname,)
    elif _DOTTED_NUMERIC_RE.match(hostname):
        if is_private_ipv4(hostname):
            raise PrivateNetworkError()
        addresses = (hostname,)
    else:
        if not _HOSTNAME_RE.match(hostname):
            raise InvalidUrlError()
        resolved = await resolve_host(hostname)
        if not resolved:
            raise UnresolvableHostError()
        for address in resolved:
            if is_private_address(address):
                logger.warning(
                    "hostname resolves to private address",
                    extra={"host": hostname, "address": address},
                )
                raise PrivateNetworkError()
        addresses = tuple(resolved)

    netloc = f"[{hostname}]" if ":" in hostname else hostname
    if port is not None:
        netloc = f"{netloc}:{port}"
    url = urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))

    return SafeURL(url=url, scheme=scheme, hostname=hostname, port=port, addresses=addresses)
