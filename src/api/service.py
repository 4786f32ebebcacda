"""Service layer — prepares raw request input for the scan engine."""

from __future__ import annotations

import re

_SCHEME_PREFIX_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def normalize_scan_url(raw: str | None) -> str | None:
    """Trim user input and default to ``https://`` when no scheme is given.

    Returns ``None`` for missing or blank input. Inputs that already carry a
    ``scheme://`` prefix are left alone so unsupported schemes still reach
    validation and get rejected there.
    """
    if raw is None:
        return None
    trimmed = raw.strip()
    if not trimmed:
        return None
    if _SCHEME_PREFIX_RE.match(trimmed):
        return trimmed
    return f"https://{trimmed}"
