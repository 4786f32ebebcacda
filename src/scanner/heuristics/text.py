"""Text normalization helpers for extracted HTML values."""

from __future__ import annotations

import re

_NAMED_ENTITIES = {
    "amp": "&",
    "quot": '"',
    "apos": "'",
    "nbsp": " ",
    "lsquo": "‘",
    "rsquo": "’",
    "ldquo": "“",
    "rdquo": "”",
}

_ENTITY_RE = re.compile(
    r"&(?:#[xX]([0-9a-fA-F]+)|#([0-9]+)|(" + "|".join(_NAMED_ENTITIES) + r"));"
)
_WHITESPACE_RE = re.compile(r"\s+")


def _replace_entity(match: re.Match[str]) -> str:
    hex_digits, dec_digits, name = match.groups()
    if name:
        return _NAMED_ENTITIES[name]
    try:
        return chr(int(hex_digits, 16) if hex_digits else int(dec_digits))
    except (ValueError, OverflowError):
        return match.group(0)


def decode_entities(text: str) -> str:
    """Decode numeric references and a small table of named entities.

    Unknown entities and out-of-range code points are left as written.
    """
    return _ENTITY_RE.sub(_replace_entity, text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalized_text_length(text: str) -> int:
    """Length in code points of *text* once decoded and whitespace-collapsed."""
    return len(collapse_whitespace(decode_entities(text)))
