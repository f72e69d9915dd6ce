"""Title normalization for fuzzy course matching."""

from __future__ import annotations

import re

_DASHES = re.compile(r"[–—−]")
_PARENS = re.compile(r"[()]")
_WHITESPACE = re.compile(r"\s+")
_PART_NUMBER = re.compile(r"part\s*(\d)", re.IGNORECASE)

# Decoded in this order; "&amp;" first so "&amp;#8217;" collapses fully.
# HTML parsers hand over the quote characters already decoded, so those
# map to ASCII too.
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&#8217;", "'"),
    ("&#8216;", "'"),
    ("&#8220;", '"'),
    ("&#8221;", '"'),
    ("\u2019", "'"),
    ("\u2018", "'"),
    ("\u201c", '"'),
    ("\u201d", '"'),
)


def _decode_entities(text: str) -> str:
    previous = None
    while previous != text:
        previous = text
        for entity, char in _ENTITIES:
            text = text.replace(entity, char)
    return text


def normalize_title(title: str) -> str:
    """Canonicalize a display title for comparison.

    Deterministic and idempotent. Steps run in a fixed order:
    lowercase, unify dashes, drop parentheses, collapse whitespace,
    normalize "part N" spacing, decode a fixed set of HTML entities
    and fold curly quotes to ASCII, trim.
    """
    text = title.lower()
    text = _DASHES.sub("-", text)
    text = _PARENS.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    text = _PART_NUMBER.sub(r"part \1", text)
    text = _decode_entities(text)
    return text.strip()


def titles_match(first: str, second: str) -> bool:
    """Return True if two titles name the same course.

    Titles match when their normalized forms are equal or one contains
    the other, which tolerates truncated subtitles. This is permissive
    and can produce false positives (e.g. "plan" inside "objective and
    plan").
    """
    a = normalize_title(first)
    b = normalize_title(second)
    return a == b or a in b or b in a
