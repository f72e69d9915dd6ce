"""YouTube video ID extraction.

Both catalogs reference videos by URL in many shapes (watch links,
short links, shorts, embeds, bare IDs). The canonical 11-character ID
is the join key between the source CMS and the destination database.
"""

from __future__ import annotations

import re

VIDEO_ID_CHARS = r"[A-Za-z0-9_-]{11}"

# Priority order matters: the first pattern that matches wins.
_URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"youtube\.com/watch\?v=({VIDEO_ID_CHARS})"),
    re.compile(rf"youtu\.be/({VIDEO_ID_CHARS})"),
    re.compile(rf"youtube\.com/shorts/({VIDEO_ID_CHARS})"),
    re.compile(rf"youtube\.com/embed/({VIDEO_ID_CHARS})"),
    re.compile(rf"youtube\.com/v/({VIDEO_ID_CHARS})"),
)

_BARE_ID = re.compile(VIDEO_ID_CHARS)


def extract_video_id(value: str) -> str | None:
    """Return the canonical 11-character video ID found in *value*.

    Purely syntactic: no network lookup is made to check that the
    video exists.

    Args:
        value: A full URL in any supported format, or a bare ID.

    Returns:
        The video ID, or ``None`` when no pattern matches.
    """
    for pattern in _URL_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)

    if _BARE_ID.fullmatch(value):
        return value

    return None
