"""Extract embedded video IDs from a source course page."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from course_audit.video_id import VIDEO_ID_CHARS, extract_video_id

# Video widgets store their config as JSON inside a data-settings attribute.
_YOUTUBE_URL_FIELD = re.compile(
    r"youtube_url[\"\s:]+([^\"]*youtu[^\"]+)",
    re.IGNORECASE,
)

_DIRECT_URL = re.compile(
    rf"(?:youtu\.be/|youtube\.com/(?:watch\?v=|embed/))({VIDEO_ID_CHARS})",
    re.IGNORECASE,
)


def _unescape_settings(raw: str) -> str:
    return raw.replace('\\"', '"').replace("\\/", "/")


def _widget_video_ids(soup: BeautifulSoup) -> list[str]:
    video_ids: list[str] = []
    for element in soup.find_all(attrs={"data-settings": True}):
        settings = element.get("data-settings")
        if not isinstance(settings, str):
            continue
        match = _YOUTUBE_URL_FIELD.search(_unescape_settings(settings))
        if not match:
            continue
        video_id = extract_video_id(match.group(1))
        if video_id:
            video_ids.append(video_id)
    return video_ids


def extract_video_ids(html: str) -> list[str]:
    """Return video IDs embedded in a course page.

    Two passes feed one list: video widget ``data-settings`` configs
    first, then any raw YouTube URL anywhere in the markup as a
    fallback. Order is first appearance, without duplicates. A page
    without recognizable videos yields an empty list.
    """
    soup = BeautifulSoup(html, "html.parser")
    found = _widget_video_ids(soup)
    found.extend(match.group(1) for match in _DIRECT_URL.finditer(html))
    return list(dict.fromkeys(found))
