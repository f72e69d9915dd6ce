"""Parse the source CMS "All Courses" directory page.

Each catalog entry is laid out as a marked ``<h2>`` title followed by
a link to the course page. The parser walks the DOM in document order
and pairs every heading with the first course link after it, as long
as no other heading comes in between. Entries that don't fit that
layout are dropped, so a markup change on the source site degrades
the result silently rather than failing.
"""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlsplit

import structlog
from bs4 import BeautifulSoup, Tag

from course_audit.titles import normalize_title

logger = structlog.get_logger()

DEFAULT_HEADING_CLASS = "elementor-cta__title"
MIN_TITLE_LENGTH = 3

# Catalog sections: generic "*-academy", individual and leadership academies.
COURSE_LINK_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"-academy/.+"),
    re.compile(r"^/individual-academy/.+"),
    re.compile(r"^/leadership-academy/.+"),
)


def _heading_title(element: Tag, heading_class: str) -> str | None:
    classes = element.get("class") or []
    if heading_class not in classes:
        return None
    title = " ".join(element.get_text(" ").split())
    if len(title) < MIN_TITLE_LENGTH:
        return None
    return title


def _course_link(element: Tag, base_url: str) -> str | None:
    href = element.get("href")
    if not isinstance(href, str) or not href.strip():
        return None
    url = urljoin(base_url, href.strip())
    parts = urlsplit(url)
    if parts.netloc != urlsplit(base_url).netloc:
        return None
    if any(pattern.search(parts.path) for pattern in COURSE_LINK_PATTERNS):
        return url
    return None


def parse_catalog_page(
    html: str,
    base_url: str,
    *,
    heading_class: str = DEFAULT_HEADING_CLASS,
) -> dict[str, str]:
    """Extract course titles and page URLs from the directory page.

    Args:
        html: Raw HTML of the directory page.
        base_url: URL the page was fetched from; relative links are
            resolved against it and only same-host links are kept.
        heading_class: CSS class marking catalog entry titles.

    Returns:
        Mapping of normalized title to absolute course URL, in page
        order. A title seen twice keeps the later URL. The same URL may
        appear several times on the page (card wrapper and button); each
        occurrence can pair with the heading before it.
    """
    soup = BeautifulSoup(html, "html.parser")
    catalog: dict[str, str] = {}
    seen_urls: set[str] = set()
    pending_title: str | None = None
    headings = 0
    unclaimed_links = 0

    for element in soup.find_all(["h2", "a"]):
        if element.name == "h2":
            title = _heading_title(element, heading_class)
            if title is None:
                continue
            headings += 1
            pending_title = title
            continue

        url = _course_link(element, base_url)
        if url is None:
            continue
        seen_urls.add(url)

        if pending_title is None:
            # Link without a preceding unclaimed heading.
            unclaimed_links += 1
            continue

        catalog[normalize_title(pending_title)] = url
        pending_title = None

    logger.debug(
        "catalog_page_parsed",
        headings=headings,
        links=len(seen_urls),
        entries=len(catalog),
        unclaimed_links=unclaimed_links,
    )
    return catalog
