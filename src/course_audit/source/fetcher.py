"""Plain HTTP page fetcher for the source CMS."""

from __future__ import annotations

from urllib.parse import urljoin

import httpx
import structlog

from course_audit.config import Settings
from course_audit.errors import FetchError

logger = structlog.get_logger()

REDIRECT_STATUSES = frozenset({301, 302})


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Build the shared client for scraping.

    Redirects are disabled on the transport so that :func:`fetch_html`
    can follow them itself.
    """
    return httpx.AsyncClient(
        follow_redirects=False,
        timeout=settings.fetch_timeout_seconds,
        headers={"User-Agent": settings.user_agent},
    )


async def fetch_html(
    client: httpx.AsyncClient,
    url: str,
    *,
    max_redirects: int = 10,
) -> str:
    """Fetch a page and return its body as text.

    301/302 responses with a ``Location`` header are followed by
    re-invoking this function on the target URL (relative locations
    are resolved against *url*).

    Args:
        client: Shared async HTTP client.
        url: Absolute page URL.
        max_redirects: Remaining redirect hops before giving up.

    Returns:
        Decoded response body.

    Raises:
        FetchError: On transport errors, non-2xx responses, or when
            the redirect budget is exhausted.
    """
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        raise FetchError(url, str(exc) or type(exc).__name__) from exc

    if response.status_code in REDIRECT_STATUSES:
        location = response.headers.get("location")
        if location:
            if max_redirects <= 0:
                raise FetchError(url, "too many redirects")
            target = urljoin(url, location)
            logger.debug("fetch_redirect", url=url, target=target)
            return await fetch_html(client, target, max_redirects=max_redirects - 1)

    if not response.is_success:
        raise FetchError(url, f"HTTP {response.status_code}")

    return response.text
