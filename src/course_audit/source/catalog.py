"""Sequential scrape of the whole source catalog."""

from __future__ import annotations

import asyncio

import httpx
import structlog

from course_audit.config import Settings
from course_audit.errors import FetchError
from course_audit.models.catalog import FailedFetch, SourceCatalog, SourceCourse
from course_audit.source.catalog_page import parse_catalog_page
from course_audit.source.course_page import extract_video_ids
from course_audit.source.fetcher import fetch_html


async def load_source_catalog(
    client: httpx.AsyncClient,
    settings: Settings,
) -> SourceCatalog:
    """Fetch the directory page, then every course page one at a time.

    A failing course page is logged, recorded in ``failed`` and skipped.
    A failing directory page aborts the run since there is nothing to
    compare against.

    Args:
        client: Shared async HTTP client (see ``create_http_client``).
        settings: Source URL, heading marker, delay and redirect limit.

    Returns:
        Source courses keyed by normalized title plus fetch failures.

    Raises:
        FetchError: If the directory page cannot be fetched.
    """
    log = structlog.get_logger().bind(catalog_url=settings.source_catalog_url)
    log.info("source_catalog_fetch_start")

    directory_html = await fetch_html(
        client,
        settings.source_catalog_url,
        max_redirects=settings.max_redirects,
    )
    urls = parse_catalog_page(
        directory_html,
        settings.source_catalog_url,
        heading_class=settings.catalog_heading_class,
    )
    log.info("source_catalog_urls_found", count=len(urls))

    catalog = SourceCatalog()
    total = len(urls)
    for position, (title, url) in enumerate(urls.items(), start=1):
        try:
            html = await fetch_html(client, url, max_redirects=settings.max_redirects)
        except FetchError as exc:
            log.warning(
                "source_course_fetch_failed",
                position=position,
                total=total,
                title=title,
                url=url,
                error=exc.reason,
            )
            catalog.failed.append(FailedFetch(title=title, url=url, error=exc.reason))
        else:
            video_ids = extract_video_ids(html)
            catalog.courses[title] = SourceCourse(
                title=title,
                canonical_url=url,
                video_ids=tuple(video_ids),
            )
            log.info(
                "source_course_fetched",
                position=position,
                total=total,
                title=title,
                video_count=len(video_ids),
            )

        await asyncio.sleep(settings.fetch_delay_seconds)

    log.info(
        "source_catalog_fetch_done",
        courses=len(catalog.courses),
        failed=len(catalog.failed),
    )
    return catalog
