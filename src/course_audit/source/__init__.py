"""Source CMS scraping: fetching, directory parsing, course page parsing."""

from course_audit.source.catalog import load_source_catalog
from course_audit.source.catalog_page import parse_catalog_page
from course_audit.source.course_page import extract_video_ids
from course_audit.source.fetcher import create_http_client, fetch_html

__all__ = [
    "create_http_client",
    "extract_video_ids",
    "fetch_html",
    "load_source_catalog",
    "parse_catalog_page",
]
