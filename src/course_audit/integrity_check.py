"""Integrity check orchestrator: source scrape + destination load → report."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from course_audit.config import Settings
from course_audit.crossref.duplicates import find_duplicates, mark_duplicates
from course_audit.crossref.report import assemble_report, format_course_line
from course_audit.crossref.voting import build_video_index, cross_reference
from course_audit.models.catalog import DestinationCourse, SourceCatalog
from course_audit.models.reports import IntegrityReport
from course_audit.source.catalog import load_source_catalog
from course_audit.storage.repositories import DestinationCourseRepository

logger = structlog.get_logger()

ProgressCallback = Callable[[str], None]


class IntegrityCheck:
    """Runs one full cross-reference of the source and destination catalogs.

    Steps, in order:

    1. Scrape the source catalog (sequential, with a fixed delay).
    2. Load destination courses with ``id >= min_course_id``.
    3. Build the video index and classify every destination course.
    4. Detect duplicate groups and reclassify non-keepers.
    5. Assemble the immutable report.

    Writing the report is left to the caller.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        http_client: httpx.AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self._settings = settings
        self._http_client = http_client
        self._session_factory = session_factory
        self._on_progress = on_progress

    async def load_destination(self) -> list[DestinationCourse]:
        async with self._session_factory() as session:
            repo = DestinationCourseRepository(session)
            return await repo.list_courses(min_id=self._settings.min_course_id)

    async def run(self) -> IntegrityReport:
        """Execute the check.

        Raises:
            FetchError: If the source directory page cannot be fetched.
            DestinationLoadError: If the destination query fails.
        """
        source: SourceCatalog = await load_source_catalog(
            self._http_client, self._settings
        )

        courses = await self.load_destination()
        logger.info(
            "destination_courses_loaded",
            count=len(courses),
            min_course_id=self._settings.min_course_id,
        )

        index = build_video_index(source.courses)
        logger.info("video_index_built", unique_videos=len(index))

        reports = cross_reference(courses, index)
        for report in reports:
            logger.debug(
                "course_classified",
                course_id=report.destination_id,
                status=str(report.status),
                matched=report.matched_source_title,
                confidence=report.confidence_percent,
            )
            if self._on_progress is not None:
                self._on_progress(format_course_line(report))

        duplicates = find_duplicates(reports, courses)
        final_reports = mark_duplicates(reports, duplicates)
        logger.info("duplicates_identified", groups=len(duplicates))

        report = assemble_report(
            reports=final_reports,
            duplicates=duplicates,
            total_source_courses=len(source.courses),
            failed_fetches=source.failed,
        )
        logger.info(
            "integrity_check_done",
            correct=report.summary.correct,
            wrong_title=report.summary.wrong_title,
            duplicate=report.summary.duplicate,
            orphan=report.summary.orphan,
            mixed=report.summary.mixed,
            failed_fetches=report.summary.failed_fetches,
        )
        return report
