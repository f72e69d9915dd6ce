"""Archive courses through the platform's course-import API."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

import httpx
import structlog
from pydantic import SecretStr

from course_audit.config import Settings
from course_audit.errors import ArchiveConfigError
from course_audit.models.remediation import ArchiveResult, RemediationAction

logger = structlog.get_logger()

ARCHIVE_ENDPOINT = "/api/course-import/archive"


class ArchiveClient:
    """Thin wrapper over ``POST /api/course-import/archive``.

    Failures never raise: each call returns an ``ArchiveResult`` so a
    batch keeps going after one bad course.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        platform_url: str,
        secret: SecretStr,
    ) -> None:
        self._client = client
        self._url = platform_url.rstrip("/") + ARCHIVE_ENDPOINT
        self._secret = secret

    @classmethod
    def from_settings(
        cls, client: httpx.AsyncClient, settings: Settings
    ) -> ArchiveClient:
        """Build a client from settings.

        Raises:
            ArchiveConfigError: If the platform URL or the import secret
                is not configured.
        """
        if not settings.platform_url or settings.course_import_secret is None:
            raise ArchiveConfigError(
                "PLATFORM_URL and COURSE_IMPORT_SECRET must be set to archive courses"
            )
        return cls(
            client,
            platform_url=settings.platform_url,
            secret=settings.course_import_secret,
        )

    async def archive(self, course_id: int, title: str) -> ArchiveResult:
        payload = {
            "courseId": course_id,
            "secretKey": self._secret.get_secret_value(),
        }
        try:
            response = await self._client.post(self._url, json=payload)
            body = response.json()
        except (httpx.HTTPError, json.JSONDecodeError) as exc:
            return ArchiveResult(
                course_id=course_id,
                title=title,
                success=False,
                error=str(exc) or type(exc).__name__,
            )

        if not isinstance(body, dict):
            body = {}
        success = response.is_success and bool(body.get("success"))
        error = None
        if not success:
            error = body.get("error") or f"HTTP {response.status_code}"
        return ArchiveResult(
            course_id=course_id,
            title=title,
            success=success,
            error=error,
        )


async def archive_courses(
    client: ArchiveClient,
    actions: Sequence[RemediationAction],
    *,
    delay_seconds: float = 0.3,
) -> list[ArchiveResult]:
    """Archive each course in turn, pausing between requests."""
    results: list[ArchiveResult] = []
    for action in actions:
        result = await client.archive(action.course_id, action.title)
        if result.success:
            logger.info("course_archived", course_id=action.course_id)
        else:
            logger.warning(
                "course_archive_failed",
                course_id=action.course_id,
                error=result.error,
            )
        results.append(result)
        await asyncio.sleep(delay_seconds)
    return results


def write_archive_results(results: Sequence[ArchiveResult], path: Path) -> Path:
    """Persist archive results with a timestamp as indented JSON."""
    payload = {
        "timestamp": datetime.now(UTC).isoformat(),
        "results": [result.model_dump(mode="json") for result in results],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path
