"""Integrity report schemas.

Serialized with camelCase keys (``destinationId``, ``confidencePercent``)
to keep the JSON report readable by the platform's TypeScript tooling.
"""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from course_audit.models.catalog import FailedFetch


class CourseStatus(StrEnum):
    """Classification of one destination course."""

    CORRECT = "CORRECT"
    WRONG_TITLE = "WRONG_TITLE"
    DUPLICATE = "DUPLICATE"
    ORPHAN = "ORPHAN"
    MIXED = "MIXED"


class ReportModel(BaseModel):
    """Base for report schemas: camelCase aliases, populate by name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class CourseReport(ReportModel):
    """Cross-reference outcome for one destination course."""

    destination_id: int
    destination_title: str
    status: CourseStatus
    matched_source_title: str | None = None
    correct_title: str | None = None
    confidence_percent: int = Field(default=0, ge=0, le=100)
    matching_video_count: int = 0
    total_video_count: int = 0
    recommendation: str | None = None


class DuplicateGroup(ReportModel):
    """Destination courses that all matched the same source course."""

    source_title: str
    destination_ids: list[int] = Field(min_length=2)
    keeper_id: int
    delete_ids: list[int]
    recommendation: str


class OrphanSummary(ReportModel):
    destination_id: int
    destination_title: str
    recommendation: str


class ReportSummary(ReportModel):
    """Counts per final status plus catalog sizes."""

    total_source_courses: int
    total_destination_courses: int
    correct: int
    wrong_title: int
    duplicate: int
    orphan: int
    mixed: int
    failed_fetches: int


class IntegrityReport(ReportModel):
    """Immutable snapshot of one integrity check run."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    summary: ReportSummary
    courses: list[CourseReport]
    duplicates: list[DuplicateGroup] = Field(default_factory=list)
    orphans: list[OrphanSummary] = Field(default_factory=list)
    failed_fetches: list[FailedFetch] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
