"""Pydantic schemas for course-audit domain models."""

from course_audit.models.catalog import (
    DestinationCourse,
    FailedFetch,
    Lesson,
    Module,
    SourceCatalog,
    SourceCourse,
    VideoIndex,
)
from course_audit.models.remediation import (
    ActionType,
    ArchiveResult,
    RemediationAction,
    RemediationPlan,
)
from course_audit.models.reports import (
    CourseReport,
    CourseStatus,
    DuplicateGroup,
    IntegrityReport,
    OrphanSummary,
    ReportSummary,
)

__all__ = [
    "ActionType",
    "ArchiveResult",
    "CourseReport",
    "CourseStatus",
    "DestinationCourse",
    "DuplicateGroup",
    "FailedFetch",
    "IntegrityReport",
    "Lesson",
    "Module",
    "OrphanSummary",
    "RemediationAction",
    "RemediationPlan",
    "ReportSummary",
    "SourceCatalog",
    "SourceCourse",
    "VideoIndex",
]
