"""Remediation: planning fixes from a report and archiving courses."""

from course_audit.remediation.archive import (
    ArchiveClient,
    archive_courses,
    write_archive_results,
)
from course_audit.remediation.plan import build_remediation_plan, format_plan

__all__ = [
    "ArchiveClient",
    "archive_courses",
    "build_remediation_plan",
    "format_plan",
    "write_archive_results",
]
