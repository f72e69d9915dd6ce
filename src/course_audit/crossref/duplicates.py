"""Duplicate detection over already-classified course reports."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from course_audit.models.catalog import DestinationCourse
from course_audit.models.reports import CourseReport, CourseStatus, DuplicateGroup

MATCHED_STATUSES = frozenset({CourseStatus.CORRECT, CourseStatus.WRONG_TITLE})


def _rank_key(course: DestinationCourse) -> tuple[int, int]:
    return (-course.lesson_count, -course.module_count)


def find_duplicates(
    reports: Iterable[CourseReport],
    courses: Iterable[DestinationCourse],
) -> list[DuplicateGroup]:
    """Group matched destination courses that point at the same source course.

    Only ``CORRECT`` and ``WRONG_TITLE`` reports take part. Within a
    group the course with the most lessons is kept (ties: most modules,
    then report order); the rest are recommended for deletion.

    Args:
        reports: Voting results, one per destination course.
        courses: The destination courses the reports were built from.

    Returns:
        One group per source title matched by more than one course,
        in order of first match.
    """
    by_id = {course.id: course for course in courses}
    groups: dict[str, list[int]] = {}
    for report in reports:
        if report.status in MATCHED_STATUSES and report.matched_source_title:
            groups.setdefault(report.matched_source_title, []).append(
                report.destination_id
            )

    duplicates: list[DuplicateGroup] = []
    for source_title, destination_ids in groups.items():
        if len(destination_ids) < 2:
            continue

        ranked = sorted((by_id[i] for i in destination_ids), key=_rank_key)
        keeper, *rest = ranked
        delete_ids = [course.id for course in rest]
        duplicates.append(
            DuplicateGroup(
                source_title=source_title,
                destination_ids=destination_ids,
                keeper_id=keeper.id,
                delete_ids=delete_ids,
                recommendation=(
                    f"Keep {keeper.id} ({keeper.module_count} modules, "
                    f"{keeper.lesson_count} lessons), "
                    f"delete {', '.join(str(i) for i in delete_ids)}"
                ),
            )
        )
    return duplicates


def mark_duplicates(
    reports: Sequence[CourseReport],
    groups: Iterable[DuplicateGroup],
) -> list[CourseReport]:
    """Reclassify non-keeper group members as ``DUPLICATE``.

    Second pass after voting: keepers and courses outside any group
    are returned unchanged. Reports are immutable, so changed entries
    are copies.
    """
    keeper_of: dict[int, int] = {}
    for group in groups:
        for course_id in group.delete_ids:
            keeper_of[course_id] = group.keeper_id

    marked: list[CourseReport] = []
    for report in reports:
        keeper_id = keeper_of.get(report.destination_id)
        if keeper_id is None:
            marked.append(report)
            continue
        marked.append(
            report.model_copy(
                update={
                    "status": CourseStatus.DUPLICATE,
                    "recommendation": f"DELETE - duplicate of {keeper_id}",
                }
            )
        )
    return marked
