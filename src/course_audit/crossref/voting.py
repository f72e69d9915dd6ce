"""Vote-based matching of destination courses to source courses.

Every video of a destination course votes for each source course that
contains it. The source course with the most votes is the match,
unless the votes are split with no decisive winner (``MIXED``).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from course_audit.models.catalog import DestinationCourse, SourceCourse, VideoIndex
from course_audit.models.reports import CourseReport, CourseStatus
from course_audit.titles import titles_match

# Empirically chosen for the current catalogs; recalibrate with domain
# input rather than tuning toward a "nicer" default.
MIXED_CONFIDENCE_THRESHOLD = 50
"""Below this confidence (percent) a split vote can be classified MIXED."""

MIXED_MAX_VOTE_GAP = 2
"""A winner leading the runner-up by at most this many votes is not decisive."""

NO_VIDEOS_RECOMMENDATION = "DELETE - no videos found"
NO_MATCH_RECOMMENDATION = "DELETE - no source match"


def build_video_index(source_courses: Mapping[str, SourceCourse]) -> VideoIndex:
    """Map each video ID to the titles of the source courses containing it.

    Title lists follow the iteration order of *source_courses*, which
    fixes the vote tie-break order downstream.
    """
    index: VideoIndex = {}
    for title, course in source_courses.items():
        for video_id in course.video_ids:
            titles = index.setdefault(video_id, [])
            if title not in titles:
                titles.append(title)
    return index


def confidence_percent(matching: int, total: int) -> int:
    """Percentage of *total* covered by *matching*, rounded half up."""
    if total <= 0:
        return 0
    return math.floor(matching / total * 100 + 0.5)


def tally_votes(video_ids: Iterable[str], index: VideoIndex) -> dict[str, int]:
    """Count one vote per (video, source course) pair.

    A video shared by several source courses votes for each of them.
    The result keeps first-vote insertion order.
    """
    votes: dict[str, int] = {}
    for video_id in video_ids:
        for title in index.get(video_id, ()):
            votes[title] = votes.get(title, 0) + 1
    return votes


def pick_winner(votes: Mapping[str, int]) -> tuple[str, int, int]:
    """Return ``(winner, max_votes, runner_up)`` from a non-empty tally.

    Only a strictly higher count replaces the current winner, so the
    first-inserted title wins ties and the tied count becomes the
    runner-up.
    """
    winner: str | None = None
    max_votes = 0
    runner_up = 0
    for title, count in votes.items():
        if count > max_votes:
            runner_up = max_votes
            max_votes = count
            winner = title
        elif count > runner_up:
            runner_up = count
    if winner is None:
        raise ValueError("pick_winner() requires at least one vote")
    return winner, max_votes, runner_up


def is_mixed(confidence: int, max_votes: int, runner_up: int) -> bool:
    return (
        confidence < MIXED_CONFIDENCE_THRESHOLD
        and runner_up > 0
        and max_votes - runner_up <= MIXED_MAX_VOTE_GAP
    )


def cross_reference_course(
    course: DestinationCourse,
    index: VideoIndex,
) -> CourseReport:
    """Classify one destination course against the source catalog.

    Returns a report with status ``CORRECT``, ``WRONG_TITLE``,
    ``ORPHAN`` or ``MIXED``. ``DUPLICATE`` is assigned later by the
    duplicate pass.
    """
    video_ids = course.video_ids
    total = len(video_ids)

    if total == 0:
        return CourseReport(
            destination_id=course.id,
            destination_title=course.title,
            status=CourseStatus.ORPHAN,
            recommendation=NO_VIDEOS_RECOMMENDATION,
        )

    votes = tally_votes(video_ids, index)
    if not votes:
        return CourseReport(
            destination_id=course.id,
            destination_title=course.title,
            status=CourseStatus.ORPHAN,
            total_video_count=total,
            recommendation=NO_MATCH_RECOMMENDATION,
        )

    winner, max_votes, runner_up = pick_winner(votes)
    confidence = confidence_percent(max_votes, total)

    if is_mixed(confidence, max_votes, runner_up):
        return CourseReport(
            destination_id=course.id,
            destination_title=course.title,
            status=CourseStatus.MIXED,
            matched_source_title=winner,
            confidence_percent=confidence,
            matching_video_count=max_votes,
            total_video_count=total,
            recommendation=(
                f"REVIEW - videos from multiple courses ({', '.join(votes)})"
            ),
        )

    if titles_match(course.title, winner):
        return CourseReport(
            destination_id=course.id,
            destination_title=course.title,
            status=CourseStatus.CORRECT,
            matched_source_title=winner,
            confidence_percent=confidence,
            matching_video_count=max_votes,
            total_video_count=total,
        )

    return CourseReport(
        destination_id=course.id,
        destination_title=course.title,
        status=CourseStatus.WRONG_TITLE,
        matched_source_title=winner,
        correct_title=winner,
        confidence_percent=confidence,
        matching_video_count=max_votes,
        total_video_count=total,
        recommendation=f"UPDATE title to '{winner}'",
    )


def cross_reference(
    courses: Iterable[DestinationCourse],
    index: VideoIndex,
) -> list[CourseReport]:
    """Classify every destination course, preserving input order."""
    return [cross_reference_course(course, index) for course in courses]
