"""Shared pytest fixtures."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence

import pytest

from course_audit.models.catalog import DestinationCourse, Lesson, Module, SourceCourse

CourseFactory = Callable[..., DestinationCourse]


def _destination_course(
    course_id: int,
    title: str,
    video_ids: Sequence[str] = (),
    *,
    extra_lessons: int = 0,
    modules: int = 1,
) -> DestinationCourse:
    """Build a destination course whose lessons carry *video_ids*.

    Lessons are spread round-robin over *modules* modules. *extra_lessons*
    adds lessons without a video, to tune the lesson count.
    """
    lessons = [
        Lesson(
            id=str(uuid.uuid4()),
            title=f"Video {vid}",
            video_url=f"https://youtu.be/{vid}",
        )
        for vid in video_ids
    ]
    lessons += [
        Lesson(id=str(uuid.uuid4()), title=f"Form {i}") for i in range(extra_lessons)
    ]
    buckets: list[list[Lesson]] = [[] for _ in range(modules)]
    for position, lesson in enumerate(lessons):
        buckets[position % modules].append(lesson)
    return DestinationCourse(
        id=course_id,
        title=title,
        modules=tuple(
            Module(
                id=str(uuid.uuid4()),
                title=f"Module {i + 1}",
                lessons=tuple(bucket),
            )
            for i, bucket in enumerate(buckets)
        ),
    )


def _source_course(title: str, video_ids: Sequence[str]) -> SourceCourse:
    return SourceCourse(
        title=title,
        canonical_url=f"http://cms.test/energy-academy/{title.replace(' ', '-')}/",
        video_ids=tuple(video_ids),
    )


@pytest.fixture()
def make_course() -> CourseFactory:
    """Factory for DestinationCourse test objects."""
    return _destination_course


@pytest.fixture()
def make_source() -> Callable[[str, Sequence[str]], SourceCourse]:
    """Factory for SourceCourse test objects."""
    return _source_course
