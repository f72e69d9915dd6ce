"""Tests for vote-based cross-referencing."""

from __future__ import annotations

import pytest

from course_audit.crossref.voting import (
    MIXED_CONFIDENCE_THRESHOLD,
    MIXED_MAX_VOTE_GAP,
    build_video_index,
    confidence_percent,
    cross_reference,
    cross_reference_course,
    pick_winner,
    tally_votes,
)
from course_audit.models.reports import CourseStatus

A, B, C, D, E, F = (ch * 11 for ch in "ABCDEF")


@pytest.fixture()
def index(make_source):
    """Source catalog: foo=[A, B], bar=[C], shared=[A, D]."""
    return build_video_index(
        {
            "foo": make_source("foo", [A, B]),
            "bar": make_source("bar", [C]),
            "shared": make_source("shared", [A, D]),
        }
    )


class TestBuildVideoIndex:
    def test_maps_videos_to_all_containing_courses(self, index) -> None:
        assert index == {A: ["foo", "shared"], B: ["foo"], C: ["bar"], D: ["shared"]}

    def test_empty_catalog(self) -> None:
        assert build_video_index({}) == {}


class TestHelpers:
    def test_tally_counts_one_vote_per_course(self, index) -> None:
        """A shared video votes for every source course containing it."""
        assert tally_votes([A, B, E], index) == {"foo": 2, "shared": 1}

    def test_pick_winner_first_inserted_wins_ties(self) -> None:
        assert pick_winner({"foo": 1, "bar": 1}) == ("foo", 1, 1)

    def test_pick_winner_tracks_runner_up(self) -> None:
        assert pick_winner({"a": 1, "b": 3, "c": 2}) == ("b", 3, 2)

    def test_pick_winner_rejects_empty(self) -> None:
        with pytest.raises(ValueError):
            pick_winner({})

    @pytest.mark.parametrize(
        ("matching", "total", "expected"),
        [
            (2, 3, 67),
            (1, 2, 50),
            (1, 3, 33),
            (1, 8, 13),
            (3, 3, 100),
            (0, 5, 0),
            (0, 0, 0),
        ],
    )
    def test_confidence_rounds_half_up(
        self, matching: int, total: int, expected: int
    ) -> None:
        assert confidence_percent(matching, total) == expected

    def test_thresholds(self) -> None:
        assert MIXED_CONFIDENCE_THRESHOLD == 50
        assert MIXED_MAX_VOTE_GAP == 2


class TestCrossReferenceCourse:
    def test_no_videos_is_orphan(self, make_course, index) -> None:
        course = make_course(1, "Empty", [], extra_lessons=3)

        report = cross_reference_course(course, index)

        assert report.status == CourseStatus.ORPHAN
        assert report.total_video_count == 0
        assert report.matching_video_count == 0
        assert report.confidence_percent == 0
        assert report.recommendation == "DELETE - no videos found"

    def test_no_source_match_is_orphan(self, make_course, index) -> None:
        report = cross_reference_course(make_course(2, "Unknown", [E, F]), index)

        assert report.status == CourseStatus.ORPHAN
        assert report.total_video_count == 2
        assert report.matching_video_count == 0
        assert report.recommendation == "DELETE - no source match"

    def test_correct_when_titles_match(self, make_course, index) -> None:
        report = cross_reference_course(make_course(3, "Foo", [A, B]), index)

        assert report.status == CourseStatus.CORRECT
        assert report.matched_source_title == "foo"
        assert report.correct_title is None
        assert report.matching_video_count == 2
        assert report.confidence_percent == 100
        assert report.recommendation is None

    def test_wrong_title(self, make_course, index) -> None:
        report = cross_reference_course(make_course(4, "Momentum", [B]), index)

        assert report.status == CourseStatus.WRONG_TITLE
        assert report.matched_source_title == "foo"
        assert report.correct_title == "foo"
        assert report.recommendation == "UPDATE title to 'foo'"

    def test_majority_above_threshold_is_not_mixed(
        self, make_source, make_course
    ) -> None:
        """[A, B, C] vs Foo=[A, B], Bar=[C] → 67% for Foo, classified by title."""
        index = build_video_index(
            {"foo": make_source("foo", [A, B]), "bar": make_source("bar", [C])}
        )

        report = cross_reference_course(make_course(5, "Foo", [A, B, C]), index)

        assert report.status == CourseStatus.CORRECT
        assert report.matched_source_title == "foo"
        assert report.confidence_percent == 67
        assert report.matching_video_count == 2
        assert report.total_video_count == 3

    def test_even_split_at_fifty_percent_uses_first_source(
        self, make_source, make_course
    ) -> None:
        """[A, B] vs Foo=[A], Bar=[B] → 50% is not < 50, first source wins."""
        index = build_video_index(
            {"foo": make_source("foo", [A]), "bar": make_source("bar", [B])}
        )

        report = cross_reference_course(make_course(6, "Bar", [A, B]), index)

        assert report.status == CourseStatus.WRONG_TITLE
        assert report.matched_source_title == "foo"
        assert report.confidence_percent == 50

    def test_split_below_threshold_is_mixed(self, make_source, make_course) -> None:
        """[A, B, C] spread over three sources → 33% with a tie → MIXED."""
        index = build_video_index(
            {
                "foo": make_source("foo", [A]),
                "bar": make_source("bar", [B]),
                "baz": make_source("baz", [C]),
            }
        )

        report = cross_reference_course(make_course(7, "Foo", [A, B, C]), index)

        assert report.status == CourseStatus.MIXED
        assert report.matched_source_title == "foo"
        assert report.confidence_percent == 33
        assert report.recommendation == (
            "REVIEW - videos from multiple courses (foo, bar, baz)"
        )

    def test_low_confidence_with_decisive_gap_is_not_mixed(
        self, make_source, make_course
    ) -> None:
        """Gap of 3 votes beats the tie rule even under 50% confidence."""
        videos = [ch * 11 for ch in "GHIJKLMNOP"]
        index = build_video_index(
            {
                "winner": make_source("winner", videos[:4]),
                "other": make_source("other", videos[4:5]),
            }
        )

        report = cross_reference_course(make_course(8, "Winner", videos), index)

        assert report.confidence_percent == 40
        assert report.status == CourseStatus.CORRECT

    def test_low_confidence_without_runner_up_is_not_mixed(
        self, make_source, make_course
    ) -> None:
        index = build_video_index({"foo": make_source("foo", [A])})

        report = cross_reference_course(make_course(9, "Foo", [A, E, F]), index)

        assert report.status == CourseStatus.CORRECT
        assert report.confidence_percent == 33

    def test_shared_video_votes_for_each_course(self, make_course, index) -> None:
        """A alone votes foo and shared equally: foo wins by insertion order."""
        report = cross_reference_course(make_course(10, "Shared", [A]), index)

        assert report.matched_source_title == "foo"
        assert report.status == CourseStatus.WRONG_TITLE

    def test_repeated_video_counts_once(self, make_course, index) -> None:
        report = cross_reference_course(make_course(11, "Foo", [A, A, B]), index)

        assert report.total_video_count == 2
        assert report.confidence_percent == 100


class TestCrossReferenceProperties:
    def test_statuses_and_bounds(self, make_course, index) -> None:
        """Every pre-duplicate report is one of four statuses, within bounds."""
        courses = [
            make_course(1, "Empty"),
            make_course(2, "Unknown", [E]),
            make_course(3, "Foo", [A, B]),
            make_course(4, "Other", [C]),
            make_course(5, "Mix", [B, C, D, E, F]),
            make_course(6, "Shared", [A, D, E]),
        ]

        reports = cross_reference(courses, index)

        assert [r.destination_id for r in reports] == [1, 2, 3, 4, 5, 6]
        for report in reports:
            assert report.status in {
                CourseStatus.CORRECT,
                CourseStatus.WRONG_TITLE,
                CourseStatus.ORPHAN,
                CourseStatus.MIXED,
            }
            assert 0 <= report.confidence_percent <= 100
            if report.status == CourseStatus.ORPHAN:
                assert report.matching_video_count == 0
            if report.total_video_count > 0:
                assert report.confidence_percent == confidence_percent(
                    report.matching_video_count, report.total_video_count
                )
