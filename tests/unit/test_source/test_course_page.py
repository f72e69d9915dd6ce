"""Tests for video ID extraction from course pages."""

from course_audit.source.course_page import extract_video_ids


def _video_widget(youtube_url: str) -> str:
    """Elementor-style video widget with HTML- and JSON-escaped settings."""
    escaped = youtube_url.replace("/", "\\/")
    settings = (
        "{&quot;youtube_url&quot;:&quot;" + escaped + "&quot;,"
        "&quot;video_type&quot;:&quot;youtube&quot;}"
    )
    return (
        '<div class="elementor-widget elementor-widget-video" '
        f'data-settings="{settings}"></div>'
    )


class TestExtractVideoIds:
    def test_widget_settings(self) -> None:
        """IDs are read from youtube_url inside data-settings."""
        html = (
            _video_widget("https://www.youtube.com/watch?v=AAAAAAAAAAA")
            + _video_widget("https://youtu.be/BBBBBBBBBBB")
        )

        assert extract_video_ids(html) == ["AAAAAAAAAAA", "BBBBBBBBBBB"]

    def test_direct_urls_fallback(self) -> None:
        """Raw YouTube URLs in attributes are picked up too."""
        html = (
            '<iframe src="https://www.youtube.com/embed/CCCCCCCCCCC"></iframe>'
            '<a href="https://youtu.be/DDDDDDDDDDD">watch</a>'
        )

        assert extract_video_ids(html) == ["CCCCCCCCCCC", "DDDDDDDDDDD"]

    def test_deduplicated_in_first_appearance_order(self) -> None:
        html = (
            _video_widget("https://youtu.be/BBBBBBBBBBB")
            + _video_widget("https://youtu.be/AAAAAAAAAAA")
            + '<a href="https://www.youtube.com/watch?v=BBBBBBBBBBB">again</a>'
            + '<a href="https://www.youtube.com/watch?v=EEEEEEEEEEE">new</a>'
        )

        assert extract_video_ids(html) == ["BBBBBBBBBBB", "AAAAAAAAAAA", "EEEEEEEEEEE"]

    def test_widget_ids_come_before_fallback_ids(self) -> None:
        """Widget pass results precede the raw scan even if later in the page."""
        html = (
            '<a href="https://youtu.be/FFFFFFFFFFF">intro</a>'
            + _video_widget("https://youtu.be/GGGGGGGGGGG")
        )

        assert extract_video_ids(html) == ["GGGGGGGGGGG", "FFFFFFFFFFF"]

    def test_settings_without_youtube_url(self) -> None:
        html = '<div data-settings="{&quot;autoplay&quot;:&quot;yes&quot;}"></div>'

        assert extract_video_ids(html) == []

    def test_no_videos(self) -> None:
        """Pages without videos give an empty list, not an error."""
        assert extract_video_ids("<html><body><p>Nothing</p></body></html>") == []
        assert extract_video_ids("") == []
