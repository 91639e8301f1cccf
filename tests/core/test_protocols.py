"""Tests for structural protocols."""

from pathlib import Path

from orderflow_tools.core.protocols import FeedSource
from orderflow_tools.data.providers.feed_file import FeedFileProvider


class _StaticFeed:
    """In-memory feed that matches the FeedSource shape."""

    async def get_lines(self) -> list[str]:
        """Return a fixed single-line feed."""
        return ['{"feeds": {}}']


class TestFeedSource:
    """Tests for the FeedSource protocol."""

    def test_file_provider_satisfies_protocol(self, tmp_path: Path) -> None:
        """Recognise FeedFileProvider as a FeedSource."""
        assert isinstance(FeedFileProvider(tmp_path / "feed.txt"), FeedSource)

    def test_structural_match_without_inheritance(self) -> None:
        """Accept any class with a matching get_lines method."""
        assert isinstance(_StaticFeed(), FeedSource)

    def test_unrelated_object_does_not_match(self) -> None:
        """Reject objects without get_lines."""
        assert not isinstance(object(), FeedSource)
