"""
Unit tests for score aggregation.
"""

from fastfind.models.search_query import SearchType
from fastfind.models.search_results import ContentMatch
from fastfind.search.aggregator import aggregate


def _matches(count):
    return [ContentMatch(line_number=i + 1, line_content="foo", match_start=0, match_end=3)
            for i in range(count)]


class TestAggregate:
    """Test cases for aggregate."""

    def test_filename_search(self):
        """Test that filename searches use the filename score."""
        assert aggregate(150, [], SearchType.FILE_NAME) == (True, 150)
        assert aggregate(None, [], SearchType.FILE_NAME) == (False, 0)

    def test_content_search(self):
        """Test that content searches score a flat 100."""
        assert aggregate(None, _matches(1), SearchType.CONTENT) == (True, 100)
        assert aggregate(None, _matches(5), SearchType.CONTENT) == (True, 100)
        assert aggregate(None, [], SearchType.CONTENT) == (False, 0)

    def test_hybrid_both(self):
        """Test that a hybrid hit on both adds the content bonus."""
        assert aggregate(150, _matches(1), SearchType.HYBRID) == (True, 200)

    def test_hybrid_filename_only(self):
        """Test a hybrid hit on the filename alone."""
        assert aggregate(100, [], SearchType.HYBRID) == (True, 100)

    def test_hybrid_content_only(self):
        """Test a hybrid hit on the content alone."""
        assert aggregate(None, _matches(2), SearchType.HYBRID) == (True, 50)

    def test_hybrid_neither(self):
        """Test a hybrid miss."""
        assert aggregate(None, [], SearchType.HYBRID) == (False, 0)
