"""
Unit tests for the SearchQuery data model.
"""

import pytest
from pathlib import Path
from pydantic import ValidationError
from fastfind.models.search_query import SearchQuery, MatchMode, SearchType


class TestSearchType:
    """Test cases for search type derivation."""

    def test_from_patterns(self):
        """Test each combination of supplied patterns."""
        assert SearchType.from_patterns("main", "TODO") == SearchType.HYBRID
        assert SearchType.from_patterns("main", None) == SearchType.FILE_NAME
        assert SearchType.from_patterns(None, "TODO") == SearchType.CONTENT

    def test_no_patterns(self):
        """Test that a search without patterns is rejected."""
        with pytest.raises(ValueError):
            SearchType.from_patterns(None, None)


class TestSearchQuery:
    """Test cases for SearchQuery model."""

    def test_basic_query_creation(self):
        """Test creating a basic filename query."""
        query = SearchQuery(root="/tmp", filename_pattern="main")

        assert query.filename_pattern == "main"
        assert query.content_pattern is None
        assert query.limit == 10
        assert query.match_mode == MatchMode.FUZZY
        assert query.search_type == SearchType.FILE_NAME

    def test_root_is_resolved(self):
        """Test that the root is expanded and made absolute."""
        query = SearchQuery(root=".", filename_pattern="main")
        assert query.root == str(Path(".").resolve())

        query = SearchQuery(root="~", filename_pattern="main")
        assert query.root == str(Path.home().resolve())

    def test_requires_a_pattern(self):
        """Test that at least one pattern is required."""
        with pytest.raises(ValidationError):
            SearchQuery(root="/tmp")

        with pytest.raises(ValidationError):
            SearchQuery(root="/tmp", filename_pattern="   ", content_pattern="")

    def test_blank_pattern_treated_as_absent(self):
        """Test that a blank pattern does not turn a search hybrid."""
        query = SearchQuery(root="/tmp", filename_pattern="main", content_pattern="  ")
        assert query.content_pattern is None
        assert query.search_type == SearchType.FILE_NAME

    def test_hybrid_query(self):
        """Test that both patterns make a hybrid search."""
        query = SearchQuery(root="/tmp", filename_pattern="test", content_pattern="foo")
        assert query.search_type == SearchType.HYBRID

    def test_match_mode_from_string(self):
        """Test match mode conversion from strings."""
        query = SearchQuery(root="/tmp", filename_pattern="x", match_mode="EXACT")
        assert query.match_mode == MatchMode.EXACT

        with pytest.raises(ValidationError):
            SearchQuery(root="/tmp", filename_pattern="x", match_mode="regex")

    def test_conflicting_kind_filters(self):
        """Test that dirs_only and files_only cannot both be set."""
        with pytest.raises(ValidationError):
            SearchQuery(root="/tmp", filename_pattern="x", dirs_only=True, files_only=True)

    def test_negative_limit(self):
        """Test that a negative limit is rejected."""
        with pytest.raises(ValidationError):
            SearchQuery(root="/tmp", filename_pattern="x", limit=-1)

    def test_accepts_kind(self):
        """Test the dirs_only / files_only restriction."""
        files = SearchQuery(root="/tmp", filename_pattern="x", files_only=True)
        assert files.accepts_kind(is_dir=False)
        assert not files.accepts_kind(is_dir=True)

        dirs = SearchQuery(root="/tmp", filename_pattern="x", dirs_only=True)
        assert dirs.accepts_kind(is_dir=True)
        assert not dirs.accepts_kind(is_dir=False)

        both = SearchQuery(root="/tmp", filename_pattern="x")
        assert both.accepts_kind(is_dir=True)
        assert both.accepts_kind(is_dir=False)

    def test_string_representation(self):
        """Test the string form of a query."""
        query = SearchQuery(root="/tmp", filename_pattern="main", content_pattern="TODO")
        text = str(query)

        assert "'main'" in text
        assert "'TODO'" in text
        assert "hybrid" in text
