"""
Unit tests for filename scoring.
"""

import pytest

from fastfind.models.search_query import MatchMode
from fastfind.tools.name_matcher import (
    fuzzy_score,
    score_filename,
    PREFIX_SCORE,
    SUBSTRING_SCORE,
    FUZZY_SCORE_MAX,
)


class TestFuzzyScore:
    """Test cases for the subsequence scorer."""

    def test_not_a_subsequence(self):
        """Test that missing or out-of-order characters do not match."""
        assert fuzzy_score("main.rs", "xyz") is None
        assert fuzzy_score("main.rs", "nm") is None
        assert fuzzy_score("main.rs", "") is None

    def test_sparse_match(self):
        """Test the score of a sparse subsequence."""
        # m: 16 + 2 * 8 boundary, gap of two: -3 -1, n: 16
        assert fuzzy_score("main.rs", "mn") == 44

    def test_consecutive_match(self):
        """Test that consecutive characters keep the boundary bonus."""
        # a: 16 + 2 * 8, b: 16 + 8, c: 16 + 8
        assert fuzzy_score("abc", "abc") == 80

    def test_case_insensitive(self):
        """Test that case does not affect matching."""
        assert fuzzy_score("MAIN.RS", "mn") is not None
        assert fuzzy_score("main.rs", "MN") is not None

    def test_boundaries_score_higher(self):
        """Test that matches at word boundaries beat matches mid-word."""
        assert fuzzy_score("foo_bar", "fb") > fuzzy_score("foobar", "fb")

    def test_camel_case_bonus(self):
        """Test that camelCase humps earn a bonus."""
        assert fuzzy_score("FooBar", "fb") > fuzzy_score("Foobar", "fb")

    def test_score_bounds(self):
        """Test that scores stay within 1..99 even for long patterns."""
        assert fuzzy_score("abcdefghijklmnop", "abcdefghijklmnop") == FUZZY_SCORE_MAX
        assert 1 <= fuzzy_score("a" + "-" * 200 + "b", "ab") <= FUZZY_SCORE_MAX

    def test_window_tightened_backwards(self):
        """Test that the window starts at the latest usable first character."""
        assert fuzzy_score("m_m_n", "mn") == fuzzy_score("x_m_n", "mn")


class TestScoreFilename:
    """Test cases for filename score fusion."""

    def test_exact_mode_substring(self):
        """Test exact mode substring containment."""
        assert score_filename("my_main.rs", "MAIN", MatchMode.EXACT) == SUBSTRING_SCORE
        assert score_filename("main.rs", "main", MatchMode.EXACT) == SUBSTRING_SCORE
        assert score_filename("main.rs", "mn", MatchMode.EXACT) is None

    def test_fuzzy_prefix(self):
        """Test that a prefix match scores 150."""
        assert score_filename("main.rs", "main", MatchMode.FUZZY) == PREFIX_SCORE
        assert score_filename("Main.py", "main", MatchMode.FUZZY) == PREFIX_SCORE

    def test_fuzzy_substring(self):
        """Test that a non-prefix substring scores 100."""
        assert score_filename("my_main.rs", "main", MatchMode.FUZZY) == SUBSTRING_SCORE

    def test_fuzzy_subsequence(self):
        """Test that a subsequence-only match scores below 100."""
        score = score_filename("main.rs", "mn", MatchMode.FUZZY)
        assert score is not None
        assert 0 < score < SUBSTRING_SCORE

    def test_fuzzy_no_match(self):
        """Test that unrelated names do not match."""
        assert score_filename("main.rs", "xyz", MatchMode.FUZZY) is None

    @pytest.mark.parametrize("pattern", ["r", "rep", "report", "reportgen"])
    def test_ranking_policy(self, pattern):
        """Test prefix >= substring >= subsequence for the same pattern."""
        prefix = score_filename(pattern + "_final.txt", pattern, MatchMode.FUZZY)
        substring = score_filename("old_" + pattern + ".txt", pattern, MatchMode.FUZZY)
        subsequence = score_filename("_".join(pattern) + ".txt", pattern, MatchMode.FUZZY)

        assert prefix >= substring
        if len(pattern) > 1:
            assert substring > subsequence
