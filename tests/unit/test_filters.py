"""
Unit tests for the traversal entry filter.
"""

from fastfind.models.config import FinderConfig
from fastfind.search.cancellation import CancellationToken
from fastfind.tools.filters import EntryFilter, is_hidden_name


class TestIsHiddenName:
    """Test cases for hidden name detection."""

    def test_hidden_names(self):
        """Test names with a leading dot."""
        assert is_hidden_name(".git")
        assert is_hidden_name(".env")
        assert is_hidden_name("..")

    def test_not_hidden(self):
        """Test that a lone dot and regular names are visible."""
        assert not is_hidden_name(".")
        assert not is_hidden_name("main.py")
        assert not is_hidden_name("")


class TestEntryFilter:
    """Test cases for EntryFilter."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = FinderConfig(
            ignore_directories=["node_modules", "target"],
            ignore_file_patterns=["*.log", "thumbs.db"],
            max_file_size_mb=1,
        )

    def test_regular_entries_accepted(self):
        """Test that ordinary entries pass."""
        entry_filter = EntryFilter(self.config)
        assert entry_filter.accepts("src")
        assert entry_filter.accepts("main.py", is_file=True, size=100)

    def test_hidden_entries(self):
        """Test the hidden-entry policy."""
        assert not EntryFilter(self.config).accepts(".env", is_file=True, size=1)
        assert EntryFilter(self.config, include_hidden=True).accepts(".env", is_file=True, size=1)

    def test_hidden_from_config(self):
        """Test that the config can enable hidden entries on its own."""
        config = FinderConfig(include_hidden=True)
        assert EntryFilter(config, include_hidden=False).accepts(".vscode")

    def test_ignored_directories(self):
        """Test ignored directory fragments."""
        entry_filter = EntryFilter(self.config)
        assert not entry_filter.accepts("node_modules")
        assert not entry_filter.accepts("target")
        assert not entry_filter.accepts("my_target_dir")

    def test_ignored_files(self):
        """Test ignored file patterns."""
        entry_filter = EntryFilter(self.config)
        assert not entry_filter.accepts("debug.log", is_file=True, size=1)
        assert not entry_filter.accepts("thumbs.db", is_file=True, size=1)

    def test_size_ceiling(self):
        """Test that oversized files are rejected but directories are not."""
        entry_filter = EntryFilter(self.config)
        limit = 1024 * 1024

        assert entry_filter.accepts("big.txt", is_file=True, size=limit)
        assert not entry_filter.accepts("big.txt", is_file=True, size=limit + 1)
        assert entry_filter.accepts("bigdir", is_file=False, size=limit + 1)

    def test_cancellation_rejects_everything(self):
        """Test that a cancelled token prunes every entry, including the root."""
        token = CancellationToken()
        entry_filter = EntryFilter(self.config, cancel_token=token)
        assert entry_filter.accepts("src")

        token.cancel()
        assert not entry_filter.accepts("src")
        assert not entry_filter.accepts("root", depth=0)

    def test_root_exempt_from_name_rules(self):
        """Test that the search root is not pruned by hidden or ignore rules."""
        entry_filter = EntryFilter(self.config)
        assert entry_filter.accepts(".config", depth=0)
        assert entry_filter.accepts("target", depth=0)
        assert not entry_filter.accepts(".config", depth=1)
