"""
Traversal filter for fastfind.

Decides whether an entry discovered during traversal is visible at all.
Rejected directories are pruned, so nothing beneath them is visited.
"""

from typing import Optional
import logging

from ..models.config import FinderConfig
from ..search.cancellation import CancellationToken


logger = logging.getLogger(__name__)


class EntryFilter:
    """
    Include-or-prune predicate applied to every traversal entry.

    Rules, checked in order:
      1. once cancellation is requested every entry is rejected
      2. hidden names (leading dot, longer than one character) are rejected
         unless hidden entries are enabled
      3. names matching an ignored directory fragment or ignored file
         pattern are rejected
      4. regular files larger than the configured ceiling are rejected

    The search root (depth 0) is exempt from rules 2 and 3.
    """

    def __init__(self, config: FinderConfig, include_hidden: bool = False,
                 cancel_token: Optional[CancellationToken] = None):
        """
        Args:
            config: Configuration with ignore lists and the size ceiling
            include_hidden: Caller's hidden-entry choice, OR-ed with the config
            cancel_token: Token polled by rule 1
        """
        self.config = config
        self.include_hidden = include_hidden or config.include_hidden
        self.cancel_token = cancel_token
        self.max_file_size = config.max_file_size_bytes

    def accepts(self, name: str, is_file: bool = False, size: Optional[int] = None, depth: int = 1) -> bool:
        """
        Check whether an entry is visible.

        Args:
            name: Entry name (last path component)
            is_file: Whether the entry is a regular file
            size: File size in bytes, if known
            depth: Depth below the search root (root is 0)

        Returns:
            True to include the entry, False to prune it
        """
        if self.cancel_token is not None and self.cancel_token.is_cancelled:
            return False

        if depth > 0:
            if not self.include_hidden and is_hidden_name(name):
                return False

            if self.config.should_ignore_directory(name) or self.config.should_ignore_file(name):
                logger.debug(f"Ignoring {name}")
                return False

        if is_file and size is not None and size > self.max_file_size:
            logger.debug(f"Skipping large file: {name} ({size} bytes)")
            return False

        return True


def is_hidden_name(name: str) -> bool:
    """A name is hidden when it starts with a dot and is not just ``.``."""
    return name.startswith('.') and len(name) > 1
