"""
Filesystem walker for fastfind.

This module traverses a directory tree depth-first, applying the entry filter
before descending so that pruned directories are never read. Each visited
entry is described once by an immutable WalkEntry.
"""

import os
import stat
from pathlib import Path
from typing import Dict, List, Optional, Iterator, Tuple, FrozenSet
from datetime import datetime
from dataclasses import dataclass
import logging

from ..models.config import FinderConfig
from ..search.cancellation import CancellationToken
from .filters import EntryFilter


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkEntry:
    """
    A filesystem entry discovered during traversal.

    Attributes:
        path: Full path of the entry
        is_dir: Whether the entry is, or links to, a directory
        is_symlink: Whether the entry itself is a symbolic link
        depth: Depth below the search root (direct children are 1)
        size: Size in bytes for regular files, None otherwise
        modified: Last modification time, if it could be read
        inode: (st_dev, st_ino) pair used for cycle detection
    """
    path: Path
    is_dir: bool
    is_symlink: bool
    depth: int
    size: Optional[int] = None
    modified: Optional[datetime] = None
    inode: Optional[Tuple[int, int]] = None

    @property
    def name(self) -> str:
        return self.path.name


class FSWalker:
    """
    Depth-first, pre-order directory walker with pruning.

    Children of a directory are visited in name order, which keeps the
    traversal order well defined. Symbolic links are reported but only
    descended into when the configuration enables it; directory cycles
    reached through links are skipped.
    """

    def __init__(self, config: FinderConfig, include_hidden: bool = False,
                 cancel_token: Optional[CancellationToken] = None):
        """
        Initialize the filesystem walker.

        Args:
            config: Configuration with ignore lists, limits and link policy
            include_hidden: Visit hidden entries even if the config does not
            cancel_token: Token that stops the traversal when set
        """
        self.config = config
        self.cancel_token = cancel_token
        self.entry_filter = EntryFilter(config, include_hidden=include_hidden, cancel_token=cancel_token)
        self.follow_symlinks = config.follow_symlinks
        self._stats = self._empty_stats()

    def walk(self, root: str) -> Iterator[WalkEntry]:
        """
        Walk the tree beneath ``root`` and yield every visible entry.

        The root itself is not yielded. Traversal stops as soon as the
        cancellation token is set.

        Args:
            root: Directory to traverse

        Yields:
            WalkEntry objects in depth-first pre-order
        """
        root_path = Path(root)
        if not root_path.exists():
            logger.warning(f"Root directory does not exist: {root_path}")
            return
        if not root_path.is_dir():
            logger.warning(f"Root path is not a directory: {root_path}")
            return
        if not self.entry_filter.accepts(root_path.name, depth=0):
            return

        logger.info(f"Walking directory tree: {root_path}")

        root_inode = None
        try:
            root_stat = root_path.stat()
            root_inode = (root_stat.st_dev, root_stat.st_ino)
        except OSError as e:
            logger.warning(f"Cannot stat root {root_path}: {e}")

        ancestors = frozenset([root_inode]) if root_inode else frozenset()

        # Stack of (entry, ancestors of its children); reversed so names pop in order
        stack: List[Tuple[WalkEntry, FrozenSet[Tuple[int, int]]]] = [
            (child, ancestors) for child in reversed(self._list_children(root_path, 0))
        ]

        while stack:
            if self._cancelled():
                logger.info("Traversal cancelled")
                return

            entry, parent_ancestors = stack.pop()
            if entry.is_dir:
                self._stats['dirs_scanned'] += 1
            else:
                self._stats['files_scanned'] += 1
            yield entry

            if not self._should_descend(entry, parent_ancestors):
                continue

            child_ancestors = parent_ancestors | {entry.inode} if entry.inode else parent_ancestors
            for child in reversed(self._list_children(entry.path, entry.depth)):
                stack.append((child, child_ancestors))

    def _should_descend(self, entry: WalkEntry, ancestors: FrozenSet[Tuple[int, int]]) -> bool:
        """Check whether the walker may read the contents of ``entry``."""
        if not entry.is_dir:
            return False
        if entry.is_symlink and not self.follow_symlinks:
            return False
        if entry.inode is not None and entry.inode in ancestors:
            logger.warning(f"Skipping directory cycle at {entry.path}")
            return False
        return True

    def _list_children(self, dir_path: Path, depth: int) -> List[WalkEntry]:
        """
        Read a directory and return its visible children in name order.

        Permission errors are skipped silently; other errors are logged and
        the directory is treated as empty.
        """
        try:
            with os.scandir(dir_path) as it:
                dir_entries = sorted(it, key=lambda e: e.name)
        except PermissionError:
            logger.debug(f"Permission denied: {dir_path}")
            return []
        except OSError as e:
            logger.warning(f"Error reading directory {dir_path}: {e}")
            self._stats['errors'] += 1
            return []

        children = []
        for dir_entry in dir_entries:
            entry = self._create_entry(dir_entry, depth + 1)
            if entry is None:
                continue
            if not self.entry_filter.accepts(dir_entry.name, not entry.is_dir, entry.size, entry.depth):
                self._stats['entries_pruned'] += 1
                continue
            children.append(entry)
        return children

    def _create_entry(self, dir_entry: os.DirEntry, depth: int) -> Optional[WalkEntry]:
        """
        Build a WalkEntry from a scandir result, reading its metadata once.

        Links are described by their target, whether or not they are
        followed, so the size ceiling applies to what a scan would read.

        Returns:
            WalkEntry or None if the entry cannot be inspected
        """
        try:
            is_symlink = dir_entry.is_symlink()
            try:
                stat_result = dir_entry.stat(follow_symlinks=True)
            except OSError:
                if not is_symlink:
                    raise
                # Dangling or looping link: describe the link itself
                stat_result = dir_entry.stat(follow_symlinks=False)
        except PermissionError:
            logger.debug(f"Permission denied: {dir_entry.path}")
            return None
        except OSError as e:
            logger.warning(f"Error reading metadata for {dir_entry.path}: {e}")
            self._stats['errors'] += 1
            return None

        is_dir = stat.S_ISDIR(stat_result.st_mode)
        is_file = stat.S_ISREG(stat_result.st_mode)

        try:
            modified = datetime.fromtimestamp(stat_result.st_mtime)
        except (OverflowError, OSError, ValueError) as e:
            logger.debug(f"Unusable modification time for {dir_entry.path}: {e}")
            modified = None

        return WalkEntry(
            path=Path(dir_entry.path),
            is_dir=is_dir,
            is_symlink=is_symlink,
            depth=depth,
            size=stat_result.st_size if is_file else None,
            modified=modified,
            inode=(stat_result.st_dev, stat_result.st_ino),
        )

    def _cancelled(self) -> bool:
        return self.cancel_token is not None and self.cancel_token.is_cancelled

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'files_scanned': 0,
            'dirs_scanned': 0,
            'entries_pruned': 0,
            'errors': 0
        }

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the filesystem walking operation.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()
