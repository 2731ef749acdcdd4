"""
Sequential search executor for fastfind.

Streams the traversal on the calling thread, scoring each entry as it is
discovered.
"""

import time
import logging
from typing import List, Optional, Union, Callable

from ..models.config import FinderConfig
from ..models.search_query import SearchQuery, MatchMode
from ..models.search_results import SearchResult, rank_results
from ..tools.fs_walker import FSWalker
from .cancellation import CancellationToken
from .evaluator import EntryEvaluator
from .progress import ProgressCounters, ProgressSink, ProgressSnapshot, ProgressThrottle, as_progress_sink


logger = logging.getLogger(__name__)


def search(
    root: str,
    filename_pattern: Optional[str] = None,
    content_pattern: Optional[str] = None,
    include_hidden: bool = False,
    dirs_only: bool = False,
    files_only: bool = False,
    limit: int = 10,
    show_details: bool = False,
    match_mode: Union[MatchMode, str] = MatchMode.FUZZY,
    config: Optional[FinderConfig] = None,
    cancel_token: Optional[CancellationToken] = None,
    progress: Union[ProgressSink, Callable[[ProgressSnapshot], None], None] = None,
) -> List[SearchResult]:
    """
    Search beneath ``root`` on the calling thread.

    Args:
        root: Directory to search
        filename_pattern: Pattern scored against entry names
        content_pattern: Pattern searched for in content-searchable files
        include_hidden: Visit hidden entries (OR-ed with the config)
        dirs_only: Only directories may match
        files_only: Only files may match
        limit: Maximum number of results
        show_details: Collect size and modification time
        match_mode: Fuzzy or exact matching
        config: Configuration, defaults to FinderConfig()
        cancel_token: Token checked before every entry
        progress: Progress sink or callback; defaults to a stderr status line

    Returns:
        Results sorted by descending score (ties by path), at most ``limit``.
        A cancelled search returns the partial results, ranked the same way.

    Raises:
        ValueError: If neither pattern is given or the options conflict
    """
    query = SearchQuery(
        root=root,
        filename_pattern=filename_pattern,
        content_pattern=content_pattern,
        include_hidden=include_hidden,
        dirs_only=dirs_only,
        files_only=files_only,
        limit=limit,
        show_details=show_details,
        match_mode=match_mode,
    )
    executor = SequentialSearch(query, config or FinderConfig(), cancel_token, progress)
    return executor.run()


class SequentialSearch:
    """
    Single-threaded traversal, scoring and collection.

    State: running until the traversal is exhausted (completed) or the
    token is set (cancelled). Either way the collected results are ranked
    and truncated.
    """

    def __init__(self, query: SearchQuery, config: FinderConfig,
                 cancel_token: Optional[CancellationToken] = None,
                 progress: Union[ProgressSink, Callable[[ProgressSnapshot], None], None] = None):
        self.query = query
        self.config = config
        self.cancel_token = cancel_token or CancellationToken()
        self.sink = as_progress_sink(progress)
        self.counters = ProgressCounters()
        self.cancelled = False

    def run(self) -> List[SearchResult]:
        walker = FSWalker(self.config, include_hidden=self.query.include_hidden, cancel_token=self.cancel_token)
        evaluator = EntryEvaluator(self.query, self.config)
        throttle = ProgressThrottle(1.0)
        results = []
        started = time.monotonic()

        logger.info(f"Searching: {self.query}")

        try:
            for entry in walker.walk(self.query.root):
                if self.cancel_token.is_cancelled:
                    break

                self.counters.record_processed(entry.is_dir)
                if throttle.ready():
                    self.sink.update(self.counters.snapshot())

                result = evaluator.evaluate(entry)
                if result is not None:
                    self.counters.record_matched(entry.is_dir)
                    results.append(result)
        finally:
            self.sink.close()

        self.cancelled = self.cancel_token.is_cancelled
        snapshot = self.counters.snapshot()
        if self.cancelled:
            logger.info("Search stopped")
        logger.info(f"Scanned {snapshot.files_processed} files and {snapshot.dirs_processed} directories "
                    f"in {time.monotonic() - started:.2f}s, {len(results)} matches")

        return rank_results(results, self.query.limit)
