"""
Parallel search executor for fastfind.

Phase one enumerates the filtered tree on the calling thread into a bounded
candidate list. Phase two scores the candidates on a thread pool while a
reporter thread shows progress. Results are merged, ranked and truncated on
the calling thread.
"""

import time
import itertools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Union, Callable

from ..models.config import FinderConfig
from ..models.search_query import SearchQuery, MatchMode
from ..models.search_results import SearchResult, rank_results
from ..tools.fs_walker import FSWalker, WalkEntry
from .cancellation import CancellationToken
from .evaluator import EntryEvaluator
from .progress import ProgressCounters, ProgressReporter, ProgressSink, ProgressSnapshot, as_progress_sink


logger = logging.getLogger(__name__)


def search_parallel(
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
    threads: Optional[int] = None,
    max_cpu: bool = False,
    cancel_token: Optional[CancellationToken] = None,
    progress: Union[ProgressSink, Callable[[ProgressSnapshot], None], None] = None,
) -> List[SearchResult]:
    """
    Search beneath ``root`` using a pool of worker threads.

    Takes the same arguments as ``search`` plus:

    Args:
        threads: Worker count; falls back to the config, then the core count
        max_cpu: Use twice the core count when no count is set

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
    config = config or FinderConfig()
    thread_count = config.get_effective_thread_count(threads, max_cpu)
    executor = ParallelSearch(query, config, thread_count, cancel_token, progress)
    return executor.run()


class ParallelSearch:
    """
    Two-phase search: bounded enumeration, then a concurrent map.

    Workers share only the read-only candidate list and the progress
    counters. Each task checks the cancellation token before it starts;
    tasks already running finish their file.
    """

    def __init__(self, query: SearchQuery, config: FinderConfig, thread_count: int,
                 cancel_token: Optional[CancellationToken] = None,
                 progress: Union[ProgressSink, Callable[[ProgressSnapshot], None], None] = None,
                 poll_interval: float = 0.5):
        if thread_count < 1:
            raise ValueError(f"thread_count must be positive, got {thread_count}")
        self.query = query
        self.config = config
        self.thread_count = thread_count
        self.cancel_token = cancel_token or CancellationToken()
        self.sink = as_progress_sink(progress)
        self.poll_interval = poll_interval
        self.counters = ProgressCounters()
        self.evaluator = EntryEvaluator(query, config)
        self.cancelled = False
        self.truncated = False

    def collect_candidates(self) -> List[WalkEntry]:
        """Phase one: enumerate the filtered tree, stopping at the candidate cap."""
        walker = FSWalker(self.config, include_hidden=self.query.include_hidden, cancel_token=self.cancel_token)
        cap = self.config.max_files_per_search
        candidates = list(itertools.islice(walker.walk(self.query.root), cap))

        if len(candidates) >= cap:
            self.truncated = True
            logger.warning(f"Limited to {cap} paths per config setting")
        return candidates

    def _process(self, entry: WalkEntry) -> Optional[SearchResult]:
        if self.cancel_token.is_cancelled:
            return None

        self.counters.record_processed(entry.is_dir)
        result = self.evaluator.evaluate(entry)
        if result is not None:
            self.counters.record_matched(entry.is_dir)
        return result

    def run(self) -> List[SearchResult]:
        started = time.monotonic()
        logger.info(f"Searching: {self.query} (parallel, {self.thread_count} threads)")

        candidates = self.collect_candidates()
        self.counters.total = len(candidates)
        logger.info(f"Processing {len(candidates)} paths using {self.thread_count} threads")

        reporter = ProgressReporter(self.counters, self.sink, cancel_token=self.cancel_token,
                                    poll_interval=self.poll_interval)
        reporter.start()
        try:
            with ThreadPoolExecutor(max_workers=self.thread_count, thread_name_prefix="fastfind") as pool:
                results = [result for result in pool.map(self._process, candidates) if result is not None]
        finally:
            reporter.stop()

        self.cancelled = self.cancel_token.is_cancelled
        snapshot = self.counters.snapshot()
        if self.cancelled:
            logger.info("Parallel search stopped")
        logger.info(f"Scanned {snapshot.files_processed} files and {snapshot.dirs_processed} directories "
                    f"in {time.monotonic() - started:.2f}s, {len(results)} matches")

        return rank_results(results, self.query.limit)
