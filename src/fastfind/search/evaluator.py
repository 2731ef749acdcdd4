"""
Per-entry evaluation shared by the sequential and parallel executors.
"""

from typing import Optional
import logging

from ..models.config import FinderConfig
from ..models.search_query import SearchQuery
from ..models.search_results import SearchResult
from ..tools.fs_walker import WalkEntry
from ..tools.name_matcher import score_filename
from ..tools.content_scanner import scan_file
from .aggregator import aggregate


logger = logging.getLogger(__name__)


class EntryEvaluator:
    """
    Turns a WalkEntry into a SearchResult, or None if it does not match.

    Holds no mutable state, so one instance can be shared by any number of
    worker threads.
    """

    def __init__(self, query: SearchQuery, config: FinderConfig):
        self.query = query
        self.config = config
        self.search_type = query.search_type
        self.want_details = query.show_details or config.output_options.show_details

    def evaluate(self, entry: WalkEntry) -> Optional[SearchResult]:
        """
        Score one entry.

        Applies the dirs-only / files-only restriction, scores the name,
        scans content for searchable files and aggregates the outcome.
        """
        if not self.query.accepts_kind(entry.is_dir):
            return None

        filename_score = None
        if self.query.filename_pattern:
            filename_score = score_filename(entry.name, self.query.filename_pattern, self.query.match_mode)

        content_matches = []
        if self.query.content_pattern and not entry.is_dir and self.config.is_content_searchable(entry.path):
            content_matches = scan_file(entry.path, self.query.content_pattern, self.query.match_mode)

        is_match, score = aggregate(filename_score, content_matches, self.search_type)
        if not is_match:
            return None

        return SearchResult(
            path=str(entry.path),
            score=score,
            is_dir=entry.is_dir,
            size=entry.size if self.want_details else None,
            modified=entry.modified if self.want_details else None,
            content_matches=content_matches,
            search_type=self.search_type,
        )
