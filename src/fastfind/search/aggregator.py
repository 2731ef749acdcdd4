"""
Score aggregation for fastfind.

Combines the filename score and the content matches of one entry into a
single match decision and final score, according to the run's search type.
"""

from typing import List, Optional, Tuple

from ..models.search_query import SearchType
from ..models.search_results import ContentMatch


CONTENT_SCORE = 100
HYBRID_CONTENT_BONUS = 50


def aggregate(filename_score: Optional[int], content_matches: List[ContentMatch],
              search_type: SearchType) -> Tuple[bool, int]:
    """
    Decide whether an entry matches and compute its final score.

    ========== ================================ =====================================
    type       matches when                     score
    ========== ================================ =====================================
    FILE_NAME  filename scored                  filename score
    CONTENT    any content match                100
    HYBRID     filename scored or content hit   filename score (or 0) + 50 on content
    ========== ================================ =====================================

    Args:
        filename_score: Score from the name matcher, None if it did not match
        content_matches: Occurrences found by the content scanner
        search_type: Search type of the run

    Returns:
        Tuple of (is_match, final_score)
    """
    has_content = bool(content_matches)

    if search_type is SearchType.FILE_NAME:
        return filename_score is not None, filename_score or 0

    if search_type is SearchType.CONTENT:
        return has_content, CONTENT_SCORE if has_content else 0

    score = (filename_score or 0) + (HYBRID_CONTENT_BONUS if has_content else 0)
    return filename_score is not None or has_content, score
