"""
Content scanning for fastfind.

Reads a text file line by line and records every occurrence of the content
pattern. A file that cannot be opened, read or decoded simply yields no
matches.
"""

from pathlib import Path
from typing import List, Tuple, Union
import logging

from ..models.search_query import MatchMode
from ..models.search_results import ContentMatch
from .name_matcher import fuzzy_score


logger = logging.getLogger(__name__)

# Cursor policies for find_occurrences
ADVANCE_CHAR = "char"
ADVANCE_MATCH = "match"


def fold_case(line: str) -> Tuple[str, List[int]]:
    """
    Lowercase a line and map every folded position back to the original.

    Some characters lowercase to more than one code point (a dotted capital I
    becomes ``i`` plus a combining dot), so positions in the folded text can
    run ahead of the original. ``origins[i]`` is the index in ``line`` of the character that
    produced folded position ``i``.
    """
    folded = []
    origins = []
    for idx, char in enumerate(line):
        lowered = char.lower()
        folded.append(lowered)
        origins.extend([idx] * len(lowered))
    return ''.join(folded), origins


def line_matches(line_lower: str, pattern_lower: str, match_mode: MatchMode) -> bool:
    """
    Check whether a lowercased line is a hit for the pattern.

    Exact mode requires a substring. Fuzzy mode also accepts lines where the
    pattern appears as a subsequence.
    """
    if pattern_lower in line_lower:
        return True
    if match_mode is MatchMode.FUZZY:
        return fuzzy_score(line_lower, pattern_lower) is not None
    return False


def find_occurrences(line_lower: str, pattern_lower: str, advance: str = ADVANCE_CHAR) -> List[int]:
    """
    Find the start offsets of ``pattern_lower`` inside ``line_lower``.

    The scan runs left to right. With ``advance="char"`` the cursor moves one
    character past each found start, so overlapping occurrences are all
    reported (``"aa"`` is found twice in ``"aaa"``). With ``advance="match"``
    the cursor skips the whole occurrence.

    Args:
        line_lower: Lowercased line
        pattern_lower: Lowercased pattern
        advance: Cursor policy, ``"char"`` or ``"match"``

    Returns:
        List of start offsets in increasing order
    """
    if advance not in (ADVANCE_CHAR, ADVANCE_MATCH):
        raise ValueError(f"Invalid advance policy: {advance}")
    if not pattern_lower:
        return []

    step = 1 if advance == ADVANCE_CHAR else len(pattern_lower)
    positions = []
    start = 0
    while True:
        pos = line_lower.find(pattern_lower, start)
        if pos < 0:
            break
        positions.append(pos)
        start = pos + step
    return positions


def scan_file(file_path: Union[str, Path], pattern: str, match_mode: MatchMode,
              advance: str = ADVANCE_CHAR) -> List[ContentMatch]:
    """
    Scan a text file for occurrences of ``pattern``.

    Matching is case-insensitive. Lines accepted only through a fuzzy
    subsequence hit contribute no occurrences, since occurrences are
    substring positions. Match offsets are character positions in the
    original, unfolded line.

    Args:
        file_path: File to read as UTF-8 text
        pattern: Content pattern from the query
        match_mode: Fuzzy or exact matching
        advance: Cursor policy passed to find_occurrences

    Returns:
        ContentMatch records in file order, or an empty list if the file
        could not be read
    """
    pattern_lower = pattern.lower()
    matches = []

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, 1):
                line = line.rstrip('\r\n')
                line_lower, origins = fold_case(line)

                if not line_matches(line_lower, pattern_lower, match_mode):
                    continue

                for pos in find_occurrences(line_lower, pattern_lower, advance):
                    matches.append(ContentMatch(
                        line_number=line_number,
                        line_content=line,
                        match_start=origins[pos],
                        match_end=origins[pos + len(pattern_lower) - 1] + 1,
                    ))
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot scan {file_path}: {e}")
        return []

    return matches
