"""
Filename scoring for fastfind.

Exact mode is a case-insensitive substring test. Fuzzy mode fuses three
signals and keeps the best: a subsequence score, a substring match and a
prefix match, ranked prefix > substring > subsequence.
"""

from typing import Optional, List

from ..models.search_query import MatchMode


PREFIX_SCORE = 150
SUBSTRING_SCORE = 100

# Subsequence scores stay below SUBSTRING_SCORE so the ranking policy holds
# for arbitrarily long patterns.
FUZZY_SCORE_MIN = 1
FUZZY_SCORE_MAX = SUBSTRING_SCORE - 1

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_NON_WORD, _LOWER, _UPPER, _LETTER, _NUMBER = range(5)


def _char_class(c: str) -> int:
    if c.islower():
        return _LOWER
    if c.isupper():
        return _UPPER
    if c.isdigit():
        return _NUMBER
    if c.isalpha():
        return _LETTER
    return _NON_WORD


def _bonus_for(prev_class: int, char_class: int) -> int:
    if prev_class == _NON_WORD and char_class != _NON_WORD:
        return BONUS_BOUNDARY
    if (prev_class == _LOWER and char_class == _UPPER) or \
            (prev_class != _NUMBER and char_class == _NUMBER):
        return BONUS_CAMEL123
    if char_class == _NON_WORD:
        return BONUS_NON_WORD
    return 0


def fuzzy_score(text: str, pattern: str) -> Optional[int]:
    """
    Score ``pattern`` as a case-insensitive subsequence of ``text``.

    The shortest window ending at the earliest complete match is scored:
    every matched character earns a base score plus a bonus for word
    boundaries, camelCase humps and digits, consecutive runs keep the bonus
    of their first character, and gaps cost a penalty. The first character's
    bonus counts double.

    Args:
        text: Text to search in (a filename or a line)
        pattern: Characters that must appear in order

    Returns:
        Score in ``FUZZY_SCORE_MIN..FUZZY_SCORE_MAX``, or None if the
        pattern is not a subsequence of the text
    """
    if not pattern:
        return None

    pattern_chars = [c.lower() for c in pattern]
    text_lower = [c.lower() for c in text]

    # Forward pass: earliest end of a complete subsequence
    pidx = 0
    end = -1
    for idx, c in enumerate(text_lower):
        if c == pattern_chars[pidx]:
            pidx += 1
            if pidx == len(pattern_chars):
                end = idx + 1
                break
    if end < 0:
        return None

    # Backward pass: latest start of a subsequence ending there
    pidx = len(pattern_chars) - 1
    start = 0
    for idx in range(end - 1, -1, -1):
        if text_lower[idx] == pattern_chars[pidx]:
            pidx -= 1
            if pidx < 0:
                start = idx
                break

    return _clamp(_score_window(text, text_lower, pattern_chars, start, end))


def _score_window(text: str, text_lower: List[str], pattern_chars: List[str], start: int, end: int) -> int:
    score = 0
    pidx = 0
    in_gap = False
    consecutive = 0
    first_bonus = 0
    prev_class = _char_class(text[start - 1]) if start > 0 else _NON_WORD

    for idx in range(start, end):
        if pidx == len(pattern_chars):
            break
        char_class = _char_class(text[idx])
        if text_lower[idx] == pattern_chars[pidx]:
            score += SCORE_MATCH
            bonus = _bonus_for(prev_class, char_class)
            if consecutive == 0:
                first_bonus = bonus
            else:
                if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)
            if pidx == 0:
                score += bonus * BONUS_FIRST_CHAR_MULTIPLIER
            else:
                score += bonus
            in_gap = False
            consecutive += 1
            pidx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0
        prev_class = char_class

    return score


def _clamp(score: int) -> int:
    return max(FUZZY_SCORE_MIN, min(FUZZY_SCORE_MAX, score))


def score_filename(filename: str, pattern: str, match_mode: MatchMode) -> Optional[int]:
    """
    Score a filename against a pattern.

    Args:
        filename: Entry name (not the full path)
        pattern: Filename pattern from the query
        match_mode: Fuzzy or exact matching

    Returns:
        The best score, or None when the filename does not match
    """
    name_lower = filename.lower()
    pattern_lower = pattern.lower()

    if match_mode is MatchMode.EXACT:
        return SUBSTRING_SCORE if pattern_lower in name_lower else None

    scores = []
    fuzzy = fuzzy_score(filename, pattern)
    if fuzzy is not None:
        scores.append(fuzzy)
    if pattern_lower in name_lower:
        scores.append(SUBSTRING_SCORE)
    if name_lower.startswith(pattern_lower):
        scores.append(PREFIX_SCORE)

    return max(scores) if scores else None
