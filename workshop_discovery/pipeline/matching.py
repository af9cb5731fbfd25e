"""
Fuzzy token matching - graded match strength between two tokens.
"""
from typing import Optional

from rapidfuzz.distance import Levenshtein

from ..config import SearchConfig, get_config


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert/delete/substitute costs."""
    return Levenshtein.distance(a, b)


def allowed_edits(a: str, b: str, long_token_length: int = 5) -> int:
    """One typo for short tokens, two once either token is long."""
    return 2 if max(len(a), len(b)) > long_token_length else 1


def match_strength(a: str, b: str, config: Optional[SearchConfig] = None) -> float:
    """
    Compare two lower-cased tokens.

    Returns the exact strength for equal tokens, the substring strength when
    one contains the other, the fuzzy strength when they are within the
    allowed edit distance, and 0 otherwise. Checks run in that order so the
    edit distance is only computed when the cheap checks fail.
    """
    if config is None:
        config = get_config().search

    if a == b:
        return config.exact_strength
    if a in b or b in a:
        return config.substring_strength

    limit = allowed_edits(a, b, config.long_token_length)
    # score_cutoff lets rapidfuzz stop early; anything above it comes back as cutoff + 1
    if Levenshtein.distance(a, b, score_cutoff=limit) <= limit:
        return config.fuzzy_strength
    return 0.0
