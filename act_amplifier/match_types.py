"""
Match type syntax for keyword text.

    EXACT   ->  [running shoes]
    PHRASE  ->  "running shoes"
    BROAD   ->  running shoes
"""
from __future__ import annotations

from typing import List, Tuple

from .exceptions import InvalidMatchType

EXACT = "EXACT"
PHRASE = "PHRASE"
BROAD = "BROAD"
ALL = "ALL"

MATCH_TYPES = (EXACT, PHRASE, BROAD)


def normalize_match_type(match_type: str) -> str:
    """Upper-case a match type and check it is one of EXACT, PHRASE, BROAD."""
    if not isinstance(match_type, str) or match_type.upper() not in MATCH_TYPES:
        raise InvalidMatchType(match_type)
    return match_type.upper()


def apply_match_type(keyword: str, match_type: str) -> str:
    """
    Apply match type syntax to keyword text.

    Args:
        keyword: Keyword text without any match type syntax
        match_type: EXACT, PHRASE or BROAD (case-insensitive)

    Returns:
        Keyword text in the format for the given match type

    Raises:
        InvalidMatchType: If match_type is anything else
    """
    match_type = normalize_match_type(match_type)
    if match_type == EXACT:
        return f"[{keyword}]"
    if match_type == PHRASE:
        return f'"{keyword}"'
    return keyword


def parse_match_type(formatted: str) -> Tuple[str, str]:
    """Split match type syntax back off keyword text: '[a b]' -> ('a b', 'EXACT')."""
    if len(formatted) >= 2 and formatted.startswith("[") and formatted.endswith("]"):
        return formatted[1:-1], EXACT
    if len(formatted) >= 2 and formatted.startswith('"') and formatted.endswith('"'):
        return formatted[1:-1], PHRASE
    return formatted, BROAD


def expand_match_types(selector: str) -> List[str]:
    """
    Resolve a match type selector into the match types to process.

    ALL expands to one pass per match type; anything else is validated and
    returned as a single-element list.
    """
    if isinstance(selector, str) and selector.upper() == ALL:
        return list(MATCH_TYPES)
    return [normalize_match_type(selector)]
