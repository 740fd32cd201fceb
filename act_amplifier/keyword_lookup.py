"""
Existing keyword lookup by identity (ad group, text, match type).
"""
from __future__ import annotations

from typing import Optional

from .exceptions import MultipleMatchesError
from .match_types import normalize_match_type
from .models import AdGroup, Keyword


def find_keyword(account, ad_group: AdGroup, keyword: str, match_type: str) -> Optional[Keyword]:
    """
    Find an existing keyword with the given text and match type.

    Args:
        account: Account facade (GoogleAdsAccount or a test double)
        ad_group: Ad group to search in
        keyword: Keyword text without match type syntax
        match_type: EXACT, PHRASE or BROAD

    Returns:
        The matching keyword, or None

    Raises:
        MultipleMatchesError: If more than one keyword has this identity
    """
    match_type = normalize_match_type(match_type)
    matches = list(account.find_keywords(ad_group, keyword, match_type))

    if len(matches) > 1:
        raise MultipleMatchesError(keyword, ad_group.name, match_type, len(matches))

    return matches[0] if matches else None
