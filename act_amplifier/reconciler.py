"""
Keyword reconciliation: turns search terms into keywords.

For every candidate search term and match type:
  1. Look up an existing keyword with the same identity in the ad group
  2. Skip it (overwrite off) or (re)create it with the optional max CPC
  3. Record failed creations as KeywordError entries
  4. Label, enable/pause and set URLs on every created keyword

Negative mode removes a same-identity positive keyword before adding the
search term as a negative keyword.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .keyword_lookup import find_keyword
from .logging_config import setup_logging
from .match_types import apply_match_type, expand_match_types
from .models import AdGroup, KeywordError, NegativeKeyword, ReconciliationResult

logger = setup_logging(__name__)

UrlBuilder = Callable[..., str]


@dataclass
class KeywordOptions:
    """Settings applied to every keyword created in one reconciliation call."""
    match_type: str = "BROAD"               # EXACT | PHRASE | BROAD | ALL
    labels: List[str] = field(default_factory=list)
    max_cpc: Optional[float] = None         # currency units, None = leave to ad group default
    enable: bool = True
    overwrite: bool = False
    final_url_builder: Optional[UrlBuilder] = None
    mobile_final_url_builder: Optional[UrlBuilder] = None


def create_keyword(account, ad_group: AdGroup, keyword: str, match_type: str,
                   max_cpc: Optional[float], overwrite: bool):
    """
    Create a keyword unless it already exists and overwrite is off.

    Returns:
        The KeywordOperation if creation was attempted, None if the keyword
        already existed and was skipped.
    """
    existing = find_keyword(account, ad_group, keyword, match_type)

    if existing is not None and not overwrite:
        logger.info(
            f"Existing keyword {existing.text} in {existing.ad_group.name}, "
            f"isEnabled {existing.enabled}, is skipped."
        )
        return None

    formatted = apply_match_type(keyword, match_type)
    if max_cpc:
        return account.create_keyword(ad_group, formatted, max_cpc=max_cpc)
    return account.create_keyword(ad_group, formatted)


def add_keywords_to_ad_group(account, keywords: List[str], match_type: str,
                             ad_group: AdGroup, options: KeywordOptions) -> ReconciliationResult:
    """
    Add keywords with one match type to an ad group and maintain the created ones.

    Args:
        account: Account facade
        keywords: Search terms to add
        match_type: EXACT, PHRASE or BROAD
        ad_group: Destination ad group
        options: Labels, max CPC, enable flag, URL builders, overwrite flag

    Returns:
        ReconciliationResult for this match type pass
    """
    result = ReconciliationResult()
    successful_operations = []

    for keyword in keywords:
        operation = create_keyword(
            account, ad_group, keyword, match_type, options.max_cpc, options.overwrite
        )
        if operation is None:
            result.skipped.append(keyword)
            continue
        if operation.succeeded:
            successful_operations.append(operation)
        else:
            reason = "; ".join(str(e) for e in operation.errors) or "Unknown error"
            logger.warning(f"Failed to add keyword '{keyword}' to {ad_group.name}: {reason}")
            result.errors.append(KeywordError(reason, ad_group.name, keyword))

    # Labels not yet committed in production make preview runs fail
    apply_labels = not account.is_preview()

    for operation in successful_operations:
        created = operation.result
        result.created_keywords.append(created)

        if apply_labels:
            for label in options.labels:
                account.apply_label(created, label)

        account.set_keyword_status(created, options.enable)

        if options.final_url_builder is not None:
            account.set_final_url(created, options.final_url_builder(created))
        if options.mobile_final_url_builder is not None:
            account.set_mobile_final_url(created, options.mobile_final_url_builder(created))

        logger.info(
            f"New keyword {apply_match_type(created.text, created.match_type)}, "
            f"added to {created.ad_group.name}, isEnabled: {created.enabled}, "
            f"finalUrl: [{created.final_url or ''}]"
        )

    return result


def add_new_keywords(account, keywords: List[str], ad_group: AdGroup,
                     options: KeywordOptions) -> ReconciliationResult:
    """
    Add keywords for every match type selected by options.match_type.

    ALL runs three passes (EXACT, PHRASE, BROAD), so each search term yields
    up to three keywords.
    """
    result = ReconciliationResult()
    for match_type in expand_match_types(options.match_type):
        result.merge(add_keywords_to_ad_group(account, keywords, match_type, ad_group, options))
    return result


def add_negative_keywords_to_ad_group(account, keywords: List[str], match_type: str,
                                      ad_group: AdGroup) -> ReconciliationResult:
    """
    Add search terms as negative keywords to an ad group.

    A positive keyword with the same text and match type is removed first.
    Existing negative keywords are not checked, so re-running adds duplicates.
    """
    result = ReconciliationResult()

    for current_match_type in expand_match_types(match_type):
        for keyword in keywords:
            existing = find_keyword(account, ad_group, keyword, current_match_type)
            if existing is not None:
                account.remove_keyword(existing)
                logger.info(f"Keyword removed: {existing.text}")

            formatted = apply_match_type(keyword, current_match_type)

            try:
                account.create_negative_keyword(ad_group, formatted)
            except Exception as e:
                logger.error(f"Failed to add negative keyword {formatted} to {ad_group.name}: {e}")
                result.errors.append(
                    KeywordError(f"{type(e).__name__}: {e}", ad_group.name, formatted)
                )
                continue

            logger.info(f"Negative keyword added to ad group: {formatted}, {ad_group.name}")
            result.created_keywords.append(NegativeKeyword(ad_group, keyword, current_match_type))

    return result
