"""
Resolves configured campaign / ad group names into ad group handles.
"""
from __future__ import annotations

from typing import List

from .logging_config import setup_logging
from .models import AdGroup

logger = setup_logging(__name__)

ALL_CAMPAIGNS = "__ALL__"

# Dynamic search ad groups reject keywords but accept negative keywords
DYNAMIC_SEARCH_AD_GROUP_TYPE = "SEARCH_DYNAMIC_ADS"


def get_campaign_names(account) -> List[str]:
    """Names of every campaign in the account."""
    names = list(account.campaign_names())
    logger.info(f"All campaigns found: {names}")
    return names


def ad_group_resource_id(customer_id: str, ad_group: AdGroup) -> str:
    """Google Ads resource name of an ad group: customers/{cid}/adGroups/{id}."""
    customer_id = str(customer_id).replace("-", "")
    return f"customers/{customer_id}/adGroups/{ad_group.id}"


def resolve_ad_groups(account, campaigns: List[str], ad_groups: List[str],
                      is_negative_keywords: bool) -> List[AdGroup]:
    """
    Resolve the ad groups to extract search terms from.

    Campaigns take precedence: if any campaign names are given, ad_groups is
    ignored and every ad group of those campaigns is used. ['__ALL__'] means
    every campaign in the account.

    Args:
        account: Account facade
        campaigns: Campaign names, ['__ALL__'] or []
        ad_groups: Ad group names (used when campaigns is empty)
        is_negative_keywords: Keep dynamic search ad groups when True

    Returns:
        Ad groups in campaign order, then ad group order
    """
    exclude_types = () if is_negative_keywords else (DYNAMIC_SEARCH_AD_GROUP_TYPE,)

    if not campaigns:
        found = list(account.get_ad_groups(names=list(ad_groups), exclude_types=exclude_types))
        logger.info(f"The number of ad groups found: {len(found)}")
        return found

    campaign_names = list(campaigns)
    if campaign_names[0] == ALL_CAMPAIGNS:
        campaign_names = get_campaign_names(account)

    matched_campaigns = list(account.get_campaigns(campaign_names))
    logger.info(f"The number of campaigns found: {len(matched_campaigns)}")

    resolved: List[AdGroup] = []
    for campaign in matched_campaigns:
        logger.info(f"Campaign found: {campaign.name}")
        found = list(account.get_ad_groups(campaign=campaign, exclude_types=exclude_types))
        logger.info(f"The number of ad groups found: {len(found)}")
        resolved.extend(found)

    return resolved
