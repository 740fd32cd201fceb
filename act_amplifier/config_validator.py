"""
Configuration validation with clear error messages.

Catches the mistakes that would otherwise surface halfway through a run:
- Unknown match type
- Destination ad group missing when keywords go to a different ad group
- Non-positive max CPC
- Non-list name fields
- Malformed customer_id

Usage:
    from act_amplifier.config_validator import validate_config

    errors = validate_config(config_dict)
    if errors:
        for error in errors:
            print(f"  - {error}")
"""

from typing import Any, Dict, List

from .logging_config import setup_logging

logger = setup_logging(__name__)

VALID_MATCH_TYPES = ["EXACT", "PHRASE", "BROAD", "ALL"]

LIST_FIELDS = ["campaigns", "ad_groups", "labels", "mail_recipients", "ignore_words"]

BOOL_FIELDS = [
    "add_to_different_ad_group",
    "enable_keywords",
    "overwrite_keywords",
    "is_negative_keywords",
]


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate amplifier configuration.

    Args:
        config: Configuration dictionary loaded from YAML

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    for field in LIST_FIELDS:
        if field in config:
            errors.extend(_validate_string_list(field, config[field]))

    for field in BOOL_FIELDS:
        if field in config and not isinstance(config[field], bool):
            errors.append(f"{field} must be true or false: {config[field]!r}")

    if "match_type" in config:
        errors.extend(_validate_match_type(config["match_type"]))

    if "max_cpc" in config:
        errors.extend(_validate_max_cpc(config["max_cpc"]))

    if "google_ads" in config:
        errors.extend(_validate_google_ads_config(config["google_ads"]))

    errors.extend(_validate_scope(config))

    query = config.get("search_term_query")
    if query is not None and "search_term_view.search_term" not in str(query):
        errors.append("search_term_query must select search_term_view.search_term")

    if errors:
        logger.error(f"Config validation failed: {len(errors)} errors")
        for error in errors:
            logger.error(f"  - {error}")

    return errors


def _validate_string_list(field: str, value: Any) -> List[str]:
    if not isinstance(value, list):
        return [f"{field} must be a list: {value!r}"]
    if not all(isinstance(v, str) for v in value):
        return [f"{field} must only contain strings: {value!r}"]
    return []


def _validate_match_type(match_type: Any) -> List[str]:
    if not isinstance(match_type, str) or match_type.strip().upper() not in VALID_MATCH_TYPES:
        return [f"match_type must be one of {VALID_MATCH_TYPES}: {match_type!r}"]
    return []


def _validate_max_cpc(max_cpc: Any) -> List[str]:
    """max_cpc is a positive number, or false/null/0 to leave the bid unset."""
    if max_cpc is None or max_cpc is False or max_cpc == 0:
        return []
    if isinstance(max_cpc, bool) or not isinstance(max_cpc, (int, float)) or max_cpc <= 0:
        return [f"max_cpc must be a positive number or false: {max_cpc!r}"]
    return []


def _validate_google_ads_config(ga_config: Any) -> List[str]:
    """Validate google_ads section."""
    if not isinstance(ga_config, dict):
        return ["google_ads must be a mapping"]

    errors = []
    for key in ("customer_id", "mcc_id"):
        if key not in ga_config or ga_config[key] is None:
            continue
        digits = str(ga_config[key]).replace("-", "")
        if not digits.isdigit() or len(digits) != 10:
            errors.append(f"google_ads.{key} must be 10 digits: '{ga_config[key]}'")
    return errors


def _validate_scope(config: Dict[str, Any]) -> List[str]:
    """Check that the run has somewhere to read from and write to."""
    errors = []

    campaigns = config.get("campaigns", ["__ALL__"])
    ad_groups = config.get("ad_groups", [])
    if isinstance(campaigns, list) and isinstance(ad_groups, list):
        if not campaigns and not ad_groups:
            logger.warning("Neither campaigns nor ad_groups set: the run will find no search terms")
        if "__ALL__" in campaigns and len(campaigns) > 1:
            errors.append("campaigns: '__ALL__' must be the only entry")

    if config.get("add_to_different_ad_group") is True:
        destination = config.get("destination_ad_group")
        if not isinstance(destination, str) or not destination.strip():
            errors.append(
                "destination_ad_group is required when add_to_different_ad_group is true"
            )

    return errors
