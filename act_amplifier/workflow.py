"""
Search Term Amplifier workflow.

Flow:
  1. Ensure the configured labels exist
  2. Resolve the ad groups to read search terms from
  3. Fetch search terms, either per ad group (keywords go back to the same
     ad group) or for all ad groups at once (keywords go to one destination)
  4. Add them as keywords or negative keywords
  5. Log a summary and email the report
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from .config import AmplifierConfig
from .exceptions import AdGroupResolutionError
from .group_resolver import ad_group_resource_id, resolve_ad_groups
from .logging_config import setup_logging
from .models import AdGroup, ReconciliationResult, RunSummary
from .reconciler import KeywordOptions, add_negative_keywords_to_ad_group, add_new_keywords
from .reporter import report_outcome, send_reporting_email
from .search_terms import fetch_search_terms, scope_query_to_ad_group, scope_query_to_ad_groups
from .url_builders import resolve_builder

logger = setup_logging(__name__)


def ensure_labels(account, labels: List[str]) -> None:
    """Create every label that does not exist in the account yet."""
    preview = account.is_preview()
    for label in labels:
        if account.label_exists(label):
            continue
        account.create_label(label)
        logger.info(f"Label created: {label}")
        if preview:
            logger.info(
                f'[PREVIEW MODE] Label "{label}" is configured but will NOT be added '
                "to keywords under preview mode."
            )


def keyword_options(config: AmplifierConfig, labels: List[str]) -> KeywordOptions:
    return KeywordOptions(
        match_type=config.match_type,
        labels=labels,
        max_cpc=config.max_cpc,
        enable=config.enable_keywords,
        overwrite=config.overwrite_keywords,
        final_url_builder=_builder(config.final_url_builder),
        mobile_final_url_builder=_builder(config.mobile_final_url_builder),
    )


def _builder(ref):
    if ref is None or callable(ref):
        return ref
    return resolve_builder(ref)


def _reconcile(account, config: AmplifierConfig, search_terms: List[str],
               ad_group: AdGroup, options: KeywordOptions) -> ReconciliationResult:
    if config.is_negative_keywords:
        return add_negative_keywords_to_ad_group(account, search_terms, config.match_type, ad_group)
    return add_new_keywords(account, search_terms, ad_group, options)


def find_destination_ad_group(account, name: str) -> AdGroup:
    """
    Look up the single ad group keywords are added to.

    Raises:
        AdGroupResolutionError: If no ad group or several ad groups have this name
    """
    found = list(account.get_ad_groups(names=[name]))
    if len(found) > 1:
        raise AdGroupResolutionError(f"Invalid Value Error: Found multiple ad groups with {name}")
    if not found:
        raise AdGroupResolutionError(f"Destination ad group not found: {name}")
    return found[0]


def run_amplifier(account, config: AmplifierConfig, mailer=None,
                  run_started_at: Optional[datetime] = None) -> RunSummary:
    """
    Run the amplifier once against an account.

    Args:
        account: Account facade (GoogleAdsAccount or a test double)
        config: Run configuration
        mailer: Object with send_email(); None disables the report email
        run_started_at: Timestamp used in label names (defaults to now)

    Returns:
        RunSummary with every created keyword and error
    """
    run_started_at = run_started_at or datetime.now()
    preview = account.is_preview()
    mode = "PREVIEW" if preview else "LIVE"
    logger.info(f"Starting {config.script_name}: customer_id={account.customer_id}, mode={mode}")

    labels = config.resolved_labels(run_started_at)
    ensure_labels(account, labels)
    options = keyword_options(config, labels)

    source_ad_groups = resolve_ad_groups(
        account, config.campaigns, config.ad_groups, config.is_negative_keywords
    )

    result = ReconciliationResult()

    if config.add_to_different_ad_group:
        search_terms = []
        if source_ad_groups:
            resource_ids = [ad_group_resource_id(account.customer_id, g) for g in source_ad_groups]
            query = scope_query_to_ad_groups(config.search_term_query, resource_ids)
            search_terms = fetch_search_terms(account, query, config.ignore_words)

        if not search_terms:
            logger.info(f"No search terms found for {[g.name for g in source_ad_groups]}.")
        else:
            destination = find_destination_ad_group(account, config.destination_ad_group)
            result.merge(_reconcile(account, config, search_terms, destination, options))
    else:
        for ad_group in source_ad_groups:
            resource_id = ad_group_resource_id(account.customer_id, ad_group)
            query = scope_query_to_ad_group(config.search_term_query, resource_id)
            search_terms = fetch_search_terms(account, query, config.ignore_words)
            if not search_terms:
                logger.info(f"No search terms found for {ad_group.name}.")
                continue
            result.merge(_reconcile(account, config, search_terms, ad_group, options))

        if not source_ad_groups:
            logger.info("No search terms found: no ad groups matched the configured scope.")

    if result.errors:
        details = "\n".join(str(e) for e in result.errors)
        logger.warning(f"Failed to update some keywords:\n\n {details}")
    else:
        logger.info(f"{len(result.created_keywords)} keywords added to the account")
    if result.skipped:
        logger.info(f"{len(result.skipped)} existing keywords skipped")

    report_sent = False
    if config.mail_recipients:
        if mailer is None:
            logger.warning("Mail recipients configured but no mailer available, report not sent")
        else:
            report_sent = send_reporting_email(
                mailer,
                config.script_name,
                config.mail_recipients,
                account,
                result.created_keywords,
                result.errors,
                config.search_term_query,
            )

    return RunSummary(
        created_keywords=result.created_keywords,
        errors=result.errors,
        outcome=report_outcome(result.created_keywords, result.errors),
        preview=preview,
        report_sent=report_sent,
        ad_groups_processed=len(source_ad_groups),
    )
