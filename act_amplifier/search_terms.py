"""
Search term extraction from the search term report (GAQL).
"""
from __future__ import annotations

from typing import Iterable, List

from .logging_config import setup_logging

logger = setup_logging(__name__)

SEARCH_TERM_FIELD = "search_term_view.search_term"

DEFAULT_SEARCH_TERM_QUERY = (
    "SELECT search_term_view.search_term"
    " FROM search_term_view"
    " WHERE metrics.clicks > 0"
    " AND metrics.impressions > 0"
    " AND metrics.conversions > 0"
    " AND segments.date DURING LAST_30_DAYS"
    " AND search_term_view.status NOT IN ('ADDED')"
)


def scope_query_to_ad_group(base_query: str, resource_id: str) -> str:
    """Restrict the search term query to one ad group."""
    return f"{base_query}\n AND search_term_view.ad_group = '{resource_id}'"


def scope_query_to_ad_groups(base_query: str, resource_ids: Iterable[str]) -> str:
    """Restrict the search term query to several ad groups."""
    quoted = ",".join(f"'{r}'" for r in resource_ids)
    return f"{base_query}\n AND search_term_view.ad_group IN ({quoted})"


def fetch_search_terms(account, query: str, ignore_words: Iterable[str] = ()) -> List[str]:
    """
    Run the search term query and drop ignored terms.

    Args:
        account: Account facade exposing run_query()
        query: Full GAQL query selecting search_term_view.search_term
        ignore_words: Search terms that must never become keywords

    Returns:
        Search terms in report order
    """
    ignored = set(ignore_words)
    terms = [row[SEARCH_TERM_FIELD] for row in account.run_query(query)]
    kept = [t for t in terms if t not in ignored]

    if len(kept) != len(terms):
        logger.info(f"Ignored {len(terms) - len(kept)} search terms matching ignore words")
    return kept


def extract_query_predicates(query: str) -> str:
    """
    Filter predicates of a GAQL query (text between WHERE and ORDER BY/LIMIT/PARAMETERS).

    Returns an empty string when the query has no WHERE clause.
    """
    parts = query.split("WHERE", 1)
    if len(parts) < 2:
        return ""
    predicates = parts[1]
    for keyword in ("ORDER BY", "LIMIT", "PARAMETERS"):
        predicates = predicates.split(keyword, 1)[0]
    return predicates.strip()
