"""
Outcome report for an amplifier run.

Subject:
    [SUCCEEDED] Ads scripts: Search Term Amplifier executed on My Account: 123-456-7890

Body (HTML):
    | # | Campaign Name        | Ad Group Name     | New Keyword | Match Type |
    |---|----------------------|-------------------|-------------|------------|
    | 1 | Animals (1016150843) | Cat (52781116231) | be kind     | BROAD      |

followed by the list of errors, if any.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .logging_config import setup_logging
from .models import KeywordError
from .search_terms import extract_query_predicates

logger = setup_logging(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "amplifier_report.html"

OUTCOME_SUCCEEDED = "SUCCEEDED"
OUTCOME_SUCCEEDED_WITH_ERRORS = "SUCCEEDED with errors"
OUTCOME_FAILED = "FAILED"

_jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


def report_outcome(keywords: Sequence[Any], errors: Sequence[KeywordError]) -> str:
    if not keywords and errors:
        return OUTCOME_FAILED
    if errors:
        return OUTCOME_SUCCEEDED_WITH_ERRORS
    return OUTCOME_SUCCEEDED


def build_subject(script_name: str, account_name: str, customer_id: str,
                  keywords: Sequence[Any], errors: Sequence[KeywordError]) -> str:
    outcome = report_outcome(keywords, errors)
    return f"[{outcome}] Ads scripts: {script_name} executed on {account_name}: {customer_id}"


def _keyword_rows(keywords: Sequence[Any]) -> List[Dict[str, Any]]:
    rows = []
    for number, keyword in enumerate(keywords, 1):
        campaign = keyword.campaign
        ad_group = keyword.ad_group
        rows.append({
            "number": number,
            "campaign_name": campaign.name,
            "campaign_id": campaign.id,
            "ad_group_name": ad_group.name,
            "ad_group_id": ad_group.id,
            "keyword_text": keyword.display_text,
            "match_type": keyword.match_type,
        })
    return rows


def build_html_body(keywords: Sequence[Any], errors: Sequence[KeywordError],
                    query: str = "") -> str:
    template = _jinja_env.get_template(REPORT_TEMPLATE)
    return template.render(
        query_predicates=extract_query_predicates(query) if query else "",
        rows=_keyword_rows(keywords),
        errors=[str(e) for e in errors],
    )


def build_plain_body(keywords: Sequence[Any], errors: Sequence[KeywordError],
                     query: str = "") -> str:
    lines = []
    predicates = extract_query_predicates(query) if query else ""
    if predicates:
        lines.append(f"The Performance Criteria used: {predicates}")
        lines.append("")

    if keywords:
        lines.append("Keywords added to the account:")
        for row in _keyword_rows(keywords):
            lines.append(
                f"  {row['number']}. {row['campaign_name']}({row['campaign_id']}) / "
                f"{row['ad_group_name']}({row['ad_group_id']}) / "
                f"{row['keyword_text']} / {row['match_type']}"
            )
    else:
        lines.append("No keywords were added to the account.")

    if errors:
        lines.append("")
        lines.append("The following errors occurred:")
        lines.extend(f"  - {e}" for e in errors)

    return "\n".join(lines)


def send_reporting_email(mailer, script_name: str, recipients: Sequence[str], account,
                         keywords: Sequence[Any], errors: Sequence[KeywordError],
                         query: str = "") -> bool:
    """
    Send the run report to the recipients.

    Args:
        mailer: Object with send_email(to_email, subject, html_body, plain_body)
        script_name: Name shown in the subject
        recipients: Email addresses
        account: Account facade (account_name, customer_id)
        keywords: Keywords (or negative keywords) added during the run
        errors: Errors recorded during the run
        query: Search term query, its predicates are echoed in the body

    Returns:
        True if the mailer reported success
    """
    subject = build_subject(script_name, account.account_name, account.customer_id, keywords, errors)
    sent = mailer.send_email(
        to_email=",".join(recipients),
        subject=subject,
        html_body=build_html_body(keywords, errors, query),
        plain_body=build_plain_body(keywords, errors, query),
    )

    if sent:
        logger.info("Reporting mail sent")
    else:
        logger.warning(f"Reporting mail could not be sent to {', '.join(recipients)}")
    return sent
