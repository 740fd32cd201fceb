"""
Search Term Amplifier CLI.

Usage:
    python -m act_amplifier.cli run configs/amplifier.yaml
    python -m act_amplifier.cli run configs/amplifier.yaml --live
    python -m act_amplifier.cli test-query "SELECT search_term_view.search_term FROM search_term_view WHERE segments.date DURING LAST_7_DAYS"
"""
from __future__ import annotations

import argparse
import sys
from typing import Optional

from .config import load_amplifier_config
from .email_sender import EmailSender
from .exceptions import AmplifierError, ConfigError
from .google_ads_api import GoogleAdsAccount, load_google_ads_client
from .logging_config import set_log_level
from .reporter import OUTCOME_FAILED
from .settings import Settings, get_settings
from .workflow import run_amplifier


def _resolve_customer_id(args: argparse.Namespace, settings: Settings,
                         config_customer_id: Optional[str] = None) -> Optional[str]:
    return args.customer_id or config_customer_id or settings.google_ads_customer_id


def _build_mailer(settings: Settings) -> Optional[EmailSender]:
    if not settings.smtp_configured:
        return None
    return EmailSender(
        smtp_host=settings.smtp_host,
        smtp_port=settings.smtp_port,
        smtp_user=settings.smtp_user,
        smtp_password=settings.smtp_password,
        from_email=settings.smtp_from,
    )


def cmd_run(args: argparse.Namespace) -> int:
    settings = get_settings()
    set_log_level(settings.log_level)

    try:
        config = load_amplifier_config(args.config_path)
    except (ConfigError, FileNotFoundError) as e:
        print(f"[Amplifier] ERROR: {e}", file=sys.stderr)
        return 2

    customer_id = _resolve_customer_id(args, settings, config.google_ads.customer_id)
    if not customer_id:
        print("[Amplifier] ERROR: No customer id (use --customer-id, google_ads.customer_id "
              "or GOOGLE_ADS_CUSTOMER_ID)", file=sys.stderr)
        return 2

    client = load_google_ads_client(args.google_ads_config or settings.google_ads_config_path)
    account = GoogleAdsAccount(client, customer_id, dry_run=not args.live)

    mailer = _build_mailer(settings)
    if config.mail_recipients and mailer is None:
        print("[Amplifier] WARNING: mail_recipients set but SMTP_* settings missing, "
              "report will not be sent")

    try:
        summary = run_amplifier(account, config, mailer=mailer)
    except AmplifierError as e:
        print(f"[Amplifier] ERROR: {e}", file=sys.stderr)
        return 1

    mode = "PREVIEW" if summary.preview else "LIVE"
    print(f"[Amplifier] [{summary.outcome}] mode={mode}")
    print(f"[Amplifier]   ad groups processed: {summary.ad_groups_processed}")
    print(f"[Amplifier]   keywords added:      {len(summary.created_keywords)}")
    print(f"[Amplifier]   errors:              {len(summary.errors)}")
    for error in summary.errors:
        print(f"[Amplifier]     - {error}")
    print(f"[Amplifier]   report sent:         {summary.report_sent}")

    return 1 if summary.outcome == OUTCOME_FAILED else 0


def cmd_test_query(args: argparse.Namespace) -> int:
    """Run a GAQL query and print its rows, to try out search term criteria."""
    settings = get_settings()
    set_log_level(settings.log_level)

    query = args.query
    config_customer_id = None
    if args.config:
        try:
            config = load_amplifier_config(args.config)
        except (ConfigError, FileNotFoundError) as e:
            print(f"[Amplifier] ERROR: {e}", file=sys.stderr)
            return 2
        query = query or config.search_term_query
        config_customer_id = config.google_ads.customer_id

    if not query:
        print("[Amplifier] ERROR: Give a query or --config", file=sys.stderr)
        return 2

    customer_id = _resolve_customer_id(args, settings, config_customer_id)
    if not customer_id:
        print("[Amplifier] ERROR: No customer id", file=sys.stderr)
        return 2

    client = load_google_ads_client(args.google_ads_config or settings.google_ads_config_path)
    account = GoogleAdsAccount(client, customer_id, dry_run=True)

    rows = account.run_query(query)
    for row in rows[: args.limit]:
        print(row)
    print(f"[Amplifier] {len(rows)} rows")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="search-term-amplifier")
    sub = p.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Add search terms as keywords (preview unless --live)")
    p_run.add_argument("config_path", help="Path to amplifier config YAML")
    p_run.add_argument("--google-ads-config", default=None, help="Path to google-ads.yaml")
    p_run.add_argument("--customer-id", default=None, help="Google Ads customer ID")
    p_run.add_argument(
        "--live",
        action="store_true",
        help="Apply changes. Without this flag the run is a preview (nothing is written).",
    )
    p_run.set_defaults(func=cmd_run)

    p_query = sub.add_parser("test-query", help="Run a GAQL query and print the rows")
    p_query.add_argument("query", nargs="?", default=None, help="GAQL query")
    p_query.add_argument("--config", default=None, help="Use search_term_query from this config")
    p_query.add_argument("--google-ads-config", default=None, help="Path to google-ads.yaml")
    p_query.add_argument("--customer-id", default=None, help="Google Ads customer ID")
    p_query.add_argument("--limit", type=int, default=50, help="Rows to print")
    p_query.set_defaults(func=cmd_test_query)

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
