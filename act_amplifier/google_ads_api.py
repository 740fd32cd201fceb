"""
Google Ads API account adapter for the amplifier.

Handles:
- GAQL queries (search term report, campaigns, ad groups, keywords, labels)
- Keyword operations (create, remove, status, final URLs)
- Negative keyword creation
- Label creation and keyword labeling
- Client authentication
- Dry-run mode (mutations sent with validate_only, maintenance calls logged)
"""

import re
from typing import Dict, Iterable, List, Optional

from google.ads.googleads.client import GoogleAdsClient
from google.ads.googleads.errors import GoogleAdsException
from google.api_core import protobuf_helpers

from .logging_config import setup_logging
from .match_types import parse_match_type
from .models import AdGroup, Campaign, Keyword, KeywordOperation

logger = setup_logging(__name__)

MICROS_PER_UNIT = 1_000_000

_SELECT_RE = re.compile(r"SELECT\s+(.*?)\s+FROM\s", re.IGNORECASE | re.DOTALL)


def load_google_ads_client(config_path: str) -> GoogleAdsClient:
    """
    Load Google Ads API client from YAML configuration.

    Args:
        config_path: Path to google-ads.yaml file

    Returns:
        GoogleAdsClient instance

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    logger.info(f"Loading Google Ads client from {config_path}")

    try:
        client = GoogleAdsClient.load_from_storage(config_path)
        logger.info("Google Ads client loaded successfully")
        return client
    except FileNotFoundError:
        logger.error(f"Config file not found: {config_path}")
        raise
    except Exception as e:
        logger.error(f"Failed to load Google Ads client: {str(e)}")
        raise


def gaql_string(value: str) -> str:
    """Quote a value as a GAQL string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def gaql_list(values: Iterable[str]) -> str:
    return "(" + ", ".join(gaql_string(v) for v in values) + ")"


def select_fields(query: str) -> List[str]:
    """Field names of a GAQL SELECT clause."""
    match = _SELECT_RE.search(query)
    if not match:
        raise ValueError(f"Not a GAQL SELECT query: {query[:80]}")
    return [f.strip() for f in match.group(1).split(",") if f.strip()]


def row_value(row, field: str):
    """
    Read a dotted field ('search_term_view.search_term') from a GoogleAdsRow.

    Enum values are returned by name, repeated fields as lists.
    """
    value = row
    for part in field.split("."):
        # proto-plus renames fields that shadow Python builtins
        if part == "type":
            part = "type_"
        value = getattr(value, part)
    if hasattr(value, "name") and isinstance(value, int):
        return value.name
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    try:
        return list(value)
    except TypeError:
        return value


def _google_ads_errors(ex: GoogleAdsException) -> List[str]:
    return [error.message for error in ex.failure.errors] or [str(ex)]


class GoogleAdsAccount:
    """
    One Google Ads account, seen through the operations the amplifier needs.

    In dry-run mode keyword, negative keyword and label creation are sent with
    validate_only (the API checks them, nothing is written) and follow-up
    changes on created keywords are only logged.
    """

    def __init__(self, client: GoogleAdsClient, customer_id: str, dry_run: bool = True):
        """
        Initialize account adapter.

        Args:
            client: GoogleAdsClient instance
            customer_id: Google Ads customer ID (dashes allowed)
            dry_run: If True, validate mutations without applying them
        """
        self.client = client
        self.customer_id = str(customer_id).replace("-", "")
        self.dry_run = dry_run
        self._account_name: Optional[str] = None
        self._label_resources: Dict[str, str] = {}

        mode = "DRY-RUN" if dry_run else "LIVE"
        logger.info(f"GoogleAdsAccount initialized: customer_id={self.customer_id}, mode={mode}")

    # ========================================================================
    # ACCOUNT
    # ========================================================================

    def is_preview(self) -> bool:
        return self.dry_run

    @property
    def account_name(self) -> str:
        if self._account_name is None:
            rows = self.run_query("SELECT customer.descriptive_name FROM customer")
            self._account_name = rows[0]["customer.descriptive_name"] if rows else ""
        return self._account_name

    def run_query(self, query: str) -> List[dict]:
        """
        Run a GAQL query.

        Returns:
            One dict per row, keyed by the selected field names

        Raises:
            GoogleAdsException: If API call fails
        """
        ga_service = self.client.get_service("GoogleAdsService")
        fields = select_fields(query)

        try:
            response = ga_service.search(customer_id=self.customer_id, query=query)
            return [{f: row_value(row, f) for f in fields} for row in response]
        except GoogleAdsException as ex:
            logger.error(f"Query failed: {ex}")
            raise

    # ========================================================================
    # CAMPAIGNS & AD GROUPS
    # ========================================================================

    def campaign_names(self) -> List[str]:
        rows = self.run_query(
            "SELECT campaign.name FROM campaign WHERE campaign.status != 'REMOVED'"
        )
        return [r["campaign.name"] for r in rows]

    def get_campaigns(self, names: List[str]) -> List[Campaign]:
        if not names:
            return []
        rows = self.run_query(
            "SELECT campaign.id, campaign.name FROM campaign"
            " WHERE campaign.status != 'REMOVED'"
            f" AND campaign.name IN {gaql_list(names)}"
        )
        return [Campaign(id=str(r["campaign.id"]), name=r["campaign.name"]) for r in rows]

    def get_ad_groups(self, names: Optional[List[str]] = None, campaign: Optional[Campaign] = None,
                      exclude_types: Iterable[str] = ()) -> List[AdGroup]:
        """
        Fetch ad groups by name and/or campaign.

        Args:
            names: Ad group names (None = any name, [] = nothing)
            campaign: Restrict to this campaign
            exclude_types: Ad group types to leave out (e.g. SEARCH_DYNAMIC_ADS)
        """
        if names is not None and not names:
            return []

        conditions = ["ad_group.status != 'REMOVED'"]
        if names is not None:
            conditions.append(f"ad_group.name IN {gaql_list(names)}")
        if campaign is not None:
            conditions.append(f"campaign.id = {int(campaign.id)}")
        exclude_types = list(exclude_types)
        if exclude_types:
            conditions.append(f"ad_group.type NOT IN {gaql_list(exclude_types)}")

        rows = self.run_query(
            "SELECT ad_group.id, ad_group.name, ad_group.type, campaign.id, campaign.name"
            " FROM ad_group WHERE " + " AND ".join(conditions)
        )
        return [
            AdGroup(
                id=str(r["ad_group.id"]),
                name=r["ad_group.name"],
                campaign=Campaign(id=str(r["campaign.id"]), name=r["campaign.name"]),
                ad_group_type=r["ad_group.type"],
            )
            for r in rows
        ]

    def _ad_group_path(self, ad_group: AdGroup) -> str:
        service = self.client.get_service("AdGroupCriterionService")
        return service.ad_group_path(self.customer_id, ad_group.id)

    def _criterion_path(self, keyword: Keyword) -> str:
        service = self.client.get_service("AdGroupCriterionService")
        return service.ad_group_criterion_path(self.customer_id, keyword.ad_group.id, keyword.id)

    # ========================================================================
    # KEYWORD OPERATIONS
    # ========================================================================

    def find_keywords(self, ad_group: AdGroup, text: str, match_type: str) -> List[Keyword]:
        """Positive keywords in ad_group with exactly this text and match type."""
        rows = self.run_query(
            "SELECT ad_group_criterion.criterion_id, ad_group_criterion.keyword.text,"
            " ad_group_criterion.keyword.match_type, ad_group_criterion.status,"
            " ad_group_criterion.final_urls, ad_group_criterion.final_mobile_urls"
            " FROM ad_group_criterion"
            f" WHERE ad_group_criterion.ad_group = {gaql_string(self._ad_group_path(ad_group))}"
            " AND ad_group_criterion.type = 'KEYWORD'"
            " AND ad_group_criterion.negative = FALSE"
            " AND ad_group_criterion.status != 'REMOVED'"
            f" AND ad_group_criterion.keyword.text = {gaql_string(text)}"
            f" AND ad_group_criterion.keyword.match_type = '{match_type}'"
        )
        return [
            Keyword(
                text=r["ad_group_criterion.keyword.text"],
                match_type=r["ad_group_criterion.keyword.match_type"],
                ad_group=ad_group,
                id=str(r["ad_group_criterion.criterion_id"]),
                enabled=r["ad_group_criterion.status"] == "ENABLED",
                final_url=(r["ad_group_criterion.final_urls"] or [None])[0],
                mobile_final_url=(r["ad_group_criterion.final_mobile_urls"] or [None])[0],
            )
            for r in rows
        ]

    def _mutate_criteria(self, operations: list):
        service = self.client.get_service("AdGroupCriterionService")
        request = self.client.get_type("MutateAdGroupCriteriaRequest")
        request.customer_id = self.customer_id
        request.operations.extend(operations)
        request.validate_only = self.dry_run
        return service.mutate_ad_group_criteria(request=request)

    def create_keyword(self, ad_group: AdGroup, formatted_text: str,
                       max_cpc: Optional[float] = None) -> KeywordOperation:
        """
        Create a keyword from match type formatted text ('[a b]', '"a b"', 'a b').

        An existing keyword with the same identity is updated in place (max CPC)
        and returned as the operation result.

        Returns:
            KeywordOperation; API errors are reported in .errors, never raised
        """
        text, match_type = parse_match_type(formatted_text)
        bid_micros = int(round(max_cpc * MICROS_PER_UNIT)) if max_cpc else None

        existing = self.find_keywords(ad_group, text, match_type)
        if existing:
            keyword = existing[0]
            if bid_micros is not None:
                self._update_criterion(keyword, cpc_bid_micros=bid_micros)
            return KeywordOperation(succeeded=True, result=keyword)

        operation = self.client.get_type("AdGroupCriterionOperation")
        criterion = operation.create
        criterion.ad_group = self._ad_group_path(ad_group)
        criterion.status = self.client.enums.AdGroupCriterionStatusEnum.ENABLED
        criterion.keyword.text = text
        criterion.keyword.match_type = getattr(self.client.enums.KeywordMatchTypeEnum, match_type)
        if bid_micros is not None:
            criterion.cpc_bid_micros = bid_micros

        try:
            response = self._mutate_criteria([operation])
        except GoogleAdsException as ex:
            logger.error(f"Failed to add keyword '{formatted_text}' to {ad_group.name}: {ex}")
            return KeywordOperation(succeeded=False, errors=_google_ads_errors(ex))

        if self.dry_run:
            logger.info(f"DRY RUN: Would add keyword {formatted_text} to ad group {ad_group.name}")
            keyword_id = f"simulated_{ad_group.id}_{text}"
        else:
            keyword_id = response.results[0].resource_name.split("~")[-1]

        return KeywordOperation(
            succeeded=True,
            result=Keyword(text=text, match_type=match_type, ad_group=ad_group, id=keyword_id),
        )

    def remove_keyword(self, keyword: Keyword) -> None:
        """
        Remove a keyword.

        Raises:
            GoogleAdsException: If API call fails
        """
        operation = self.client.get_type("AdGroupCriterionOperation")
        operation.remove = self._criterion_path(keyword)

        try:
            self._mutate_criteria([operation])
        except GoogleAdsException as ex:
            logger.error(f"Failed to remove keyword {keyword.text}: {ex}")
            raise

        if self.dry_run:
            logger.info(f"DRY RUN: Would remove keyword {keyword.text} from {keyword.ad_group.name}")

    def create_negative_keyword(self, ad_group: AdGroup, formatted_text: str) -> None:
        """
        Add a negative keyword to an ad group.

        Raises:
            GoogleAdsException: If API call fails
        """
        text, match_type = parse_match_type(formatted_text)

        operation = self.client.get_type("AdGroupCriterionOperation")
        criterion = operation.create
        criterion.ad_group = self._ad_group_path(ad_group)
        criterion.negative = True
        criterion.keyword.text = text
        criterion.keyword.match_type = getattr(self.client.enums.KeywordMatchTypeEnum, match_type)

        try:
            self._mutate_criteria([operation])
        except GoogleAdsException as ex:
            logger.error(f"Failed to add negative keyword {formatted_text}: {ex}")
            raise

        if self.dry_run:
            logger.info(f"DRY RUN: Would add negative keyword {formatted_text} to {ad_group.name}")

    def _update_criterion(self, keyword: Keyword, **fields) -> None:
        """Update fields of an existing keyword criterion (field mask built from the set fields)."""
        if self.dry_run:
            logger.info(f"DRY RUN: Would update keyword {keyword.text} ({keyword.id}): {fields}")
            return

        operation = self.client.get_type("AdGroupCriterionOperation")
        criterion = operation.update
        criterion.resource_name = self._criterion_path(keyword)
        for name, value in fields.items():
            if isinstance(value, list):
                getattr(criterion, name).extend(value)
            else:
                setattr(criterion, name, value)

        field_mask = protobuf_helpers.field_mask(None, criterion._pb)
        operation.update_mask.CopyFrom(field_mask)

        try:
            self._mutate_criteria([operation])
        except GoogleAdsException as ex:
            logger.error(f"Failed to update keyword {keyword.text}: {ex}")
            raise

    def set_keyword_status(self, keyword: Keyword, enabled: bool) -> None:
        status_enum = self.client.enums.AdGroupCriterionStatusEnum
        status = status_enum.ENABLED if enabled else status_enum.PAUSED
        self._update_criterion(keyword, status=status)
        keyword.enabled = enabled

    def set_final_url(self, keyword: Keyword, url: str) -> None:
        self._update_criterion(keyword, final_urls=[url])
        keyword.final_url = url

    def set_mobile_final_url(self, keyword: Keyword, url: str) -> None:
        self._update_criterion(keyword, final_mobile_urls=[url])
        keyword.mobile_final_url = url

    # ========================================================================
    # LABELS
    # ========================================================================

    def _find_label_resource(self, name: str) -> Optional[str]:
        if name in self._label_resources:
            return self._label_resources[name]
        rows = self.run_query(
            f"SELECT label.resource_name FROM label WHERE label.name = {gaql_string(name)}"
        )
        if not rows:
            return None
        self._label_resources[name] = rows[0]["label.resource_name"]
        return self._label_resources[name]

    def label_exists(self, name: str) -> bool:
        return self._find_label_resource(name) is not None

    def create_label(self, name: str) -> None:
        """
        Create an account label.

        Raises:
            GoogleAdsException: If API call fails
        """
        label_service = self.client.get_service("LabelService")
        operation = self.client.get_type("LabelOperation")
        operation.create.name = name

        request = self.client.get_type("MutateLabelsRequest")
        request.customer_id = self.customer_id
        request.operations.append(operation)
        request.validate_only = self.dry_run

        try:
            response = label_service.mutate_labels(request=request)
        except GoogleAdsException as ex:
            logger.error(f"Failed to create label {name}: {ex}")
            raise

        if self.dry_run:
            logger.info(f"DRY RUN: Would create label {name}")
        else:
            self._label_resources[name] = response.results[0].resource_name

    def apply_label(self, keyword: Keyword, name: str) -> None:
        """
        Attach an existing label to a keyword.

        Raises:
            ValueError: If the label does not exist
            GoogleAdsException: If API call fails
        """
        # run_amplifier never labels in preview; this branch serves direct callers.
        # Labels created with validate_only do not exist, so nothing can be attached.
        if self.dry_run:
            logger.info(f"DRY RUN: Would apply label {name} to keyword {keyword.text}")
            keyword.labels.append(name)
            return

        label_resource = self._find_label_resource(name)
        if label_resource is None:
            raise ValueError(f"Label not found: {name}")

        service = self.client.get_service("AdGroupCriterionLabelService")
        operation = self.client.get_type("AdGroupCriterionLabelOperation")
        operation.create.ad_group_criterion = self._criterion_path(keyword)
        operation.create.label = label_resource

        try:
            service.mutate_ad_group_criterion_labels(
                customer_id=self.customer_id, operations=[operation]
            )
        except GoogleAdsException as ex:
            logger.error(f"Failed to apply label {name} to keyword {keyword.text}: {ex}")
            raise

        keyword.labels.append(name)
