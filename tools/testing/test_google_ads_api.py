"""
Google Ads account adapter tests (mocked GoogleAdsClient).

Run: pytest tools/testing/test_google_ads_api.py
"""

from enum import IntEnum
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from google.ads.googleads.errors import GoogleAdsException

from act_amplifier.google_ads_api import (
    GoogleAdsAccount,
    gaql_list,
    gaql_string,
    row_value,
    select_fields,
)
from act_amplifier.models import Keyword


class KeywordMatchType(IntEnum):
    EXACT = 2
    PHRASE = 3
    BROAD = 4


class CriterionStatus(IntEnum):
    ENABLED = 2
    PAUSED = 3


def _client(rows=None):
    client = Mock()
    client.get_type.side_effect = lambda name: Mock(name=name)
    client.get_service.return_value.search.return_value = rows or []
    return client


def _google_ads_exception(message="Keyword text is too long"):
    failure = Mock()
    failure.errors = [Mock(message=message)]
    return GoogleAdsException(Mock(), Mock(), failure, "request-1")


# ============================================================================
# GAQL helpers
# ============================================================================


def test_gaql_string_escapes_quotes():
    assert gaql_string("kid's shoes") == "'kid\\'s shoes'"


def test_gaql_list():
    assert gaql_list(["a", "b"]) == "('a', 'b')"


def test_select_fields():
    query = "SELECT search_term_view.search_term, metrics.clicks\nFROM search_term_view WHERE x > 0"
    assert select_fields(query) == ["search_term_view.search_term", "metrics.clicks"]


def test_select_fields_rejects_non_select():
    with pytest.raises(ValueError):
        select_fields("DELETE everything")


def test_row_value_nested_field():
    row = SimpleNamespace(search_term_view=SimpleNamespace(search_term="red shoes"))
    assert row_value(row, "search_term_view.search_term") == "red shoes"


def test_row_value_enum_by_name():
    row = SimpleNamespace(ad_group=SimpleNamespace(type_=KeywordMatchType.EXACT))
    assert row_value(row, "ad_group.type") == "EXACT"


def test_row_value_repeated_field():
    row = SimpleNamespace(ad_group_criterion=SimpleNamespace(final_urls=("https://example.com",)))
    assert row_value(row, "ad_group_criterion.final_urls") == ["https://example.com"]


# ============================================================================
# Account
# ============================================================================


def test_customer_id_dashes_removed():
    account = GoogleAdsAccount(_client(), "123-456-7890")
    assert account.customer_id == "1234567890"
    assert account.is_preview() is True


def test_run_query_returns_dicts():
    rows = [SimpleNamespace(search_term_view=SimpleNamespace(search_term="red shoes"))]
    client = _client(rows)
    account = GoogleAdsAccount(client, "1234567890")

    result = account.run_query("SELECT search_term_view.search_term FROM search_term_view")

    assert result == [{"search_term_view.search_term": "red shoes"}]
    client.get_service.return_value.search.assert_called_once()


def test_run_query_reraises_api_errors():
    client = _client()
    client.get_service.return_value.search.side_effect = _google_ads_exception()
    account = GoogleAdsAccount(client, "1234567890")

    with pytest.raises(GoogleAdsException):
        account.run_query("SELECT campaign.name FROM campaign")


def test_account_name():
    rows = [SimpleNamespace(customer=SimpleNamespace(descriptive_name="My Account"))]
    account = GoogleAdsAccount(_client(rows), "1234567890")
    assert account.account_name == "My Account"


def _keyword_row(text="red shoes", match_type=KeywordMatchType.EXACT):
    criterion = SimpleNamespace(
        criterion_id=987,
        keyword=SimpleNamespace(text=text, match_type=match_type),
        status=CriterionStatus.PAUSED,
        final_urls=[],
        final_mobile_urls=["https://m.example.com"],
    )
    return SimpleNamespace(ad_group_criterion=criterion)


def test_find_keywords_maps_rows(ad_group):
    account = GoogleAdsAccount(_client([_keyword_row()]), "1234567890")

    found = account.find_keywords(ad_group, "red shoes", "EXACT")

    assert found == [
        Keyword(
            text="red shoes",
            match_type="EXACT",
            ad_group=ad_group,
            id="987",
            enabled=False,
            final_url=None,
            mobile_final_url="https://m.example.com",
        )
    ]


def test_get_ad_groups_empty_names_skips_query():
    client = _client()
    account = GoogleAdsAccount(client, "1234567890")
    assert account.get_ad_groups(names=[]) == []
    client.get_service.return_value.search.assert_not_called()


def test_create_keyword_dry_run_validates_only(ad_group):
    client = _client()
    account = GoogleAdsAccount(client, "1234567890", dry_run=True)

    operation = account.create_keyword(ad_group, "[red shoes]", max_cpc=1.5)

    assert operation.succeeded is True
    assert operation.result.text == "red shoes"
    assert operation.result.match_type == "EXACT"
    assert operation.result.id == "simulated_52781116231_red shoes"

    service = client.get_service.return_value
    request = service.mutate_ad_group_criteria.call_args.kwargs["request"]
    assert request.validate_only is True
    criterion = request.operations.extend.call_args.args[0][0].create
    assert criterion.cpc_bid_micros == 1_500_000
    assert criterion.keyword.text == "red shoes"


def test_create_keyword_live_reads_criterion_id(ad_group):
    client = _client()
    service = client.get_service.return_value
    service.mutate_ad_group_criteria.return_value.results = [
        Mock(resource_name="customers/1234567890/adGroupCriteria/52781116231~987")
    ]
    account = GoogleAdsAccount(client, "1234567890", dry_run=False)

    operation = account.create_keyword(ad_group, "shoes")

    assert operation.result.id == "987"
    request = service.mutate_ad_group_criteria.call_args.kwargs["request"]
    assert request.validate_only is False


def test_create_keyword_api_error_returns_failed_operation(ad_group):
    client = _client()
    client.get_service.return_value.mutate_ad_group_criteria.side_effect = _google_ads_exception()
    account = GoogleAdsAccount(client, "1234567890")

    operation = account.create_keyword(ad_group, '"shoes"')

    assert operation.succeeded is False
    assert operation.errors == ["Keyword text is too long"]


def test_create_existing_keyword_live_updates_bid_only(ad_group):
    client = _client([_keyword_row()])
    # No .create on the operation: creating a duplicate raises AttributeError
    client.get_type.side_effect = lambda name: (
        Mock(spec=["update", "update_mask"], name=name)
        if name == "AdGroupCriterionOperation" else Mock(name=name)
    )
    account = GoogleAdsAccount(client, "1234567890", dry_run=False)

    with patch("act_amplifier.google_ads_api.protobuf_helpers.field_mask") as field_mask:
        operation = account.create_keyword(ad_group, "[red shoes]", max_cpc=1.5)

    assert operation.succeeded is True
    assert operation.result.id == "987"

    service = client.get_service.return_value
    service.mutate_ad_group_criteria.assert_called_once()
    request = service.mutate_ad_group_criteria.call_args.kwargs["request"]
    assert request.validate_only is False
    update = request.operations.extend.call_args.args[0][0]
    assert update.update.cpc_bid_micros == 1_500_000
    field_mask.assert_called_once_with(None, update.update._pb)
    update.update_mask.CopyFrom.assert_called_once_with(field_mask.return_value)


def test_create_existing_keyword_dry_run_sends_nothing(ad_group):
    client = _client([_keyword_row()])
    account = GoogleAdsAccount(client, "1234567890", dry_run=True)

    operation = account.create_keyword(ad_group, "[red shoes]", max_cpc=1.5)

    assert operation.succeeded is True
    assert operation.result.id == "987"
    client.get_service.return_value.mutate_ad_group_criteria.assert_not_called()


def test_create_negative_keyword_reraises(ad_group):
    client = _client()
    client.get_service.return_value.mutate_ad_group_criteria.side_effect = _google_ads_exception()
    account = GoogleAdsAccount(client, "1234567890")

    with pytest.raises(GoogleAdsException):
        account.create_negative_keyword(ad_group, "free")


def test_create_negative_keyword_sets_negative(ad_group):
    client = _client()
    account = GoogleAdsAccount(client, "1234567890")

    account.create_negative_keyword(ad_group, "[free]")

    request = client.get_service.return_value.mutate_ad_group_criteria.call_args.kwargs["request"]
    criterion = request.operations.extend.call_args.args[0][0].create
    assert criterion.negative is True
    assert criterion.keyword.text == "free"


def test_dry_run_status_change_only_logged(ad_group):
    client = _client()
    account = GoogleAdsAccount(client, "1234567890", dry_run=True)
    keyword = Keyword("shoes", "BROAD", ad_group, id="987")

    account.set_keyword_status(keyword, False)

    assert keyword.enabled is False
    client.get_service.return_value.mutate_ad_group_criteria.assert_not_called()


def test_live_final_url_update_uses_field_mask(ad_group):
    client = _client()
    account = GoogleAdsAccount(client, "1234567890", dry_run=False)
    keyword = Keyword("shoes", "BROAD", ad_group, id="987")

    with patch("act_amplifier.google_ads_api.protobuf_helpers.field_mask") as field_mask:
        account.set_final_url(keyword, "https://example.com?p=shoes")

    field_mask.assert_called_once()
    assert keyword.final_url == "https://example.com?p=shoes"
    client.get_service.return_value.mutate_ad_group_criteria.assert_called_once()


def test_dry_run_label_application_only_logged(ad_group):
    client = _client()
    account = GoogleAdsAccount(client, "1234567890", dry_run=True)
    keyword = Keyword("shoes", "BROAD", ad_group, id="987")

    account.apply_label(keyword, "AutoAdded")

    assert keyword.labels == ["AutoAdded"]
    client.get_service.return_value.mutate_ad_group_criterion_labels.assert_not_called()


def test_create_label_dry_run_validates_only():
    client = _client()
    account = GoogleAdsAccount(client, "1234567890", dry_run=True)

    account.create_label("AutoAdded")

    request = client.get_service.return_value.mutate_labels.call_args.kwargs["request"]
    assert request.validate_only is True
