"""
Ad group resolution tests.

Run: pytest tools/testing/test_group_resolver.py
"""

from fake_account import FakeAdsAccount

from act_amplifier.group_resolver import ad_group_resource_id, resolve_ad_groups


def _account():
    account = FakeAdsAccount()
    shoes = account.add_campaign("Shoes", "1")
    boots = account.add_campaign("Boots", "2")
    account.add_ad_group(shoes, "Running", "11")
    account.add_ad_group(shoes, "Dynamic", "12", ad_group_type="SEARCH_DYNAMIC_ADS")
    account.add_ad_group(boots, "Hiking", "21")
    account.add_ad_group(boots, "Winter", "22")
    return account


def _names(ad_groups):
    return [g.name for g in ad_groups]


def test_all_campaigns_in_order():
    account = _account()
    found = resolve_ad_groups(account, ["__ALL__"], [], False)
    assert _names(found) == ["Running", "Hiking", "Winter"]


def test_named_campaigns():
    account = _account()
    found = resolve_ad_groups(account, ["Boots"], ["Running"], False)
    assert _names(found) == ["Hiking", "Winter"]


def test_ad_groups_used_when_no_campaigns():
    account = _account()
    found = resolve_ad_groups(account, [], ["Winter", "Running"], False)
    assert _names(found) == ["Running", "Winter"]


def test_dynamic_search_ad_groups_excluded_for_keywords():
    account = _account()
    found = resolve_ad_groups(account, ["Shoes"], [], False)
    assert _names(found) == ["Running"]


def test_dynamic_search_ad_groups_kept_for_negatives():
    account = _account()
    found = resolve_ad_groups(account, ["Shoes"], [], True)
    assert _names(found) == ["Running", "Dynamic"]


def test_dynamic_ad_group_by_name_excluded_for_keywords():
    account = _account()
    assert resolve_ad_groups(account, [], ["Dynamic"], False) == []
    assert _names(resolve_ad_groups(account, [], ["Dynamic"], True)) == ["Dynamic"]


def test_unknown_campaign_resolves_to_nothing():
    account = _account()
    assert resolve_ad_groups(account, ["Sandals"], [], False) == []


def test_empty_account():
    account = FakeAdsAccount()
    assert resolve_ad_groups(account, ["__ALL__"], [], False) == []


def test_resource_id_strips_dashes(ad_group):
    assert ad_group_resource_id("123-456-7890", ad_group) == "customers/1234567890/adGroups/52781116231"
