"""
Existing keyword lookup tests.

Run: pytest tools/testing/test_keyword_lookup.py
"""

from unittest.mock import Mock

import pytest

from act_amplifier.exceptions import MultipleMatchesError
from act_amplifier.keyword_lookup import find_keyword


def test_returns_single_keyword(account, ad_group):
    existing = account.add_keyword(ad_group, "red shoes", "EXACT")
    assert find_keyword(account, ad_group, "red shoes", "EXACT") is existing


def test_returns_none_when_not_found(account, ad_group):
    account.add_keyword(ad_group, "red shoes", "PHRASE")
    assert find_keyword(account, ad_group, "red shoes", "EXACT") is None


def test_match_type_is_part_of_identity(account, ad_group):
    broad = account.add_keyword(ad_group, "shoes", "BROAD")
    account.add_keyword(ad_group, "shoes", "EXACT")
    assert find_keyword(account, ad_group, "shoes", "broad") is broad


def test_multiple_matches_raise(ad_group):
    account = Mock()
    account.find_keywords.return_value = iter([Mock(), Mock()])

    with pytest.raises(MultipleMatchesError) as exc_info:
        find_keyword(account, ad_group, "shoes", "BROAD")

    assert exc_info.value.count == 2
    assert "Running" in str(exc_info.value)


def test_lookup_queries_store_with_identity(ad_group):
    account = Mock()
    account.find_keywords.return_value = []

    find_keyword(account, ad_group, "shoes", "exact")

    account.find_keywords.assert_called_once_with(ad_group, "shoes", "EXACT")
