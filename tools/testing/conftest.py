"""
Shared fixtures for the amplifier tests.

Run: pytest tools/testing
"""

import sys
from pathlib import Path

import pytest

# Add project root and this directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from fake_account import FakeAdsAccount


@pytest.fixture
def account():
    """Account with one campaign and one search ad group."""
    fake = FakeAdsAccount()
    campaign = fake.add_campaign("Shoes", "1016150843")
    fake.add_ad_group(campaign, "Running", "52781116231")
    return fake


@pytest.fixture
def ad_group(account):
    return account.ad_groups[0]


@pytest.fixture
def mailer():
    """Mailer double that records sent emails."""

    class RecordingMailer:
        def __init__(self):
            self.sent = []

        def send_email(self, to_email, subject, html_body, plain_body=None):
            self.sent.append({
                "to_email": to_email,
                "subject": subject,
                "html_body": html_body,
                "plain_body": plain_body,
            })
            return True

    return RecordingMailer()
