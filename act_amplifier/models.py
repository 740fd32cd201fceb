"""
Amplifier data models: entity handles, keyword operations and run results.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class Campaign:
    """Handle to a campaign in the account."""
    id: str
    name: str


@dataclass(frozen=True)
class AdGroup:
    """Handle to an ad group in the account."""
    id: str
    name: str
    campaign: Campaign
    ad_group_type: str = "SEARCH_STANDARD"   # SEARCH_STANDARD | SEARCH_DYNAMIC_ADS | ...


@dataclass
class Keyword:
    """A positive keyword in an ad group (existing or just created)."""
    text: str                               # without match type syntax
    match_type: str                         # EXACT | PHRASE | BROAD
    ad_group: AdGroup
    id: Optional[str] = None                # criterion id
    enabled: bool = True
    final_url: Optional[str] = None
    mobile_final_url: Optional[str] = None
    labels: List[str] = field(default_factory=list)

    @property
    def campaign(self) -> Campaign:
        return self.ad_group.campaign

    @property
    def display_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class NegativeKeyword:
    """A negative keyword submitted to an ad group."""
    ad_group: AdGroup
    text: str
    match_type: str

    @property
    def campaign(self) -> Campaign:
        return self.ad_group.campaign

    @property
    def display_text(self) -> str:
        return f"{self.text} [NEGATIVE]"


@dataclass
class KeywordOperation:
    """Outcome of a keyword creation request."""
    succeeded: bool
    result: Optional[Keyword] = None
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class KeywordError:
    """A keyword that could not be added."""
    reason: str
    ad_group_name: str
    keyword_text: str

    def __str__(self) -> str:
        return f"{self.reason}, {self.ad_group_name}, {self.keyword_text}"


@dataclass
class ReconciliationResult:
    """Keywords created, errors recorded and candidates skipped by one reconciliation call."""
    created_keywords: List[Any] = field(default_factory=list)   # Keyword | NegativeKeyword
    errors: List[KeywordError] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def merge(self, other: "ReconciliationResult") -> "ReconciliationResult":
        self.created_keywords.extend(other.created_keywords)
        self.errors.extend(other.errors)
        self.skipped.extend(other.skipped)
        return self


@dataclass
class RunSummary:
    """What a whole amplifier run did."""
    created_keywords: List[Any]
    errors: List[KeywordError]
    outcome: str                            # SUCCEEDED | SUCCEEDED with errors | FAILED
    preview: bool = False
    report_sent: bool = False
    ad_groups_processed: int = 0
