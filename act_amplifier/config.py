"""
Amplifier run configuration.

Example YAML:

    script_name: "Search Term Amplifier"
    google_ads:
      customer_id: "123-456-7890"
    campaigns: ["__ALL__"]
    ad_groups: []
    labels: ["AutoAdded_{timestamp}"]
    match_type: BROAD
    max_cpc: 1.25
    mail_recipients: ["ppc@example.com"]
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .config_validator import validate_config
from .exceptions import ConfigError
from .match_types import ALL, MATCH_TYPES
from .search_terms import DEFAULT_SEARCH_TERM_QUERY

UrlBuilderRef = Union[str, Callable[..., str]]


class GoogleAdsSection(BaseModel):
    mcc_id: Optional[str] = None
    customer_id: Optional[str] = None

    @field_validator("customer_id", "mcc_id", mode="before")
    @classmethod
    def digits_only(cls, v) -> Optional[str]:
        # YAML reads an unquoted customer_id as an int
        if v is None:
            return v
        v2 = "".join(ch for ch in str(v) if ch.isdigit())
        if not v2:
            raise ValueError("google_ads ids must contain digits")
        return v2


class AmplifierConfig(BaseModel):
    """Everything one amplifier run needs. Defaults match the documented defaults."""

    script_name: str = "Search Term Amplifier"
    google_ads: GoogleAdsSection = GoogleAdsSection()

    # Where search terms come from
    campaigns: List[str] = Field(default_factory=lambda: ["__ALL__"])
    ad_groups: List[str] = Field(default_factory=list)

    # Where keywords go
    add_to_different_ad_group: bool = False
    destination_ad_group: str = ""

    # How keywords are created
    labels: List[str] = Field(default_factory=lambda: ["AutoAdded_{timestamp}"])
    enable_keywords: bool = True
    overwrite_keywords: bool = False
    max_cpc: Optional[float] = None
    match_type: str = "BROAD"
    is_negative_keywords: bool = False

    search_term_query: str = DEFAULT_SEARCH_TERM_QUERY
    mail_recipients: List[str] = Field(default_factory=list)
    ignore_words: List[str] = Field(default_factory=list)

    final_url_builder: Optional[UrlBuilderRef] = None
    mobile_final_url_builder: Optional[UrlBuilderRef] = None

    @field_validator("match_type")
    @classmethod
    def known_match_type(cls, v: str) -> str:
        v = str(v).strip().upper()
        if v not in MATCH_TYPES + (ALL,):
            raise ValueError("match_type must be EXACT, PHRASE, BROAD or ALL")
        return v

    @field_validator("max_cpc", mode="before")
    @classmethod
    def disabled_max_cpc(cls, v):
        # false / 0 / empty disable the max CPC
        if v is None or v is False or v == "" or v == 0:
            return None
        return v

    @field_validator("max_cpc")
    @classmethod
    def positive_max_cpc(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("max_cpc must be positive")
        return v

    def resolved_labels(self, run_started_at: datetime) -> List[str]:
        """Labels with {timestamp} replaced by the run start time."""
        stamp = run_started_at.isoformat(timespec="seconds")
        return [label.replace("{timestamp}", stamp) for label in self.labels]


def parse_amplifier_config(data: dict) -> AmplifierConfig:
    """Validate a config mapping, raising ConfigError listing every problem."""
    errors = validate_config(data)
    if errors:
        raise ConfigError("Invalid amplifier config:\n  - " + "\n  - ".join(errors), errors)
    try:
        return AmplifierConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid amplifier config: {e}", [str(e)]) from e


def load_amplifier_config(path: str | Path) -> AmplifierConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Amplifier config not found: {p}")

    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError("Amplifier config must be a YAML mapping/object")

    return parse_amplifier_config(data)
