"""
Search Term Amplifier for Ads Control Tower

Promotes converting search terms to keywords or negative keywords:
- Search term extraction (GAQL)
- Keyword dedup, creation, labeling and URLs
- Negative keyword mode
- Email report
"""

__version__ = "1.0.0"

from .config import AmplifierConfig, load_amplifier_config
from .match_types import apply_match_type
from .workflow import run_amplifier

__all__ = [
    "AmplifierConfig",
    "load_amplifier_config",
    "apply_match_type",
    "run_amplifier",
]
