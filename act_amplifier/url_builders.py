"""
Final URL builders for new keywords.

A builder receives the created Keyword and returns a URL string. Configure one
with a dotted path, e.g. ``final_url_builder: "my_builders:landing_page"``.
"""
from __future__ import annotations

import importlib
from typing import Callable, Optional
from urllib.parse import quote

from .models import Keyword

EXAMPLE_BASE_URL = "https://example.com"
# Punctuation kept unescaped in the p= parameter
URL_SAFE_CHARS = "!*'()"


def build_final_url(keyword: Keyword) -> str:
    """Sample builder: https://example.com?p=<keyword text>."""
    return f"{EXAMPLE_BASE_URL}?p={quote(keyword.text, safe=URL_SAFE_CHARS)}"


def build_mobile_final_url(keyword: Keyword) -> str:
    """Sample builder for the mobile final URL."""
    return f"{EXAMPLE_BASE_URL}?p={quote(keyword.text, safe=URL_SAFE_CHARS)}"


def resolve_builder(path: Optional[str]) -> Optional[Callable[[Keyword], str]]:
    """
    Import a builder from 'package.module:function' (or 'package.module.function').

    Returns None when path is empty.
    """
    if not path:
        return None

    if ":" in path:
        module_name, func_name = path.split(":", 1)
    else:
        module_name, _, func_name = path.rpartition(".")
    if not module_name or not func_name:
        raise ValueError(f"Invalid URL builder path: {path}")

    module = importlib.import_module(module_name)
    builder = getattr(module, func_name, None)
    if not callable(builder):
        raise ValueError(f"URL builder {path} is not callable")
    return builder
