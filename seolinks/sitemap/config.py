"""Configuration helpers for sitemap generation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

import yaml

from .types import ChangeFreq

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
PROTOCOL_MAX_URLS = 50_000
FALLBACK_BASE_URL = "https://www.petdirectory.nl"

PAGE_PRIORITIES: Mapping[str, float] = MappingProxyType({
    "home": 1.0,
    "country": 0.9,
    "city": 0.8,
    "category": 0.8,
    "place": 0.7,
    "best": 0.7,
    "top": 0.7,
    "about": 0.5,
    "contact": 0.5,
    "privacy": 0.3,
    "terms": 0.3,
})

PAGE_CHANGEFREQ: Mapping[str, ChangeFreq] = MappingProxyType({
    "home": ChangeFreq.DAILY,
    "country": ChangeFreq.WEEKLY,
    "city": ChangeFreq.WEEKLY,
    "category": ChangeFreq.DAILY,
    "place": ChangeFreq.WEEKLY,
    "best": ChangeFreq.WEEKLY,
    "top": ChangeFreq.WEEKLY,
    "about": ChangeFreq.MONTHLY,
    "contact": ChangeFreq.MONTHLY,
    "privacy": ChangeFreq.YEARLY,
    "terms": ChangeFreq.YEARLY,
})


@dataclass(frozen=True)
class SitemapConfig:
    """Constructed once and passed explicitly to every builder."""

    base_url: str
    locales: Tuple[str, ...] = ("nl", "en", "de")
    default_locale: str = "nl"
    max_urls_per_sitemap: int = 25_000


def default_config_values() -> Dict[str, Any]:
    return {
        "base_url": os.getenv("APP_BASE_URL") or FALLBACK_BASE_URL,
        "locales": ["nl", "en", "de"],
        "default_locale": "nl",
        "max_urls_per_sitemap": 25_000,
    }


def load_sitemap_config(path: str | Path | None = None) -> SitemapConfig:
    """Load configuration from YAML, merging with defaults."""

    data = default_config_values()
    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)
    return build_config(data)


def build_config(data: Mapping[str, Any]) -> SitemapConfig:
    locales = tuple(str(locale) for locale in data["locales"])
    if not locales:
        raise ValueError("At least one locale must be configured.")
    max_urls = int(data["max_urls_per_sitemap"])
    if not 1 <= max_urls <= PROTOCOL_MAX_URLS:
        raise ValueError(
            f"max_urls_per_sitemap must be between 1 and {PROTOCOL_MAX_URLS}, got {max_urls}."
        )
    return SitemapConfig(
        base_url=str(data["base_url"]).rstrip("/"),
        locales=locales,
        default_locale=str(data["default_locale"]),
        max_urls_per_sitemap=max_urls,
    )


def merge_into(base: Dict[str, Any], override: Mapping[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
