"""Typed records for sitemap generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


class ChangeFreq(str, Enum):
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@dataclass(frozen=True)
class SitemapUrl:
    """One ``<url>`` entry."""

    loc: str
    lastmod: Optional[str] = None
    changefreq: Optional[ChangeFreq] = None
    priority: Optional[float] = None


@dataclass(frozen=True)
class SitemapSection:
    """One sitemap file referenced from the sitemap index."""

    id: str
    path: str
    lastmod: Optional[str] = None


@dataclass(frozen=True)
class SitemapFile:
    name: str
    urls: List[SitemapUrl] = field(default_factory=list)


@dataclass(frozen=True)
class SitemapStats:
    total_urls: int
    by_changefreq: Dict[str, int]
    by_priority: Dict[str, int]
    with_lastmod: int
    estimated_bytes: int


@dataclass(frozen=True)
class ValidationReport:
    valid: bool
    errors: List[str]


# Rows supplied by the data source.


@dataclass(frozen=True)
class ProvinceRow:
    province_slug: str
    country_slug: str
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CityRow:
    city_slug: str
    country_slug: str
    province_slug: Optional[str] = None


@dataclass(frozen=True)
class CityCategoryRow:
    city_slug: str
    country_slug: str
    category_slug: str
    province_slug: Optional[str] = None


@dataclass(frozen=True)
class PlaceRow:
    place_slug: str
    city_slug: str
    country_slug: str
    category_slug: str
    province_slug: Optional[str] = None
    status: str = "active"
    is_premium: bool = False
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CountryCategoryRow:
    country_slug: str
    category_slug: str
