"""Sitemap URL builders, one per sitemap section.

Each builder reads its rows from a ``SitemapDataSource`` and emits one
``SitemapUrl`` per configured locale, with the locale loop innermost so
every entity's URLs stay contiguous. A missing data source means the
section is disabled and the builder returns an empty list.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from typing import Awaitable, Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from .config import PAGE_CHANGEFREQ, PAGE_PRIORITIES, SitemapConfig, load_sitemap_config
from .types import (
    ChangeFreq,
    CityCategoryRow,
    CityRow,
    CountryCategoryRow,
    PlaceRow,
    ProvinceRow,
    SitemapUrl,
)

PROVINCE_PRIORITY = 0.85
PREMIUM_PLACE_PRIORITY = 0.8
CLOSED_STATUS = "permanently_closed"

# (path, priority, changefreq) for pages outside the directory graph.
STATIC_PAGES: Tuple[Tuple[str, float, ChangeFreq], ...] = (
    ("about", PAGE_PRIORITIES["about"], PAGE_CHANGEFREQ["about"]),
    ("contact", PAGE_PRIORITIES["contact"], PAGE_CHANGEFREQ["contact"]),
    ("privacy", PAGE_PRIORITIES["privacy"], PAGE_CHANGEFREQ["privacy"]),
    ("terms", PAGE_PRIORITIES["terms"], PAGE_CHANGEFREQ["terms"]),
    ("for-businesses", 0.6, ChangeFreq.MONTHLY),
    ("search", 0.5, ChangeFreq.DAILY),
)


class SitemapDataSource(Protocol):
    """Read-only row queries used to enumerate the directory graph."""

    async def countries(self) -> Sequence[str]: ...

    async def provinces(self) -> Sequence[ProvinceRow]: ...

    async def cities(self) -> Sequence[CityRow]: ...

    async def city_category_pairs(self) -> Sequence[CityCategoryRow]: ...

    async def places(self) -> Sequence[PlaceRow]: ...

    async def country_category_pairs(self) -> Sequence[CountryCategoryRow]: ...

    async def counts(self) -> Dict[str, int]: ...


SectionBuilder = Callable[..., Awaitable[List[SitemapUrl]]]


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _lastmod(updated_at: Optional[date], today: str) -> str:
    if updated_at is None:
        return today
    return updated_at.isoformat()[:10]


def _city_path(country_slug: str, province_slug: Optional[str], city_slug: str) -> str:
    if province_slug:
        return f"{country_slug}/p/{province_slug}/{city_slug}"
    return f"{country_slug}/{city_slug}"


async def build_home_urls(
    source: Optional[SitemapDataSource] = None,
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    config = config or load_sitemap_config()
    today = today or today_iso()
    return [
        SitemapUrl(
            loc=f"{config.base_url}/{locale}",
            lastmod=today,
            changefreq=PAGE_CHANGEFREQ["home"],
            priority=PAGE_PRIORITIES["home"],
        )
        for locale in config.locales
    ]


async def build_static_urls(
    source: Optional[SitemapDataSource] = None,
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    config = config or load_sitemap_config()
    today = today or today_iso()
    urls: List[SitemapUrl] = []
    for path, priority, changefreq in STATIC_PAGES:
        for locale in config.locales:
            urls.append(
                SitemapUrl(
                    loc=f"{config.base_url}/{locale}/{path}",
                    lastmod=today,
                    changefreq=changefreq,
                    priority=priority,
                )
            )
    return urls


async def build_country_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    if source is None:
        return []
    config = config or load_sitemap_config()
    today = today or today_iso()

    urls: List[SitemapUrl] = []
    for country_slug in await source.countries():
        for locale in config.locales:
            urls.append(
                SitemapUrl(
                    loc=f"{config.base_url}/{locale}/{country_slug}",
                    lastmod=today,
                    changefreq=PAGE_CHANGEFREQ["country"],
                    priority=PAGE_PRIORITIES["country"],
                )
            )
    return urls


async def build_province_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    """Province pages, e.g. ``/nl/netherlands/p/noord-holland``."""

    if source is None:
        return []
    config = config or load_sitemap_config()
    today = today or today_iso()

    urls: List[SitemapUrl] = []
    for province in await source.provinces():
        for locale in config.locales:
            urls.append(
                SitemapUrl(
                    loc=f"{config.base_url}/{locale}/{province.country_slug}/p/{province.province_slug}",
                    lastmod=_lastmod(province.updated_at, today),
                    changefreq=PAGE_CHANGEFREQ["city"],
                    priority=PROVINCE_PRIORITY,
                )
            )
    return urls


async def build_city_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    """City pages, nested under their province when they have one."""

    if source is None:
        return []
    config = config or load_sitemap_config()
    today = today or today_iso()

    urls: List[SitemapUrl] = []
    for city in await source.cities():
        path = _city_path(city.country_slug, city.province_slug, city.city_slug)
        for locale in config.locales:
            urls.append(
                SitemapUrl(
                    loc=f"{config.base_url}/{locale}/{path}",
                    lastmod=today,
                    changefreq=PAGE_CHANGEFREQ["city"],
                    priority=PAGE_PRIORITIES["city"],
                )
            )
    return urls


async def build_category_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    """Category listings within a city that has at least one place."""

    if source is None:
        return []
    config = config or load_sitemap_config()
    today = today or today_iso()

    urls: List[SitemapUrl] = []
    for pair in await source.city_category_pairs():
        path = _city_path(pair.country_slug, pair.province_slug, pair.city_slug)
        for locale in config.locales:
            urls.append(
                SitemapUrl(
                    loc=f"{config.base_url}/{locale}/{path}/{pair.category_slug}",
                    lastmod=today,
                    changefreq=PAGE_CHANGEFREQ["category"],
                    priority=PAGE_PRIORITIES["category"],
                )
            )
    return urls


async def build_place_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    """Place detail pages.

    The data source returns one row per (place, category); a place is
    published under the category of its first row only, and a set of
    already emitted URLs keeps it from appearing twice per locale.
    Permanently closed places are skipped.
    """

    if source is None:
        return []
    config = config or load_sitemap_config()
    today = today or today_iso()

    canonical_category: Dict[Tuple[str, str, str], str] = {}
    seen_urls: set[str] = set()
    urls: List[SitemapUrl] = []

    for place in await source.places():
        if place.status == CLOSED_STATUS:
            continue

        key = (place.country_slug, place.city_slug, place.place_slug)
        category_slug = canonical_category.setdefault(key, place.category_slug)
        path = _city_path(place.country_slug, place.province_slug, place.city_slug)
        priority = PREMIUM_PLACE_PRIORITY if place.is_premium else PAGE_PRIORITIES["place"]

        for locale in config.locales:
            loc = f"{config.base_url}/{locale}/{path}/{category_slug}/{place.place_slug}"
            if loc in seen_urls:
                continue
            seen_urls.add(loc)
            urls.append(
                SitemapUrl(
                    loc=loc,
                    lastmod=_lastmod(place.updated_at, today),
                    changefreq=PAGE_CHANGEFREQ["place"],
                    priority=priority,
                )
            )
    return urls


async def build_best_in_city_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    """Best-of pages per city and category."""

    if source is None:
        return []
    config = config or load_sitemap_config()
    today = today or today_iso()

    urls: List[SitemapUrl] = []
    for pair in await source.city_category_pairs():
        for locale in config.locales:
            urls.append(
                SitemapUrl(
                    loc=(
                        f"{config.base_url}/{locale}/{pair.country_slug}/"
                        f"{pair.city_slug}/best/{pair.category_slug}"
                    ),
                    lastmod=today,
                    changefreq=PAGE_CHANGEFREQ["best"],
                    priority=PAGE_PRIORITIES["best"],
                )
            )
    return urls


async def _country_category_urls(
    source: SitemapDataSource,
    config: SitemapConfig,
    today: str,
    segment: str,
    page_type: str,
) -> List[SitemapUrl]:
    urls: List[SitemapUrl] = []
    for pair in await source.country_category_pairs():
        for locale in config.locales:
            urls.append(
                SitemapUrl(
                    loc=f"{config.base_url}/{locale}/{pair.country_slug}/{segment}/{pair.category_slug}",
                    lastmod=today,
                    changefreq=PAGE_CHANGEFREQ[page_type],
                    priority=PAGE_PRIORITIES[page_type],
                )
            )
    return urls


async def build_top_in_country_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    if source is None:
        return []
    return await _country_category_urls(
        source, config or load_sitemap_config(), today or today_iso(), "top", "top"
    )


async def build_best_in_country_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    if source is None:
        return []
    return await _country_category_urls(
        source, config or load_sitemap_config(), today or today_iso(), "best", "best"
    )


async def build_category_in_country_urls(
    source: Optional[SitemapDataSource],
    config: Optional[SitemapConfig] = None,
    *,
    today: Optional[str] = None,
) -> List[SitemapUrl]:
    """Category overview pages per country, e.g. ``/nl/netherlands/c/veterinary``."""

    if source is None:
        return []
    return await _country_category_urls(
        source, config or load_sitemap_config(), today or today_iso(), "c", "category"
    )


async def get_sitemap_counts(source: Optional[SitemapDataSource]) -> Dict[str, int]:
    """Entity counts behind the sitemap, for logging."""

    if source is None:
        return {"countries": 0, "cities": 0, "categories": 0, "places": 0}
    return await source.counts()


SECTION_BUILDERS: Dict[str, SectionBuilder] = {
    "home": build_home_urls,
    "static": build_static_urls,
    "countries": build_country_urls,
    "provinces": build_province_urls,
    "cities": build_city_urls,
    "categories": build_category_urls,
    "country-categories": build_category_in_country_urls,
    "places": build_place_urls,
    "best-in-city": build_best_in_city_urls,
    "best-in-country": build_best_in_country_urls,
    "top-in-country": build_top_in_country_urls,
}


async def build_all_sections(
    source: Optional[SitemapDataSource],
    config: SitemapConfig,
    *,
    today: Optional[str] = None,
) -> Dict[str, List[SitemapUrl]]:
    """Run every section builder and return their URLs in registry order."""

    today = today or today_iso()
    results = await asyncio.gather(
        *(builder(source, config, today=today) for builder in SECTION_BUILDERS.values())
    )
    return dict(zip(SECTION_BUILDERS.keys(), results))
