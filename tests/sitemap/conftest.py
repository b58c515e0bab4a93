"""Shared fixtures for sitemap tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from seolinks.sitemap.config import SitemapConfig
from seolinks.sitemap.types import (
    CityCategoryRow,
    CityRow,
    CountryCategoryRow,
    PlaceRow,
    ProvinceRow,
)

TODAY = "2024-05-01"


class FakeDirectorySource:
    """Fixed rows for a tiny two-city directory."""

    def __init__(self, **overrides) -> None:
        self.rows = {
            "countries": ["netherlands"],
            "provinces": [
                ProvinceRow(
                    province_slug="noord-holland",
                    country_slug="netherlands",
                    updated_at=datetime(2024, 3, 2, 10, 30, tzinfo=timezone.utc),
                ),
            ],
            "cities": [
                CityRow(city_slug="amsterdam", country_slug="netherlands", province_slug="noord-holland"),
                CityRow(city_slug="utrecht", country_slug="netherlands"),
            ],
            "city_category_pairs": [
                CityCategoryRow(
                    city_slug="amsterdam",
                    country_slug="netherlands",
                    category_slug="veterinary",
                    province_slug="noord-holland",
                ),
            ],
            "places": [],
            "country_category_pairs": [
                CountryCategoryRow(country_slug="netherlands", category_slug="veterinary"),
                CountryCategoryRow(country_slug="netherlands", category_slug="grooming"),
            ],
        }
        self.rows.update(overrides)

    async def countries(self):
        return self.rows["countries"]

    async def provinces(self):
        return self.rows["provinces"]

    async def cities(self):
        return self.rows["cities"]

    async def city_category_pairs(self):
        return self.rows["city_category_pairs"]

    async def places(self):
        return self.rows["places"]

    async def country_category_pairs(self):
        return self.rows["country_category_pairs"]

    async def counts(self):
        return {
            "countries": len(self.rows["countries"]),
            "cities": len(self.rows["cities"]),
            "categories": 2,
            "places": len({row.place_slug for row in self.rows["places"]}),
        }


def make_place(slug: str, category: str = "veterinary", **overrides) -> PlaceRow:
    values = {
        "place_slug": slug,
        "city_slug": "utrecht",
        "country_slug": "netherlands",
        "category_slug": category,
    }
    values.update(overrides)
    return PlaceRow(**values)


@pytest.fixture()
def config() -> SitemapConfig:
    return SitemapConfig(base_url="https://example.com", locales=("nl", "en"))


@pytest.fixture()
def source() -> FakeDirectorySource:
    return FakeDirectorySource()
