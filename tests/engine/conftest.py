"""Shared fixtures for link engine tests."""

from __future__ import annotations

from typing import Dict, List, Sequence

import pytest

from seolinks.engine.types import (
    CategoryLinkStats,
    CityLinkStats,
    CountryTopLists,
    RelatedPlaceLink,
)


class FakeStatsProvider:
    """In-memory provider that records every lookup it serves."""

    def __init__(
        self,
        *,
        categories: Sequence[CategoryLinkStats] = (),
        cities: Sequence[CityLinkStats] = (),
        places: Sequence[RelatedPlaceLink] = (),
        error: Exception | None = None,
    ) -> None:
        self.categories = list(categories)
        self.cities = list(cities)
        self.places = list(places)
        self.error = error
        self.calls: List[tuple[str, Dict[str, object]]] = []

    def _record(self, name: str, **kwargs: object) -> None:
        self.calls.append((name, kwargs))
        if self.error is not None:
            raise self.error

    async def top_categories_for_city(self, *, city_slug, country_slug, limit):
        self._record("top_categories_for_city", city_slug=city_slug, country_slug=country_slug, limit=limit)
        return self.categories[:limit]

    async def top_cities_for_category(self, *, country_slug, category_slug, limit):
        self._record("top_cities_for_category", country_slug=country_slug, category_slug=category_slug, limit=limit)
        return self.cities[:limit]

    async def related_places(self, *, place_id, city_slug, category_slug, limit):
        self._record("related_places", place_id=place_id, city_slug=city_slug, category_slug=category_slug, limit=limit)
        return self.places[:limit]

    async def country_top_cities_and_categories(self, *, country_slug, limit_cities, limit_categories):
        self._record(
            "country_top_cities_and_categories",
            country_slug=country_slug,
            limit_cities=limit_cities,
            limit_categories=limit_categories,
        )
        return CountryTopLists(
            top_cities=tuple(self.cities[:limit_cities]),
            top_categories=tuple(self.categories[:limit_categories]),
        )

    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


def make_categories(*pairs: tuple[str, int]) -> List[CategoryLinkStats]:
    return [CategoryLinkStats(category_slug=slug, places_count=count) for slug, count in pairs]


def make_cities(*pairs: tuple[str, int], country_slug: str = "netherlands") -> List[CityLinkStats]:
    return [
        CityLinkStats(
            city_slug=slug,
            city_name=slug.replace("-", " ").title(),
            country_slug=country_slug,
            places_count=count,
        )
        for slug, count in pairs
    ]


@pytest.fixture()
def categories() -> List[CategoryLinkStats]:
    return make_categories(
        ("veterinary", 42),
        ("pet-store", 30),
        ("grooming", 21),
        ("dog-training", 12),
        ("pet-sitting", 9),
        ("dog-walking", 7),
    )


@pytest.fixture()
def cities() -> List[CityLinkStats]:
    return make_cities(("amsterdam", 80), ("rotterdam", 55), ("utrecht", 31), ("den-haag", 30))


@pytest.fixture()
def related_places() -> List[RelatedPlaceLink]:
    return [
        RelatedPlaceLink(place_slug="dierenkliniek-west", place_name="Dierenkliniek West", city_slug="amsterdam", avg_rating=4.5, review_count=12),
        RelatedPlaceLink(place_slug="vet-centrum", place_name="Vet Centrum", city_slug="amsterdam", avg_rating=None),
    ]
