"""Read-only queries over the directory tables.

``DjangoDirectorySource`` serves both the internal link engine (as its
``EntityStatsProvider``) and the sitemap builders (as their
``SitemapDataSource``) using Django's async ORM. Rows are returned as the
engine's frozen dataclasses so nothing downstream touches model objects.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from django.db.models import Avg, Count, F

from .engine.types import CategoryLinkStats, CityLinkStats, CountryTopLists, RelatedPlaceLink
from .models import Category, City, Country, Place, PlaceCategory, Province
from .sitemap.types import CityCategoryRow, CityRow, CountryCategoryRow, PlaceRow, ProvinceRow

# Places that still count towards link statistics.
LISTED_STATUSES = (Place.Status.ACTIVE, Place.Status.TEMPORARILY_CLOSED)


def _as_float(value) -> Optional[float]:
    return float(value) if value is not None else None


class DjangoDirectorySource:
    """Directory lookups backed by the default database."""

    # Link statistics

    async def top_categories_for_city(
        self, *, city_slug: str, country_slug: str, limit: int
    ) -> List[CategoryLinkStats]:
        queryset = (
            Category.objects.filter(
                places__city__slug=city_slug,
                places__city__country__slug=country_slug,
                places__status__in=LISTED_STATUSES,
            )
            .annotate(places_count=Count('places', distinct=True), rating=Avg('places__avg_rating'))
            .order_by('-places_count', 'slug')
            .values('slug', 'name', 'places_count', 'rating')[:limit]
        )
        return [
            CategoryLinkStats(
                category_slug=row['slug'],
                category_name=row['name'],
                places_count=row['places_count'],
                avg_rating=_as_float(row['rating']),
            )
            async for row in queryset
        ]

    async def top_cities_for_category(
        self, *, country_slug: str, category_slug: str, limit: int
    ) -> List[CityLinkStats]:
        queryset = (
            City.objects.filter(
                country__slug=country_slug,
                places__categories__slug=category_slug,
                places__status__in=LISTED_STATUSES,
            )
            .annotate(places_count=Count('places', distinct=True))
            .order_by('-places_count', 'name')
            .values('slug', 'name', 'country__slug', 'places_count')[:limit]
        )
        return [
            CityLinkStats(
                city_slug=row['slug'],
                city_name=row['name'],
                country_slug=row['country__slug'],
                places_count=row['places_count'],
            )
            async for row in queryset
        ]

    async def related_places(
        self, *, place_id: int, city_slug: str, category_slug: str, limit: int
    ) -> List[RelatedPlaceLink]:
        queryset = (
            Place.objects.filter(
                city__slug=city_slug,
                categories__slug=category_slug,
                status__in=LISTED_STATUSES,
                slug__isnull=False,
            )
            .exclude(pk=place_id)
            .exclude(slug='')
            .order_by(F('avg_rating').desc(nulls_last=True), '-review_count', 'name')
            .values('slug', 'name', 'city__slug', 'avg_rating', 'review_count')[:limit]
        )
        return [
            RelatedPlaceLink(
                place_slug=row['slug'],
                place_name=row['name'],
                city_slug=row['city__slug'],
                avg_rating=_as_float(row['avg_rating']),
                review_count=row['review_count'],
            )
            async for row in queryset
        ]

    async def country_top_cities_and_categories(
        self, *, country_slug: str, limit_cities: int, limit_categories: int
    ) -> CountryTopLists:
        cities = (
            City.objects.filter(country__slug=country_slug, places__status__in=LISTED_STATUSES)
            .annotate(places_count=Count('places', distinct=True))
            .order_by('-places_count', 'name')
            .values('slug', 'name', 'places_count')[:limit_cities]
        )
        categories = (
            Category.objects.filter(
                places__city__country__slug=country_slug,
                places__status__in=LISTED_STATUSES,
            )
            .annotate(places_count=Count('places', distinct=True))
            .order_by('-places_count', 'slug')
            .values('slug', 'name', 'places_count')[:limit_categories]
        )
        return CountryTopLists(
            top_cities=tuple([
                CityLinkStats(
                    city_slug=row['slug'],
                    city_name=row['name'],
                    country_slug=country_slug,
                    places_count=row['places_count'],
                )
                async for row in cities
            ]),
            top_categories=tuple([
                CategoryLinkStats(
                    category_slug=row['slug'],
                    category_name=row['name'],
                    places_count=row['places_count'],
                )
                async for row in categories
            ]),
        )

    # Sitemap rows

    async def countries(self) -> List[str]:
        return [slug async for slug in Country.objects.order_by('slug').values_list('slug', flat=True)]

    async def provinces(self) -> List[ProvinceRow]:
        queryset = Province.objects.order_by('country__slug', 'slug').values_list(
            'slug', 'country__slug', 'updated_at'
        )
        return [
            ProvinceRow(province_slug=slug, country_slug=country, updated_at=updated_at)
            async for slug, country, updated_at in queryset
        ]

    async def cities(self) -> List[CityRow]:
        queryset = City.objects.order_by('country__slug', 'slug').values_list(
            'slug', 'country__slug', 'province__slug'
        )
        return [
            CityRow(city_slug=slug, country_slug=country, province_slug=province)
            async for slug, country, province in queryset
        ]

    async def city_category_pairs(self) -> List[CityCategoryRow]:
        queryset = (
            PlaceCategory.objects.values_list(
                'place__city__country__slug',
                'place__city__slug',
                'category__slug',
                'place__city__province__slug',
            )
            .order_by('place__city__country__slug', 'place__city__slug', 'category__slug')
            .distinct()
        )
        return [
            CityCategoryRow(
                city_slug=city,
                country_slug=country,
                category_slug=category,
                province_slug=province,
            )
            async for country, city, category, province in queryset
        ]

    async def places(self) -> List[PlaceRow]:
        """One row per (place, category), primary category first."""

        queryset = (
            PlaceCategory.objects.filter(place__slug__isnull=False)
            .exclude(place__slug='')
            .order_by(
                'place__city__country__slug',
                'place__city__slug',
                'place__slug',
                '-is_primary',
                'category__slug',
            )
            .values(
                'place__slug',
                'place__city__slug',
                'place__city__country__slug',
                'place__city__province__slug',
                'category__slug',
                'place__status',
                'place__is_premium',
                'place__updated_at',
            )
        )
        return [
            PlaceRow(
                place_slug=row['place__slug'],
                city_slug=row['place__city__slug'],
                country_slug=row['place__city__country__slug'],
                province_slug=row['place__city__province__slug'],
                category_slug=row['category__slug'],
                status=row['place__status'],
                is_premium=row['place__is_premium'],
                updated_at=row['place__updated_at'],
            )
            async for row in queryset
        ]

    async def country_category_pairs(self) -> List[CountryCategoryRow]:
        queryset = (
            PlaceCategory.objects.values_list('place__city__country__slug', 'category__slug')
            .order_by('place__city__country__slug', 'category__slug')
            .distinct()
        )
        return [
            CountryCategoryRow(country_slug=country, category_slug=category)
            async for country, category in queryset
        ]

    async def counts(self) -> Dict[str, int]:
        return {
            'countries': await Country.objects.acount(),
            'cities': await City.objects.acount(),
            'categories': await Category.objects.acount(),
            'places': await Place.objects.acount(),
        }
