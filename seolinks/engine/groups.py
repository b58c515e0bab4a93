"""Link group builders, one per page type.

Builders never re-rank their input: callers pass stats already ordered
by relevance and each builder only slices to ``limit``.
"""

from __future__ import annotations

from typing import List, Sequence

from .i18n import category_in_text, get_localized_category_name, get_phrase, get_section_title
from .routing import build_link_url
from .types import (
    CategoryLinkStats,
    CityLinkStats,
    InternalLinkGroup,
    InternalLinkItem,
    LinkType,
    RelatedPlaceLink,
    RouteType,
)


def build_category_links_for_city(
    *,
    locale: str,
    country_slug: str,
    city_slug: str,
    city_name: str,
    categories: Sequence[CategoryLinkStats],
    limit: int = 6,
) -> InternalLinkGroup:
    """Links to the most populated categories of a city."""

    links: List[InternalLinkItem] = []
    for cat in categories[:limit]:
        category_name = get_localized_category_name(cat.category_slug, locale)
        links.append(
            InternalLinkItem(
                href=build_link_url(locale, country_slug, city_slug, cat.category_slug),
                label=category_name,
                description=get_phrase(
                    "servicesInCity",
                    locale,
                    count=cat.places_count,
                    category=category_in_text(category_name, locale),
                    city=city_name,
                ),
                type=LinkType.CITY_CATEGORY,
                relevance_score=cat.places_count,
            )
        )

    return InternalLinkGroup(
        title=get_section_title("categoriesInCity", locale, city=city_name),
        links=tuple(links),
        max_display=limit,
    )


def build_city_links_for_category(
    *,
    locale: str,
    category_slug: str,
    category_name: str,
    cities: Sequence[CityLinkStats],
    limit: int = 6,
) -> InternalLinkGroup:
    """Links to the cities where a category has the most places."""

    links = tuple(
        InternalLinkItem(
            href=build_link_url(locale, city.country_slug, city.city_slug, category_slug),
            label=city.city_name,
            description=get_phrase("locationsCount", locale, count=city.places_count),
            type=LinkType.CATEGORY_CITY,
            relevance_score=city.places_count,
        )
        for city in cities[:limit]
    )

    return InternalLinkGroup(
        title=get_section_title("citiesForCategory", locale, category=category_name),
        links=links,
        max_display=limit,
    )


def build_related_place_links(
    *,
    locale: str,
    country_slug: str,
    category_slug: str,
    places: Sequence[RelatedPlaceLink],
    limit: int = 4,
) -> InternalLinkGroup:
    """Links to similar places; ratings map onto a 0-100 relevance scale."""

    links: List[InternalLinkItem] = []
    for place in places[:limit]:
        description = None
        score = 0.0
        if place.avg_rating:
            rating = float(place.avg_rating)
            description = get_phrase(
                "ratingSummary",
                locale,
                rating=f"{rating:.1f}",
                reviews=place.review_count or 0,
            )
            score = rating * 20
        links.append(
            InternalLinkItem(
                href=build_link_url(
                    locale,
                    country_slug,
                    place.city_slug,
                    category_slug,
                    place.place_slug,
                ),
                label=place.place_name,
                description=description,
                type=LinkType.PLACE_RELATED,
                relevance_score=score,
            )
        )

    return InternalLinkGroup(
        title=get_section_title("relatedPlaces", locale),
        links=tuple(links),
        max_display=limit,
    )


def build_place_context_links(
    *,
    locale: str,
    country_slug: str,
    country_name: str,
    city_slug: str,
    city_name: str,
    category_slug: str,
    category_name: str,
) -> InternalLinkGroup:
    """The four navigational links every place page carries."""

    in_text = category_in_text(category_name, locale)
    links = (
        InternalLinkItem(
            href=build_link_url(locale, country_slug, city_slug, category_slug),
            label=get_phrase("allCategoryInCity", locale, category=in_text, city=city_name),
            type=LinkType.PLACE_CITY_CATEGORY,
            relevance_score=100,
        ),
        InternalLinkItem(
            href=build_link_url(
                locale, country_slug, city_slug, category_slug, route=RouteType.BEST
            ),
            label=get_phrase("bestCategoryInCity", locale, category=in_text, city=city_name),
            type=LinkType.CITY_BEST,
            relevance_score=90,
        ),
        InternalLinkItem(
            href=build_link_url(locale, country_slug, city_slug),
            label=get_phrase("allServicesInCity", locale, city=city_name),
            type=LinkType.PLACE_CITY,
            relevance_score=80,
        ),
        InternalLinkItem(
            href=build_link_url(
                locale, country_slug, category_slug=category_slug, route=RouteType.CATEGORY
            ),
            label=get_phrase(
                "categoryInCountry", locale, category=category_name, country=country_name
            ),
            type=LinkType.PLACE_CATEGORY,
            relevance_score=70,
        ),
    )

    return InternalLinkGroup(
        title=get_section_title("exploreCity", locale, city=city_name),
        links=links,
        max_display=4,
    )


def build_country_explore_links(
    *,
    locale: str,
    country_slug: str,
    country_name: str,
    top_cities: Sequence[CityLinkStats],
    top_categories: Sequence[CategoryLinkStats],
    limit_cities: int = 6,
    limit_categories: int = 6,
) -> List[InternalLinkGroup]:
    """Return two groups for a country page: top cities, then categories."""

    city_links = tuple(
        InternalLinkItem(
            href=build_link_url(locale, country_slug, city.city_slug),
            label=city.city_name,
            description=get_phrase("locationsCount", locale, count=city.places_count),
            type=LinkType.COUNTRY_CITY,
            relevance_score=city.places_count,
        )
        for city in top_cities[:limit_cities]
    )

    category_links = tuple(
        InternalLinkItem(
            href=build_link_url(
                locale, country_slug, category_slug=cat.category_slug, route=RouteType.CATEGORY
            ),
            label=get_localized_category_name(cat.category_slug, locale),
            description=get_phrase("locationsCount", locale, count=cat.places_count),
            type=LinkType.COUNTRY_CATEGORY,
            relevance_score=cat.places_count,
        )
        for cat in top_categories[:limit_categories]
    )

    return [
        InternalLinkGroup(
            title=get_section_title("topCities", locale),
            links=city_links,
            max_display=limit_cities,
        ),
        InternalLinkGroup(
            title=get_section_title("popularCategories", locale),
            links=category_links,
            max_display=limit_categories,
        ),
    ]


def _best_links(
    locale: str,
    country_slug: str,
    city_slug: str | None,
    categories: Sequence[CategoryLinkStats],
    limit: int,
    link_type: LinkType,
) -> tuple[InternalLinkItem, ...]:
    links = []
    for cat in categories[:limit]:
        category_name = get_localized_category_name(cat.category_slug, locale)
        links.append(
            InternalLinkItem(
                href=build_link_url(
                    locale,
                    country_slug,
                    city_slug,
                    cat.category_slug,
                    route=RouteType.BEST,
                ),
                label=get_phrase(
                    "bestCategory", locale, category=category_in_text(category_name, locale)
                ),
                type=link_type,
                relevance_score=cat.places_count,
            )
        )
    return tuple(links)


def build_city_best_links(
    *,
    locale: str,
    country_slug: str,
    city_slug: str,
    city_name: str,
    categories: Sequence[CategoryLinkStats],
    limit: int = 4,
) -> InternalLinkGroup:
    return InternalLinkGroup(
        title=get_section_title("bestInCity", locale, city=city_name),
        links=_best_links(locale, country_slug, city_slug, categories, limit, LinkType.CITY_BEST),
        max_display=limit,
    )


def build_country_best_links(
    *,
    locale: str,
    country_slug: str,
    country_name: str,
    categories: Sequence[CategoryLinkStats],
    limit: int = 4,
) -> InternalLinkGroup:
    return InternalLinkGroup(
        title=get_section_title("bestInCountry", locale, country=country_name),
        links=_best_links(locale, country_slug, None, categories, limit, LinkType.COUNTRY_BEST),
        max_display=limit,
    )
