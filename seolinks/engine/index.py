"""Coordinator that picks and builds internal links for a page."""

from __future__ import annotations

from typing import Awaitable, Callable, Dict, List, Protocol, Sequence

from . import groups as groups_module
from .i18n import get_localized_category_name
from .types import (
    CategoryLinkStats,
    CityLinkStats,
    CountryTopLists,
    InternalLinkGroup,
    InternalLinkOptions,
    InternalLinkPageContext,
    InternalLinksResult,
    PageType,
    RelatedPlaceLink,
)

# Number of rows requested from the provider for each group.
STATS_LIMIT = 6
RELATED_PLACES_LIMIT = 4
BEST_LINKS_LIMIT = 4


class EntityStatsProvider(Protocol):
    """Read-only lookups the orchestrator depends on."""

    async def top_categories_for_city(
        self, *, city_slug: str, country_slug: str, limit: int
    ) -> Sequence[CategoryLinkStats]: ...

    async def top_cities_for_category(
        self, *, country_slug: str, category_slug: str, limit: int
    ) -> Sequence[CityLinkStats]: ...

    async def related_places(
        self, *, place_id: int, city_slug: str, category_slug: str, limit: int
    ) -> Sequence[RelatedPlaceLink]: ...

    async def country_top_cities_and_categories(
        self, *, country_slug: str, limit_cities: int, limit_categories: int
    ) -> CountryTopLists: ...


GroupBuilder = Callable[[InternalLinkPageContext, EntityStatsProvider], Awaitable[List[InternalLinkGroup]]]


def _category_name(context: InternalLinkPageContext) -> str:
    return context.category_name or get_localized_category_name(
        context.category_slug or "", context.locale
    )


async def _home_groups(
    context: InternalLinkPageContext, provider: EntityStatsProvider
) -> List[InternalLinkGroup]:
    return []


async def _city_groups(
    context: InternalLinkPageContext, provider: EntityStatsProvider
) -> List[InternalLinkGroup]:
    if not context.city_slug or not context.country_slug:
        return []

    categories = await provider.top_categories_for_city(
        city_slug=context.city_slug,
        country_slug=context.country_slug,
        limit=STATS_LIMIT,
    )
    city_name = context.city_name or context.city_slug
    return [
        groups_module.build_category_links_for_city(
            locale=context.locale,
            country_slug=context.country_slug,
            city_slug=context.city_slug,
            city_name=city_name,
            categories=categories,
            limit=STATS_LIMIT,
        ),
        groups_module.build_city_best_links(
            locale=context.locale,
            country_slug=context.country_slug,
            city_slug=context.city_slug,
            city_name=city_name,
            categories=categories,
            limit=BEST_LINKS_LIMIT,
        ),
    ]


async def _category_groups(
    context: InternalLinkPageContext, provider: EntityStatsProvider
) -> List[InternalLinkGroup]:
    """Used by category, combo, best and top pages."""

    if not context.category_slug or not context.country_slug:
        return []

    cities = await provider.top_cities_for_category(
        country_slug=context.country_slug,
        category_slug=context.category_slug,
        limit=STATS_LIMIT,
    )
    return [
        groups_module.build_city_links_for_category(
            locale=context.locale,
            category_slug=context.category_slug,
            category_name=_category_name(context),
            cities=cities,
            limit=STATS_LIMIT,
        )
    ]


async def _place_groups(
    context: InternalLinkPageContext, provider: EntityStatsProvider
) -> List[InternalLinkGroup]:
    if (
        context.place_id is None
        or not context.city_slug
        or not context.category_slug
        or not context.country_slug
    ):
        return []

    related = await provider.related_places(
        place_id=context.place_id,
        city_slug=context.city_slug,
        category_slug=context.category_slug,
        limit=RELATED_PLACES_LIMIT,
    )
    return [
        groups_module.build_related_place_links(
            locale=context.locale,
            country_slug=context.country_slug,
            category_slug=context.category_slug,
            places=related,
            limit=RELATED_PLACES_LIMIT,
        ),
        groups_module.build_place_context_links(
            locale=context.locale,
            country_slug=context.country_slug,
            country_name=context.country_name or context.country_slug,
            city_slug=context.city_slug,
            city_name=context.city_name or context.city_slug,
            category_slug=context.category_slug,
            category_name=_category_name(context),
        ),
    ]


async def _country_groups(
    context: InternalLinkPageContext, provider: EntityStatsProvider
) -> List[InternalLinkGroup]:
    if not context.country_slug:
        return []

    top = await provider.country_top_cities_and_categories(
        country_slug=context.country_slug,
        limit_cities=STATS_LIMIT,
        limit_categories=STATS_LIMIT,
    )
    country_name = context.country_name or context.country_slug
    result = groups_module.build_country_explore_links(
        locale=context.locale,
        country_slug=context.country_slug,
        country_name=country_name,
        top_cities=top.top_cities,
        top_categories=top.top_categories,
        limit_cities=STATS_LIMIT,
        limit_categories=STATS_LIMIT,
    )
    result.append(
        groups_module.build_country_best_links(
            locale=context.locale,
            country_slug=context.country_slug,
            country_name=country_name,
            categories=top.top_categories,
            limit=BEST_LINKS_LIMIT,
        )
    )
    return result


# One entry per page type; a new PageType member must be added here too.
PAGE_GROUP_BUILDERS: Dict[PageType, GroupBuilder] = {
    PageType.HOME: _home_groups,
    PageType.COUNTRY: _country_groups,
    PageType.CITY: _city_groups,
    PageType.CATEGORY: _category_groups,
    PageType.COMBO: _category_groups,
    PageType.PLACE: _place_groups,
    PageType.BEST: _category_groups,
    PageType.TOP: _category_groups,
}


async def get_internal_links_for_page(
    context: InternalLinkPageContext,
    provider: EntityStatsProvider,
    options: InternalLinkOptions | None = None,
) -> InternalLinksResult:
    """Return the links to show on the page described by ``context``.

    Pages missing a required slug get no groups. Groups stay in build
    order and the flattened link list is cut to ``options.limit`` only
    after every group is built, so later groups are the ones dropped.
    Provider errors propagate to the caller.
    """

    limit = (options or InternalLinkOptions()).limit
    builder = PAGE_GROUP_BUILDERS[context.page_type]
    groups = await builder(context, provider)

    links = [link for group in groups for link in group.links]
    if limit and len(links) > limit:
        links = links[:limit]

    return InternalLinksResult(
        links=tuple(links),
        groups=tuple(groups),
        total_available=len(links),
        context=context,
    )
