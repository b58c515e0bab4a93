"""Canonical path composition for internal links."""

from __future__ import annotations

from typing import List, Optional

from .types import RouteType

# Prefix segment inserted before the category slug for each route type.
ROUTE_SEGMENTS = {
    RouteType.BEST: "best",
    RouteType.TOP: "top",
    RouteType.CATEGORY: "c",
}


def _join(parts: List[str]) -> str:
    return "/" + "/".join(parts)


def build_link_url(
    locale: str,
    country_slug: Optional[str] = None,
    city_slug: Optional[str] = None,
    category_slug: Optional[str] = None,
    place_slug: Optional[str] = None,
    route: Optional[RouteType] = None,
) -> str:
    """Return the canonical path for the given slugs.

    Segments are appended as locale, country, city, category, place.
    Route types short-circuit that order: without a city, ``best``,
    ``top`` and ``category`` produce ``/{locale}/{country}/{prefix}/{category}``;
    with a city, ``best`` produces ``/{locale}/{country}/{city}/best/{category}``
    and any place slug is ignored. Slugs are used verbatim and missing
    segments simply shorten the path.
    """

    parts = [locale]
    if country_slug:
        parts.append(country_slug)

    if route is not None and not city_slug and category_slug:
        parts.extend([ROUTE_SEGMENTS[route], category_slug])
        return _join(parts)

    if city_slug:
        parts.append(city_slug)

    if route is RouteType.BEST and category_slug:
        parts.extend([ROUTE_SEGMENTS[route], category_slug])
        return _join(parts)

    if category_slug:
        parts.append(category_slug)
    if place_slug:
        parts.append(place_slug)
    return _join(parts)
