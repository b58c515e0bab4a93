"""Typed data structures used by the internal link engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Locale(str, Enum):
    """Locales with a translated string table."""

    EN = "en"
    NL = "nl"
    DE = "de"

    @classmethod
    def resolve(cls, code: Optional[str]) -> "Locale":
        """Return the matching locale, or English for unknown codes."""

        for member in cls:
            if member.value == code:
                return member
        return cls.EN


class PageType(str, Enum):
    HOME = "home"
    COUNTRY = "country"
    CITY = "city"
    CATEGORY = "category"
    PLACE = "place"
    COMBO = "combo"
    BEST = "best"
    TOP = "top"


class RouteType(str, Enum):
    """Special URL shapes that short-circuit hierarchical composition."""

    BEST = "best"
    TOP = "top"
    CATEGORY = "category"


class LinkType(str, Enum):
    CITY_CATEGORY = "city_category"
    CATEGORY_CITY = "category_city"
    PLACE_RELATED = "place_related"
    PLACE_CITY_CATEGORY = "place_city_category"
    PLACE_CITY = "place_city"
    PLACE_CATEGORY = "place_category"
    CITY_BEST = "city_best"
    COUNTRY_BEST = "country_best"
    COUNTRY_TOP = "country_top"
    COUNTRY_CITY = "country_city"
    COUNTRY_CATEGORY = "country_category"
    PROVINCE_CITY = "province_city"
    RELATED_CATEGORY = "related_category"
    GUIDE = "guide"


@dataclass(frozen=True)
class InternalLinkItem:
    """A single navigational link rendered on a page."""

    href: str
    label: str
    type: LinkType
    description: Optional[str] = None
    relevance_score: Optional[float] = None
    icon: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "href": self.href,
            "label": self.label,
            "type": self.type.value,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.relevance_score is not None:
            data["relevanceScore"] = self.relevance_score
        if self.icon is not None:
            data["icon"] = self.icon
        return data


@dataclass(frozen=True)
class InternalLinkGroup:
    """Titled, ordered bucket of links."""

    title: str
    links: Tuple[InternalLinkItem, ...] = ()
    max_display: Optional[int] = None

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "links": [link.as_dict() for link in self.links],
        }
        if self.max_display is not None:
            data["maxDisplay"] = self.max_display
        return data


@dataclass(frozen=True)
class InternalLinkPageContext:
    """Describes the page asking for links."""

    locale: str
    page_type: PageType
    country_slug: Optional[str] = None
    country_name: Optional[str] = None
    province_slug: Optional[str] = None
    city_slug: Optional[str] = None
    city_name: Optional[str] = None
    category_slug: Optional[str] = None
    category_name: Optional[str] = None
    place_slug: Optional[str] = None
    place_id: Optional[int] = None

    def as_dict(self) -> Dict[str, Any]:
        fields = {
            "locale": self.locale,
            "pageType": self.page_type.value,
            "countrySlug": self.country_slug,
            "countryName": self.country_name,
            "provinceSlug": self.province_slug,
            "citySlug": self.city_slug,
            "cityName": self.city_name,
            "categorySlug": self.category_slug,
            "categoryName": self.category_name,
            "placeSlug": self.place_slug,
            "placeId": self.place_id,
        }
        return {key: value for key, value in fields.items() if value is not None}


@dataclass(frozen=True)
class InternalLinkOptions:
    """Caller options. Only ``limit`` is applied by the orchestrator."""

    limit: int = 8
    include_descriptions: bool = True
    min_relevance_score: Optional[float] = None
    exclude_types: Tuple[LinkType, ...] = ()
    only_types: Tuple[LinkType, ...] = ()


@dataclass(frozen=True)
class InternalLinksResult:
    """Flattened links plus the groups they were derived from."""

    links: Tuple[InternalLinkItem, ...]
    groups: Tuple[InternalLinkGroup, ...]
    total_available: int
    context: InternalLinkPageContext

    def as_dict(self) -> Dict[str, Any]:
        return {
            "links": [link.as_dict() for link in self.links],
            "groups": [group.as_dict() for group in self.groups],
            "totalAvailable": self.total_available,
            "context": self.context.as_dict(),
        }


@dataclass(frozen=True)
class CategoryLinkStats:
    category_slug: str
    places_count: int
    category_name: Optional[str] = None
    avg_rating: Optional[float] = None


@dataclass(frozen=True)
class CityLinkStats:
    city_slug: str
    city_name: str
    country_slug: str
    places_count: int


@dataclass(frozen=True)
class RelatedPlaceLink:
    place_slug: str
    place_name: str
    city_slug: str
    avg_rating: Optional[float] = None
    review_count: Optional[int] = None


@dataclass(frozen=True)
class CountryTopLists:
    """Top cities and categories of one country, fetched together."""

    top_cities: Tuple[CityLinkStats, ...] = field(default_factory=tuple)
    top_categories: Tuple[CategoryLinkStats, ...] = field(default_factory=tuple)
