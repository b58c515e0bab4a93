"""Localized strings for link groups, labels and descriptions.

Every lookup resolves the requested locale through ``Locale.resolve`` so
an unsupported locale code falls back to the English table.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .types import Locale

SECTION_TITLES: Mapping[Locale, Mapping[str, str]] = MappingProxyType({
    Locale.EN: MappingProxyType({
        "categoriesInCity": "Popular Services in {city}",
        "citiesForCategory": "Top Cities for {category}",
        "relatedPlaces": "Similar Places Nearby",
        "exploreCity": "Explore {city}",
        "exploreCountry": "Explore {country}",
        "topCities": "Top Cities",
        "popularCategories": "Popular Categories",
        "bestInCity": "Best in {city}",
        "bestInCountry": "Best in {country}",
    }),
    Locale.NL: MappingProxyType({
        "categoriesInCity": "Populaire Services in {city}",
        "citiesForCategory": "Beste Steden voor {category}",
        "relatedPlaces": "Vergelijkbare Locaties",
        "exploreCity": "Ontdek {city}",
        "exploreCountry": "Ontdek {country}",
        "topCities": "Top Steden",
        "popularCategories": "Populaire Categorieën",
        "bestInCity": "Beste in {city}",
        "bestInCountry": "Beste in {country}",
    }),
    Locale.DE: MappingProxyType({
        "categoriesInCity": "Beliebte Dienste in {city}",
        "citiesForCategory": "Top-Städte für {category}",
        "relatedPlaces": "Ähnliche Orte in der Nähe",
        "exploreCity": "Entdecke {city}",
        "exploreCountry": "Entdecke {country}",
        "topCities": "Top-Städte",
        "popularCategories": "Beliebte Kategorien",
        "bestInCity": "Beste in {city}",
        "bestInCountry": "Beste in {country}",
    }),
})

PHRASES: Mapping[Locale, Mapping[str, str]] = MappingProxyType({
    Locale.EN: MappingProxyType({
        "servicesInCity": "{count}+ {category} in {city}",
        "locationsCount": "{count}+ locations",
        "bestCategory": "Best {category}",
        "allCategoryInCity": "All {category} in {city}",
        "bestCategoryInCity": "Best {category} in {city}",
        "allServicesInCity": "All services in {city}",
        "categoryInCountry": "{category} in {country}",
        "ratingSummary": "★ {rating} ({reviews})",
    }),
    Locale.NL: MappingProxyType({
        "servicesInCity": "{count}+ {category} in {city}",
        "locationsCount": "{count}+ locaties",
        "bestCategory": "Beste {category}",
        "allCategoryInCity": "Alle {category} in {city}",
        "bestCategoryInCity": "Beste {category} in {city}",
        "allServicesInCity": "Alle services in {city}",
        "categoryInCountry": "{category} in {country}",
        "ratingSummary": "★ {rating} ({reviews})",
    }),
    Locale.DE: MappingProxyType({
        "servicesInCity": "{count}+ {category} in {city}",
        "locationsCount": "{count}+ Standorte",
        "bestCategory": "Beste {category}",
        "allCategoryInCity": "Alle {category} in {city}",
        "bestCategoryInCity": "Beste {category} in {city}",
        "allServicesInCity": "Alle Dienste in {city}",
        "categoryInCountry": "{category} in {country}",
        "ratingSummary": "★ {rating} ({reviews})",
    }),
})

# Singular and plural slug variants share names.
CATEGORY_NAMES: Mapping[str, Mapping[Locale, str]] = MappingProxyType({
    # Veterinary services
    "veterinary": {Locale.NL: "Dierenartsen", Locale.EN: "Veterinarians", Locale.DE: "Tierärzte"},
    "veterinarians": {Locale.NL: "Dierenartsen", Locale.EN: "Veterinarians", Locale.DE: "Tierärzte"},
    "vet": {Locale.NL: "Dierenartsen", Locale.EN: "Veterinarians", Locale.DE: "Tierärzte"},
    # Pet stores and shops
    "pet-store": {Locale.NL: "Dierenwinkels", Locale.EN: "Pet Stores", Locale.DE: "Tierhandlungen"},
    "pet-stores": {Locale.NL: "Dierenwinkels", Locale.EN: "Pet Stores", Locale.DE: "Tierhandlungen"},
    "pet-shops": {Locale.NL: "Dierenwinkels", Locale.EN: "Pet Shops", Locale.DE: "Tiergeschäfte"},
    "pet-shop": {Locale.NL: "Dierenwinkel", Locale.EN: "Pet Shop", Locale.DE: "Tiergeschäft"},
    # Grooming
    "grooming": {Locale.NL: "Trimsalons", Locale.EN: "Pet Grooming", Locale.DE: "Tierfriseure"},
    "pet-grooming": {Locale.NL: "Trimsalons", Locale.EN: "Pet Grooming", Locale.DE: "Tierfriseure"},
    "groomers": {Locale.NL: "Trimsalons", Locale.EN: "Pet Groomers", Locale.DE: "Tierfriseure"},
    # Animal shelters
    "animal-shelter": {Locale.NL: "Dierenopvang", Locale.EN: "Animal Shelters", Locale.DE: "Tierheime"},
    "animal-shelters": {Locale.NL: "Dierenopvang", Locale.EN: "Animal Shelters", Locale.DE: "Tierheime"},
    "shelter": {Locale.NL: "Dierenopvang", Locale.EN: "Animal Shelters", Locale.DE: "Tierheime"},
    "shelters": {Locale.NL: "Dierenopvang", Locale.EN: "Animal Shelters", Locale.DE: "Tierheime"},
    # Boarding and hotels
    "boarding": {Locale.NL: "Dierenpensions", Locale.EN: "Pet Boarding", Locale.DE: "Tierpensionen"},
    "pet-boarding": {Locale.NL: "Dierenpensions", Locale.EN: "Pet Boarding", Locale.DE: "Tierpensionen"},
    "pet-hotels": {Locale.NL: "Dierenpensions", Locale.EN: "Pet Hotels", Locale.DE: "Tierhotels"},
    "pet-hotel": {Locale.NL: "Dierenpension", Locale.EN: "Pet Hotel", Locale.DE: "Tierhotel"},
    # Dog parks
    "dog-park": {Locale.NL: "Hondenuitlaatgebieden", Locale.EN: "Dog Parks", Locale.DE: "Hundeparks"},
    "dog-parks": {Locale.NL: "Hondenuitlaatgebieden", Locale.EN: "Dog Parks", Locale.DE: "Hundeparks"},
    # Pet cafes
    "pet-cafe": {Locale.NL: "Huisdiervriendelijke cafés", Locale.EN: "Pet-friendly Cafes", Locale.DE: "Haustierfreundliche Cafés"},
    "pet-cafes": {Locale.NL: "Huisdiervriendelijke cafés", Locale.EN: "Pet-friendly Cafes", Locale.DE: "Haustierfreundliche Cafés"},
    # Pet cemeteries
    "cemetery": {Locale.NL: "Dierenbegraafplaatsen", Locale.EN: "Pet Cemeteries", Locale.DE: "Tierfriedhöfe"},
    "pet-cemetery": {Locale.NL: "Dierenbegraafplaats", Locale.EN: "Pet Cemetery", Locale.DE: "Tierfriedhof"},
    "pet-cemeteries": {Locale.NL: "Dierenbegraafplaatsen", Locale.EN: "Pet Cemeteries", Locale.DE: "Tierfriedhöfe"},
    # Training
    "training": {Locale.NL: "Hondentraining", Locale.EN: "Dog Training", Locale.DE: "Hundetraining"},
    "dog-training": {Locale.NL: "Hondentraining", Locale.EN: "Dog Training", Locale.DE: "Hundetraining"},
    # Dog walking
    "dog-walking": {Locale.NL: "Hondenuitlaatservice", Locale.EN: "Dog Walking", Locale.DE: "Hundeausführservice"},
    "dog-walkers": {Locale.NL: "Hondenuitlaatservice", Locale.EN: "Dog Walkers", Locale.DE: "Hundeausführer"},
    # Pet sitting
    "pet-sitting": {Locale.NL: "Huisdierverzorging", Locale.EN: "Pet Sitting", Locale.DE: "Tierbetreuung"},
    "pet-sitters": {Locale.NL: "Huisdieroppas", Locale.EN: "Pet Sitters", Locale.DE: "Tiersitter"},
    # Photography and insurance
    "pet-photography": {Locale.NL: "Huisdierfotografie", Locale.EN: "Pet Photography", Locale.DE: "Tierfotografie"},
    "pet-insurance": {Locale.NL: "Huisdierverzekering", Locale.EN: "Pet Insurance", Locale.DE: "Tierversicherung"},
    # Emergency services
    "emergency-vet": {Locale.NL: "Spoeddierenarts", Locale.EN: "Emergency Vet", Locale.DE: "Notfall-Tierarzt"},
    "24h-vet": {Locale.NL: "24-uurs Dierenarts", Locale.EN: "24h Veterinarian", Locale.DE: "24h Tierarzt"},
})


def _substitute(template: str, replacements: Mapping[str, object]) -> str:
    for key, value in replacements.items():
        template = template.replace("{" + key + "}", str(value))
    return template


def get_section_title(key: str, locale: Optional[str], **replacements: object) -> str:
    """Return the localized title for a link group."""

    strings = SECTION_TITLES[Locale.resolve(locale)]
    return _substitute(strings[key], replacements)


def get_phrase(key: str, locale: Optional[str], **replacements: object) -> str:
    strings = PHRASES[Locale.resolve(locale)]
    return _substitute(strings[key], replacements)


def get_localized_category_name(slug: str, locale: Optional[str]) -> str:
    """Return the display name of a category slug.

    Unknown slugs are title-cased (``dog-park`` becomes ``Dog Park``).
    """

    names = CATEGORY_NAMES.get(slug)
    if names:
        return names.get(Locale.resolve(locale)) or names[Locale.EN]
    return " ".join(word.capitalize() for word in slug.split("-") if word)


def category_in_text(name: str, locale: Optional[str]) -> str:
    """Lower-case a category name for use inside a sentence.

    German nouns stay capitalised.
    """

    if Locale.resolve(locale) is Locale.DE:
        return name
    return name.lower()
