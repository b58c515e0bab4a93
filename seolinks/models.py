"""Database models for the pet-services directory graph.

Countries contain provinces and cities, cities contain places, and
places carry one or more categories. The link engine and the sitemap
builders only ever read these tables.
"""

from __future__ import annotations

from django.db import models


class Country(models.Model):
    slug = models.SlugField(max_length=255, unique=True)
    name = models.CharField(max_length=255)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['slug']
        verbose_name_plural = 'countries'

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return self.name


class Province(models.Model):
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name='provinces')
    slug = models.SlugField(max_length=255)
    name = models.CharField(max_length=255)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['country__slug', 'slug']
        unique_together = ('country', 'slug')

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return self.name


class City(models.Model):
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name='cities')
    province = models.ForeignKey(
        Province,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cities',
    )
    slug = models.SlugField(max_length=255)
    name = models.CharField(max_length=255)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['country__slug', 'slug']
        unique_together = ('country', 'slug')
        verbose_name_plural = 'cities'

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return self.name


class Category(models.Model):
    slug = models.SlugField(max_length=255, unique=True)
    name = models.CharField(max_length=255)

    class Meta:
        ordering = ['slug']
        verbose_name_plural = 'categories'

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return self.name


class Place(models.Model):
    """A listed business."""

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        TEMPORARILY_CLOSED = 'temporarily_closed', 'Temporarily closed'
        PERMANENTLY_CLOSED = 'permanently_closed', 'Permanently closed'

    city = models.ForeignKey(City, on_delete=models.CASCADE, related_name='places')
    slug = models.SlugField(max_length=255, null=True, blank=True)
    name = models.CharField(max_length=255)
    status = models.CharField(max_length=32, choices=Status.choices, default=Status.ACTIVE)
    is_premium = models.BooleanField(default=False)
    avg_rating = models.DecimalField(max_digits=2, decimal_places=1, null=True, blank=True)
    review_count = models.PositiveIntegerField(default=0)
    categories = models.ManyToManyField(Category, through='PlaceCategory', related_name='places')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['city__slug', 'slug']

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return self.name


class PlaceCategory(models.Model):
    place = models.ForeignKey(Place, on_delete=models.CASCADE, related_name='place_categories')
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name='place_categories')
    is_primary = models.BooleanField(default=False)

    class Meta:
        unique_together = ('place', 'category')
        verbose_name_plural = 'place categories'

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return f"{self.place} · {self.category}"
