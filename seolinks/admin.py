from django.contrib import admin

from .models import Category, City, Country, Place, PlaceCategory, Province


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'updated_at')
    search_fields = ('name', 'slug')


@admin.register(Province)
class ProvinceAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'country', 'updated_at')
    list_filter = ('country',)
    search_fields = ('name', 'slug')


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'province', 'country')
    list_filter = ('country',)
    search_fields = ('name', 'slug')


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug')
    search_fields = ('name', 'slug')


class PlaceCategoryInline(admin.TabularInline):
    model = PlaceCategory
    extra = 1


@admin.register(Place)
class PlaceAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'city', 'status', 'is_premium', 'avg_rating', 'updated_at')
    list_filter = ('status', 'is_premium', 'city__country')
    search_fields = ('name', 'slug')
    inlines = (PlaceCategoryInline,)
