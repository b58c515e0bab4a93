from __future__ import annotations

import tempfile
from decimal import Decimal
from io import StringIO
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import Client, TestCase, override_settings
from django.urls import reverse

from seolinks.engine.types import InternalLinkPageContext, PageType
from seolinks.forms import InternalLinksQueryForm
from seolinks.models import Category, City, Country, Place, PlaceCategory, Province
from seolinks.queries import DjangoDirectorySource
from seolinks.services import (
    build_sitemap_file,
    build_sitemap_files,
    get_directory_source,
    get_sitemap_config,
    internal_links_for,
)
from seolinks.sitemap.config import SitemapConfig
from seolinks.sitemap.sections import build_category_urls, build_place_urls


def create_directory() -> dict:
    """Two cities, two categories and a handful of places in one country."""

    country = Country.objects.create(slug='netherlands', name='Netherlands')
    province = Province.objects.create(country=country, slug='noord-holland', name='Noord-Holland')
    amsterdam = City.objects.create(country=country, province=province, slug='amsterdam', name='Amsterdam')
    utrecht = City.objects.create(country=country, slug='utrecht', name='Utrecht')
    veterinary = Category.objects.create(slug='veterinary', name='Veterinarian')
    grooming = Category.objects.create(slug='grooming', name='Grooming')

    def place(city, slug, name, categories, **fields):
        obj = Place.objects.create(city=city, slug=slug, name=name, **fields)
        for position, category in enumerate(categories):
            PlaceCategory.objects.create(place=obj, category=category, is_primary=position == 0)
        return obj

    return {
        'west': place(
            amsterdam, 'west', 'Dierenkliniek West', [veterinary, grooming],
            avg_rating=Decimal('4.5'), review_count=10,
        ),
        'oost': place(amsterdam, 'oost', 'Dierenkliniek Oost', [veterinary], avg_rating=Decimal('3.9'), review_count=4),
        'noord': place(amsterdam, 'noord', 'Dierenkliniek Noord', [veterinary]),
        'gesloten': place(
            amsterdam, 'gesloten', 'Gesloten Kliniek', [veterinary],
            status=Place.Status.PERMANENTLY_CLOSED, avg_rating=Decimal('5.0'),
        ),
        'trim': place(utrecht, 'trim', 'Trimsalon Utrecht', [grooming], is_premium=True),
        'noslug': place(utrecht, None, 'Naamloze Praktijk', [veterinary]),
    }


class RecordingDirectorySource(DjangoDirectorySource):
    """Database source that records which sitemap queries ran."""

    calls: list = []

    async def countries(self):
        self.calls.append('countries')
        return await super().countries()

    async def provinces(self):
        self.calls.append('provinces')
        return await super().provinces()

    async def cities(self):
        self.calls.append('cities')
        return await super().cities()

    async def city_category_pairs(self):
        self.calls.append('city_category_pairs')
        return await super().city_category_pairs()

    async def places(self):
        self.calls.append('places')
        return await super().places()

    async def country_category_pairs(self):
        self.calls.append('country_category_pairs')
        return await super().country_category_pairs()

    async def counts(self):
        self.calls.append('counts')
        return await super().counts()


class DirectoryQueryTests(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        cls.places = create_directory()

    def setUp(self) -> None:
        self.source = DjangoDirectorySource()

    async def test_top_categories_for_city(self) -> None:
        rows = await self.source.top_categories_for_city(city_slug='amsterdam', country_slug='netherlands', limit=6)
        self.assertEqual(
            [(row.category_slug, row.places_count) for row in rows],
            [('veterinary', 3), ('grooming', 1)],
        )
        self.assertEqual(rows[0].category_name, 'Veterinarian')

    async def test_top_cities_for_category(self) -> None:
        rows = await self.source.top_cities_for_category(country_slug='netherlands', category_slug='veterinary', limit=6)
        self.assertEqual([(row.city_slug, row.places_count) for row in rows], [('amsterdam', 3), ('utrecht', 1)])
        self.assertEqual(rows[0].city_name, 'Amsterdam')

    async def test_related_places_excludes_self_and_closed(self) -> None:
        rows = await self.source.related_places(
            place_id=self.places['west'].pk, city_slug='amsterdam', category_slug='veterinary', limit=4,
        )
        self.assertEqual([row.place_slug for row in rows], ['oost', 'noord'])
        self.assertEqual(rows[0].avg_rating, 3.9)
        self.assertIsNone(rows[1].avg_rating)

    async def test_country_top_lists(self) -> None:
        top = await self.source.country_top_cities_and_categories(
            country_slug='netherlands', limit_cities=6, limit_categories=1,
        )
        self.assertEqual([(row.city_slug, row.places_count) for row in top.top_cities], [('amsterdam', 3), ('utrecht', 2)])
        self.assertEqual([row.category_slug for row in top.top_categories], ['veterinary'])

    async def test_sitemap_rows(self) -> None:
        self.assertEqual(await self.source.countries(), ['netherlands'])
        cities = await self.source.cities()
        self.assertEqual([(row.city_slug, row.province_slug) for row in cities], [('amsterdam', 'noord-holland'), ('utrecht', None)])
        pairs = await self.source.city_category_pairs()
        self.assertEqual(len(pairs), 4)
        self.assertEqual(
            [(row.country_slug, row.category_slug) for row in await self.source.country_category_pairs()],
            [('netherlands', 'grooming'), ('netherlands', 'veterinary')],
        )
        counts = await self.source.counts()
        self.assertEqual(counts, {'countries': 1, 'cities': 2, 'categories': 2, 'places': 6})

    async def test_place_rows_list_primary_category_first(self) -> None:
        rows = [row for row in await self.source.places() if row.place_slug == 'west']
        self.assertEqual([row.category_slug for row in rows], ['veterinary', 'grooming'])

    async def test_place_urls_from_database(self) -> None:
        config = SitemapConfig(base_url='https://example.com', locales=('en',))
        urls = await build_place_urls(self.source, config, today='2024-05-01')
        locs = [url.loc for url in urls]

        self.assertEqual(len(locs), 4)
        self.assertIn('https://example.com/en/netherlands/p/noord-holland/amsterdam/veterinary/west', locs)
        self.assertNotIn('https://example.com/en/netherlands/p/noord-holland/amsterdam/grooming/west', locs)
        self.assertFalse(any('gesloten' in loc for loc in locs))
        premium = [url for url in urls if url.loc.endswith('/trim')]
        self.assertEqual(premium[0].priority, 0.8)

    async def test_category_urls_from_database(self) -> None:
        config = SitemapConfig(base_url='https://example.com', locales=('nl',))
        urls = await build_category_urls(self.source, config, today='2024-05-01')
        self.assertEqual(urls[0].loc, 'https://example.com/nl/netherlands/p/noord-holland/amsterdam/grooming')
        self.assertEqual(urls[-1].loc, 'https://example.com/nl/netherlands/utrecht/veterinary')

    async def test_build_sitemap_files(self) -> None:
        config = SitemapConfig(base_url='https://example.com', locales=('nl', 'en'), max_urls_per_sitemap=3)
        files = await build_sitemap_files(self.source, config, today='2024-05-01')
        names = [file.name for file in files]

        self.assertIn('home.xml', names)
        self.assertIn('places-1.xml', names)
        self.assertIn('places-3.xml', names)
        self.assertTrue(all(len(file.urls) <= 3 for file in files))


class ServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        create_directory()

    def test_directory_source_from_settings(self) -> None:
        self.assertIsInstance(get_directory_source(), DjangoDirectorySource)

    def test_invalid_sitemap_config_is_improperly_configured(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'sitemap.yaml'
            path.write_text('max_urls_per_sitemap: 0\n', encoding='utf-8')
            with override_settings(SEOLINKS_CONFIG_PATH=str(path)):
                with self.assertRaises(ImproperlyConfigured):
                    get_sitemap_config()

    @override_settings(SEOLINKS_DATA_SOURCE='')
    def test_disabled_directory_source(self) -> None:
        self.assertIsNone(get_directory_source())

    @override_settings(SEOLINKS_DATA_SOURCE='')
    async def test_internal_links_without_source_are_empty(self) -> None:
        context = InternalLinkPageContext(locale='en', page_type=PageType.COUNTRY, country_slug='netherlands')
        result = await internal_links_for(context)
        self.assertEqual(result.links, ())
        self.assertEqual(result.total_available, 0)

    async def test_internal_links_for_country(self) -> None:
        context = InternalLinkPageContext(
            locale='nl', page_type=PageType.COUNTRY, country_slug='netherlands', country_name='Nederland',
        )
        result = await internal_links_for(context)
        self.assertEqual(
            [group.title for group in result.groups],
            ['Top Steden', 'Populaire Categorieën', 'Beste in Nederland'],
        )
        self.assertEqual(result.links[0].href, '/nl/netherlands/amsterdam')


class BuildSitemapFileTests(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        create_directory()

    def setUp(self) -> None:
        RecordingDirectorySource.calls = []
        self.source = RecordingDirectorySource()
        self.config = SitemapConfig(base_url='https://example.com', locales=('nl', 'en'), max_urls_per_sitemap=3)

    async def test_numbered_part_runs_only_its_section(self) -> None:
        sitemap = await build_sitemap_file(self.source, self.config, 'places-2.xml', today='2024-05-01')

        self.assertEqual(sitemap.name, 'places-2.xml')
        self.assertEqual(len(sitemap.urls), 3)
        self.assertEqual(RecordingDirectorySource.calls, ['places'])

    async def test_parts_match_the_full_build(self) -> None:
        files = {file.name: file for file in await build_sitemap_files(self.source, self.config, today='2024-05-01')}
        sitemap = await build_sitemap_file(self.source, self.config, 'places-3.xml', today='2024-05-01')
        self.assertEqual(sitemap.urls, files['places-3.xml'].urls)

    async def test_static_sections_need_no_queries(self) -> None:
        for name in ('home.xml', 'static.xml'):
            sitemap = await build_sitemap_file(self.source, self.config, name, today='2024-05-01')
            self.assertEqual(sitemap.name, name)
            self.assertTrue(sitemap.urls)
        self.assertEqual(RecordingDirectorySource.calls, [])

    async def test_names_that_are_never_planned(self) -> None:
        # places splits into three parts at three URLs per file
        for name in ('places.xml', 'places-4.xml', 'home-1.xml', 'blog.xml', 'places-02.xml'):
            with self.subTest(name=name):
                self.assertIsNone(await build_sitemap_file(self.source, self.config, name, today='2024-05-01'))

    async def test_empty_section_still_has_a_file(self) -> None:
        sitemap = await build_sitemap_file(None, self.config, 'cities.xml', today='2024-05-01')
        self.assertEqual(sitemap.urls, [])


class InternalLinksQueryFormTests(TestCase):
    def form(self, **overrides):
        data = {'locale': ' NL ', 'page_type': 'city', 'country_slug': 'netherlands', 'city_slug': 'amsterdam'}
        data.update(overrides)
        return InternalLinksQueryForm(data)

    def test_builds_context_and_options(self) -> None:
        form = self.form(limit='3', city_name='Amsterdam')
        self.assertTrue(form.is_valid(), form.errors)
        context = form.to_context()
        self.assertEqual(context.locale, 'nl')
        self.assertIs(context.page_type, PageType.CITY)
        self.assertEqual(context.city_name, 'Amsterdam')
        self.assertIsNone(context.category_slug)
        self.assertEqual(form.to_options().limit, 3)

    def test_default_limit(self) -> None:
        form = self.form()
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.to_options().limit, 8)

    def test_rejects_unknown_page_type(self) -> None:
        form = self.form(page_type='blog')
        self.assertFalse(form.is_valid())
        self.assertIn('page_type', form.errors)

    def test_rejects_out_of_range_limit(self) -> None:
        self.assertFalse(self.form(limit='0').is_valid())
        self.assertFalse(self.form(limit='51').is_valid())


class ViewTests(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        create_directory()

    def setUp(self) -> None:
        self.client = Client()

    def test_sitemap_index(self) -> None:
        response = self.client.get(reverse('seolinks:sitemap_index'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/xml')
        body = response.content.decode()
        self.assertIn('<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">', body)
        self.assertIn('/sitemaps/home.xml</loc>', body)
        self.assertIn('/sitemaps/places.xml</loc>', body)

    def test_sitemap_file(self) -> None:
        response = self.client.get(reverse('seolinks:sitemap_file', args=['places']))
        self.assertEqual(response.status_code, 200)
        body = response.content.decode()
        self.assertIn('<urlset', body)
        self.assertIn('/nl/netherlands/p/noord-holland/amsterdam/veterinary/west</loc>', body)
        self.assertNotIn('gesloten', body)

    def test_unknown_sitemap_file(self) -> None:
        response = self.client.get(reverse('seolinks:sitemap_file', args=['blog']))
        self.assertEqual(response.status_code, 404)

    @override_settings(SEOLINKS_DATA_SOURCE='tests.test_seolinks.RecordingDirectorySource')
    def test_sitemap_file_queries_only_its_section(self) -> None:
        expected = {
            'home': [],
            'static': [],
            'places': ['places'],
            'best-in-city': ['city_category_pairs'],
        }
        for name, calls in expected.items():
            with self.subTest(name=name):
                RecordingDirectorySource.calls = []
                response = self.client.get(reverse('seolinks:sitemap_file', args=[name]))
                self.assertEqual(response.status_code, 200)
                self.assertEqual(RecordingDirectorySource.calls, calls)

    def test_part_of_unsplit_section_is_not_found(self) -> None:
        response = self.client.get(reverse('seolinks:sitemap_file', args=['home-2']))
        self.assertEqual(response.status_code, 404)

    def test_sitemap_requires_get(self) -> None:
        response = self.client.post(reverse('seolinks:sitemap_index'))
        self.assertEqual(response.status_code, 405)

    def test_internal_links(self) -> None:
        response = self.client.get(
            reverse('seolinks:internal_links'),
            {'locale': 'en', 'page_type': 'city', 'country_slug': 'netherlands', 'city_slug': 'amsterdam', 'city_name': 'Amsterdam'},
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([group['title'] for group in data['groups']], ['Popular Services in Amsterdam', 'Best in Amsterdam'])
        self.assertEqual(data['links'][0]['href'], '/en/netherlands/amsterdam/veterinary')
        self.assertEqual(data['totalAvailable'], 4)
        self.assertEqual(data['context']['citySlug'], 'amsterdam')

    def test_internal_links_invalid_query(self) -> None:
        response = self.client.get(reverse('seolinks:internal_links'), {'locale': 'en', 'page_type': 'blog'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('page_type', response.json()['errors'])


class BuildSitemapsCommandTests(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        create_directory()

    def test_writes_index_and_section_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            stdout = StringIO()
            call_command('build_sitemaps', output=tmp, validate=True, stdout=stdout, stderr=StringIO())

            written = {path.name for path in Path(tmp).iterdir()}
            self.assertIn('sitemap.xml', written)
            self.assertIn('home.xml', written)
            self.assertIn('places.xml', written)
            index = (Path(tmp) / 'sitemap.xml').read_text(encoding='utf-8')
            self.assertIn('/sitemaps/places.xml</loc>', index)
            self.assertIn('Wrote', stdout.getvalue())

    @override_settings(SEOLINKS_SITEMAP_DIR=None)
    def test_requires_output_directory(self) -> None:
        with self.assertRaises(CommandError):
            call_command('build_sitemaps', stdout=StringIO())
