"""Write the sitemap index and every section file to a directory."""

from __future__ import annotations

import logging
from pathlib import Path

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from seolinks.services import (
    build_sitemap_files,
    get_directory_source,
    get_sitemap_config,
    render_sitemap_index,
)
from seolinks.sitemap.xml import build_sitemap_xml, validate_sitemap

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Generate sitemap.xml and its section files as static XML.'

    def add_arguments(self, parser) -> None:
        parser.add_argument(
            '--output',
            default=None,
            help='Target directory (defaults to SEOLINKS_SITEMAP_DIR).',
        )
        parser.add_argument(
            '--validate',
            action='store_true',
            help='Report validation problems for each file; files are written regardless.',
        )

    def handle(self, *args, **options) -> None:
        output = options['output'] or getattr(settings, 'SEOLINKS_SITEMAP_DIR', None)
        if not output:
            raise CommandError('No output directory given and SEOLINKS_SITEMAP_DIR is not set.')
        target = Path(output)
        target.mkdir(parents=True, exist_ok=True)

        config = get_sitemap_config()
        source = get_directory_source()
        if source is None:
            logger.warning('Directory data source is disabled; only static sections will be written.')

        files = async_to_sync(build_sitemap_files)(source, config)
        for sitemap in files:
            (target / sitemap.name).write_text(build_sitemap_xml(sitemap.urls), encoding='utf-8')
            if options['validate']:
                report = validate_sitemap(sitemap.urls, config.max_urls_per_sitemap)
                for error in report.errors:
                    self.stderr.write(f'{sitemap.name}: {error}')
        (target / 'sitemap.xml').write_text(render_sitemap_index(files, config), encoding='utf-8')

        total = sum(len(sitemap.urls) for sitemap in files)
        self.stdout.write(
            self.style.SUCCESS(f'Wrote {len(files)} sitemap files ({total} URLs) to {target}.')
        )
