"""Service functions connecting the engines to Django.

These helpers resolve the configured data source and sitemap
configuration from settings and assemble complete sitemap file sets, so
the views and the ``build_sitemaps`` command share one code path.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from .engine.index import EntityStatsProvider, get_internal_links_for_page
from .engine.types import InternalLinkOptions, InternalLinkPageContext, InternalLinksResult
from .sitemap.config import SitemapConfig, load_sitemap_config
from .sitemap.sections import (
    SECTION_BUILDERS,
    SitemapDataSource,
    build_all_sections,
    get_sitemap_counts,
    today_iso,
)
from .sitemap.types import SitemapFile
from .sitemap.xml import (
    build_sitemap_index_xml,
    parse_sitemap_file_name,
    plan_sitemap_files,
    section_index,
    split_into_sitemaps,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA_SOURCE = 'seolinks.queries.DjangoDirectorySource'


class DirectorySource(EntityStatsProvider, SitemapDataSource, Protocol):
    """A source serving both the link engine and the sitemap builders."""


def get_sitemap_config() -> SitemapConfig:
    """Load the sitemap configuration named by ``SEOLINKS_CONFIG_PATH``."""

    path = getattr(settings, 'SEOLINKS_CONFIG_PATH', None)
    try:
        return load_sitemap_config(path)
    except ValueError as exc:
        raise ImproperlyConfigured(f'Invalid sitemap configuration in {path}: {exc}') from exc


def get_directory_source() -> Optional[DirectorySource]:
    """Instantiate the configured data source.

    An empty ``SEOLINKS_DATA_SOURCE`` setting disables it; callers then
    receive ``None`` and every data-backed section comes out empty.
    """

    dotted_path = getattr(settings, 'SEOLINKS_DATA_SOURCE', DEFAULT_DATA_SOURCE)
    if not dotted_path:
        return None
    return import_string(dotted_path)()


async def internal_links_for(
    context: InternalLinkPageContext, options: InternalLinkOptions | None = None
) -> InternalLinksResult:
    """Build internal links with the configured data source.

    Pages cannot be linked without statistics, so a disabled source
    yields an empty result rather than an error.
    """

    source = get_directory_source()
    if source is None:
        return InternalLinksResult(links=(), groups=(), total_available=0, context=context)
    return await get_internal_links_for_page(context, source, options)


async def build_sitemap_files(
    source: Optional[SitemapDataSource],
    config: SitemapConfig,
    *,
    today: Optional[str] = None,
) -> List[SitemapFile]:
    """Build every sitemap section and split it into protocol-sized files."""

    sections = await build_all_sections(source, config, today=today)
    files = plan_sitemap_files(sections, config)
    counts = await get_sitemap_counts(source)
    logger.info(
        'Built %d sitemap files with %d URLs (%s)',
        len(files),
        sum(len(urls) for urls in sections.values()),
        ', '.join(f'{name}={value}' for name, value in counts.items()),
    )
    return files


async def build_sitemap_file(
    source: Optional[SitemapDataSource],
    config: SitemapConfig,
    name: str,
    *,
    today: Optional[str] = None,
) -> Optional[SitemapFile]:
    """Build one planned file by running only the builder of its section.

    Returns ``None`` when ``name`` is not a file ``plan_sitemap_files``
    would produce: an unknown section, a part number on a section that
    fits in one file, a bare name for a split section, or a part out of
    range.
    """

    parsed = parse_sitemap_file_name(name, SECTION_BUILDERS)
    if parsed is None:
        return None
    section_id, part = parsed

    urls = await SECTION_BUILDERS[section_id](source, config, today=today)
    chunks = split_into_sitemaps(urls, config.max_urls_per_sitemap)
    if part is None:
        if len(chunks) > 1:
            return None
        return SitemapFile(name=name, urls=list(urls))
    if len(chunks) <= 1 or part > len(chunks):
        return None
    logger.debug('Built %s with %d of %d %s URLs', name, len(chunks[part - 1]), len(urls), section_id)
    return SitemapFile(name=name, urls=chunks[part - 1])


def render_sitemap_index(files: List[SitemapFile], config: SitemapConfig, today: Optional[str] = None) -> str:
    return build_sitemap_index_xml(section_index(files, today or today_iso()), config.base_url)
