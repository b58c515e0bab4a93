"""Sitemap XML serialization, chunking and validation.

Documents follow the sitemaps.org 0.9 protocol: exact element names,
``xmlns`` on the root element and priorities with one decimal place.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator

from .config import PROTOCOL_MAX_URLS, SITEMAP_NAMESPACE, SitemapConfig
from .types import SitemapFile, SitemapSection, SitemapStats, SitemapUrl, ValidationReport

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
LASTMOD_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")

_XML_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

_url_validator = URLValidator()


def escape_xml(value: str) -> str:
    """Escape the five XML special characters."""

    for char, entity in _XML_ENTITIES:
        value = value.replace(char, entity)
    return value


def format_priority(priority: float) -> str:
    return f"{float(priority):.1f}"


def _text(value: object) -> str:
    return str(getattr(value, "value", value))


def build_sitemap_xml(urls: Iterable[SitemapUrl]) -> str:
    """Render a ``<urlset>`` document."""

    lines = [XML_DECLARATION, f'<urlset xmlns="{SITEMAP_NAMESPACE}">']
    for url in urls:
        lines.append("  <url>")
        lines.append(f"    <loc>{escape_xml(url.loc)}</loc>")
        if url.lastmod:
            lines.append(f"    <lastmod>{escape_xml(url.lastmod)}</lastmod>")
        if url.changefreq:
            lines.append(f"    <changefreq>{_text(url.changefreq)}</changefreq>")
        if url.priority is not None:
            lines.append(f"    <priority>{format_priority(url.priority)}</priority>")
        lines.append("  </url>")
    lines.append("</urlset>")
    return "\n".join(lines)


def build_sitemap_index_xml(sections: Iterable[SitemapSection], base_url: str) -> str:
    """Render a ``<sitemapindex>`` document referencing each section file."""

    base = base_url.rstrip("/")
    lines = [XML_DECLARATION, f'<sitemapindex xmlns="{SITEMAP_NAMESPACE}">']
    for section in sections:
        lines.append("  <sitemap>")
        lines.append(f"    <loc>{escape_xml(base + section.path)}</loc>")
        if section.lastmod:
            lines.append(f"    <lastmod>{escape_xml(section.lastmod)}</lastmod>")
        lines.append("  </sitemap>")
    lines.append("</sitemapindex>")
    return "\n".join(lines)


def split_into_sitemaps(
    urls: Sequence[SitemapUrl], max_per_sitemap: int = PROTOCOL_MAX_URLS
) -> List[List[SitemapUrl]]:
    """Partition ``urls`` into consecutive chunks of at most ``max_per_sitemap``."""

    if max_per_sitemap < 1:
        raise ValueError("max_per_sitemap must be at least 1.")
    return [
        list(urls[start:start + max_per_sitemap])
        for start in range(0, len(urls), max_per_sitemap)
    ]


def plan_sitemap_files(
    sections: Mapping[str, Sequence[SitemapUrl]], config: SitemapConfig
) -> List[SitemapFile]:
    """Name one file per section, numbering the parts of oversized sections."""

    files: List[SitemapFile] = []
    for section_id, urls in sections.items():
        chunks = split_into_sitemaps(urls, config.max_urls_per_sitemap)
        if len(chunks) <= 1:
            files.append(SitemapFile(name=f"{section_id}.xml", urls=list(urls)))
            continue
        for number, chunk in enumerate(chunks, start=1):
            files.append(SitemapFile(name=f"{section_id}-{number}.xml", urls=chunk))
    return files


def parse_sitemap_file_name(
    name: str, section_ids: Iterable[str]
) -> Optional[Tuple[str, Optional[int]]]:
    """Split a planned file name into its section id and part number.

    ``home.xml`` gives ``("home", None)`` and ``places-2.xml`` gives
    ``("places", 2)``. Unknown sections and non-canonical part numbers
    such as ``places-02.xml`` give ``None``.
    """

    if not name.endswith(".xml"):
        return None
    stem = name[: -len(".xml")]
    known = set(section_ids)
    if stem in known:
        return stem, None
    section_id, separator, part = stem.rpartition("-")
    if separator and section_id in known and part.isdigit() and not part.startswith("0"):
        return section_id, int(part)
    return None


def get_sitemap_stats(urls: Sequence[SitemapUrl]) -> SitemapStats:
    by_changefreq: Counter[str] = Counter(
        _text(url.changefreq) for url in urls if url.changefreq
    )
    by_priority: Counter[str] = Counter(
        format_priority(url.priority) for url in urls if url.priority is not None
    )
    return SitemapStats(
        total_urls=len(urls),
        by_changefreq=dict(by_changefreq),
        by_priority=dict(sorted(by_priority.items(), reverse=True)),
        with_lastmod=sum(1 for url in urls if url.lastmod),
        estimated_bytes=len(build_sitemap_xml(urls).encode("utf-8")),
    )


def validate_sitemap_url(url: SitemapUrl) -> List[str]:
    """Return the problems found in one entry; empty when it is valid."""

    errors: List[str] = []
    if not url.loc:
        errors.append("Missing loc")
    else:
        try:
            _url_validator(url.loc)
        except ValidationError:
            errors.append(f"Invalid URL format: {url.loc}")

    if url.lastmod and not LASTMOD_RE.match(url.lastmod):
        errors.append(f"Invalid lastmod format: {url.lastmod}")

    if url.priority is not None and not 0.0 <= url.priority <= 1.0:
        errors.append(f"Priority must be between 0.0 and 1.0: {url.priority}")

    return errors


def validate_sitemap(
    urls: Sequence[SitemapUrl], max_urls: Optional[int] = PROTOCOL_MAX_URLS
) -> ValidationReport:
    """Collect every problem in a sitemap instead of raising."""

    errors: List[str] = []
    if max_urls is not None and len(urls) > max_urls:
        errors.append(f"Sitemap has {len(urls)} URLs; the limit is {max_urls}")
    for position, url in enumerate(urls, start=1):
        errors.extend(f"URL {position}: {error}" for error in validate_sitemap_url(url))
    return ValidationReport(valid=not errors, errors=errors)


def section_index(files: Sequence[SitemapFile], lastmod: str) -> List[SitemapSection]:
    """Describe planned files as sitemap index entries under ``/sitemaps/``."""

    return [
        SitemapSection(id=file.name[: -len(".xml")], path=f"/sitemaps/{file.name}", lastmod=lastmod)
        for file in files
    ]
