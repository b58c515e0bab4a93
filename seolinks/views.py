"""Django views for the seolinks app.

The sitemap views render the sitemap index and the individual section
files on demand; the internal links view returns the link groups for a
page as JSON for the template layer.
"""

from __future__ import annotations

import logging

from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET

from .forms import InternalLinksQueryForm
from .services import (
    build_sitemap_file,
    build_sitemap_files,
    get_directory_source,
    get_sitemap_config,
    internal_links_for,
    render_sitemap_index,
)
from .sitemap.xml import build_sitemap_xml

logger = logging.getLogger(__name__)

XML_CONTENT_TYPE = 'application/xml'


@require_GET
async def sitemap_index(request: HttpRequest) -> HttpResponse:
    """Serve ``/sitemap.xml`` listing every section file."""

    config = get_sitemap_config()
    files = await build_sitemap_files(get_directory_source(), config)
    return HttpResponse(render_sitemap_index(files, config), content_type=XML_CONTENT_TYPE)


@require_GET
async def sitemap_file(request: HttpRequest, name: str) -> HttpResponse:
    """Serve one section file, e.g. ``/sitemaps/places-2.xml``."""

    config = get_sitemap_config()
    sitemap = await build_sitemap_file(get_directory_source(), config, f'{name}.xml')
    if sitemap is None:
        raise Http404(f'Unknown sitemap: {name}.xml')
    return HttpResponse(build_sitemap_xml(sitemap.urls), content_type=XML_CONTENT_TYPE)


@require_GET
async def internal_links(request: HttpRequest) -> JsonResponse:
    """Return the internal links for the page described by the query string."""

    form = InternalLinksQueryForm(request.GET)
    if not form.is_valid():
        logger.debug('Rejected internal links query: %s', form.errors.as_json())
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)

    result = await internal_links_for(form.to_context(), form.to_options())
    return JsonResponse(result.as_dict())
