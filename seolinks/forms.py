"""Forms for the seolinks app.

The internal links endpoint receives the page context as query string
parameters; this form validates them and builds the engine's context
and options objects.
"""

from __future__ import annotations

from django import forms

from .engine.types import InternalLinkOptions, InternalLinkPageContext, PageType


class InternalLinksQueryForm(forms.Form):
    """Query parameters describing the page that wants internal links."""

    locale = forms.CharField(max_length=8)
    page_type = forms.ChoiceField(choices=[(page.value, page.value) for page in PageType])
    country_slug = forms.SlugField(required=False, max_length=255)
    country_name = forms.CharField(required=False, max_length=255)
    province_slug = forms.SlugField(required=False, max_length=255)
    city_slug = forms.SlugField(required=False, max_length=255)
    city_name = forms.CharField(required=False, max_length=255)
    category_slug = forms.SlugField(required=False, max_length=255)
    category_name = forms.CharField(required=False, max_length=255)
    place_slug = forms.SlugField(required=False, max_length=255)
    place_id = forms.IntegerField(required=False, min_value=1)
    limit = forms.IntegerField(
        required=False,
        min_value=1,
        max_value=50,
        help_text='Maximum number of flattened links (default 8).',
    )

    def clean_locale(self) -> str:
        return self.cleaned_data['locale'].strip().lower()

    def to_context(self) -> InternalLinkPageContext:
        data = self.cleaned_data
        return InternalLinkPageContext(
            locale=data['locale'],
            page_type=PageType(data['page_type']),
            country_slug=data.get('country_slug') or None,
            country_name=data.get('country_name') or None,
            province_slug=data.get('province_slug') or None,
            city_slug=data.get('city_slug') or None,
            city_name=data.get('city_name') or None,
            category_slug=data.get('category_slug') or None,
            category_name=data.get('category_name') or None,
            place_slug=data.get('place_slug') or None,
            place_id=data.get('place_id'),
        )

    def to_options(self) -> InternalLinkOptions:
        limit = self.cleaned_data.get('limit')
        if limit is None:
            return InternalLinkOptions()
        return InternalLinkOptions(limit=limit)
