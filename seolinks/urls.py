"""URL configuration for the seolinks app.

This module defines the URL patterns for the app's views. It also
specifies the ``app_name`` to allow namespacing from the project URL
configuration.
"""

from django.urls import path

from . import views

app_name = 'seolinks'

urlpatterns = [
    path('sitemap.xml', views.sitemap_index, name='sitemap_index'),
    path('sitemaps/<str:name>.xml', views.sitemap_file, name='sitemap_file'),
    path('api/internal-links/', views.internal_links, name='internal_links'),
]
