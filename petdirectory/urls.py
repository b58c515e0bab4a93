"""Root URL configuration for the petdirectory project."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('seolinks.urls')),
]
