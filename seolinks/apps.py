from django.apps import AppConfig


class SeolinksConfig(AppConfig):
    """Configuration for the seolinks Django app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'seolinks'
    verbose_name = 'SEO links & sitemaps'
