"""Sitemap generation: section URL builders and the XML serializer."""
