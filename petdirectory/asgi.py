"""ASGI config for petdirectory.

The sitemap and internal link views are async; serving them through
ASGI keeps their database awaits off the request thread.
"""

import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'petdirectory.settings')

application = get_asgi_application()
