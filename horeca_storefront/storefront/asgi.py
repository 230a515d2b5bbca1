# storefront/asgi.py
"""
PATH: storefront/asgi.py

ASGI config for the storefront project.
Defaults to dev settings unless DJANGO_SETTINGS_MODULE is set externally.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    os.getenv("DJANGO_SETTINGS_MODULE", "storefront.settings.dev"),
)

application = get_asgi_application()
