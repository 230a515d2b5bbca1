# revalidation/apps.py

"""
REVALIDATION APP CONFIG

Signed webhook from the backend that invalidates cached catalog data
(page data per path / route, data cache per tag).
"""

from django.apps import AppConfig


class RevalidationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "revalidation"
    verbose_name = "Cache Revalidation"
