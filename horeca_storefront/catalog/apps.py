# catalog/apps.py

"""
CATALOG APP CONFIG

Storefront catalog module:
- Backend REST API client (products, categories, orders, favorites, messages)
- Tag-versioned data cache + page data cache (revalidated by webhook)
- Home, category, product and search pages
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Storefront Catalog"
