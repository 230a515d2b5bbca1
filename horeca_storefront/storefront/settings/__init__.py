# storefront/settings/__init__.py
"""
PATH: storefront/settings/__init__.py

Settings package entrypoint.

We intentionally do NOT import dev/prod here to avoid accidental environment coupling.
Use DJANGO_SETTINGS_MODULE to select:
- storefront.settings.dev   (local development, tests)
- storefront.settings.prod  (production)
"""
