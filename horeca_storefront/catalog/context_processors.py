"""Context processors for the storefront catalog."""

import logging
import re

from django.conf import settings

from catalog.services.exceptions import StorefrontServiceError
from catalog.services.server_api import get_cached_categories

logger = logging.getLogger(__name__)

# Same pattern as the <slug:...> path converter behind catalog:category.
SLUG_RE = re.compile(r"[-a-zA-Z0-9_]+")


def _menu_entry(category) -> bool:
    if not isinstance(category, dict) or not category.get("is_active", True):
        return False
    slug = category.get("slug")
    return isinstance(slug, str) and SLUG_RE.fullmatch(slug) is not None


def storefront(request):
    """Category menu + store currency for the header of every page."""
    try:
        categories = [c for c in get_cached_categories() or [] if _menu_entry(c)]
    except StorefrontServiceError:
        logger.warning("Error fetching category menu")
        categories = []

    return {
        "menu_categories": categories,
        "store_currency": getattr(settings, "STORE_CURRENCY", "RON"),
    }
