# catalog/views/home.py

from __future__ import annotations

import logging

from django.views.generic import TemplateView

from catalog.services.exceptions import StorefrontServiceError
from catalog.services.page_cache import cached_page_data
from catalog.services.server_api import (
    get_cached_featured_products,
    get_cached_top_products,
)

logger = logging.getLogger(__name__)

ROUTE = "/"


def _load_home() -> dict:
    return {
        "featured_products": get_cached_featured_products(),
        "top_products": get_cached_top_products(),
    }


class HomeView(TemplateView):
    """Landing page: featured products (first 8) and top products (next 6)."""

    template_name = "catalog/home.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        try:
            data = cached_page_data(ROUTE, self.request.path, _load_home)
        except StorefrontServiceError:
            logger.exception("Error fetching home page products")
            data = {"featured_products": [], "top_products": []}
        context.update(data)
        return context
