# catalog/views/search.py

from __future__ import annotations

import logging

from django.views.generic import TemplateView

from catalog.services.exceptions import StorefrontServiceError
from catalog.services.page_cache import cached_page_data
from catalog.services.server_api import get_cached_products
from catalog.views.listing import apply_listing_filters

logger = logging.getLogger(__name__)

ROUTE = "/search"
RESULT_LIMIT = 20


class SearchView(TemplateView):
    """Product search (`?q=`), with the same price filters as category pages."""

    template_name = "catalog/search.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        query = (self.request.GET.get("q") or "").strip()

        products: list[dict] = []
        search_error = False
        if query:
            try:
                products = cached_page_data(
                    ROUTE,
                    self.request.path,
                    lambda: get_cached_products(
                        search=query, active_only=True, limit=RESULT_LIMIT
                    ),
                    variant=query,
                )
            except StorefrontServiceError:
                logger.exception("Error loading search results", extra={"query": query})
                search_error = True

        products, filters = apply_listing_filters(products, self.request.GET)
        context.update(
            {
                "query": query,
                "products": products,
                "filters": filters,
                "search_error": search_error,
            }
        )
        return context
