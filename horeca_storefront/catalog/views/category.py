# catalog/views/category.py
"""
CATEGORY PAGE

GET /category/<slug>/?min_price=&max_price=&price_sort=

- Category is resolved by slug; a missing category (or any backend failure) is a 404.
- Products: active only, first 50 of the category.
- Price filters are applied to the cached product list per request.
"""

from __future__ import annotations

import logging

from django.http import Http404
from django.views.generic import TemplateView

from catalog.services.exceptions import StorefrontServiceError
from catalog.services.page_cache import cached_page_data
from catalog.services.presentation import title_from_slug
from catalog.services.server_api import (
    get_cached_category_by_slug,
    get_cached_products_by_category,
)
from catalog.views.listing import apply_listing_filters

logger = logging.getLogger(__name__)

ROUTE = "/category/[slug]"


def _load_category(slug: str) -> dict:
    category = get_cached_category_by_slug(slug)
    products = get_cached_products_by_category(category.get("id"))
    return {"category": category, "products": products or []}


class CategoryView(TemplateView):
    template_name = "catalog/category.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        slug = kwargs["slug"]

        try:
            data = cached_page_data(
                ROUTE, self.request.path, lambda: _load_category(slug)
            )
        except StorefrontServiceError as exc:
            logger.warning(
                "Error fetching category data",
                extra={"slug": slug, "error": str(exc)},
            )
            raise Http404("Category not found") from exc

        products, filters = apply_listing_filters(data["products"], self.request.GET)

        context.update(
            {
                "title": title_from_slug(slug),
                "category": data["category"],
                "products": products,
                "total_products": len(data["products"]),
                "filters": filters,
            }
        )
        return context
