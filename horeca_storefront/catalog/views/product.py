# catalog/views/product.py
"""
PRODUCT PAGE

GET /product/<slug>/

- Product is resolved by slug; a missing product (or any backend failure) is a 404.
- Variants are fetched only when the product declares has_variants; failure -> none.
- Related products: same category, limit 4, current product filtered out; failure -> none.
"""

from __future__ import annotations

import logging

from django.http import Http404
from django.views.generic import TemplateView

from cart.services.favorites_store import CookieFavorites
from catalog.services.exceptions import StorefrontServiceError
from catalog.services.page_cache import cached_page_data
from catalog.services.presentation import exclude_product
from catalog.services.server_api import (
    get_cached_product_by_slug,
    get_cached_product_variants,
    get_cached_products,
)

logger = logging.getLogger(__name__)

ROUTE = "/product/[slug]"
RELATED_LIMIT = 4


def load_variants(product: dict) -> list[dict]:
    if not product.get("has_variants"):
        return []
    try:
        variants = get_cached_product_variants(product["id"])
    except StorefrontServiceError:
        logger.warning("Error fetching variants", extra={"product_id": product.get("id")})
        return []
    return [v for v in (variants or []) if v.get("is_active", True)]


def load_related(product: dict) -> list[dict]:
    category_id = product.get("category_id")
    if not category_id:
        return []
    try:
        related = get_cached_products(
            category_id=category_id, limit=RELATED_LIMIT, active_only=True
        )
    except StorefrontServiceError:
        logger.warning(
            "Error fetching related products", extra={"product_id": product.get("id")}
        )
        return []
    return exclude_product(related or [], product.get("id"))


def _load_product(slug: str) -> dict:
    product = get_cached_product_by_slug(slug)
    return {
        "product": product,
        "variants": load_variants(product),
        "related_products": load_related(product),
    }


class ProductView(TemplateView):
    template_name = "catalog/product.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        slug = kwargs["slug"]

        try:
            data = cached_page_data(ROUTE, self.request.path, lambda: _load_product(slug))
        except StorefrontServiceError as exc:
            logger.warning(
                "Error fetching product", extra={"slug": slug, "error": str(exc)}
            )
            raise Http404("Product not found") from exc

        product = data["product"]
        context.update(data)
        context["variant_type"] = product.get("variant_type_en") or "Variant"
        context["is_favorite"] = CookieFavorites.from_request(self.request).is_favorite(slug)
        return context
