# catalog/views/listing.py
"""
Shared price filtering for product listings (category page, search page).

Query params:
- min_price / max_price : inclusive bounds; blank or unparsable -> ignored
- price_sort            : "asc" | "desc" | "none" (default)
"""

from __future__ import annotations

from catalog.services.presentation import (
    SORT_CHOICES,
    SORT_NONE,
    filter_and_sort_products,
    parse_price,
)


def read_listing_filters(params) -> dict:
    price_sort = (params.get("price_sort") or SORT_NONE).strip().lower()
    if price_sort not in SORT_CHOICES:
        price_sort = SORT_NONE
    return {
        "min_price": parse_price(params.get("min_price")),
        "max_price": parse_price(params.get("max_price")),
        "price_sort": price_sort,
    }


def apply_listing_filters(products, params) -> tuple[list[dict], dict]:
    filters = read_listing_filters(params)
    return filter_and_sort_products(products or [], **filters), filters
