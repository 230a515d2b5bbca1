# cart/services/product_lines.py
"""
Build cart lines / favorites from backend product data.

Pricing rule for a variant selection:
- no variant selected   -> the product's shown price (sale price when set)
- variant(s) selected   -> the highest positive price among them,
                           else the product's shown price
All of a product's variants belong to one group named by `variant_type_en`.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from catalog.services.presentation import display_price, first_image, money
from cart.services.cart_store import CartLine, VariantChoice
from cart.services.favorites_store import FavoriteItem

DEFAULT_VARIANT_GROUP = "Variant"


class UnknownVariantError(ValueError):
    """Raised when a selected variant id is not one of the product's variants."""


def variant_group_name(product: dict) -> str:
    return str(product.get("variant_type_en") or DEFAULT_VARIANT_GROUP)


def resolve_variants(variants: Iterable[dict], selected_ids: Iterable[Any]) -> list[dict]:
    by_id = {str(v.get("id")): v for v in variants or []}
    chosen = []
    for raw in selected_ids or []:
        key = str(raw).strip()
        if not key:
            continue
        variant = by_id.get(key)
        if variant is None:
            raise UnknownVariantError(f"Unknown variant: {key}")
        chosen.append(variant)
    return chosen


def selection_price(product: dict, chosen: list[dict]) -> Decimal:
    prices = [money(v.get("price")) for v in chosen]
    best = max(prices, default=Decimal("0.00"))
    if best > 0:
        return best
    return display_price(product)


def line_from_product(
    product: dict,
    *,
    variants: Iterable[dict] = (),
    selected_variant_ids: Iterable[Any] = (),
    size: str | None = None,
    qty: int = 1,
) -> CartLine:
    chosen = resolve_variants(variants, selected_variant_ids)
    group = variant_group_name(product)
    # One group: the last selection wins, as a single-choice selector would.
    selection = {
        group: VariantChoice(
            name_en=group,
            value_en=str(v.get("value_en") or ""),
            price=money(v.get("price")),
        )
        for v in chosen
    }
    return CartLine(
        id=str(product.get("id")),
        slug=product.get("slug"),
        name=str(product.get("name_en") or ""),
        price=selection_price(product, chosen),
        qty=qty,
        size=size or None,
        image=first_image(product),
        variants=selection,
    )


def favorite_from_product(product: dict) -> FavoriteItem:
    return FavoriteItem(
        id=str(product.get("slug") or product.get("id")),
        name=str(product.get("name_en") or ""),
        price=money(product.get("price")),
        image=first_image(product),
    )
