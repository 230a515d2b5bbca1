# catalog/services/presentation.py
"""
DISPLAY HELPERS FOR BACKEND ENTITIES

Backend entities are passed through as dicts. The only client-side rules are
display fallbacks:
- bilingual fields (`name_en` / `name_ro`) fall back to English, then ""
- the shown price is `sale_price` when positive, else `price`, else 0
- price filters/sorting treat a missing price as 0
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

TWOPLACES = Decimal("0.01")

SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_NONE = "none"
SORT_CHOICES = (SORT_NONE, SORT_ASC, SORT_DESC)

DEFAULT_LANGUAGE = "en"


def money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    try:
        return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0.00")


def parse_price(raw: Any) -> Decimal | None:
    """Parse a user-supplied price filter; blank or invalid input means no filter."""
    if raw is None:
        return None
    text = str(raw).strip().replace(",", ".")
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def localized(entity: dict | None, field: str, language: str | None = None) -> str:
    if not entity:
        return ""
    lang = (language or DEFAULT_LANGUAGE).split("-")[0].lower()
    value = entity.get(f"{field}_{lang}")
    if not value and lang != DEFAULT_LANGUAGE:
        value = entity.get(f"{field}_{DEFAULT_LANGUAGE}")
    return str(value) if value else ""


def display_price(product: dict | None) -> Decimal:
    if not product:
        return Decimal("0.00")
    sale = money(product.get("sale_price"))
    if sale > 0:
        return sale
    return money(product.get("price"))


def first_image(product: dict | None) -> str | None:
    images = (product or {}).get("images") or []
    return images[0] if images else None


def title_from_slug(slug: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in (slug or "").split("-"))


def filter_and_sort_products(
    products: Iterable[dict],
    *,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    price_sort: str = SORT_NONE,
) -> list[dict]:
    def price_of(p: dict) -> Decimal:
        return money(p.get("price"))

    result = [
        p
        for p in products
        if (min_price is None or price_of(p) >= min_price)
        and (max_price is None or price_of(p) <= max_price)
    ]

    if price_sort == SORT_ASC:
        result.sort(key=price_of)
    elif price_sort == SORT_DESC:
        result.sort(key=price_of, reverse=True)
    return result


def exclude_product(products: Iterable[dict], product_id: Any) -> list[dict]:
    return [p for p in products if p.get("id") != product_id]
