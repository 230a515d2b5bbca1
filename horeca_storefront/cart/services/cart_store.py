# cart/services/cart_store.py
"""
COOKIE CART

Purpose:
- Shopping cart kept in the `cart` cookie (JSON list of lines).
- No server-side storage; the cookie is the source of truth.

Rules:
- A line is identified by its merge key: (product id, size, variant selection).
- The variant selection compares by content, not key order
  ({"Size": ..., "Color": ...} == {"Color": ..., "Size": ...}).
- Adding a line whose key already exists increases that line's qty.
- Quantities are whole units >= 1 (updates below 1 clamp to 1).
- A missing or malformed cookie is an empty cart; malformed lines are dropped.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping

from django.conf import settings

from catalog.services.presentation import money
from cart.services.cookies import read_json_cookie, write_json_cookie

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def _to_qty(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("qty must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValueError("qty must be a whole number")


@dataclass(frozen=True)
class VariantChoice:
    name_en: str
    value_en: str
    price: Decimal = Decimal("0.00")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VariantChoice":
        if not isinstance(data, Mapping):
            raise ValueError("variant choice must be an object")
        return cls(
            name_en=str(data.get("name_en") or ""),
            value_en=str(data.get("value_en") or ""),
            price=money(data.get("price")),
        )

    def to_dict(self) -> dict:
        return {
            "name_en": self.name_en,
            "value_en": self.value_en,
            "price": float(self.price),
        }


def normalize_variants(
    variants: Mapping[str, Any] | None,
) -> dict[str, VariantChoice]:
    if not variants:
        return {}
    if not isinstance(variants, Mapping):
        raise ValueError("variants must be an object")
    return {
        str(group): choice if isinstance(choice, VariantChoice) else VariantChoice.from_dict(choice)
        for group, choice in variants.items()
    }


def canonical_variants(variants: Mapping[str, Any] | None) -> str:
    normalized = normalize_variants(variants)
    return json.dumps(
        {group: choice.to_dict() for group, choice in normalized.items()},
        sort_keys=True,
        separators=(",", ":"),
    )


def merge_key(
    product_id: Any, size: Any = None, variants: Mapping[str, Any] | None = None
) -> tuple[str, str | None, str]:
    return (str(product_id), _optional_str(size), canonical_variants(variants))


@dataclass
class CartLine:
    id: str
    name: str
    price: Decimal
    qty: int = 1
    slug: str | None = None
    size: str | None = None
    image: str | None = None
    variants: dict[str, VariantChoice] = field(default_factory=dict)

    def __post_init__(self):
        self.id = str(self.id)
        self.price = money(self.price)
        self.qty = max(1, _to_qty(self.qty))
        self.size = _optional_str(self.size)
        self.variants = normalize_variants(self.variants)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartLine":
        if not isinstance(data, Mapping):
            raise ValueError("cart line must be an object")
        product_id = data.get("id")
        if product_id is None or str(product_id).strip() == "":
            raise ValueError("cart line requires an id")
        return cls(
            id=str(product_id),
            name=str(data.get("name") or ""),
            price=data.get("price"),
            qty=data.get("qty", 1),
            slug=_optional_str(data.get("slug")),
            size=data.get("size"),
            image=_optional_str(data.get("image")),
            variants=data.get("variants") or {},
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "price": float(self.price),
            "qty": self.qty,
            "size": self.size,
            "image": self.image,
        }
        if self.variants:
            data["variants"] = {g: c.to_dict() for g, c in self.variants.items()}
        return data

    @property
    def key(self) -> tuple[str, str | None, str]:
        return merge_key(self.id, self.size, self.variants)

    @property
    def token(self) -> str:
        """Short opaque handle for the merge key (used by HTML forms)."""
        raw = json.dumps(list(self.key), separators=(",", ":"))
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:16]

    @property
    def line_total(self) -> Decimal:
        return money(self.price * Decimal(self.qty))


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    vat_rate: Decimal

    def to_dict(self) -> dict:
        return {
            "subtotal": f"{self.subtotal:.2f}",
            "tax": f"{self.tax:.2f}",
            "total": f"{self.total:.2f}",
            "vat_rate": str(self.vat_rate),
        }


def compute_totals(lines: Iterable[CartLine], vat_rate: Decimal | None = None) -> CartTotals:
    rate = Decimal(str(vat_rate if vat_rate is not None else getattr(settings, "VAT_RATE", "0.21")))
    subtotal = money(sum((line.price * Decimal(line.qty) for line in lines), Decimal("0")))
    tax = (subtotal * rate).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    return CartTotals(subtotal=subtotal, tax=tax, total=money(subtotal + tax), vat_rate=rate)


class CookieCart:
    """
    Cart backed by the `cart` cookie.

    Mutations mark the cart as changed; persist(response) writes the cookie
    only when something changed.
    """

    def __init__(self, lines: Iterable[CartLine] | None = None):
        self._lines: list[CartLine] = list(lines or [])
        self.changed = False

    # --------------------------------------------------
    # Loading / saving
    # --------------------------------------------------

    @staticmethod
    def cookie_name() -> str:
        return getattr(settings, "CART_COOKIE_NAME", "cart")

    @classmethod
    def from_data(cls, data: Any) -> "CookieCart":
        if not isinstance(data, list):
            return cls()

        lines: list[CartLine] = []
        for raw in data:
            try:
                line = CartLine.from_dict(raw)
            except (ValueError, TypeError, ArithmeticError):
                logger.warning("Dropping malformed cart line")
                continue
            lines.append(line)

        cart = cls()
        # Re-adding folds duplicate keys a hand-edited cookie might carry.
        for line in lines:
            cart._add_line(line)
        return cart

    @classmethod
    def from_request(cls, request) -> "CookieCart":
        return cls.from_data(read_json_cookie(request, cls.cookie_name()))

    def to_data(self) -> list[dict]:
        return [line.to_dict() for line in self._lines]

    def persist(self, response) -> None:
        if not self.changed:
            return
        write_json_cookie(
            response,
            self.cookie_name(),
            self.to_data(),
            max_age_days=getattr(settings, "CART_COOKIE_MAX_AGE_DAYS", 7),
        )
        self.changed = False

    # --------------------------------------------------
    # Queries
    # --------------------------------------------------

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self):
        return iter(list(self._lines))

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        return sum(line.qty for line in self._lines)

    @property
    def subtotal(self) -> Decimal:
        return compute_totals(self._lines, Decimal("0")).subtotal

    def totals(self, vat_rate: Decimal | None = None) -> CartTotals:
        return compute_totals(self._lines, vat_rate)

    def find(
        self, product_id: Any, size: Any = None, variants: Mapping[str, Any] | None = None
    ) -> CartLine | None:
        key = merge_key(product_id, size, variants)
        return next((line for line in self._lines if line.key == key), None)

    def find_by_token(self, token: str) -> CartLine | None:
        return next((line for line in self._lines if line.token == token), None)

    # --------------------------------------------------
    # Mutations
    # --------------------------------------------------

    def _add_line(self, line: CartLine) -> CartLine:
        existing = next((it for it in self._lines if it.key == line.key), None)
        if existing is not None:
            existing.qty += line.qty
            return existing
        self._lines.append(line)
        return line

    def add(self, line: CartLine) -> CartLine:
        result = self._add_line(line)
        self.changed = True
        logger.info("Cart line added", extra={"product_id": line.id, "qty": line.qty})
        return result

    def update_qty(
        self,
        product_id: Any,
        size: Any,
        qty: int,
        variants: Mapping[str, Any] | None = None,
    ) -> CartLine | None:
        line = self.find(product_id, size, variants)
        if line is None:
            return None
        line.qty = max(1, _to_qty(qty))
        self.changed = True
        return line

    def remove(
        self, product_id: Any, size: Any = None, variants: Mapping[str, Any] | None = None
    ) -> bool:
        key = merge_key(product_id, size, variants)
        kept = [line for line in self._lines if line.key != key]
        removed = len(kept) != len(self._lines)
        self._lines = kept
        # Removal always rewrites the cookie, as clear() does.
        self.changed = True
        return removed

    def clear(self) -> None:
        self._lines = []
        self.changed = True
