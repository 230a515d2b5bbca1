# cart/services/favorites_store.py
"""
COOKIE FAVORITES

Favorites kept in the `favorites` cookie (JSON list).
Items are keyed by `id` (the product slug, as the product pages use it);
an id appears at most once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping

from django.conf import settings

from catalog.services.presentation import money
from cart.services.cookies import read_json_cookie, write_json_cookie

logger = logging.getLogger(__name__)


@dataclass
class FavoriteItem:
    id: str
    name: str
    price: Decimal
    image: str | None = None

    def __post_init__(self):
        self.id = str(self.id)
        self.price = money(self.price)
        self.image = str(self.image) if self.image else None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FavoriteItem":
        if not isinstance(data, Mapping):
            raise ValueError("favorite must be an object")
        item_id = data.get("id")
        if item_id is None or str(item_id).strip() == "":
            raise ValueError("favorite requires an id")
        return cls(
            id=str(item_id),
            name=str(data.get("name") or ""),
            price=data.get("price"),
            image=data.get("image"),
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "price": float(self.price),
        }
        if self.image:
            data["image"] = self.image
        return data


class CookieFavorites:
    def __init__(self, items: Iterable[FavoriteItem] | None = None):
        self._items: list[FavoriteItem] = []
        for item in items or []:
            if not self.is_favorite(item.id):
                self._items.append(item)
        self.changed = False

    @staticmethod
    def cookie_name() -> str:
        return getattr(settings, "FAVORITES_COOKIE_NAME", "favorites")

    @classmethod
    def from_data(cls, data: Any) -> "CookieFavorites":
        if not isinstance(data, list):
            return cls()
        items = []
        for raw in data:
            try:
                items.append(FavoriteItem.from_dict(raw))
            except (ValueError, TypeError):
                logger.warning("Dropping malformed favorite")
        return cls(items)

    @classmethod
    def from_request(cls, request) -> "CookieFavorites":
        return cls.from_data(read_json_cookie(request, cls.cookie_name()))

    def to_data(self) -> list[dict]:
        return [item.to_dict() for item in self._items]

    def persist(self, response) -> None:
        if not self.changed:
            return
        write_json_cookie(
            response,
            self.cookie_name(),
            self.to_data(),
            max_age_days=getattr(settings, "FAVORITES_COOKIE_MAX_AGE_DAYS", 365),
        )
        self.changed = False

    @property
    def items(self) -> list[FavoriteItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def ids(self) -> set[str]:
        return {item.id for item in self._items}

    def is_favorite(self, item_id: Any) -> bool:
        return any(item.id == str(item_id) for item in self._items)

    def add(self, item: FavoriteItem) -> bool:
        if self.is_favorite(item.id):
            return False
        self._items.append(item)
        self.changed = True
        return True

    def remove(self, item_id: Any) -> bool:
        kept = [item for item in self._items if item.id != str(item_id)]
        removed = len(kept) != len(self._items)
        self._items = kept
        self.changed = True
        return removed

    def toggle(self, item: FavoriteItem) -> bool:
        """Flip membership; returns True when the item is now a favorite."""
        if self.is_favorite(item.id):
            self.remove(item.id)
            return False
        self.add(item)
        return True
