from .cart_store import CartLine, CartTotals, CookieCart, VariantChoice, merge_key
from .favorites_store import CookieFavorites, FavoriteItem
from .product_lines import (
    UnknownVariantError,
    favorite_from_product,
    line_from_product,
)

__all__ = [
    "CartLine",
    "CartTotals",
    "CookieCart",
    "VariantChoice",
    "merge_key",
    "CookieFavorites",
    "FavoriteItem",
    "UnknownVariantError",
    "favorite_from_product",
    "line_from_product",
]
