# cart/api_urls.py
"""
CART API URLS

Base path (mounted in storefront/urls.py):
    /api/

- GET    /api/cart/
- POST   /api/cart/items/
- PATCH  /api/cart/items/
- DELETE /api/cart/items/
- POST   /api/cart/clear/
- GET    /api/favorites/
- POST   /api/favorites/toggle/
"""

from __future__ import annotations

from django.urls import path

from cart.views.api import (
    CartItemsView,
    CartView,
    ClearCartView,
    FavoritesView,
    FavoriteToggleView,
)

app_name = "cart-api"

urlpatterns = [
    path("cart/", CartView.as_view(), name="cart"),
    path("cart/items/", CartItemsView.as_view(), name="cart-items"),
    path("cart/clear/", ClearCartView.as_view(), name="cart-clear"),
    path("favorites/", FavoritesView.as_view(), name="favorites"),
    path("favorites/toggle/", FavoriteToggleView.as_view(), name="favorites-toggle"),
]
