# cart/urls.py

from __future__ import annotations

from django.urls import path

from cart.views import pages

app_name = "cart"

urlpatterns = [
    path("cart/", pages.CartPageView.as_view(), name="cart"),
    path("cart/add/", pages.AddToCartView.as_view(), name="add"),
    path("cart/update/", pages.UpdateCartLineView.as_view(), name="update"),
    path("cart/remove/", pages.RemoveCartLineView.as_view(), name="remove"),
    path("cart/clear/", pages.ClearCartView.as_view(), name="clear"),
    path("favorites/", pages.FavoritesPageView.as_view(), name="favorites"),
    path("favorites/toggle/", pages.ToggleFavoriteView.as_view(), name="favorites-toggle"),
]
