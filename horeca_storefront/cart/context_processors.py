"""Header counters for the cart and favorites."""

from cart.services.cart_store import CookieCart
from cart.services.favorites_store import CookieFavorites


def cart_summary(request):
    return {
        "cart_count": CookieCart.from_request(request).item_count,
        "favorites_count": len(CookieFavorites.from_request(request)),
    }
