# cart/apps.py

"""
CART APP CONFIG

Shopper-side state kept in cookies (the storefront persists nothing):
- Shopping cart, lines merged by (product id, size, variant selection)
- Favorites list
"""

from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cart"
    verbose_name = "Cart & Favorites"
