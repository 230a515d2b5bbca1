# cart/serializers.py
"""
CART / FAVORITES SERIALIZERS

Input:
- CartLineInputSerializer     add a line (qty >= 1)
- CartLineRefSerializer       identify a line by (id, size, variants)
- CartQtyUpdateSerializer     ref + new qty (values below 1 clamp to 1)
- FavoriteItemSerializer      toggle a favorite

Output:
- cart_payload(cart)          lines + counters + totals
"""

from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from cart.services.cart_store import CartLine, CookieCart
from cart.services.favorites_store import CookieFavorites, FavoriteItem


class VariantChoiceSerializer(serializers.Serializer):
    name_en = serializers.CharField(allow_blank=True)
    value_en = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, default=0
    )


class CartLineRefSerializer(serializers.Serializer):
    id = serializers.CharField()
    size = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    variants = serializers.DictField(
        child=VariantChoiceSerializer(), required=False, allow_null=True, default=None
    )

    def validate_size(self, value):
        return value or None


class CartLineInputSerializer(CartLineRefSerializer):
    slug = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    name = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    qty = serializers.IntegerField(min_value=1, required=False, default=1)
    image = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def to_line(self) -> CartLine:
        data = self.validated_data
        return CartLine(
            id=data["id"],
            slug=data.get("slug") or None,
            name=data["name"],
            price=data["price"],
            qty=data["qty"],
            size=data.get("size"),
            image=data.get("image") or None,
            variants=data.get("variants") or {},
        )


class CartQtyUpdateSerializer(CartLineRefSerializer):
    qty = serializers.IntegerField()


class FavoriteItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    image = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    def to_item(self) -> FavoriteItem:
        data = self.validated_data
        return FavoriteItem(
            id=data["id"],
            name=data["name"],
            price=data["price"],
            image=data.get("image") or None,
        )


def cart_payload(cart: CookieCart) -> dict:
    lines = []
    for line in cart.lines:
        row = line.to_dict()
        row["key"] = line.token
        row["line_total"] = f"{line.line_total:.2f}"
        lines.append(row)
    return {
        "items": lines,
        "item_count": cart.item_count,
        "currency": getattr(settings, "STORE_CURRENCY", "RON"),
        **cart.totals().to_dict(),
    }


def favorites_payload(favorites: CookieFavorites) -> dict:
    return {
        "items": favorites.to_data(),
        "count": len(favorites),
    }
