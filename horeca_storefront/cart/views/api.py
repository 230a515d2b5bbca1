# cart/views/api.py

"""
CART / FAVORITES JSON API

Purpose:
- Cookie-backed cart lifecycle for client-side scripts
- Add / update qty / remove / clear, keyed by (id, size, variants)
- Favorites listing + toggle

Hard rules:
- The cookie is the only storage; every mutating response re-writes it.
- qty on add must be >= 1; qty on update clamps to 1.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from cart.serializers import (
    CartLineInputSerializer,
    CartLineRefSerializer,
    CartQtyUpdateSerializer,
    FavoriteItemSerializer,
    cart_payload,
    favorites_payload,
)
from cart.services.cart_store import CookieCart
from cart.services.favorites_store import CookieFavorites

logger = logging.getLogger(__name__)


class PublicWriteThrottle(AnonRateThrottle):
    """
    For cookie-mutating endpoints.
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_write'].
    """

    scope = "public_write"


# =====================================================
# API ERROR NORMALIZATION
# =====================================================

def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def _cart_response(cart: CookieCart, *, http_status: int = status.HTTP_200_OK) -> Response:
    response = Response(cart_payload(cart), status=http_status)
    cart.persist(response)
    return response


class CartView(APIView):
    """
    GET /api/cart/
    """

    permission_classes = [AllowAny]

    @extend_schema(tags=["Cart"], responses={200: OpenApiResponse(description="Cart contents")})
    def get(self, request, *args, **kwargs):
        return _cart_response(CookieCart.from_request(request))


class CartItemsView(APIView):
    """
    POST   /api/cart/items/   add a line (merges by id + size + variants)
    PATCH  /api/cart/items/   set qty of a line
    DELETE /api/cart/items/   remove a line
    """

    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(tags=["Cart"], request=CartLineInputSerializer)
    def post(self, request, *args, **kwargs):
        s = CartLineInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = CookieCart.from_request(request)
        cart.add(s.to_line())
        return _cart_response(cart, http_status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Cart"], request=CartQtyUpdateSerializer)
    def patch(self, request, *args, **kwargs):
        s = CartQtyUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        cart = CookieCart.from_request(request)
        line = cart.update_qty(data["id"], data.get("size"), data["qty"], data.get("variants"))
        if line is None:
            return error_response(
                code="LINE_NOT_FOUND",
                message="Cart line not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )
        return _cart_response(cart)

    @extend_schema(tags=["Cart"], request=CartLineRefSerializer)
    def delete(self, request, *args, **kwargs):
        s = CartLineRefSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        cart = CookieCart.from_request(request)
        cart.remove(data["id"], data.get("size"), data.get("variants"))
        return _cart_response(cart)


class ClearCartView(APIView):
    """
    POST /api/cart/clear/
    """

    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(tags=["Cart"], request=None)
    def post(self, request, *args, **kwargs):
        cart = CookieCart.from_request(request)
        cart.clear()
        return _cart_response(cart)


class FavoritesView(APIView):
    """
    GET /api/favorites/
    """

    permission_classes = [AllowAny]

    @extend_schema(tags=["Favorites"])
    def get(self, request, *args, **kwargs):
        return Response(favorites_payload(CookieFavorites.from_request(request)))


class FavoriteToggleView(APIView):
    """
    POST /api/favorites/toggle/
    """

    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(tags=["Favorites"], request=FavoriteItemSerializer)
    def post(self, request, *args, **kwargs):
        s = FavoriteItemSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        favorites = CookieFavorites.from_request(request)
        is_favorite = favorites.toggle(s.to_item())
        logger.info(
            "Favorite toggled",
            extra={"item_id": s.validated_data["id"], "is_favorite": is_favorite},
        )

        payload = favorites_payload(favorites)
        payload["is_favorite"] = is_favorite
        response = Response(payload, status=status.HTTP_200_OK)
        favorites.persist(response)
        return response
