# cart/views/pages.py
"""
CART / FAVORITES PAGES

- GET  /cart/                 lines, quantity controls, totals
- POST /cart/add/             add from a product page (server-side product price)
- POST /cart/update/          set qty of a line (clamps to 1)
- POST /cart/remove/          remove a line
- POST /cart/clear/           empty the cart
- GET  /favorites/            favorites list
- POST /favorites/toggle/     add/remove a product by slug

User feedback goes through django.contrib.messages.
"""

from __future__ import annotations

import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.views import View
from django.views.generic import TemplateView

from catalog.services.exceptions import StorefrontServiceError
from catalog.services.server_api import get_cached_product_by_slug
from catalog.views.navigation import safe_redirect
from catalog.views.product import load_variants
from cart.forms import AddToCartForm, CartLineForm, ToggleFavoriteForm, UpdateQtyForm
from cart.services.cart_store import CookieCart
from cart.services.favorites_store import CookieFavorites
from cart.services.product_lines import (
    UnknownVariantError,
    favorite_from_product,
    line_from_product,
)

logger = logging.getLogger(__name__)


class CartPageView(TemplateView):
    template_name = "cart/cart.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        cart = CookieCart.from_request(self.request)
        context.update({"cart": cart, "lines": cart.lines, "totals": cart.totals()})
        return context


class AddToCartView(View):
    def post(self, request, *args, **kwargs):
        form = AddToCartForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Error adding item to cart. Please try again.")
            return safe_redirect(request, request.POST.get("next"), "cart:cart")

        data = form.cleaned_data
        try:
            product = get_cached_product_by_slug(data["slug"])
            line = line_from_product(
                product,
                variants=load_variants(product),
                selected_variant_ids=[data["variant_id"]] if data["variant_id"] else [],
                size=data["size"] or None,
                qty=data["qty"],
            )
        except UnknownVariantError:
            messages.error(request, "Please choose one of the available options.")
            return safe_redirect(request, data["next"], "cart:cart")
        except StorefrontServiceError:
            logger.exception("Error adding to cart", extra={"slug": data["slug"]})
            messages.error(request, "Error adding item to cart. Please try again.")
            return safe_redirect(request, data["next"], "cart:cart")

        cart = CookieCart.from_request(request)
        cart.add(line)
        messages.success(request, f"Added to cart: {line.name} ({line.price:.2f})")

        response = safe_redirect(request, data["next"], "cart:cart")
        cart.persist(response)
        return response


class UpdateCartLineView(View):
    def post(self, request, *args, **kwargs):
        form = UpdateQtyForm(request.POST)
        response = redirect("cart:cart")
        if not form.is_valid():
            return response

        cart = CookieCart.from_request(request)
        line = cart.find_by_token(form.cleaned_data["token"])
        if line is not None:
            cart.update_qty(line.id, line.size, form.cleaned_data["qty"], line.variants)
            cart.persist(response)
        return response


class RemoveCartLineView(View):
    def post(self, request, *args, **kwargs):
        form = CartLineForm(request.POST)
        response = redirect("cart:cart")
        if not form.is_valid():
            return response

        cart = CookieCart.from_request(request)
        line = cart.find_by_token(form.cleaned_data["token"])
        if line is not None:
            cart.remove(line.id, line.size, line.variants)
            cart.persist(response)
            messages.info(request, f"Removed from cart: {line.name}")
        return response


class ClearCartView(View):
    def post(self, request, *args, **kwargs):
        cart = CookieCart.from_request(request)
        cart.clear()
        response = redirect("cart:cart")
        cart.persist(response)
        return response


class FavoritesPageView(TemplateView):
    template_name = "cart/favorites.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["favorites"] = CookieFavorites.from_request(self.request).items
        return context


class ToggleFavoriteView(View):
    def post(self, request, *args, **kwargs):
        form = ToggleFavoriteForm(request.POST)
        if not form.is_valid():
            return safe_redirect(request, request.POST.get("next"), "cart:favorites")

        slug = form.cleaned_data["slug"]
        favorites = CookieFavorites.from_request(request)

        if favorites.is_favorite(slug):
            favorites.remove(slug)
            messages.info(request, "Removed from favorites.")
        else:
            try:
                product = get_cached_product_by_slug(slug)
            except StorefrontServiceError:
                logger.exception("Error adding favorite", extra={"slug": slug})
                messages.error(request, "Could not update favorites. Please try again.")
                return safe_redirect(request, form.cleaned_data["next"], "cart:favorites")
            favorites.add(favorite_from_product(product))
            messages.success(request, "Added to favorites.")

        response = safe_redirect(request, form.cleaned_data["next"], "cart:favorites")
        favorites.persist(response)
        return response
