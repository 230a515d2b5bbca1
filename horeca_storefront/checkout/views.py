# checkout/views.py
"""
CHECKOUT PAGES

- GET  /checkout/           form (pre-filled from the signed-in profile) + summary
- POST /checkout/           validate, create order + payment session, redirect
- GET  /checkout/success/   ?session_id= ; clears the cart
- GET  /checkout/cancel/    nothing was charged
"""

from __future__ import annotations

import logging

from django.contrib import messages
from django.forms.utils import pretty_name
from django.shortcuts import redirect, render
from django.views import View
from django.views.generic import TemplateView

from accounts.forms import CustomerDetailsForm
from accounts.services.auth_service import AuthError, auth_service, get_token
from cart.services.cart_store import CookieCart
from catalog.services.api_client import get_client
from catalog.services.exceptions import StorefrontServiceError
from checkout.services.orchestrator import CheckoutError, start_checkout

logger = logging.getLogger(__name__)


class CheckoutView(View):
    template_name = "checkout/checkout.html"

    def get(self, request, *args, **kwargs):
        cart = CookieCart.from_request(request)
        form = CustomerDetailsForm(initial=self.profile_initial(request))
        return self._render(request, form, cart)

    def post(self, request, *args, **kwargs):
        cart = CookieCart.from_request(request)
        form = CustomerDetailsForm(request.POST)

        if cart.is_empty:
            messages.error(request, "Your cart is empty. Add some items before checking out.")
            return self._render(request, form, cart, status=400)

        if not form.is_valid():
            for error in form.non_field_errors():
                messages.error(request, error)
            for name, errors in form.errors.items():
                if name != "__all__":
                    messages.error(request, f"{pretty_name(name)}: {errors[0]}")
            return self._render(request, form, cart, status=400)

        try:
            result = start_checkout(form.cleaned_data, cart.lines)
        except CheckoutError as exc:
            messages.error(request, f"Checkout failed: {exc}")
            return self._render(request, form, cart, status=502)

        logger.info("Redirecting to payment", extra={"order_id": result.order_id})
        return redirect(result.redirect_url)

    def profile_initial(self, request) -> dict:
        token = get_token(request)
        if not token:
            return {}
        try:
            profile = auth_service.get_profile(token)
        except AuthError:
            logger.warning("Error loading shopper profile", exc_info=True)
            return {}
        return CustomerDetailsForm.initial_from_profile(profile)

    def _render(self, request, form, cart, *, status: int = 200):
        return render(
            request,
            self.template_name,
            {
                "form": form,
                "cart": cart,
                "lines": cart.lines,
                "totals": cart.totals(),
            },
            status=status,
        )


class CheckoutSuccessView(TemplateView):
    template_name = "checkout/success.html"

    def get_session_details(self, session_id: str) -> dict | None:
        if not session_id:
            return None
        try:
            return get_client().get_checkout_session(session_id)
        except StorefrontServiceError:
            logger.warning(
                "Error fetching checkout session", extra={"session_id": session_id}
            )
            return None

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        session_id = self.request.GET.get("session_id", "").strip()
        context["session_id"] = session_id
        context["session"] = self.get_session_details(session_id)
        return context

    def get(self, request, *args, **kwargs):
        response = super().get(request, *args, **kwargs)
        cart = CookieCart.from_request(request)
        cart.clear()
        cart.persist(response)
        return response


class CheckoutCancelView(TemplateView):
    template_name = "checkout/cancel.html"
