# checkout/services/orchestrator.py
"""
CHECKOUT ORCHESTRATOR

Flow:
1) cart lines -> order lines {id: int, quantity, variants}
2) POST /orders/                          (order recorded in the backend)
3) POST /stripe/create-checkout-session   (payment session for that order)
4) caller redirects the shopper to the returned `url`

Hard rules:
- An empty cart never reaches the backend.
- Product ids must be numeric; anything else is a CheckoutError.
- Company fields + billing address are sent only for company buyers.
- Backend failures become CheckoutError carrying the backend message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from django.conf import settings

from accounts.forms import ENTITY_COMPANY
from cart.services.cart_store import CartLine, CartTotals, compute_totals
from catalog.services.api_client import BackendApiClient, get_client
from catalog.services.exceptions import StorefrontServiceError

logger = logging.getLogger(__name__)

COMPANY_ORDER_FIELDS = ("company_name", "tax_id", "trade_register_no", "bank_name", "iban")


class CheckoutError(Exception):
    """Checkout could not be started; message is shown to the shopper."""


@dataclass(frozen=True)
class CheckoutResult:
    order_id: Any
    redirect_url: str
    totals: CartTotals


def _variants_payload(line: CartLine) -> dict | None:
    if not line.variants:
        return None
    return {group: choice.to_dict() for group, choice in line.variants.items()}


def order_lines(lines: Iterable[CartLine]) -> list[dict]:
    items = []
    for line in lines:
        try:
            product_id = int(str(line.id).strip())
        except ValueError:
            raise CheckoutError(
                f"Invalid product ID: {line.id}. Product ID must be a valid number."
            ) from None
        items.append(
            {
                "id": product_id,
                "quantity": line.qty,
                "variants": _variants_payload(line),
            }
        )
    return items


def _address(customer: dict) -> dict:
    return {
        "county": customer["county"],
        "city": customer["city"],
        "address": customer["address"],
    }


def build_order_payload(customer: dict, lines: list[CartLine], totals: CartTotals) -> dict:
    is_company = customer.get("entity_type") == ENTITY_COMPANY

    customer_info: dict[str, Any] = {
        "customer_email": customer["email"],
        "customer_name": f"{customer['first_name']} {customer['last_name']}",
        "customer_phone": customer["phone"],
        "shipping_address": _address(customer),
    }
    if is_company:
        for name in COMPANY_ORDER_FIELDS:
            customer_info[name] = customer.get(name) or None
        customer_info["billing_address"] = _address(customer)

    return {
        "customer_info": customer_info,
        "cart_items": order_lines(lines),
        "subtotal": float(totals.subtotal),
        "tax_amount": float(totals.tax),
        "total_amount": float(totals.total),
        "currency": getattr(settings, "STORE_CURRENCY", "RON"),
    }


def build_payment_payload(
    customer: dict, lines: list[CartLine], totals: CartTotals, order_id: Any
) -> dict:
    customer_info: dict[str, Any] = {
        "entityType": customer.get("entity_type"),
        "firstName": customer["first_name"],
        "lastName": customer["last_name"],
        "phone": customer["phone"],
        "email": customer["email"],
        "county": customer["county"],
        "city": customer["city"],
        "address": customer["address"],
    }
    if customer.get("tax_id"):
        customer_info["taxId"] = customer["tax_id"]
    if customer.get("company_name"):
        customer_info["companyName"] = customer["company_name"]

    return {
        "cartItems": [
            {
                "id": line.id,
                "name": line.name,
                "price": float(line.price),
                "qty": line.qty,
                "variants": _variants_payload(line),
            }
            for line in lines
        ],
        "customerInfo": customer_info,
        "total": float(totals.total),
        "orderId": order_id,
    }


class CheckoutOrchestrator:
    def __init__(self, client: BackendApiClient | None = None):
        self.client = client or get_client()

    def start_checkout(self, customer: dict, lines: list[CartLine]) -> CheckoutResult:
        lines = list(lines)
        if not lines:
            raise CheckoutError("Your cart is empty")

        totals = compute_totals(lines)
        order_payload = build_order_payload(customer, lines, totals)

        try:
            order = self.client.create_order(order_payload)
        except StorefrontServiceError as exc:
            logger.error("Order creation failed", extra={"error": str(exc)})
            raise CheckoutError(f"Failed to create order: {exc}") from exc

        order_id = (order or {}).get("id")
        if order_id is None:
            raise CheckoutError("Failed to create order: backend returned no order id")

        logger.info("Order created", extra={"order_id": order_id})

        try:
            session = self.client.create_checkout_session(
                build_payment_payload(customer, lines, totals, order_id)
            )
        except StorefrontServiceError as exc:
            logger.error(
                "Checkout session creation failed",
                extra={"order_id": order_id, "error": str(exc)},
            )
            raise CheckoutError(f"Failed to create checkout session: {exc}") from exc

        url = (session or {}).get("url")
        if not url:
            raise CheckoutError("Failed to create checkout session: no redirect url")

        return CheckoutResult(order_id=order_id, redirect_url=url, totals=totals)


def start_checkout(customer: dict, lines: list[CartLine]) -> CheckoutResult:
    return CheckoutOrchestrator().start_checkout(customer, lines)
