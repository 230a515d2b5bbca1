# revalidation/services/webhook.py
"""
CACHE REVALIDATION WEBHOOK

The backend posts an event whenever catalog data changes:

    {"type": "product.updated",
     "data": {"id": 12, "slug": "combi-oven", "category_id": 3},
     "timestamp": "..."}

signed with X-Webhook-Signature = hex(HMAC-SHA256(WEBHOOK_SECRET, raw body)).

Each event invalidates the page data and data tags it can affect and
returns the list of paths that were revalidated.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from django.conf import settings

from catalog.services.page_cache import KIND_PAGE, revalidate_path
from catalog.services.server_api import TAG_CATEGORIES, TAG_PRODUCTS, revalidate_tag

logger = logging.getLogger(__name__)

CATEGORY_ROUTE = "/category/[slug]"


class InvalidPayloadError(ValueError):
    pass


class UnknownEventError(ValueError):
    pass


class WebhookConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class WebhookEvent:
    type: str
    data: dict = field(default_factory=dict)
    timestamp: str | None = None

    @property
    def slug(self) -> str | None:
        slug = self.data.get("slug")
        return str(slug) if slug else None

    @property
    def category_id(self) -> Any:
        return self.data.get("category_id")


# --------------------------------------------------
# Signature + parsing
# --------------------------------------------------

def _get_secret() -> str:
    secret = getattr(settings, "WEBHOOK_SECRET", "") or ""
    if not secret:
        raise WebhookConfigError("WEBHOOK_SECRET is not configured")
    return secret


def sign_payload(raw_body: bytes) -> str:
    return hmac.new(
        _get_secret().encode("utf-8"), raw_body or b"", hashlib.sha256
    ).hexdigest()


def verify_signature(*, raw_body: bytes, signature: str | None) -> bool:
    if not signature:
        return False
    # Hex is case-insensitive; bytes so non-ASCII headers compare unequal.
    expected = sign_payload(raw_body).encode("ascii")
    received = str(signature).strip().lower().encode("utf-8", "ignore")
    return hmac.compare_digest(expected, received)


def parse_event(raw_body: bytes) -> WebhookEvent:
    try:
        payload = json.loads((raw_body or b"").decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidPayloadError("Invalid payload") from exc

    if not isinstance(payload, dict):
        raise InvalidPayloadError("Invalid payload")

    event_type = payload.get("type")
    data = payload.get("data")
    if not isinstance(event_type, str) or not event_type:
        raise InvalidPayloadError("Invalid payload")
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidPayloadError("Invalid payload")

    timestamp = payload.get("timestamp")
    return WebhookEvent(
        type=event_type,
        data=data,
        timestamp=str(timestamp) if timestamp is not None else None,
    )


# --------------------------------------------------
# Handlers
# --------------------------------------------------

def _product_changed(event: WebhookEvent) -> list[str]:
    paths = []
    if event.slug:
        paths.append(revalidate_path(f"/product/{event.slug}"))
    paths.append(revalidate_path("/"))
    if event.category_id is not None:
        paths.append(revalidate_path(CATEGORY_ROUTE, KIND_PAGE))
    paths.append(revalidate_path("/search"))
    revalidate_tag(TAG_PRODUCTS)
    return paths


def _category_changed(event: WebhookEvent) -> list[str]:
    paths = []
    if event.slug:
        paths.append(revalidate_path(f"/category/{event.slug}"))
    paths.append(revalidate_path(CATEGORY_ROUTE, KIND_PAGE))
    paths.append(revalidate_path("/"))
    revalidate_tag(TAG_CATEGORIES)
    return paths


def _category_deleted(event: WebhookEvent) -> list[str]:
    paths = [
        revalidate_path(CATEGORY_ROUTE, KIND_PAGE),
        revalidate_path("/"),
    ]
    revalidate_tag(TAG_CATEGORIES)
    return paths


def _order_event(event: WebhookEvent) -> list[str]:
    logger.info(
        "Order event received; no public pages to revalidate",
        extra={"event_type": event.type, "order_id": event.data.get("id")},
    )
    return []


HANDLERS: dict[str, Callable[[WebhookEvent], list[str]]] = {
    "product.created": _product_changed,
    "product.updated": _product_changed,
    "product.deleted": _product_changed,
    "category.created": _category_changed,
    "category.updated": _category_changed,
    "category.deleted": _category_deleted,
    "order.created": _order_event,
    "order.updated": _order_event,
    "order.deleted": _order_event,
}


def handle_event(event: WebhookEvent) -> list[str]:
    handler = HANDLERS.get(event.type)
    if handler is None:
        raise UnknownEventError(f"Unknown event type: {event.type}")

    paths = handler(event)
    logger.info(
        "Cache invalidated",
        extra={"event_type": event.type, "entity_id": event.data.get("id"), "paths": paths},
    )
    return paths
