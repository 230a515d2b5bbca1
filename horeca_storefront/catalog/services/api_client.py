# catalog/services/api_client.py
"""
BACKEND REST API CLIENT

The storefront owns no data: products, categories, orders, favorites,
contact messages and Stripe checkout sessions all live behind the backend
REST API configured in settings.BACKEND_API.

Rules:
- JSON in, JSON out.
- Query parameters that are None are omitted.
- Non-2xx responses raise BackendApiError (404 -> NotFoundError) carrying the
  backend's own message when it sends one.
- Network failures and non-JSON bodies raise BackendUnavailableError.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from django.conf import settings

from catalog.services.exceptions import (
    BackendApiError,
    BackendUnavailableError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

USER_AGENT = "horeca-storefront/1.0 (+Python-urllib)"


def _backend_cfg() -> dict:
    cfg = getattr(settings, "BACKEND_API", {}) or {}
    return cfg if isinstance(cfg, dict) else {}


def _safe_preview(text: str, limit: int = 300) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " ...(truncated)"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: dict | None) -> str:
    if not params:
        return ""
    pairs = [(k, _query_value(v)) for k, v in params.items() if v is not None]
    return urlencode(pairs)


def _parse_json_or_text(raw: str) -> dict[str, Any]:
    raw = raw or ""
    if not raw.strip():
        return {"kind": "empty", "raw": raw}
    try:
        return {"kind": "json", "json": json.loads(raw), "raw": raw}
    except ValueError:
        return {"kind": "text", "raw": raw}


def _error_message(parsed: dict[str, Any], fallback: str) -> str:
    if parsed.get("kind") == "json" and isinstance(parsed.get("json"), dict):
        j = parsed["json"]
        msg = j.get("detail") or j.get("message") or j.get("error")
        if msg:
            return msg if isinstance(msg, str) else json.dumps(msg, ensure_ascii=False)
    preview = _safe_preview(parsed.get("raw") or "")
    return preview or fallback


def _segment(value: Any) -> str:
    return quote(str(value).strip(), safe="")


class BackendApiClient:
    """
    Thin JSON client over the backend REST API.

    `token` (optional) is sent as `Authorization: Bearer <token>` for calls
    made on behalf of a signed-in shopper.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        prefix: str | None = None,
        timeout: int | None = None,
        token: str | None = None,
    ):
        cfg = _backend_cfg()
        self.base_url = (base_url if base_url is not None else cfg.get("BASE_URL") or "").rstrip("/")
        raw_prefix = prefix if prefix is not None else cfg.get("PREFIX") or ""
        self.prefix = ("/" + raw_prefix.strip("/")) if raw_prefix.strip("/") else ""
        self.timeout = int(timeout if timeout is not None else cfg.get("TIMEOUT") or 15)
        self.token = (token or "").strip() or None

    # --------------------------------------------------
    # Transport
    # --------------------------------------------------

    def url_for(self, path: str, params: dict | None = None) -> str:
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self.base_url}{self.prefix}{path}"
        qs = build_query(params)
        return f"{url}?{qs}" if qs else url

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request_json(
        self,
        method: str,
        path: str,
        *,
        body: dict | list | None = None,
        params: dict | None = None,
    ) -> Any:
        url = self.url_for(path, params)
        data = None
        if body is not None:
            data = json.dumps(body, ensure_ascii=False, default=str).encode("utf-8")

        req = Request(url, data=data, headers=self._headers(), method=method)

        try:
            with urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            try:
                raw = e.read().decode("utf-8", errors="replace")
            except (OSError, AttributeError):
                raw = ""
            parsed = _parse_json_or_text(raw)
            message = _error_message(parsed, f"HTTP error! status: {e.code}")
            logger.warning(
                "Backend API request failed",
                extra={"method": method, "url": url, "status": e.code},
            )
            payload = parsed.get("json")
            if e.code == 404:
                raise NotFoundError(message, status_code=e.code, payload=payload) from e
            raise BackendApiError(message, status_code=e.code, payload=payload) from e
        except URLError as e:
            logger.error("Backend API unreachable", extra={"method": method, "url": url})
            raise BackendUnavailableError(f"Backend API unreachable: {e.reason}") from e
        except (TimeoutError, OSError) as e:
            logger.error("Backend API request failed", extra={"method": method, "url": url})
            raise BackendUnavailableError(f"Backend API request failed: {e}") from e

        parsed = _parse_json_or_text(raw)
        if parsed["kind"] == "empty":
            return {}
        if parsed["kind"] != "json":
            raise BackendUnavailableError(
                f"Backend API returned non-JSON: {_safe_preview(parsed.get('raw') or '')}"
            )
        return parsed["json"]

    def get(self, path: str, params: dict | None = None) -> Any:
        return self.request_json("GET", path, params=params)

    def post(self, path: str, body: dict | None = None) -> Any:
        return self.request_json("POST", path, body=body)

    def put(self, path: str, body: dict | None = None) -> Any:
        return self.request_json("PUT", path, body=body)

    def delete(self, path: str) -> Any:
        return self.request_json("DELETE", path)

    # --------------------------------------------------
    # Categories
    # --------------------------------------------------

    def get_categories(self) -> list[dict]:
        return self.get("/categories")

    def get_category(self, category_id: int) -> dict:
        return self.get(f"/categories/{_segment(category_id)}")

    def get_category_by_slug(self, slug: str) -> dict:
        return self.get(f"/categories/slug/{_segment(slug)}")

    # --------------------------------------------------
    # Products
    # --------------------------------------------------

    def get_products(
        self,
        *,
        skip: int | None = None,
        limit: int | None = None,
        active_only: bool | None = None,
        category_id: int | None = None,
        search: str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        brand: str | None = None,
        language: str | None = None,
    ) -> list[dict]:
        params = {
            "skip": skip,
            "limit": limit,
            "active_only": active_only,
            "category_id": category_id,
            "search": search,
            "min_price": min_price,
            "max_price": max_price,
            "brand": brand,
            "language": language,
        }
        return self.get("/products", params)

    def get_product(self, product_id: int) -> dict:
        return self.get(f"/products/{_segment(product_id)}")

    def get_product_by_slug(self, slug: str) -> dict:
        return self.get(f"/products/slug/{_segment(slug)}")

    def get_product_variants(self, product_id: int) -> list[dict]:
        return self.get(f"/products/{_segment(product_id)}/variants")

    # --------------------------------------------------
    # Orders
    # --------------------------------------------------

    def get_orders(
        self,
        *,
        user_id: int | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        return self.get("/orders", {"skip": skip, "limit": limit, "user_id": user_id})

    def get_order(self, order_id: int) -> dict:
        return self.get(f"/orders/{_segment(order_id)}")

    def create_order(self, payload: dict) -> dict:
        return self.post("/orders/", payload)

    # --------------------------------------------------
    # Favorites (server-side, signed-in shoppers)
    # --------------------------------------------------

    def get_user_favorites(
        self, user_id: int, *, skip: int | None = None, limit: int | None = None
    ) -> list[dict]:
        return self.get(
            f"/users/{_segment(user_id)}/favorites", {"skip": skip, "limit": limit}
        )

    def add_favorite(self, *, user_id: int, product_id: int) -> dict:
        return self.post("/favorites", {"user_id": user_id, "product_id": product_id})

    def remove_favorite(self, *, user_id: int, product_id: int) -> Any:
        return self.delete(
            f"/users/{_segment(user_id)}/favorites/{_segment(product_id)}"
        )

    def check_favorite(self, *, user_id: int, product_id: int) -> bool:
        data = self.get(
            f"/users/{_segment(user_id)}/favorites/{_segment(product_id)}/check"
        )
        return bool((data or {}).get("is_favorite"))

    # --------------------------------------------------
    # Contact messages
    # --------------------------------------------------

    def create_message(self, payload: dict) -> dict:
        return self.post("/messages/", payload)

    # --------------------------------------------------
    # Stripe checkout sessions (created by the backend)
    # --------------------------------------------------

    def create_checkout_session(self, payload: dict) -> dict:
        return self.post("/stripe/create-checkout-session", payload)

    def get_checkout_session(self, session_id: str) -> dict:
        return self.get(f"/stripe/session/{_segment(session_id)}")

    # --------------------------------------------------
    # Health
    # --------------------------------------------------

    def health_check(self) -> dict:
        return self.get("/health")


def get_client(*, token: str | None = None) -> BackendApiClient:
    return BackendApiClient(token=token)
