# accounts/services/auth_service.py
"""
AUTH SERVICE (BACKEND PROXY)

Shopper accounts live in the backend. This service:
- forwards sign up / sign in / SSO / sign out / password reset calls
- reads and updates the shopper profile (saved checkout address)
- keeps the backend token + user in the Django session

Errors:
- AuthError carries the backend's `detail` when present, otherwise a
  per-action default ("Sign in failed", ...).
- Sign out is best-effort: backend failures are logged, the session is
  cleared regardless.
"""

from __future__ import annotations

import logging
from typing import Any

from catalog.services.api_client import BackendApiClient
from catalog.services.exceptions import (
    BackendApiError,
    StorefrontServiceError,
)

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "auth_token"
SESSION_USER_KEY = "auth_user"

SSO_PROVIDERS = ("google", "apple")


class AuthError(StorefrontServiceError):
    """User-facing authentication failure."""


def _backend_detail(exc: StorefrontServiceError) -> str | None:
    if isinstance(exc, BackendApiError) and isinstance(exc.payload, dict):
        detail = exc.payload.get("detail") or exc.payload.get("message")
        if isinstance(detail, str) and detail.strip():
            return detail.strip()
    return None


def _fail(exc: StorefrontServiceError, default: str) -> AuthError:
    return AuthError(_backend_detail(exc) or default)


class AuthService:
    def __init__(self, client_factory=None):
        self._client_factory = client_factory or (
            lambda token=None: BackendApiClient(token=token)
        )

    def _client(self, token: str | None = None) -> BackendApiClient:
        return self._client_factory(token=token)

    def _call(self, default_error: str, method: str, path: str, *, body=None, token=None):
        try:
            return self._client(token).request_json(method, path, body=body)
        except StorefrontServiceError as exc:
            logger.warning(
                "Auth request failed", extra={"path": path, "error": str(exc)}
            )
            raise _fail(exc, default_error) from exc

    # --------------------------------------------------
    # Sessions
    # --------------------------------------------------

    def sign_up(
        self, *, first_name: str, last_name: str, email: str, phone: str, password: str
    ) -> dict:
        return self._call(
            "Sign up failed. Please try again.",
            "POST",
            "/auth/signup",
            body={
                "firstName": first_name,
                "lastName": last_name,
                "email": email,
                "phone": phone,
                "password": password,
            },
        )

    def sign_in(self, *, email: str, password: str) -> dict:
        return self._call(
            "Sign in failed. Please try again.",
            "POST",
            "/auth/signin",
            body={"email": email, "password": password},
        )

    def sso_login(
        self,
        *,
        provider: str,
        token: str,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> dict:
        if provider not in SSO_PROVIDERS:
            raise AuthError(f"Unsupported sign-in provider: {provider}")
        body: dict[str, Any] = {"provider": provider, "token": token, "email": email}
        if first_name:
            body["firstName"] = first_name
        if last_name:
            body["lastName"] = last_name
        return self._call(
            "SSO login failed. Please try again.", "POST", "/auth/sso", body=body
        )

    def sign_out(self, token: str | None) -> None:
        if not token:
            return
        try:
            self._client(token).request_json("POST", "/auth/signout")
        except StorefrontServiceError:
            logger.warning("Sign out error", exc_info=True)

    # --------------------------------------------------
    # Profile
    # --------------------------------------------------

    def get_profile(self, token: str) -> dict:
        return self._call(
            "Failed to load profile.", "GET", "/auth/profile", token=token
        )

    def update_address(self, token: str, address: dict) -> dict:
        body = {k: v for k, v in address.items() if v not in (None, "")}
        return self._call(
            "Failed to save address. Please try again.",
            "PUT",
            "/auth/profile/address",
            body=body,
            token=token,
        )

    # --------------------------------------------------
    # Passwords
    # --------------------------------------------------

    def forgot_password(self, *, email: str) -> dict:
        return self._call(
            "Failed to send reset email. Please try again.",
            "POST",
            "/auth/forgot-password",
            body={"email": email},
        )

    def reset_password(self, *, token: str, new_password: str) -> dict:
        return self._call(
            "Failed to reset password. Please try again.",
            "POST",
            "/auth/reset-password",
            body={"token": token, "new_password": new_password},
        )


auth_service = AuthService()


# --------------------------------------------------
# Session storage
# --------------------------------------------------

def store_auth(request, result: dict) -> None:
    token = (result or {}).get("token")
    if not token:
        return
    request.session.cycle_key()
    request.session[SESSION_TOKEN_KEY] = token
    request.session[SESSION_USER_KEY] = (result or {}).get("user") or {}


def clear_auth(request) -> None:
    request.session.pop(SESSION_TOKEN_KEY, None)
    request.session.pop(SESSION_USER_KEY, None)


def get_token(request) -> str | None:
    return request.session.get(SESSION_TOKEN_KEY) or None


def get_user(request) -> dict | None:
    if not get_token(request):
        return None
    return request.session.get(SESSION_USER_KEY) or {}


def is_authenticated(request) -> bool:
    return bool(get_token(request))
