# catalog/services/exceptions.py

"""
STOREFRONT SERVICE ERRORS

Centralized errors raised when talking to the backend REST API.
"""

from __future__ import annotations

from typing import Any


class StorefrontServiceError(Exception):
    """Base exception for all storefront service failures."""


class BackendUnavailableError(StorefrontServiceError):
    """Raised when the backend cannot be reached or answers with a non-JSON body."""


class BackendApiError(StorefrontServiceError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def detail(self) -> str:
        return str(self)


class NotFoundError(BackendApiError):
    """Raised when the backend answers 404 for the requested entity."""
