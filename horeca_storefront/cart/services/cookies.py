# cart/services/cookies.py
"""
JSON cookie codec.

Values are JSON, percent-encoded the way browsers' encodeURIComponent does,
so cookies written by client-side scripts and by the server read the same.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def decode_json_cookie(raw: str | None) -> Any:
    """Return the decoded JSON value, or None when missing/malformed."""
    if not raw:
        return None
    try:
        return json.loads(unquote(raw))
    except ValueError:
        logger.warning("Malformed JSON cookie ignored")
        return None


def encode_json_cookie(value: Any) -> str:
    return quote(json.dumps(value, ensure_ascii=False, separators=(",", ":")), safe="")


def read_json_cookie(request, name: str) -> Any:
    return decode_json_cookie(request.COOKIES.get(name))


def write_json_cookie(response, name: str, value: Any, *, max_age_days: int) -> None:
    response.set_cookie(
        name,
        encode_json_cookie(value),
        max_age=int(max_age_days) * SECONDS_PER_DAY,
        path="/",
        samesite="Lax",
    )
