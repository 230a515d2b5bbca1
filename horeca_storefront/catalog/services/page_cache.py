# catalog/services/page_cache.py
"""
PAGE DATA CACHE

Caches the backend data a page is built from, keyed by the page's route
pattern and its concrete path. HTML itself is rendered per request (CSRF
token, cart counters and flash messages are per visitor).

Invalidation (see revalidation app):
- revalidate_path("/product/combi-oven")          -> that concrete page only
- revalidate_path("/category/[slug]", kind="page") -> every page of the route
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import Any, Callable

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

KIND_PAGE = "page"

PAGE_KEY_PREFIX = "storefront:page"
PATH_VERSION_PREFIX = "storefront:pathv"
ROUTE_VERSION_PREFIX = "storefront:routev"

_MISS = object()


def normalize_path(path: str) -> str:
    path = (path or "").split("?", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def _digest(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:32]


def _version(key: str) -> int:
    version = cache.get(key)
    if version is None:
        cache.add(key, int(time.time() * 1000), None)
        version = cache.get(key)
    return int(version or 0)


def _bump(key: str) -> None:
    try:
        cache.incr(key)
    except ValueError:
        cache.set(key, int(time.time() * 1000), None)


def _path_version_key(path: str) -> str:
    return f"{PATH_VERSION_PREFIX}:{_digest(normalize_path(path))}"


def _route_version_key(route: str) -> str:
    return f"{ROUTE_VERSION_PREFIX}:{_digest(normalize_path(route))}"


def revalidate_path(path: str, kind: str | None = None) -> str:
    """
    Invalidate cached page data.

    kind=None   -> `path` is a concrete URL path
    kind="page" -> `path` is a route pattern; all of its pages are invalidated
    """
    normalized = normalize_path(path)
    if kind == KIND_PAGE:
        _bump(_route_version_key(normalized))
    elif kind is None:
        _bump(_path_version_key(normalized))
    else:
        raise ValueError(f"Unsupported revalidation kind: {kind}")

    logger.info("Revalidated page path", extra={"path": normalized, "kind": kind or "path"})
    return normalized


def cached_page_data(
    route: str,
    path: str,
    loader: Callable[[], Any],
    *,
    variant: str = "",
    timeout: int | None = None,
) -> Any:
    """
    Return loader() through the page cache.

    `variant` distinguishes renderings of one path (e.g. a search query);
    revalidating the path invalidates every variant.
    """
    route_v = _version(_route_version_key(route))
    path_v = _version(_path_version_key(path))
    key = (
        f"{PAGE_KEY_PREFIX}:{route_v}:{path_v}:"
        f"{_digest(normalize_path(path) + '|' + variant)}"
    )

    hit = cache.get(key, _MISS)
    if hit is not _MISS:
        return hit

    value = loader()
    if timeout is None:
        timeout = int(getattr(settings, "CATALOG_CACHE_TTL", 1800) or 1800)
    cache.set(key, value, timeout)
    return value
