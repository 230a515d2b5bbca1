# catalog/services/server_api.py
"""
CACHED CATALOG DATA (SERVER SIDE)

Backend reads used by page rendering go through a tagged data cache:
- every entry carries one or more tags ("products", "categories", ...)
- revalidate_tag(tag) invalidates every entry carrying that tag

Mechanics:
- each tag has a version counter stored in the Django cache
- an entry key embeds the current version of each of its tags
- bumping a version makes every older key unreachable (it then expires)

Failed backend calls raise and are never cached.
"""

from __future__ import annotations

import functools
import hashlib
import json
import logging
import time
from typing import Any, Callable

from django.conf import settings
from django.core.cache import cache

from catalog.services.api_client import get_client

logger = logging.getLogger(__name__)

KEY_PREFIX = "storefront:data"
TAG_KEY_PREFIX = "storefront:tag"

TAG_PRODUCTS = "products"
TAG_CATEGORIES = "categories"
TAG_FEATURED_PRODUCTS = "featured-products"
TAG_TOP_PRODUCTS = "top-products"

_MISS = object()


def _tag_key(tag: str) -> str:
    return f"{TAG_KEY_PREFIX}:{tag}"


def tag_version(tag: str) -> int:
    key = _tag_key(tag)
    version = cache.get(key)
    if version is None:
        # Millisecond seed: a version key lost to eviction never restarts at a
        # number older entries were written under.
        cache.add(key, int(time.time() * 1000), None)
        version = cache.get(key)
    return int(version or 0)


def revalidate_tag(tag: str) -> None:
    key = _tag_key(tag)
    try:
        cache.incr(key)
    except ValueError:
        cache.set(key, int(time.time() * 1000), None)
    logger.info("Revalidated data tag", extra={"tag": tag})


def _args_digest(args: tuple, kwargs: dict) -> str:
    raw = json.dumps([list(args), kwargs], sort_keys=True, default=str)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:32]


def _ttl(setting_name: str, default: int) -> int:
    return int(getattr(settings, setting_name, default) or default)


def cached_fetch(
    name: str, *, tags: tuple[str, ...], ttl_setting: str, ttl_default: int
) -> Callable:
    """Cache the decorated backend read under `name`, tagged with `tags`."""

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            versions = ".".join(str(tag_version(t)) for t in tags)
            key = f"{KEY_PREFIX}:{name}:{versions}:{_args_digest(args, kwargs)}"

            hit = cache.get(key, _MISS)
            if hit is not _MISS:
                return hit

            value = fn(*args, **kwargs)
            cache.set(key, value, _ttl(ttl_setting, ttl_default))
            return value

        wrapper.uncached = fn
        wrapper.tags = tags
        return wrapper

    return decorator


def _catalog(name: str, *tags: str) -> Callable:
    return cached_fetch(
        name,
        tags=tags or (TAG_PRODUCTS,),
        ttl_setting="CATALOG_CACHE_TTL",
        ttl_default=1800,
    )


def _categories(name: str) -> Callable:
    return cached_fetch(
        name,
        tags=(TAG_CATEGORIES,),
        ttl_setting="CATEGORY_CACHE_TTL",
        ttl_default=3600,
    )


@_categories("categories")
def get_cached_categories() -> list[dict]:
    return get_client().get_categories()


@_catalog("products")
def get_cached_products(**params: Any) -> list[dict]:
    return get_client().get_products(**params)


@_catalog("featured-products", TAG_FEATURED_PRODUCTS, TAG_PRODUCTS)
def get_cached_featured_products() -> list[dict]:
    return get_client().get_products(limit=8, active_only=True)


@_catalog("top-products", TAG_TOP_PRODUCTS, TAG_PRODUCTS)
def get_cached_top_products() -> list[dict]:
    return get_client().get_products(limit=6, skip=8, active_only=True)


@_catalog("product")
def get_cached_product_by_slug(slug: str) -> dict:
    return get_client().get_product_by_slug(slug)


@_categories("category")
def get_cached_category_by_slug(slug: str) -> dict:
    return get_client().get_category_by_slug(slug)


@_catalog("products-by-category")
def get_cached_products_by_category(category_id: int) -> list[dict]:
    return get_client().get_products(category_id=category_id, limit=50, active_only=True)


@_catalog("product-variants")
def get_cached_product_variants(product_id: int) -> list[dict]:
    return get_client().get_product_variants(product_id)
