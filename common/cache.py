"""Read-through cache for derived listings (inventory, outstanding, tickets).

Keys embed a shared generation number; bumping it after a write makes every
cached listing stale at once without tracking individual keys.
"""

import hashlib
import json
import logging
from typing import Callable, TypeVar

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger("challan.cache")

T = TypeVar("T")

GENERATION_KEY = "listings:generation"


def _generation() -> int:
    value = cache.get(GENERATION_KEY)
    if value is None:
        cache.add(GENERATION_KEY, 1, timeout=None)
        value = cache.get(GENERATION_KEY) or 1
    return int(value)


def listing_key(name: str, params: dict) -> str:
    payload = json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]
    return f"listings:{_generation()}:{name}:{digest}"


def cached_listing(name: str, params: dict, build: Callable[[], T]) -> T:
    """Return the cached value for ``name``/``params`` or build and store it."""

    key = listing_key(name, params)
    value = cache.get(key)
    if value is None:
        value = build()
        cache.set(key, value, timeout=getattr(settings, "LISTING_CACHE_TIMEOUT", 60))
    return value


def invalidate_listings() -> None:
    """Drop every cached listing by advancing the generation."""

    try:
        cache.incr(GENERATION_KEY)
    except ValueError:
        # Key missing or evicted: start a fresh generation
        cache.set(GENERATION_KEY, 2, timeout=None)
    logger.debug("listings.invalidated", extra={"event": "listings.invalidated"})


# EOF
