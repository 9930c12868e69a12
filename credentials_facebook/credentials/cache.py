"""Bounded profile cache keyed by OAuth token.

A cache maps a token string to the profile previously resolved for it. Entries
are evicted least-recently-used once ``max_size`` is reached, and entries older
than ``ttl`` seconds are dropped on read so the token is validated against
Facebook again.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from credentials_facebook.core.logging import get_logger


logger = get_logger(__name__)

ProfileT = TypeVar("ProfileT")


@dataclass
class BaseCacheElement(Generic[ProfileT]):
    """A cached profile together with the time it was stored."""

    user_profile: ProfileT
    created_at: float = field(default_factory=time.monotonic)

    def is_expired(self, ttl: float | None, now: float | None = None) -> bool:
        """Check whether the element is older than ``ttl`` seconds."""
        if ttl is None:
            return False
        now = time.monotonic() if now is None else now
        return now - self.created_at >= ttl


class TokenCache(Generic[ProfileT]):
    """Thread-safe LRU cache of profiles keyed by token."""

    def __init__(self, max_size: int = 0, ttl: float | None = None) -> None:
        """Initialize the cache.

        Args:
            max_size: Maximum number of entries; 0 means unlimited
            ttl: Seconds an entry stays valid; None means until evicted
        """
        if max_size < 0:
            raise ValueError("max_size must be >= 0")
        if ttl is not None and ttl <= 0:
            raise ValueError("ttl must be positive")
        self.max_size = max_size
        self.ttl = ttl
        self._data: OrderedDict[str, BaseCacheElement[ProfileT]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._expirations = 0

    def get_element(self, token: str) -> BaseCacheElement[ProfileT] | None:
        """Return the live cache element for ``token``, if any."""
        with self._lock:
            element = self._data.get(token)
            if element is None:
                self._misses += 1
                return None
            if element.is_expired(self.ttl):
                del self._data[token]
                self._expirations += 1
                self._misses += 1
                logger.debug("token_cache_entry_expired", ttl=self.ttl)
                return None
            self._data.move_to_end(token)
            self._hits += 1
            return element

    def get(self, token: str) -> ProfileT | None:
        """Return the cached profile for ``token`` or None."""
        element = self.get_element(token)
        return element.user_profile if element is not None else None

    def set(self, token: str, profile: ProfileT) -> None:
        """Store ``profile`` for ``token``, evicting the oldest entry if full."""
        with self._lock:
            self._data[token] = BaseCacheElement(profile, created_at=time.monotonic())
            self._data.move_to_end(token)
            if self.max_size and len(self._data) > self.max_size:
                self._data.popitem(last=False)
                logger.debug("token_cache_evicted", max_size=self.max_size)

    def delete(self, token: str) -> bool:
        with self._lock:
            return self._data.pop(token, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._data),
                "max_size": self.max_size,
                "ttl": self.ttl,
                "hits": self._hits,
                "misses": self._misses,
                "expirations": self._expirations,
            }

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, token: object) -> bool:
        if not isinstance(token, str):
            return False
        return self.get_element(token) is not None


# One cache per typed profile class, keyed by qualified class name
_type_caches: dict[str, TokenCache[Any]] = {}
_type_caches_lock = threading.Lock()


def _type_key(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def cache_for_type(cls: type) -> TokenCache[Any]:
    """Return the token cache associated with ``cls``, creating it on first use.

    The size and time-to-live are read from the class attributes
    ``cache_size`` and ``token_time_to_live`` when the cache is created.
    """
    key = _type_key(cls)
    with _type_caches_lock:
        cache = _type_caches.get(key)
        if cache is None:
            cache_size = int(getattr(cls, "cache_size", 0) or 0)
            ttl = getattr(cls, "token_time_to_live", None)
            cache = TokenCache(max_size=cache_size, ttl=ttl)
            _type_caches[key] = cache
            logger.debug(
                "token_cache_created",
                profile_type=key,
                cache_size="unlimited" if cache_size == 0 else cache_size,
                ttl=ttl,
            )
        return cache


def clear_type_caches() -> None:
    """Drop every per-type cache; new ones are created on next use."""
    with _type_caches_lock:
        _type_caches.clear()
