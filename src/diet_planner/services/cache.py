"""Cache abstractions with coarse, region-wide invalidation."""

import threading
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

PLANS_REGION = "plans"
STATISTICS_REGION = "statistics"
SHOPPING_LISTS_REGION = "shopping_lists"

PLAN_DEPENDENT_REGIONS = (PLANS_REGION, STATISTICS_REGION, SHOPPING_LISTS_REGION)


class Cache(Protocol):
    """Cache interface keyed by region and query parameters."""

    def get(self, region: str, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(
        self,
        region: str,
        key: str,
        value: object,
        ttl_seconds: int,
        version: int | None = None,
    ) -> None:
        """Store a cached value with a TTL in seconds.

        When ``version`` is given and the region has been invalidated since,
        the value is dropped.
        """

    def invalidate(self, *regions: str) -> None:
        """Drop every entry of the given regions."""

    def version(self, region: str) -> int:
        """Return the current version of a region."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


class InMemoryCache(Cache):
    """Thread-safe in-memory cache.

    Each region carries a version counter that is part of every stored key.
    Invalidating a region bumps its counter, so all entries written under the
    previous version become unreachable at once.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _CacheEntry] = {}
        self._versions: dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, region: str, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        with self._lock:
            full_key = self._full_key(region, key)
            entry = self._entries.get(full_key)
            if entry is None:
                return None
            if datetime.now(tz=UTC) >= entry.expires_at:
                self._entries.pop(full_key, None)
                return None
            return entry.value

    def set(
        self,
        region: str,
        key: str,
        value: object,
        ttl_seconds: int,
        version: int | None = None,
    ) -> None:
        """Store a cached value unless the region moved past ``version``."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        with self._lock:
            if version is not None and version != self._versions.get(region, 0):
                return
            full_key = self._full_key(region, key)
            self._entries[full_key] = _CacheEntry(value=value, expires_at=expires_at)

    def invalidate(self, *regions: str) -> None:
        """Bump region versions and purge their stale entries."""
        with self._lock:
            for region in regions:
                self._versions[region] = self._versions.get(region, 0) + 1
                prefix = f"{region}:"
                stale = [key for key in self._entries if key.startswith(prefix)]
                for key in stale:
                    del self._entries[key]

    def version(self, region: str) -> int:
        with self._lock:
            return self._versions.get(region, 0)

    def _full_key(self, region: str, key: str) -> str:
        return f"{region}:v{self._versions.get(region, 0)}:{key}"
