"""In-memory, thread-safe result cache keyed by address."""

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Generic, TypeVar

from structlog.typing import FilteringBoundLogger

from wiki.core.logging import get_logger

T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A completed fetch result and the moment it was stored."""

    value: T
    fetched_at: datetime


@dataclass(frozen=True)
class CacheSnapshot:
    """Read-only diagnostic view of a cache at one point in time."""

    count: int
    addresses: tuple[str, ...]
    timestamps: Mapping[str, datetime]

    def as_dict(self) -> dict:
        """Plain dict form for JSON output."""
        return {
            "count": self.count,
            "addresses": list(self.addresses),
            "timestamps": {k: v.isoformat() for k, v in self.timestamps.items()},
        }


class FetchCache(Generic[T]):
    """Mapping from address to the last successfully extracted value.

    Entries are only ever installed whole and are replaced, never mutated.
    There is no expiry and no size bound: entries live until ``clear_one``
    or ``clear_all`` removes them.

    Every operation holds one lock for the duration of a dict access only,
    so readers never wait on a fetch in progress.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        logger: FilteringBoundLogger | None = None,
    ):
        self._entries: dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self.logger = logger or get_logger()

    def get(self, address: str) -> CacheEntry[T] | None:
        with self._lock:
            return self._entries.get(address)

    def put(self, address: str, value: T) -> CacheEntry[T]:
        """Store ``value`` for ``address``, replacing any previous entry."""
        entry = CacheEntry(value=value, fetched_at=self._clock())
        with self._lock:
            replaced = address in self._entries
            self._entries[address] = entry
        self.logger.debug("cache_put", address=address, replaced=replaced)
        return entry

    def clear_all(self) -> int:
        """Remove every entry and return how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        self.logger.info("cache_cleared", removed=removed)
        return removed

    def clear_one(self, address: str) -> bool:
        """Remove the entry for ``address``; no-op when absent."""
        with self._lock:
            removed = self._entries.pop(address, None) is not None
        self.logger.info("cache_cleared_one", address=address, removed=removed)
        return removed

    def snapshot(self) -> CacheSnapshot:
        with self._lock:
            items = list(self._entries.items())
        return CacheSnapshot(
            count=len(items),
            addresses=tuple(address for address, _ in items),
            timestamps=MappingProxyType(
                {address: entry.fetched_at for address, entry in items}
            ),
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, address: object) -> bool:
        with self._lock:
            return address in self._entries
