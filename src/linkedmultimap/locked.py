"""Asyncio-locked facade over LinkedListMultimap."""

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Generic

from linkedmultimap.errors import MultimapClosedError
from linkedmultimap.multimap import LinkedListMultimap
from linkedmultimap.types import K, PairsLike, V

logger = logging.getLogger(__name__)


class LockedMultimap(Generic[K, V]):
    """
    LinkedListMultimap guarded by a single asyncio.Lock.

    Every call runs under the lock and returns plain snapshots instead of live
    views. Use ``transaction()`` to iterate or to run several operations as one.
    """

    def __init__(self, multimap: LinkedListMultimap[K, V] | None = None) -> None:
        """
        Initialize the facade.

        Args:
            multimap: The multimap to guard. A new empty one is created if None.
                Once wrapped it should only be reached through this facade.
        """
        self._lock = asyncio.Lock()
        self._multimap: LinkedListMultimap[K, V] = (
            multimap if multimap is not None else LinkedListMultimap[K, V]()
        )
        self._closed = False

    async def close(self) -> None:
        """Refuse further operations. Closing twice is a no-op."""
        async with self._lock:
            if self._closed:
                return
            self._closed = True
            logger.debug("Closed locked multimap holding %d entries", len(self._multimap))

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "LockedMultimap[K, V]":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Context manager exit."""
        await self.close()

    def _check_open(self, operation: str) -> None:
        """Raise if closed (must be called with lock held)."""
        if self._closed:
            raise MultimapClosedError(f"Cannot {operation} a closed multimap")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[LinkedListMultimap[K, V]]:
        """
        Hold the lock and yield the underlying multimap.

        Views and iterators taken from the multimap must not outlive the block.

        Raises:
            MultimapClosedError: If the facade is closed
        """
        async with self._lock:
            self._check_open("use")
            yield self._multimap

    async def put(self, key: K, value: V) -> bool:
        async with self._lock:
            self._check_open("put to")
            return self._multimap.put(key, value)

    async def put_all(self, key: K, values: Iterable[V]) -> bool:
        async with self._lock:
            self._check_open("put to")
            return self._multimap.put_all(key, values)

    async def update(self, other: LinkedListMultimap[K, V] | PairsLike) -> None:
        async with self._lock:
            self._check_open("update")
            self._multimap.update(other)

    async def remove(self, key: K, value: V) -> bool:
        async with self._lock:
            self._check_open("remove from")
            return self._multimap.remove(key, value)

    async def remove_all(self, key: K) -> list[V]:
        async with self._lock:
            self._check_open("remove from")
            return self._multimap.remove_all(key)

    async def replace_values(self, key: K, values: Iterable[V]) -> list[V]:
        async with self._lock:
            self._check_open("replace values in")
            return self._multimap.replace_values(key, values)

    async def clear(self) -> None:
        async with self._lock:
            self._check_open("clear")
            self._multimap.clear()

    async def get(self, key: K) -> list[V]:
        """Return a copy of the values for ``key``."""
        async with self._lock:
            self._check_open("read from")
            return list(self._multimap.get(key))

    async def contains_key(self, key: K) -> bool:
        async with self._lock:
            self._check_open("read from")
            return self._multimap.contains_key(key)

    async def contains_value(self, value: V) -> bool:
        async with self._lock:
            self._check_open("read from")
            return self._multimap.contains_value(value)

    async def contains_entry(self, key: K, value: V) -> bool:
        async with self._lock:
            self._check_open("read from")
            return self._multimap.contains_entry(key, value)

    async def size(self) -> int:
        """Return the total number of entries."""
        async with self._lock:
            self._check_open("read from")
            return len(self._multimap)

    async def key_set(self) -> list[K]:
        """Return the distinct keys, ordered by first occurrence."""
        async with self._lock:
            self._check_open("read from")
            return list(self._multimap.key_set())

    async def entries(self) -> list[tuple[K, V]]:
        """Return all entries as tuples, in global order."""
        async with self._lock:
            self._check_open("read from")
            return [(entry.key, entry.value) for entry in self._multimap.entries()]
