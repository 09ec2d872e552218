"""Main LinkedListMultimap implementation."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Generic

from linkedmultimap.iterators import NodeIterator, ValueForKeyIterator
from linkedmultimap.linkedlist import DualLinkedList
from linkedmultimap.types import K, PairsLike, V
from linkedmultimap.views import (
    AsMapView,
    EntriesView,
    KeySetView,
    KeysMultisetView,
    ValueList,
    ValuesView,
)

logger = logging.getLogger(__name__)


class LinkedListMultimap(Generic[K, V]):
    """
    Multimap that keeps insertion order both across all entries and within each key.

    For example, after ``put(a, 1)``, ``put(b, 2)``, ``put(a, 3)`` the entries
    iterate as ``[(a, 1), (b, 2), (a, 3)]`` and ``keys()`` as ``[a, b, a]``.
    ``remove(a, 1)`` then leaves ``[(b, 2), (a, 3)]`` and a key order of
    ``[b, a]``. ``replace_values`` keeps existing entries where they are.

    All views returned by ``get``, ``key_set``, ``keys``, ``values``,
    ``entries`` and ``as_map`` are live. If the multimap is modified while one
    of them is being iterated, other than through that iterator's own
    ``remove``, the rest of the iteration is unspecified. The class has no
    locking. LockedMultimap serializes access between coroutines of one event
    loop; it does not make the multimap safe to share between threads.
    """

    def __init__(self, source: "LinkedListMultimap[K, V] | PairsLike | None" = None) -> None:
        """
        Initialize the multimap.

        Args:
            source: Optional entries to copy, in order. Either another
                multimap, a mapping of key to an iterable of values, or an
                iterable of ``(key, value)`` pairs.
        """
        self._links = DualLinkedList[K, V]()
        self._key_set: KeySetView[K, V] | None = None
        self._keys: KeysMultisetView[K, V] | None = None
        self._values: ValuesView[K, V] | None = None
        self._entries: EntriesView[K, V] | None = None
        self._as_map: AsMapView[K, V] | None = None
        if source is not None:
            self.update(source)

    # Query operations

    def __len__(self) -> int:
        """Return the total number of entries."""
        return len(self._links)

    def is_empty(self) -> bool:
        return not self._links

    def __bool__(self) -> bool:
        return bool(self._links)

    def contains_key(self, key: object) -> bool:
        """Return True if at least one entry has ``key``."""
        return key in self._links

    def __contains__(self, key: object) -> bool:
        return key in self._links

    def contains_value(self, value: object) -> bool:
        """Return True if any entry has a value equal to ``value``."""
        return any(node.value == value for node in NodeIterator(self._links))

    def contains_entry(self, key: object, value: object) -> bool:
        """Return True if ``key`` has a value equal to ``value``."""
        return any(mine == value for mine in ValueForKeyIterator(self._links, key))  # type: ignore[arg-type]

    def count(self, key: object) -> int:
        """Return the number of values stored under ``key``."""
        return self._links.count(key)

    # Modification operations

    def put(self, key: K, value: V) -> bool:
        """
        Append a key-value pair.

        Returns:
            True, always
        """
        self._links.add_node(key, value)
        return True

    def put_all(self, key: K, values: Iterable[V]) -> bool:
        """
        Append each of ``values`` under ``key``, in order.

        Returns:
            True if at least one value was added
        """
        changed = False
        # Copy first: values may be a live view of this key
        for value in list(values):
            self._links.add_node(key, value)
            changed = True
        return changed

    def update(self, other: "LinkedListMultimap[K, V] | PairsLike") -> None:
        """
        Append every entry of ``other``, in its order.

        Args:
            other: Another multimap (entries in global order), a mapping of key
                to an iterable of values, or an iterable of ``(key, value)`` pairs
        """
        if isinstance(other, LinkedListMultimap):
            # Snapshot first so updating a multimap with itself terminates
            for key, value in _pairs(other):
                self._links.add_node(key, value)
        elif isinstance(other, Mapping):
            for key, values in other.items():
                self.put_all(key, values)
        else:
            for key, value in list(other):
                self._links.add_node(key, value)

    def remove(self, key: K, value: V) -> bool:
        """
        Remove the first value of ``key`` that equals ``value``.

        Returns:
            True if an entry was removed, False if none matched
        """
        values = ValueForKeyIterator(self._links, key)
        for mine in values:
            if mine == value:
                values.remove()
                return True
        return False

    def remove_all(self, key: K) -> list[V]:
        """
        Remove every value of ``key``.

        Returns:
            The removed values, in order (empty if the key was absent)
        """
        old_values = list(ValueForKeyIterator(self._links, key))
        removed = self._links.remove_all_nodes(key)
        if removed:
            logger.debug("Removed %d values for key %r", removed, key)
        return old_values

    def replace_values(self, key: K, values: Iterable[V]) -> list[V]:
        """
        Replace the values of ``key`` with ``values``.

        Existing entries of the key are overwritten in place and keep their
        position among other keys' entries. Surplus existing entries are
        removed; surplus new values are appended at the end of the multimap.

        Returns:
            The previous values, in order
        """
        old_values = list(ValueForKeyIterator(self._links, key))
        key_values = ValueForKeyIterator(self._links, key)
        new_values = iter(values)

        # Overwrite existing values
        replaced = 0
        for new_value in new_values:
            if not key_values.has_next():
                key_values.add(new_value)
                break
            next(key_values)
            key_values.set(new_value)
            replaced += 1

        # Remove leftover old values
        while key_values.has_next():
            next(key_values)
            key_values.remove()

        # Append leftover new values
        for new_value in new_values:
            key_values.add(new_value)

        logger.debug(
            "Replaced values for key %r: %d old, %d new, %d in place",
            key,
            len(old_values),
            self._links.count(key),
            replaced,
        )
        return old_values

    def clear(self) -> None:
        """Remove all entries. O(1)."""
        size = len(self._links)
        self._links.clear()
        logger.debug("Cleared multimap of %d entries", size)

    # Views

    def get(self, key: K) -> ValueList[K, V]:
        """
        Return the live list of values for ``key``.

        The list is empty while the key is absent and follows later changes.
        """
        return ValueList(self._links, key)

    def key_set(self) -> KeySetView[K, V]:
        """Return the distinct keys, ordered by first occurrence."""
        if self._key_set is None:
            self._key_set = KeySetView(self._links)
        return self._key_set

    def keys(self) -> KeysMultisetView[K, V]:
        """Return every entry's key in global order, as a multiset view."""
        if self._keys is None:
            self._keys = KeysMultisetView(self._links, self.key_set())
        return self._keys

    def values(self) -> ValuesView[K, V]:
        """Return every entry's value in global order."""
        if self._values is None:
            self._values = ValuesView(self._links)
        return self._values

    def entries(self) -> EntriesView[K, V]:
        """Return every entry in global order."""
        if self._entries is None:
            self._entries = EntriesView(self._links)
        return self._entries

    def as_map(self) -> AsMapView[K, V]:
        """Return a mapping from each distinct key to its value list."""
        if self._as_map is None:
            self._as_map = AsMapView(self._links)
        return self._as_map

    def copy(self) -> "LinkedListMultimap[K, V]":
        """Return a new multimap with the same entries in the same order."""
        return type(self)(self)

    # Comparison and hashing

    def __eq__(self, other: object) -> bool:
        """
        Compare per-key value lists.

        Two multimaps are equal when they hold the same keys and, for each
        key, the same values in the same order. Order between different keys
        does not matter.
        """
        if other is self:
            return True
        if not isinstance(other, LinkedListMultimap):
            return NotImplemented
        return self.as_map() == other.as_map()

    def __hash__(self) -> int:
        """
        Hash consistently with equality.

        Requires hashable values. The hash changes whenever the multimap does.
        """
        return hash(frozenset((key, tuple(values)) for key, values in self.as_map().items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.as_map()!r})"


def _pairs(multimap: LinkedListMultimap[Any, Any]) -> list[tuple[Any, Any]]:
    """Return the entries of ``multimap`` as plain tuples, in global order."""
    return [(node.key, node.value) for node in NodeIterator(multimap._links)]
