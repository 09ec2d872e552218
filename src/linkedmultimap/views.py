"""Live views over a DualLinkedList.

Views keep no state of their own: every traversal starts a fresh iterator over
the underlying structure, so a view never goes stale.
"""

import operator
from collections import Counter
from collections.abc import (
    Collection,
    Iterable,
    Iterator,
    Mapping,
    MutableSequence,
    Sequence,
    Set,
)
from typing import Any, Generic, SupportsIndex, overload

from linkedmultimap.errors import PositionOutOfRangeError
from linkedmultimap.iterators import (
    DistinctKeyIterator,
    ProjectingIterator,
    ValueForKeyIterator,
)
from linkedmultimap.linkedlist import DualLinkedList, Node
from linkedmultimap.types import K, V

_MISSING: Any = object()


class Entry(Generic[K, V]):
    """
    A key-value entry bound to its node.

    Unpacks and compares like a ``(key, value)`` tuple. Assigning ``value``
    updates the stored entry in place.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node[K, V]) -> None:
        self._node = node

    @property
    def key(self) -> K:
        return self._node.key

    @property
    def value(self) -> V:
        return self._node.value

    @value.setter
    def value(self, value: V) -> None:
        self._node.value = value

    def __iter__(self) -> Iterator[Any]:
        yield self._node.key
        yield self._node.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entry):
            return (self.key, self.value) == (other.key, other.value)
        if isinstance(other, tuple):
            return (self.key, self.value) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.key, self.value))

    def __repr__(self) -> str:
        return repr((self.key, self.value))


class ValueList(MutableSequence, Generic[K, V]):
    """
    The values of one key, as a live mutable sequence.

    Positional access walks the key's sibling list from whichever end is
    closer to the index. The list stays usable while the key has no values;
    values added later through the multimap show up here.
    """

    def __init__(self, links: DualLinkedList[K, V], key: K) -> None:
        self._links = links
        self._key = key

    @property
    def key(self) -> K:
        return self._key

    def list_iterator(self, index: int = 0) -> ValueForKeyIterator[K, V]:
        """Return a bidirectional iterator whose cursor starts before ``index``."""
        return ValueForKeyIterator(self._links, self._key, index)

    def _checked_index(self, index: SupportsIndex) -> int:
        position = operator.index(index)
        size = len(self)
        if position < 0:
            position += size
        if not 0 <= position < size:
            raise PositionOutOfRangeError(
                f"index {operator.index(index)} out of range for {size} values of key {self._key!r}"
            )
        return position

    def __len__(self) -> int:
        return self._links.count(self._key)

    def __iter__(self) -> Iterator[V]:
        return ValueForKeyIterator(self._links, self._key)

    def __reversed__(self) -> Iterator[V]:
        values = self.list_iterator(len(self))
        while values.has_previous():
            yield values.previous()

    @overload
    def __getitem__(self, index: SupportsIndex) -> V: ...

    @overload
    def __getitem__(self, index: slice) -> list[V]: ...

    def __getitem__(self, index: SupportsIndex | slice) -> V | list[V]:
        if isinstance(index, slice):
            return list(self)[index]
        return next(self.list_iterator(self._checked_index(index)))

    @overload
    def __setitem__(self, index: SupportsIndex, value: V) -> None: ...

    @overload
    def __setitem__(self, index: slice, value: Iterable[V]) -> None: ...

    def __setitem__(self, index: SupportsIndex | slice, value: Any) -> None:
        if isinstance(index, slice):
            raise TypeError("ValueList does not support slice assignment")
        values = self.list_iterator(self._checked_index(index))
        next(values)
        values.set(value)

    def __delitem__(self, index: SupportsIndex | slice) -> None:
        if isinstance(index, slice):
            # Highest position first so earlier positions stay put
            for position in sorted(range(len(self))[index], reverse=True):
                del self[position]
            return
        values = self.list_iterator(self._checked_index(index))
        next(values)
        values.remove()

    def insert(self, index: SupportsIndex, value: V) -> None:
        """Insert ``value`` before ``index``, clamped to the list bounds like list.insert()."""
        position = operator.index(index)
        size = len(self)
        if position < 0:
            position = max(0, position + size)
        self.list_iterator(min(position, size)).add(value)

    def extend(self, values: Iterable[V]) -> None:
        """Append each of ``values``. The source is copied first, so it may be this key's own values."""
        for value in list(values):
            self.append(value)

    def clear(self) -> None:
        self._links.remove_all_nodes(self._key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence) or isinstance(other, (str, bytes, bytearray)):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(mine == theirs for mine, theirs in zip(self, other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return repr(list(self))


class KeySetView(Set, Generic[K, V]):
    """Distinct keys, ordered by first occurrence."""

    def __init__(self, links: DualLinkedList[K, V]) -> None:
        self._links = links

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> set[Any]:
        return set(it)

    def __len__(self) -> int:
        return len(self._links.key_count)

    def __iter__(self) -> DistinctKeyIterator[K, V]:
        return DistinctKeyIterator(self._links)

    def __contains__(self, key: object) -> bool:
        return key in self._links

    def discard(self, key: K) -> None:
        """Remove every entry of ``key``, if any."""
        self._links.remove_all_nodes(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class KeysMultisetView(Collection, Generic[K, V]):
    """One key per entry, in global order, with per-key occurrence counts."""

    def __init__(self, links: DualLinkedList[K, V], element_set: KeySetView[K, V]) -> None:
        self._links = links
        self._element_set = element_set

    def __len__(self) -> int:
        return len(self._links)

    def __iter__(self) -> ProjectingIterator[K, V, K]:
        return ProjectingIterator(self._links, operator.attrgetter("key"))

    def __contains__(self, key: object) -> bool:
        return key in self._links

    def count(self, key: object) -> int:
        """Return the number of entries for ``key``."""
        return self._links.count(key)

    def remove(self, key: K, occurrences: int = 1) -> int:
        """
        Remove up to ``occurrences`` of the first entries of ``key``.

        Returns:
            The number of entries actually removed

        Raises:
            ValueError: If occurrences is negative
        """
        if occurrences < 0:
            raise ValueError(f"occurrences cannot be negative: {occurrences}")
        values = ValueForKeyIterator(self._links, key)
        removed = 0
        while removed < occurrences and values.has_next():
            next(values)
            values.remove()
            removed += 1
        return removed

    def remove_all_occurrences(self, key: K) -> int:
        """Remove every entry of ``key``. Returns the number removed."""
        return self._links.remove_all_nodes(key)

    def element_set(self) -> KeySetView[K, V]:
        return self._element_set

    def counts(self) -> Iterator[tuple[K, int]]:
        """Yield ``(key, count)`` for each distinct key, ordered by first occurrence."""
        for key in DistinctKeyIterator(self._links):
            yield key, self._links.count(key)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeysMultisetView):
            return self._links.key_count == other._links.key_count
        if isinstance(other, Counter):
            return self._links.key_count == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class ValuesView(Collection, Generic[K, V]):
    """All values, in global order."""

    def __init__(self, links: DualLinkedList[K, V]) -> None:
        self._links = links

    def __len__(self) -> int:
        return len(self._links)

    def __iter__(self) -> ProjectingIterator[K, V, V]:
        return ProjectingIterator(self._links, operator.attrgetter("value"))

    def __contains__(self, value: object) -> bool:
        return any(mine == value for mine in self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class EntriesView(Collection, Generic[K, V]):
    """All entries, in global order."""

    def __init__(self, links: DualLinkedList[K, V]) -> None:
        self._links = links

    def __len__(self) -> int:
        return len(self._links)

    def __iter__(self) -> ProjectingIterator[K, V, Entry[K, V]]:
        return ProjectingIterator(self._links, Entry)

    def __contains__(self, item: object) -> bool:
        try:
            key, value = item  # type: ignore[misc]
        except (TypeError, ValueError):
            return False
        return any(mine == value for mine in ValueForKeyIterator(self._links, key))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class AsMapView(Mapping, Generic[K, V]):
    """Mapping from each distinct key to its ValueList, ordered by first occurrence."""

    def __init__(self, links: DualLinkedList[K, V]) -> None:
        self._links = links

    def __getitem__(self, key: K) -> ValueList[K, V]:
        if key not in self._links:
            raise KeyError(key)
        return ValueList(self._links, key)

    def __iter__(self) -> DistinctKeyIterator[K, V]:
        return DistinctKeyIterator(self._links)

    def __len__(self) -> int:
        return len(self._links.key_count)

    def __contains__(self, key: object) -> bool:
        return key in self._links

    def __delitem__(self, key: K) -> None:
        if key not in self._links:
            raise KeyError(key)
        self._links.remove_all_nodes(key)

    def pop(self, key: K, default: Any = _MISSING) -> Any:
        """Remove ``key`` and return a list of its former values."""
        if key not in self._links:
            if default is _MISSING:
                raise KeyError(key)
            return default
        values = list(ValueForKeyIterator(self._links, key))
        self._links.remove_all_nodes(key)
        return values

    def __repr__(self) -> str:
        return repr({key: list(values) for key, values in self.items()})
