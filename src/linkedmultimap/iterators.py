"""Traversals over a DualLinkedList.

Iterators hold node positions, not snapshots. Changing the structure while an
iterator is mid-traversal, other than through that iterator's own ``remove``,
``set`` or ``add``, leaves the rest of the traversal unspecified.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from linkedmultimap.errors import (
    IllegalIteratorStateError,
    NoSuchElementError,
    PositionOutOfRangeError,
)
from linkedmultimap.linkedlist import DualLinkedList, Node
from linkedmultimap.types import K, V

T = TypeVar("T")


class NodeIterator(Generic[K, V]):
    """Iterator over all nodes in global order."""

    def __init__(self, links: DualLinkedList[K, V]) -> None:
        self._links = links
        self._next: Node[K, V] | None = links.head
        self._current: Node[K, V] | None = None

    def __iter__(self) -> "NodeIterator[K, V]":
        return self

    def __next__(self) -> Node[K, V]:
        if self._next is None:
            raise StopIteration
        self._current = self._next
        self._next = self._next.next
        return self._current

    def remove(self) -> None:
        """Remove the node last returned by this iterator."""
        if self._current is None:
            raise IllegalIteratorStateError("remove() requires a preceding next()")
        self._links.remove_node(self._current)
        self._current = None


class ProjectingIterator(Generic[K, V, T]):
    """Maps each node of a NodeIterator through ``project``; remove() is forwarded."""

    def __init__(self, links: DualLinkedList[K, V], project: Callable[[Node[K, V]], T]) -> None:
        self._nodes = NodeIterator(links)
        self._project = project

    def __iter__(self) -> "ProjectingIterator[K, V, T]":
        return self

    def __next__(self) -> T:
        return self._project(next(self._nodes))

    def remove(self) -> None:
        self._nodes.remove()


class DistinctKeyIterator(Generic[K, V]):
    """Iterator over distinct keys, ordered by each key's first node in the global list."""

    def __init__(self, links: DualLinkedList[K, V]) -> None:
        self._links = links
        self._seen: set[K] = set()
        self._next: Node[K, V] | None = links.head
        self._current: Node[K, V] | None = None

    def __iter__(self) -> "DistinctKeyIterator[K, V]":
        return self

    def __next__(self) -> K:
        if self._next is None:
            raise StopIteration
        self._current = self._next
        self._seen.add(self._current.key)
        # Skip ahead to the next unseen key
        node = self._next.next
        while node is not None and node.key in self._seen:
            node = node.next
        self._next = node
        return self._current.key

    def remove(self) -> None:
        """Remove every node of the key last returned by this iterator."""
        if self._current is None:
            raise IllegalIteratorStateError("remove() requires a preceding next()")
        self._links.remove_all_nodes(self._current.key)
        self._current = None


class ValueForKeyIterator(Generic[K, V]):
    """
    Bidirectional iterator over the values of one key.

    The cursor sits between two elements, like a list iterator: ``next()`` and
    ``previous()`` return the element after or before it. ``set()`` and
    ``remove()`` act on the element returned last; ``add()`` inserts before
    the cursor.
    """

    def __init__(self, links: DualLinkedList[K, V], key: K, index: int | None = None) -> None:
        """
        Initialize the iterator.

        Args:
            links: The structure to traverse
            key: The key whose values are visited
            index: Starting position in ``[0, count(key)]``. None starts at the
                key's first value. Positioning starts from whichever end of the
                sibling list is closer, which relies on ``count(key)`` being O(1).

        Raises:
            PositionOutOfRangeError: If index is outside ``[0, count(key)]``
        """
        self._links = links
        self._key = key
        self._next_index = 0
        self._next: Node[K, V] | None = None
        self._previous: Node[K, V] | None = None
        self._current: Node[K, V] | None = None

        if index is None:
            self._next = links.key_head.get(key)
            return

        size = links.count(key)
        if index < 0:
            raise PositionOutOfRangeError(f"index {index} is negative")
        if index > size:
            raise PositionOutOfRangeError(f"index {index} exceeds {size} values for key {key!r}")
        if index >= size // 2:
            self._previous = links.key_tail.get(key)
            self._next_index = size
            for _ in range(size - index):
                self.previous()
        else:
            self._next = links.key_head.get(key)
            for _ in range(index):
                next(self)
        self._current = None

    def __iter__(self) -> "ValueForKeyIterator[K, V]":
        return self

    def has_next(self) -> bool:
        return self._next is not None

    def __next__(self) -> V:
        if self._next is None:
            raise StopIteration
        self._previous = self._current = self._next
        self._next = self._next.next_sibling
        self._next_index += 1
        return self._current.value

    def has_previous(self) -> bool:
        return self._previous is not None

    def previous(self) -> V:
        """
        Step the cursor backward and return the value it passed.

        Raises:
            NoSuchElementError: If the cursor is before the first value
        """
        if self._previous is None:
            raise NoSuchElementError(f"no value before position 0 for key {self._key!r}")
        self._next = self._current = self._previous
        self._previous = self._previous.prev_sibling
        self._next_index -= 1
        return self._current.value

    def next_index(self) -> int:
        return self._next_index

    def previous_index(self) -> int:
        return self._next_index - 1

    def remove(self) -> None:
        """
        Remove the value returned last by next() or previous().

        Raises:
            IllegalIteratorStateError: If there is no such value, or it was
                already removed, or add() was called since
        """
        current = self._current
        if current is None:
            raise IllegalIteratorStateError("remove() requires a preceding next() or previous()")
        if current is not self._next:
            # Returned by next(): the removed node is behind the cursor
            self._previous = current.prev_sibling
            self._next_index -= 1
        else:
            # Returned by previous(): the removed node is ahead of the cursor
            self._next = current.next_sibling
        self._links.remove_node(current)
        self._current = None

    def set(self, value: V) -> None:
        """
        Replace the value returned last by next() or previous(), in place.

        Raises:
            IllegalIteratorStateError: If there is no such value
        """
        if self._current is None:
            raise IllegalIteratorStateError("set() requires a preceding next() or previous()")
        self._current.value = value

    def add(self, value: V) -> None:
        """Insert ``value`` before the cursor and move the cursor past it."""
        self._previous = self._links.add_node(self._key, value, self._next)
        self._next_index += 1
        self._current = None

