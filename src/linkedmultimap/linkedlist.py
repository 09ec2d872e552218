"""Intrusive doubly-linked structure threading every node through two lists.

Each node sits in the global list (all entries, insertion order) and in the
sibling list of its key (entries sharing the key, insertion order). Both lists
are spliced in O(1) without scanning.
"""

from collections import Counter
from typing import Generic

from linkedmultimap.types import K, V


class Node(Generic[K, V]):
    """A node in both the global list and its key's sibling list."""

    __slots__ = ("key", "value", "prev", "next", "prev_sibling", "next_sibling")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value
        self.prev: Node[K, V] | None = None  # previous node, any key
        self.next: Node[K, V] | None = None  # next node, any key
        self.prev_sibling: Node[K, V] | None = None  # previous node, same key
        self.next_sibling: Node[K, V] | None = None  # next node, same key

    def __repr__(self) -> str:
        return f"{self.key!r}={self.value!r}"


class DualLinkedList(Generic[K, V]):
    """
    Global list of nodes plus one sibling list per key.

    Keeps the global head and tail, the head and tail node of every key and a
    per-key occurrence counter. A key appears in ``key_head``, ``key_tail`` and
    ``key_count`` only while it has at least one node.
    """

    def __init__(self) -> None:
        self.head: Node[K, V] | None = None
        self.tail: Node[K, V] | None = None
        self.key_head: dict[K, Node[K, V]] = {}
        self.key_tail: dict[K, Node[K, V]] = {}
        self.key_count: Counter[K] = Counter()
        self._size = 0

    def add_node(self, key: K, value: V, next_sibling: Node[K, V] | None = None) -> Node[K, V]:
        """
        Insert a new node before ``next_sibling``, or at the tails if it is None. O(1).

        ``next_sibling`` must be a node of ``key``. The new node takes the
        global position of ``next_sibling`` as well as its sibling position.
        """
        node = Node(key, value)
        if self.head is None:
            # Empty structure
            self.key_head[key] = node
            self.key_tail[key] = node
            self.head = self.tail = node
        elif next_sibling is None:
            # Append to the global tail and to the key's tail
            assert self.tail is not None
            key_tail = self.key_tail.get(key)
            self.tail.next = node
            node.prev = self.tail
            if key_tail is None:
                self.key_head[key] = node
            else:
                key_tail.next_sibling = node
                node.prev_sibling = key_tail
            self.key_tail[key] = node
            self.tail = node
        else:
            # Splice in front of next_sibling in both lists
            node.prev = next_sibling.prev
            node.prev_sibling = next_sibling.prev_sibling
            node.next = next_sibling
            node.next_sibling = next_sibling
            if next_sibling.prev_sibling is None:
                self.key_head[key] = node
            else:
                next_sibling.prev_sibling.next_sibling = node
            if next_sibling.prev is None:
                self.head = node
            else:
                next_sibling.prev.next = node
            next_sibling.prev = node
            next_sibling.prev_sibling = node
        self.key_count[key] += 1
        self._size += 1
        return node

    def remove_node(self, node: Node[K, V]) -> None:
        """Splice a node out of both lists. O(1)."""
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self.head = node.next
        if node.next is not None:
            node.next.prev = node.prev
        else:
            self.tail = node.prev

        key = node.key
        if node.prev_sibling is not None:
            node.prev_sibling.next_sibling = node.next_sibling
        elif node.next_sibling is not None:
            self.key_head[key] = node.next_sibling
        else:
            del self.key_head[key]
        if node.next_sibling is not None:
            node.next_sibling.prev_sibling = node.prev_sibling
        elif node.prev_sibling is not None:
            self.key_tail[key] = node.prev_sibling
        else:
            del self.key_tail[key]

        remaining = self.key_count[key] - 1
        if remaining:
            self.key_count[key] = remaining
        else:
            del self.key_count[key]
        self._size -= 1

        node.prev = node.next = None
        node.prev_sibling = node.next_sibling = None

    def remove_all_nodes(self, key: K) -> int:
        """Remove every node of ``key``, head first. Returns the number removed."""
        removed = 0
        node = self.key_head.get(key)
        while node is not None:
            self.remove_node(node)
            removed += 1
            node = self.key_head.get(key)
        return removed

    def clear(self) -> None:
        """Drop every node. O(1); unreachable nodes are left to the garbage collector."""
        self.head = None
        self.tail = None
        self.key_head = {}
        self.key_tail = {}
        self.key_count = Counter()
        self._size = 0

    def count(self, key: object) -> int:
        """Return the number of nodes for ``key``."""
        return self.key_count.get(key, 0)  # type: ignore[call-overload]

    def __contains__(self, key: object) -> bool:
        """Return True if ``key`` has at least one node."""
        return key in self.key_head

    def __len__(self) -> int:
        """Return the number of nodes in the global list."""
        return self._size

    def __bool__(self) -> bool:
        """Return True if the structure is non-empty."""
        return self.head is not None
