"""Shared test helpers."""

from collections.abc import Callable
from typing import Any

import pytest

from linkedmultimap.linkedlist import DualLinkedList


def assert_consistent(links: DualLinkedList[Any, Any]) -> None:
    """Check both link directions of the global list and of every sibling list."""
    forward = []
    node = links.head
    while node is not None:
        forward.append(node)
        node = node.next
    backward = []
    node = links.tail
    while node is not None:
        backward.append(node)
        node = node.prev
    assert forward == backward[::-1]
    assert len(forward) == len(links)
    assert len({id(n) for n in forward}) == len(forward)

    keys = {n.key for n in forward}
    assert set(links.key_head) == keys
    assert set(links.key_tail) == keys
    assert set(links.key_count) == keys
    for key in keys:
        siblings = []
        node = links.key_head[key]
        while node is not None:
            assert node.key == key
            siblings.append(node)
            node = node.next_sibling
        assert siblings[-1] is links.key_tail[key]
        assert len(siblings) == links.key_count[key]
        # Sibling order is the global order restricted to the key
        assert siblings == [n for n in forward if n.key == key]
        reverse = []
        node = links.key_tail[key]
        while node is not None:
            reverse.append(node)
            node = node.prev_sibling
        assert reverse == siblings[::-1]


@pytest.fixture
def check_links() -> Callable[[DualLinkedList[Any, Any]], None]:
    """Return the structural consistency checker."""
    return assert_consistent
