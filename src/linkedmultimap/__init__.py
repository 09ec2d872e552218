"""linkedmultimap - Insertion-ordered multimap with O(1) inserts and removals."""

from linkedmultimap.errors import (
    IllegalIteratorStateError,
    LinkedMultimapError,
    MultimapClosedError,
    NoSuchElementError,
    PositionOutOfRangeError,
)
from linkedmultimap.locked import LockedMultimap
from linkedmultimap.multimap import LinkedListMultimap
from linkedmultimap.views import Entry, ValueList

__version__ = "0.0.1"

__all__ = [
    "LinkedListMultimap",
    "LockedMultimap",
    "Entry",
    "ValueList",
    "LinkedMultimapError",
    "PositionOutOfRangeError",
    "IllegalIteratorStateError",
    "NoSuchElementError",
    "MultimapClosedError",
]
