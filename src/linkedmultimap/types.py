"""Type definitions for linkedmultimap."""

from collections.abc import Hashable, Iterable, Mapping
from typing import Any, TypeAlias, TypeVar

# Generic type variables for keys and values
K = TypeVar("K", bound=Hashable)  # Key type
V = TypeVar("V")  # Value type

# Sources accepted by LinkedListMultimap.update() and the copy constructor,
# besides another multimap
PairsLike: TypeAlias = Mapping[Any, Iterable[Any]] | Iterable[tuple[Any, Any]]
