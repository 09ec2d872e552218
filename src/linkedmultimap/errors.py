"""Exception classes for linkedmultimap."""


class LinkedMultimapError(Exception):
    """Base exception for all linkedmultimap errors."""


class PositionOutOfRangeError(LinkedMultimapError, IndexError):
    """Raised when a position falls outside the values of a key."""


class IllegalIteratorStateError(LinkedMultimapError, RuntimeError):
    """Raised when remove() or set() is called without a current element."""


class NoSuchElementError(LinkedMultimapError, LookupError):
    """Raised when stepping an iterator backward past its first element."""


class MultimapClosedError(LinkedMultimapError):
    """Raised when operations are attempted on a closed LockedMultimap."""
