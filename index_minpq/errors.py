class IndexMinPQError(Exception):
    """Base class for errors raised by IndexMinPQ."""


class InvalidArgument(IndexMinPQError, ValueError):
    """Index out of range, index already present, or bad capacity."""


class NotFoundError(IndexMinPQError, LookupError):
    """Index is in range but holds no key."""


class EmptyError(IndexMinPQError, IndexError):
    """Minimum requested from an empty priority queue."""

    def __init__(self, message: str = "priority queue underflow") -> None:
        super().__init__(message)
