from __future__ import annotations

import operator
from typing import Any, Generic, Iterator, Protocol, TypeVar

import numpy as np
from jaxtyping import Int, Shaped

from index_minpq.errors import EmptyError, InvalidArgument, NotFoundError
from index_minpq.logger import init_logger

logger = init_logger(__name__)

ABSENT = -1


class SupportsLessThan(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...


Key = TypeVar("Key", bound=SupportsLessThan)


class IndexMinPQ(Generic[Key]):
    """
    Indexed min-priority-queue over the integer indices ``0..max_n-1``.

    Each index holds at most one key. The index with the smallest key can be
    read or removed, and the key of any present index can be changed or
    removed in place, all in O(log n).

    ``_pq`` is a binary heap of indices with 1-based slots (slot 0 unused),
    ``_qp`` maps an index to its heap slot and ``_keys`` maps an index to its
    key. ``_qp[_pq[k]] == k`` for every occupied slot ``k``.
    """

    def __init__(self, max_n: int) -> None:
        try:
            max_n = operator.index(max_n)
        except TypeError as err:
            raise InvalidArgument(f"capacity must be an integer, got {max_n!r}") from err
        if max_n < 0:
            raise InvalidArgument(f"capacity must be non-negative, got {max_n}")

        self._max_n = max_n
        self._n = 0
        self._pq: Int[np.ndarray, "slots"] = np.full(max_n + 1, ABSENT, dtype=np.intp)
        self._qp: Int[np.ndarray, "max_n"] = np.full(max_n, ABSENT, dtype=np.intp)
        self._keys: Shaped[np.ndarray, "max_n"] = np.full(max_n, None, dtype=object)
        logger.debug(f"Created IndexMinPQ with capacity {max_n}")

    @property
    def max_n(self) -> int:
        return self._max_n

    def is_empty(self) -> bool:
        return self._n == 0

    def size(self) -> int:
        return self._n

    def contains(self, i: int) -> bool:
        i = self._validate_index(i)
        return bool(self._qp[i] != ABSENT)

    def insert(self, i: int, key: Key) -> None:
        """Associate ``key`` with index ``i``, which must not already be present."""
        i = self._validate_index(i)
        if self._qp[i] != ABSENT:
            raise InvalidArgument(f"index {i} is already in the priority queue")
        self._n += 1
        self._qp[i] = self._n
        self._pq[self._n] = i
        self._keys[i] = key
        self._swim(self._n)

    def min_index(self) -> int:
        if self._n == 0:
            raise EmptyError()
        return int(self._pq[1])

    def min_key(self) -> Key:
        if self._n == 0:
            raise EmptyError()
        return self._keys[self._pq[1]]

    def del_min(self) -> int:
        """Remove the minimum key and return the index it was associated with."""
        if self._n == 0:
            raise EmptyError()
        min_index = int(self._pq[1])
        self._exch(1, self._n)
        self._n -= 1
        self._sink(1)
        self._clear(min_index)
        return min_index

    def key_of(self, i: int) -> Key:
        i = self._require_present(i)
        return self._keys[i]

    def change_key(self, i: int, key: Key) -> None:
        """Replace the key of present index ``i``; the new key may be smaller or larger."""
        i = self._require_present(i)
        self._keys[i] = key
        self._swim(int(self._qp[i]))
        self._sink(int(self._qp[i]))

    def delete(self, i: int) -> None:
        """Remove index ``i`` and its key."""
        i = self._require_present(i)
        slot = int(self._qp[i])
        self._exch(slot, self._n)
        self._n -= 1
        # i is now parked past the end of the heap, outside the range sifted below.
        if slot <= self._n:
            self._swim(slot)
            self._sink(slot)
        self._clear(i)

    def copy(self) -> IndexMinPQ[Key]:
        """Independent queue with the same capacity and contents."""
        other: IndexMinPQ[Key] = IndexMinPQ(self._max_n)
        other._n = self._n
        other._pq = self._pq.copy()
        other._qp = self._qp.copy()
        other._keys = self._keys.copy()
        return other

    def __iter__(self) -> Iterator[int]:
        """
        Yield the present indices in ascending key order.

        The contents are snapshotted when ``iter()`` is called and the snapshot
        is drained with ``del_min``, so each iteration costs an extra
        O(n log n) and does not see later mutations of this queue.
        """
        snapshot = self.copy()
        logger.debug(f"Iterating over a snapshot of {snapshot.size()} indices")
        return _drain(snapshot)

    def __len__(self) -> int:
        return self._n

    def __bool__(self) -> bool:
        return self._n != 0

    def __contains__(self, i: object) -> bool:
        return self.contains(i)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_n={self._max_n}, size={self._n})"

    def _validate_index(self, i: int) -> int:
        try:
            i = operator.index(i)
        except TypeError as err:
            raise InvalidArgument(f"index must be an integer, got {i!r}") from err
        if i < 0 or i >= self._max_n:
            raise InvalidArgument(f"index {i} out of range [0, {self._max_n})")
        return i

    def _require_present(self, i: int) -> int:
        i = self._validate_index(i)
        if self._qp[i] == ABSENT:
            raise NotFoundError(f"index {i} is not in the priority queue")
        return i

    def _clear(self, i: int) -> None:
        self._pq[self._n + 1] = ABSENT
        self._qp[i] = ABSENT
        self._keys[i] = None

    def _greater(self, a: int, b: int) -> bool:
        # Strict, so equal keys are never swapped.
        return self._keys[self._pq[b]] < self._keys[self._pq[a]]

    def _swim(self, k: int) -> None:
        while k > 1 and self._greater(k // 2, k):
            self._exch(k, k // 2)
            k = k // 2

    def _sink(self, k: int) -> None:
        n = self._n
        while 2 * k <= n:
            j = 2 * k
            if j < n and self._greater(j, j + 1):
                j += 1
            if not self._greater(k, j):
                break
            self._exch(k, j)
            k = j

    def _exch(self, a: int, b: int) -> None:
        pq = self._pq
        pq[a], pq[b] = pq[b], pq[a]
        self._qp[pq[a]] = a
        self._qp[pq[b]] = b


def _drain(pq: IndexMinPQ[Any]) -> Iterator[int]:
    while not pq.is_empty():
        yield pq.del_min()
