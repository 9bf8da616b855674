from __future__ import annotations

from index_minpq.index_min_pq import IndexMinPQ

KEYS = [5.0, 1.5, 3.0, 0.5, 4.0, 2.0]


def make_pq() -> IndexMinPQ[float]:
    pq: IndexMinPQ[float] = IndexMinPQ(len(KEYS) + 2)
    for i, key in enumerate(KEYS):
        pq.insert(i, key)
    return pq


def test_iterates_in_ascending_key_order() -> None:
    pq = make_pq()
    assert list(pq) == [3, 1, 5, 2, 4, 0]


def test_iteration_does_not_mutate() -> None:
    pq = make_pq()
    first = list(pq)
    second = list(pq)
    assert first == second
    assert pq.size() == len(KEYS)
    assert all(pq.contains(i) for i in range(len(KEYS)))
    drained = []
    while pq:
        drained.append(pq.del_min())
    assert drained == first


def test_snapshot_taken_when_iteration_starts() -> None:
    pq = make_pq()
    it = iter(pq)
    pq.insert(6, 0.0)
    pq.delete(0)
    assert list(it) == [3, 1, 5, 2, 4, 0]
    assert list(pq) == [6, 3, 1, 5, 2, 4]


def test_interleaved_iterators_are_independent() -> None:
    pq = make_pq()
    a = iter(pq)
    assert next(a) == 3
    pq.change_key(0, -1.0)
    b = iter(pq)
    assert next(b) == 0
    assert next(a) == 1
    assert list(b) == [3, 1, 5, 2, 4]


def test_empty_iteration() -> None:
    pq: IndexMinPQ[int] = IndexMinPQ(3)
    assert list(pq) == []


def test_copy_is_independent() -> None:
    pq = make_pq()
    clone = pq.copy()
    clone.del_min()
    clone.change_key(0, 0.0)
    assert pq.size() == len(KEYS)
    assert pq.key_of(0) == 5.0
    assert clone.max_n == pq.max_n
