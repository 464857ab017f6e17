"""Ordered population of scored candidates.

The controlled random search needs the best and the worst member of a
fixed-size population after every replacement. Two binary heaps (one keyed on
``value``, one on ``-value``) give O(log n) access to both ends; entries made
obsolete by a removal are discarded lazily when they surface at the top of a
heap, and both heaps are rebuilt once stale entries dominate.

Members are ordered by ``(value, seq)`` where ``seq`` is a counter assigned on
insertion, so equal objective values remain distinct entries with a strict
order: among ties the earliest insertion is the minimum and the latest is the
maximum.

Complexity: insert, remove, replace, pop_min and pop_max are O(log n)
amortized; peek_min and peek_max are O(1) amortized.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

import numpy as np

_Entry = Tuple[float, int, int]


@dataclass(frozen=True, eq=False)
class Candidate:
    """A scored point stored in a population.

    Attributes:
        point: Coordinates, usually a row view of the optimizer's backing array.
        value: Objective value at ``point``.
        slot: Row of the backing array holding ``point``. Not used for ordering.
    """

    point: np.ndarray
    value: float
    slot: int


class OrderedPopulation:
    """Set of candidates with fast access to the minimum and maximum value."""

    def __init__(self) -> None:
        self._min_heap: List[_Entry] = []
        self._max_heap: List[_Entry] = []
        self._members: Dict[int, Candidate] = {}
        self._seq: Dict[int, int] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, candidate: object) -> bool:
        if not isinstance(candidate, Candidate):
            return False
        return self._members.get(candidate.slot) is candidate

    def __iter__(self) -> Iterator[Candidate]:
        """Iterate members in ascending order (O(n log n))."""
        members = sorted(self._members.values(), key=lambda c: (c.value, self._seq[c.slot]))
        return iter(members)

    def insert(self, candidate: Candidate) -> None:
        """Add ``candidate``; its slot must be free."""
        if candidate.slot in self._members:
            raise ValueError(f"slot {candidate.slot} is already occupied")
        seq = next(self._counter)
        value = float(candidate.value)
        self._members[candidate.slot] = candidate
        self._seq[candidate.slot] = seq
        heapq.heappush(self._min_heap, (value, seq, candidate.slot))
        heapq.heappush(self._max_heap, (-value, -seq, candidate.slot))

    def remove(self, candidate: Candidate) -> None:
        """Remove a current member."""
        if candidate not in self:
            raise ValueError(f"candidate in slot {candidate.slot} is not a member")
        del self._members[candidate.slot]
        del self._seq[candidate.slot]
        self._maybe_compact()

    def replace(self, old: Candidate, new: Candidate) -> None:
        """Remove ``old`` and insert ``new``; the size is unchanged.

        ``new`` may reuse the slot of ``old``. The population is left untouched
        if ``old`` is not a member or ``new`` targets another occupied slot.
        """
        if old not in self:
            raise ValueError(f"candidate in slot {old.slot} is not a member")
        if new.slot != old.slot and new.slot in self._members:
            raise ValueError(f"slot {new.slot} is already occupied")
        self.remove(old)
        self.insert(new)

    def peek_min(self) -> Candidate:
        return self._members[self._top(self._min_heap)[2]]

    def peek_max(self) -> Candidate:
        return self._members[self._top(self._max_heap)[2]]

    def pop_min(self) -> Candidate:
        candidate = self.peek_min()
        self.remove(candidate)
        return candidate

    def pop_max(self) -> Candidate:
        candidate = self.peek_max()
        self.remove(candidate)
        return candidate

    def _is_live(self, entry: _Entry, sign: int) -> bool:
        return self._seq.get(entry[2]) == sign * entry[1]

    def _top(self, heap: List[_Entry]) -> _Entry:
        if not self._members:
            raise IndexError("population is empty")
        sign = 1 if heap is self._min_heap else -1
        while not self._is_live(heap[0], sign):
            heapq.heappop(heap)
        return heap[0]

    def _maybe_compact(self) -> None:
        if len(self._min_heap) <= 2 * len(self._members) + 16:
            return
        self._min_heap = [e for e in self._min_heap if self._is_live(e, 1)]
        self._max_heap = [e for e in self._max_heap if self._is_live(e, -1)]
        heapq.heapify(self._min_heap)
        heapq.heapify(self._max_heap)


__all__ = ["Candidate", "OrderedPopulation"]
