"""Chained hash table used to index airports and adjacency lists by code."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, Set, TypeVar

K = TypeVar("K")
V = TypeVar("V")

DEFAULT_CAPACITY = 16
LOAD_FACTOR = 0.75


@dataclass
class DirectoryStatistics:
    """Bucket usage snapshot of a :class:`KeyedDirectory`."""

    size: int
    capacity: int
    load_factor: float
    non_empty_buckets: int
    max_chain_length: int
    avg_chain_length: float

    def describe(self) -> str:
        return (
            "Hash Table Statistics:\n"
            f"  Size: {self.size}\n"
            f"  Capacity: {self.capacity}\n"
            f"  Load Factor: {self.load_factor:.3f}\n"
            f"  Non-empty Buckets: {self.non_empty_buckets}\n"
            f"  Max Chain Length: {self.max_chain_length}\n"
            f"  Avg Chain Length: {self.avg_chain_length:.2f}"
        )


class _Entry(Generic[K, V]):
    __slots__ = ("key", "value", "next")

    def __init__(self, key: K, value: V, next_entry: Optional["_Entry[K, V]"] = None) -> None:
        self.key = key
        self.value = value
        self.next = next_entry


class KeyedDirectory(Generic[K, V]):
    """Hash table with separate chaining and doubling resize.

    Keys are compared with ``==``. New entries are prepended to their bucket
    chain, and the table doubles its capacity before an insert whenever
    ``size >= capacity * LOAD_FACTOR``. ``None`` and empty-string keys are
    rejected by :meth:`put`; lookups with them simply report absence.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is None:
            capacity = DEFAULT_CAPACITY
        elif capacity <= 0:
            raise ValueError("Initial capacity must be positive")
        self._buckets: List[Optional[_Entry[K, V]]] = [None] * capacity
        self._size = 0

    @staticmethod
    def _index(key: object, buckets: List[Optional[_Entry[K, V]]]) -> int:
        # Capacity is always len(buckets); callers pass one snapshot of the list.
        return abs(hash(key)) % len(buckets)

    @staticmethod
    def _is_missing(key: object) -> bool:
        return key is None or (isinstance(key, str) and not key)

    def put(self, key: K, value: V) -> None:
        """Insert ``value`` under ``key``, replacing any existing value."""

        if self._is_missing(key):
            raise ValueError("Key cannot be null or empty")

        if self._size >= len(self._buckets) * LOAD_FACTOR:
            self._resize()

        buckets = self._buckets
        index = self._index(key, buckets)
        entry = buckets[index]
        while entry is not None:
            if entry.key == key:
                entry.value = value
                return
            entry = entry.next

        buckets[index] = _Entry(key, value, buckets[index])
        self._size += 1

    def _find(self, key: object) -> Optional[_Entry[K, V]]:
        if self._is_missing(key):
            return None
        buckets = self._buckets
        entry = buckets[self._index(key, buckets)]
        while entry is not None:
            if entry.key == key:
                return entry
            entry = entry.next
        return None

    def get(self, key: object, default: Optional[V] = None) -> Optional[V]:
        """Return the value stored under ``key`` or ``default`` when absent."""

        entry = self._find(key)
        return default if entry is None else entry.value

    def contains_key(self, key: object) -> bool:
        return self._find(key) is not None

    __contains__ = contains_key

    def remove(self, key: object) -> None:
        """Delete ``key`` if present; missing keys are ignored."""

        if self._is_missing(key):
            return
        buckets = self._buckets
        index = self._index(key, buckets)
        previous: Optional[_Entry[K, V]] = None
        entry = buckets[index]
        while entry is not None:
            if entry.key == key:
                if previous is None:
                    buckets[index] = entry.next
                else:
                    previous.next = entry.next
                self._size -= 1
                return
            previous = entry
            entry = entry.next

    def _resize(self) -> None:
        buckets: List[Optional[_Entry[K, V]]] = [None] * (len(self._buckets) * 2)
        for head in self._buckets:
            entry = head
            while entry is not None:
                index = self._index(entry.key, buckets)
                buckets[index] = _Entry(entry.key, entry.value, buckets[index])
                entry = entry.next
        self._buckets = buckets

    def _entries(self):
        for head in self._buckets:
            entry = head
            while entry is not None:
                yield entry
                entry = entry.next

    def key_set(self) -> Set[K]:
        return {entry.key for entry in self._entries()}

    def values(self) -> List[V]:
        return [entry.value for entry in self._entries()]

    def clear(self) -> None:
        self._buckets = [None] * len(self._buckets)
        self._size = 0

    def is_empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._buckets)

    @property
    def load_factor(self) -> float:
        return self._size / len(self._buckets)

    def statistics(self) -> DirectoryStatistics:
        """Summarise bucket usage; the figures are informational only."""

        non_empty = 0
        longest = 0
        total = 0
        for head in self._buckets:
            if head is None:
                continue
            non_empty += 1
            length = 0
            entry: Optional[_Entry[K, V]] = head
            while entry is not None:
                length += 1
                entry = entry.next
            longest = max(longest, length)
            total += length

        return DirectoryStatistics(
            size=self._size,
            capacity=len(self._buckets),
            load_factor=self.load_factor,
            non_empty_buckets=non_empty,
            max_chain_length=longest,
            avg_chain_length=total / non_empty if non_empty else 0.0,
        )


__all__ = ["DEFAULT_CAPACITY", "LOAD_FACTOR", "DirectoryStatistics", "KeyedDirectory"]
