"""Thread-safe containers: a key/value map, an object pool and an atomic value."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")


class SyncMap(Generic[K, V]):
    """A map safe for concurrent use.

    A missing key and a key stored with the value None are distinct:
    lookups report whether the key was present.
    """

    def __init__(self) -> None:
        self._data: dict[K, V] = {}
        self._lock = threading.Lock()

    def load(self, key: K) -> tuple[V | None, bool]:
        """Return (value, found) for key."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
            return None, False

    def store(self, key: K, value: V) -> None:
        """Set the value for key."""
        with self._lock:
            self._data[key] = value

    def load_or_store(self, key: K, value: V) -> tuple[V, bool]:
        """Return the existing value and True, or store value and return it with False."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
            self._data[key] = value
            return value, False

    def load_and_delete(self, key: K) -> tuple[V | None, bool]:
        """Remove key and return (previous value, whether it was present)."""
        with self._lock:
            if key in self._data:
                return self._data.pop(key), True
            return None, False

    def delete(self, key: K) -> None:
        """Remove key if present."""
        with self._lock:
            self._data.pop(key, None)

    def range(self, f: Callable[[K, V], bool]) -> None:
        """Call f for each entry; stop as soon as f returns False."""
        with self._lock:
            snapshot = list(self._data.items())
        for key, value in snapshot:
            if not f(key, value):
                break

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data


class Pool(Generic[T]):
    """A pool of reusable objects; new ones come from factory when it is empty."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._items: deque[T] = deque()

    def get(self) -> T:
        """Take an object from the pool, creating one if none is free."""
        try:
            return self._items.pop()
        except IndexError:
            return self._factory()

    def put(self, item: T) -> None:
        """Return an object to the pool."""
        self._items.append(item)


class AtomicValue(Generic[T]):
    """A value whose reads and writes are atomic with respect to each other."""

    def __init__(self, value: Any = None) -> None:
        self._value = value
        self._lock = threading.Lock()

    def load(self) -> T:
        """Return the current value."""
        with self._lock:
            return self._value

    def store(self, val: T) -> None:
        """Replace the current value."""
        with self._lock:
            self._value = val

    def swap(self, new: T) -> T:
        """Store new and return the previous value."""
        with self._lock:
            old, self._value = self._value, new
            return old

    def compare_and_swap(self, old: T, new: T) -> bool:
        """Store new if the current value equals old; report whether it did."""
        with self._lock:
            current = self._value
            if current is old or current == old:
                self._value = new
                return True
            return False