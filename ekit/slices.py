"""Searching, aggregating and transforming lists."""

from __future__ import annotations

import operator
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")

EqualFunc = Callable[[Any, Any], bool]
"""Reports whether two elements are equal."""


class IndexOutOfRangeError(IndexError):
    """Raised when an index lies outside a sequence."""

    def __init__(self, length: int, index: int) -> None:
        super().__init__(f"ekit: index out of range, length {length}, index {index}")
        self.length = length
        self.index = index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexOutOfRangeError):
            return NotImplemented
        return (self.length, self.index) == (other.length, other.index)

    def __hash__(self) -> int:
        return hash((self.length, self.index))


def _items(src: Optional[Iterable[T]]) -> Sequence[T]:
    if src is None:
        return ()
    return src if isinstance(src, Sequence) else list(src)


def max_value(ts: Optional[Sequence[T]]) -> T:
    """Return the largest element; at least one element is required."""
    if not ts:
        raise ValueError("ekit: max_value needs at least one value")
    return max(ts)


def min_value(ts: Optional[Sequence[T]]) -> T:
    """Return the smallest element; at least one element is required."""
    if not ts:
        raise ValueError("ekit: min_value needs at least one value")
    return min(ts)


def sum_values(ts: Optional[Iterable[T]]):
    """Return the sum of the elements, 0 for none."""
    return sum(_items(ts))


def contains(src: Optional[Sequence[T]], dst: T) -> bool:
    """Report whether dst is an element of src."""
    return contains_func(src, dst, operator.eq)


def contains_func(src: Optional[Sequence[T]], dst: T, equal: EqualFunc) -> bool:
    """Report whether some element of src equals dst according to equal."""
    return any(equal(v, dst) for v in _items(src))


def contains_any(src: Optional[Sequence[T]], dst: Optional[Sequence[T]]) -> bool:
    """Report whether any element of dst is in src."""
    present = set(_items(src))
    return any(v in present for v in _items(dst))


def contains_any_func(
    src: Optional[Sequence[T]], dst: Optional[Sequence[T]], equal: EqualFunc
) -> bool:
    """Report whether any element of dst is in src according to equal."""
    src_items = _items(src)
    return any(equal(s, d) for d in _items(dst) for s in src_items)


def contains_all(src: Optional[Sequence[T]], dst: Optional[Sequence[T]]) -> bool:
    """Report whether every element of dst is in src."""
    present = set(_items(src))
    return all(v in present for v in _items(dst))


def contains_all_func(
    src: Optional[Sequence[T]], dst: Optional[Sequence[T]], equal: EqualFunc
) -> bool:
    """Report whether every element of dst is in src according to equal."""
    return all(contains_func(src, d, equal) for d in _items(dst))


def delete(src: Optional[Sequence[T]], index: int) -> list[T]:
    """Return a new list without the element at index."""
    items = list(_items(src))
    if not 0 <= index < len(items):
        raise IndexOutOfRangeError(len(items), index)
    return items[:index] + items[index + 1:]


def filter_delete(src: list[T], m: Callable[[int, T], bool]) -> list[T]:
    """Remove, in place, every element for which m(index, element) is true."""
    src[:] = [v for i, v in enumerate(src) if not m(i, v)]
    return src


def index(src: Optional[Sequence[T]], dst: T) -> int:
    """Return the position of the first element equal to dst, or -1."""
    return index_func(src, dst, operator.eq)


def index_func(src: Optional[Sequence[T]], dst: T, equal: EqualFunc) -> int:
    """Return the position of the first element matching dst, or -1."""
    return next((i for i, v in enumerate(_items(src)) if equal(v, dst)), -1)


def last_index(src: Optional[Sequence[T]], dst: T) -> int:
    """Return the position of the last element equal to dst, or -1."""
    return last_index_func(src, dst, operator.eq)


def last_index_func(src: Optional[Sequence[T]], dst: T, equal: EqualFunc) -> int:
    """Return the position of the last element matching dst, or -1."""
    items = _items(src)
    return next(
        (i for i, v in reversed(list(enumerate(items))) if equal(dst, v)), -1
    )


def index_all(src: Optional[Sequence[T]], dst: T) -> list[int]:
    """Return the positions of all elements equal to dst."""
    return index_all_func(src, dst, operator.eq)


def index_all_func(src: Optional[Sequence[T]], dst: T, equal: EqualFunc) -> list[int]:
    """Return the positions of all elements matching dst."""
    return [i for i, v in enumerate(_items(src)) if equal(v, dst)]


def filter_map(
    src: Optional[Sequence[T]], m: Callable[[int, T], tuple[U, bool]]
) -> list[U]:
    """Map each element with m, keeping results whose flag is true."""
    result = []
    for i, v in enumerate(_items(src)):
        value, ok = m(i, v)
        if ok:
            result.append(value)
    return result


def map_slice(src: Optional[Sequence[T]], m: Callable[[int, T], U]) -> list[U]:
    """Return [m(index, element)] for every element."""
    return [m(i, v) for i, v in enumerate(_items(src))]


def deduplicate(data: Optional[Iterable[T]]) -> list[T]:
    """Return the distinct elements of data."""
    return list(dict.fromkeys(_items(data)))


def deduplicate_func(data: Optional[Sequence[T]], equal: EqualFunc) -> list[T]:
    """Return the distinct elements of data, keeping each one's last occurrence."""
    items = _items(data)
    return [
        v for k, v in enumerate(items) if not contains_func(items[k + 1:], v, equal)
    ]


def reverse(src: Optional[Sequence[T]]) -> list[T]:
    """Return a new list with the elements in reverse order."""
    return list(reversed(_items(src)))


def reverse_self(src: Optional[list[T]]) -> None:
    """Reverse src in place."""
    if src:
        src.reverse()