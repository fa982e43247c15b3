"""Set operations on lists: difference, intersection, symmetric difference, union.

Every result is free of duplicates.
"""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

from ekit.slices import EqualFunc, contains_func, deduplicate, deduplicate_func

T = TypeVar("T")


def _items(src: Optional[Sequence[T]]) -> Sequence[T]:
    return () if src is None else src


def diff_set(src: Optional[Sequence[T]], dst: Optional[Sequence[T]]) -> list[T]:
    """Return the elements of src that are not in dst."""
    excluded = set(_items(dst))
    return [v for v in dict.fromkeys(_items(src)) if v not in excluded]


def diff_set_func(
    src: Optional[Sequence[T]], dst: Optional[Sequence[T]], equal: EqualFunc
) -> list[T]:
    """Return the elements of src that are not in dst according to equal."""
    kept = [v for v in _items(src) if not contains_func(dst, v, equal)]
    return deduplicate_func(kept, equal)


def intersect_set(src: Optional[Sequence[T]], dst: Optional[Sequence[T]]) -> list[T]:
    """Return the elements present in both src and dst."""
    present = set(_items(src))
    return deduplicate(v for v in _items(dst) if v in present)


def intersect_set_func(
    src: Optional[Sequence[T]], dst: Optional[Sequence[T]], equal: EqualFunc
) -> list[T]:
    """Return the elements present in both src and dst according to equal."""
    dst_items = _items(dst)
    common = [s for s in _items(src) if any(equal(d, s) for d in dst_items)]
    return deduplicate_func(common, equal)


def symmetric_diff_set(
    src: Optional[Sequence[T]], dst: Optional[Sequence[T]]
) -> list[T]:
    """Return the elements present in exactly one of src and dst."""
    src_keys = dict.fromkeys(_items(src))
    dst_keys = dict.fromkeys(_items(dst))
    return [k for k in src_keys if k not in dst_keys] + [
        k for k in dst_keys if k not in src_keys
    ]


def symmetric_diff_set_func(
    src: Optional[Sequence[T]], dst: Optional[Sequence[T]], equal: EqualFunc
) -> list[T]:
    """Return the elements present in exactly one of src and dst according to equal."""
    src_items, dst_items = _items(src), _items(dst)
    common = [s for s in src_items if any(equal(s, d) for d in dst_items)]
    rest = [v for v in (*src_items, *dst_items) if not contains_func(common, v, equal)]
    return deduplicate_func(rest, equal)


def union_set(src: Optional[Sequence[T]], dst: Optional[Sequence[T]]) -> list[T]:
    """Return the elements present in src or dst."""
    return list(dict.fromkeys((*_items(src), *_items(dst))))


def union_set_func(
    src: Optional[Sequence[T]], dst: Optional[Sequence[T]], equal: EqualFunc
) -> list[T]:
    """Return the elements present in src or dst according to equal."""
    return deduplicate_func([*_items(dst), *_items(src)], equal)