"""Three-way comparison helpers."""

from typing import Any, Callable

Comparator = Callable[[Any, Any], int]
"""A function returning -1, 0 or 1 as its first argument is less than,
equal to or greater than its second."""


def compare_real_number(src, dst) -> int:
    """Return -1 if src < dst, 0 if they are equal, 1 otherwise."""
    if src < dst:
        return -1
    if src == dst:
        return 0
    return 1