"""A value of unknown type paired with an optional error, with typed accessors."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Any, Optional

_FLOAT32_MAX = 3.4028234663852886e38

_INT64 = (-(2**63), 2**63 - 1)
_UINT64 = (0, 2**64 - 1)
_INT32 = (-(2**31), 2**31 - 1)
_UINT32 = (0, 2**32 - 1)


class InvalidTypeError(TypeError):
    """Raised when a value does not have the requested type."""

    def __init__(self, want: str, got: str) -> None:
        super().__init__(f"ekit: invalid type, expected {want}, got {got}")
        self.want = want
        self.got = got

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidTypeError):
            return NotImplemented
        return (self.want, self.got) == (other.want, other.got)

    def __hash__(self) -> int:
        return hash((self.want, self.got))


@dataclass
class AnyValue:
    """Holds a value or the error that prevented obtaining it."""

    val: Any = None
    err: Optional[BaseException] = None

    def _checked(self) -> Any:
        if self.err is not None:
            raise self.err
        return self.val

    def _fail(self, want: str) -> InvalidTypeError:
        return InvalidTypeError(want, type(self.val).__name__)

    def _integer(self, want: str, bounds: tuple[int, int]) -> int:
        value = self._checked()
        low, high = bounds
        if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
            raise self._fail(want)
        return value

    def _or_default(self, getter, default):
        try:
            return getter()
        except Exception:
            return default

    def as_int(self) -> int:
        """Return the value as a signed 64-bit integer."""
        return self._integer("int", _INT64)

    def as_int_or_default(self, default):
        return self._or_default(self.as_int, default)

    def as_uint(self) -> int:
        """Return the value as an unsigned 64-bit integer."""
        return self._integer("uint", _UINT64)

    def as_uint_or_default(self, default):
        return self._or_default(self.as_uint, default)

    def as_int32(self) -> int:
        """Return the value as a signed 32-bit integer."""
        return self._integer("int32", _INT32)

    def as_int32_or_default(self, default):
        return self._or_default(self.as_int32, default)

    def as_uint32(self) -> int:
        """Return the value as an unsigned 32-bit integer."""
        return self._integer("uint32", _UINT32)

    def as_uint32_or_default(self, default):
        return self._or_default(self.as_uint32, default)

    def as_int64(self) -> int:
        """Return the value as a signed 64-bit integer."""
        return self._integer("int64", _INT64)

    def as_int64_or_default(self, default):
        return self._or_default(self.as_int64, default)

    def as_uint64(self) -> int:
        """Return the value as an unsigned 64-bit integer."""
        return self._integer("uint64", _UINT64)

    def as_uint64_or_default(self, default):
        return self._or_default(self.as_uint64, default)

    def as_float32(self) -> float:
        """Return the value rounded to single precision."""
        value = self._checked()
        if not isinstance(value, float):
            raise self._fail("float32")
        if math.isfinite(value) and abs(value) > _FLOAT32_MAX:
            raise self._fail("float32")
        return struct.unpack("f", struct.pack("f", value))[0]

    def as_float32_or_default(self, default):
        return self._or_default(self.as_float32, default)

    def as_float64(self) -> float:
        """Return the value as a double-precision float."""
        value = self._checked()
        if not isinstance(value, float):
            raise self._fail("float64")
        return value

    def as_float64_or_default(self, default):
        return self._or_default(self.as_float64, default)

    def as_str(self) -> str:
        """Return the value as a string."""
        value = self._checked()
        if not isinstance(value, str):
            raise self._fail("str")
        return value

    def as_str_or_default(self, default):
        return self._or_default(self.as_str, default)

    def as_bytes(self) -> bytes:
        """Return the value as bytes."""
        value = self._checked()
        if not isinstance(value, bytes):
            raise self._fail("bytes")
        return value

    def as_bytes_or_default(self, default):
        return self._or_default(self.as_bytes, default)

    def as_bool(self) -> bool:
        """Return the value as a boolean."""
        value = self._checked()
        if not isinstance(value, bool):
            raise self._fail("bool")
        return value

    def as_bool_or_default(self, default):
        return self._or_default(self.as_bool, default)