"""Database column wrappers that store values as JSON or AES-GCM encrypted bytes."""

from __future__ import annotations

import dataclasses
import json
import os
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

T = TypeVar("T")

_NONCE_SIZE = 12
_KEY_SIZES = (16, 24, 32)


class ColumnKind(Enum):
    """How a column value is turned into bytes before it is encrypted."""

    STRING = "string"
    BYTES = "bytes"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    INT = "int"
    UINT = "uint"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    JSON = "json"

    @classmethod
    def for_value(cls, value: Any) -> "ColumnKind":
        """Pick the kind that a plain Python value is encoded with."""
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (bytes, bytearray)):
            return cls.BYTES
        if isinstance(value, bool):
            return cls.JSON
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            return cls.FLOAT64
        return cls.JSON


_FORMATS = {
    ColumnKind.INT8: ">b",
    ColumnKind.INT16: ">h",
    ColumnKind.INT32: ">i",
    ColumnKind.INT64: ">q",
    ColumnKind.UINT8: ">B",
    ColumnKind.UINT16: ">H",
    ColumnKind.UINT32: ">I",
    ColumnKind.UINT64: ">Q",
    ColumnKind.INT: ">q",
    ColumnKind.UINT: ">Q",
    ColumnKind.FLOAT32: ">f",
    ColumnKind.FLOAT64: ">d",
}


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _to_json(value: Any) -> bytes:
    return json.dumps(
        value, default=_json_default, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def _from_json(data: bytes, loader: Optional[Callable[[Any], Any]]) -> Any:
    obj = json.loads(data)
    return loader(obj) if loader is not None else obj


def _encode(kind: ColumnKind, value: Any) -> bytes:
    if kind is ColumnKind.STRING:
        if not isinstance(value, str):
            raise TypeError(f"ekit: EncryptColumn expected str, got {type(value).__name__}")
        return value.encode("utf-8")
    if kind is ColumnKind.BYTES:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"ekit: EncryptColumn expected bytes, got {type(value).__name__}")
        return bytes(value)
    if kind is ColumnKind.JSON:
        return _to_json(value)
    try:
        return struct.pack(_FORMATS[kind], value)
    except struct.error as exc:
        raise ValueError(f"ekit: cannot encode {value!r} as {kind.value}: {exc}") from exc


def _decode(kind: ColumnKind, data: bytes, loader: Optional[Callable[[Any], Any]]) -> Any:
    if kind is ColumnKind.STRING:
        return data.decode("utf-8")
    if kind is ColumnKind.BYTES:
        return data
    if kind is ColumnKind.JSON:
        return _from_json(data, loader)
    try:
        (result,) = struct.unpack_from(_FORMATS[kind], data)
    except struct.error as exc:
        raise ValueError(f"ekit: cannot decode {kind.value}: {exc}") from exc
    return result


@dataclass
class EncryptColumn(Generic[T]):
    """A column whose value is stored encrypted with AES in GCM mode.

    Strings and bytes are encrypted as they are, numbers in big-endian binary
    form according to ``kind``, and everything else as JSON. When ``kind`` is
    None it is chosen from the value on write, and JSON is assumed on read.
    ``loader``, if given, builds the value from decoded JSON.
    """

    val: Any = None
    valid: bool = False
    key: str = ""
    kind: Optional[ColumnKind] = None
    loader: Optional[Callable[[Any], T]] = None

    def _cipher(self) -> AESGCM:
        return AESGCM(self.key.encode("utf-8"))

    def value(self) -> bytes:
        """Return the encrypted value: nonce, ciphertext and tag."""
        if not self.valid:
            raise ValueError("ekit: EncryptColumn is not valid")
        if len(self.key.encode("utf-8")) not in _KEY_SIZES:
            raise ValueError("ekit: EncryptColumn only supports keys of 16/24/32 bytes")
        kind = self.kind if self.kind is not None else ColumnKind.for_value(self.val)
        plain = _encode(kind, self.val)
        nonce = os.urandom(_NONCE_SIZE)
        return nonce + self._cipher().encrypt(nonce, plain, None)

    def _decrypt(self, data: bytes) -> bytes:
        cipher = self._cipher()
        if len(data) < _NONCE_SIZE:
            raise ValueError("ekit: EncryptColumn ciphertext is too short")
        try:
            return cipher.decrypt(data[:_NONCE_SIZE], data[_NONCE_SIZE:], None)
        except InvalidTag as exc:
            raise ValueError("ekit: EncryptColumn decryption failed") from exc

    def scan(self, src: Any) -> None:
        """Decrypt src and decode it into ``val``.

        A str that cannot be decrypted is ignored and leaves the column as it was.
        """
        if isinstance(src, (bytes, bytearray)):
            plain = self._decrypt(bytes(src))
        elif isinstance(src, str):
            try:
                plain = self._decrypt(src.encode("utf-8"))
            except ValueError:
                return
        else:
            raise TypeError(f"ekit: EncryptColumn.scan does not support src type {src}")
        kind = self.kind if self.kind is not None else ColumnKind.JSON
        try:
            self.val = _decode(kind, plain, self.loader)
        except Exception:
            self.valid = False
            raise
        self.valid = True


@dataclass
class JsonColumn(Generic[T]):
    """A column stored as a JSON document.

    ``loader``, if given, builds the value from decoded JSON.
    """

    val: Any = None
    valid: bool = False
    loader: Optional[Callable[[Any], T]] = None

    def value(self) -> Optional[bytes]:
        """Return the JSON encoding of ``val``, or None when not valid."""
        if not self.valid:
            return None
        return _to_json(self.val)

    def scan(self, src: Any) -> None:
        """Decode src, which must be bytes, str or None; None changes nothing."""
        if src is None:
            return
        if isinstance(src, (bytes, bytearray)):
            data = bytes(src)
        elif isinstance(src, str):
            data = src.encode("utf-8")
        else:
            raise TypeError(f"ekit: JsonColumn.scan does not support src type {src}")
        self.val = _from_json(data, self.loader)
        self.valid = True