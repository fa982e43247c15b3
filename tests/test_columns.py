import sqlite3
from dataclasses import dataclass

import pytest

from ekit.columns import ColumnKind, EncryptColumn, JsonColumn

KEY16 = "password" * 2
KEY32 = "password" * 4


@dataclass
class Simple:
    name: str
    age: int


@dataclass
class User:
    name: str = ""


def _user(obj):
    return User(**obj)


def _simple(obj):
    return Simple(**obj)


def test_wrong_length_key():
    col = EncryptColumn(val="abc", valid=True, key="secret")
    with pytest.raises(ValueError, match="16/24/32"):
        col.value()


def test_invalid_column_cannot_be_written():
    with pytest.raises(ValueError, match="not valid"):
        EncryptColumn(val="abc", key=KEY16).value()


@pytest.mark.parametrize(
    "val,kind,key,loader",
    [
        (123, ColumnKind.INT32, KEY32, None),
        (123, ColumnKind.INT, KEY16, None),
        ("adsnfjkenfjkndjsknfjenjfknsadnfkjejfn", ColumnKind.STRING, KEY16, None),
        (123, ColumnKind.INT8, KEY16, None),
        (330, ColumnKind.INT16, KEY16, None),
        (65550, ColumnKind.INT32, KEY16, None),
        (4294967300, ColumnKind.INT64, KEY16, None),
        (123, ColumnKind.UINT8, KEY16, None),
        (330, ColumnKind.UINT16, KEY16, None),
        (65550, ColumnKind.UINT32, KEY16, None),
        (4294967300, ColumnKind.UINT64, KEY16, None),
        ((1 << 16) + 1, ColumnKind.INT, KEY16, None),
        (123, ColumnKind.UINT, KEY16, None),
        ((1 << 16) + 1, ColumnKind.UINT, KEY16, None),
        (123.125, ColumnKind.FLOAT32, KEY16, None),
        (1212321412321323.12222221322, ColumnKind.FLOAT64, KEY16, None),
        ({"A": "B", "C": "D"}, ColumnKind.JSON, KEY16, None),
        (["B", "D", "E"], ColumnKind.JSON, KEY16, None),
        (b"hello", ColumnKind.BYTES, KEY16, None),
        (True, ColumnKind.JSON, KEY16, None),
        (Simple("大明", 99), ColumnKind.JSON, KEY16, _simple),
    ],
)
def test_round_trip(val, kind, key, loader):
    src = EncryptColumn(val=val, valid=True, key=key, kind=kind)
    out = EncryptColumn(key=key, kind=kind, loader=loader)
    out.scan(src.value())
    assert out.valid is True
    assert out.val == val


@pytest.mark.parametrize("val", [complex(1, 2)])
def test_complex_is_not_serializable(val):
    col = EncryptColumn(val=val, valid=True, key=KEY16)
    with pytest.raises(TypeError, match="complex"):
        col.value()


def test_kind_inferred_on_write():
    encrypted = EncryptColumn(val=42, valid=True, key=KEY16).value()
    out = EncryptColumn(key=KEY16, kind=ColumnKind.INT)
    out.scan(encrypted)
    assert out.val == 42


def test_ciphertext_layout_and_randomness():
    col = EncryptColumn(val="hello", valid=True, key=KEY16)
    first, second = col.value(), col.value()
    assert len(first) == 12 + len("hello") + 16
    assert b"hello" not in first
    assert first != second


def test_out_of_range_int8():
    col = EncryptColumn(val=300, valid=True, key=KEY16, kind=ColumnKind.INT8)
    with pytest.raises(ValueError, match="int8"):
        col.value()


def test_scan_unsupported_type():
    col = EncryptColumn(key=KEY16)
    with pytest.raises(TypeError, match="does not support src type 123"):
        col.scan(123)


def test_scan_bad_bytes_raises():
    col = EncryptColumn(key=KEY16, kind=ColumnKind.STRING)
    with pytest.raises(ValueError):
        col.scan(b"0123456789abcdefghijklmnopqrstuvwxyz")
    assert col.valid is False


def test_scan_bad_string_is_ignored():
    col = EncryptColumn(val="old", key=KEY16, kind=ColumnKind.STRING)
    col.scan("13adfdf")
    assert col.valid is False
    assert col.val == "old"


def test_scan_with_wrong_key_fails():
    encrypted = EncryptColumn(val="hello", valid=True, key=KEY16).value()
    col = EncryptColumn(key=KEY32, kind=ColumnKind.STRING)
    with pytest.raises(ValueError):
        col.scan(encrypted)


def test_sqlite_round_trip():
    conn = sqlite3.connect(":memory:")
    conn.execute(
        "CREATE TABLE product(id INTEGER PRIMARY KEY AUTOINCREMENT, encrypt TEXT NOT NULL)"
    )
    conn.execute("INSERT INTO product (id, encrypt) VALUES (1, '13adfdf')")
    src = EncryptColumn(val={"A": "B"}, valid=True, key=KEY16)
    conn.execute("UPDATE product SET encrypt = ? WHERE id = 1", (src.value(),))
    (stored,) = conn.execute("SELECT encrypt FROM product WHERE id = 1").fetchone()
    out = EncryptColumn(key=KEY16)
    out.scan(stored)
    conn.close()
    assert out.val == {"A": "B"}
    assert out.valid is True


def test_json_value_user():
    assert JsonColumn(val=User(name="Tom"), valid=True).value() == b'{"name":"Tom"}'


def test_json_value_invalid():
    assert JsonColumn(val=User()).value() is None
    assert JsonColumn().value() is None


def test_json_value_nil_but_valid():
    assert JsonColumn(valid=True).value() == b"null"


def test_json_scan_nil():
    col = JsonColumn(loader=_user)
    col.scan(None)
    assert col.valid is False
    assert col.val is None


@pytest.mark.parametrize("src", ['{"name":"Tom"}', b'{"name":"Tom"}'])
def test_json_scan_text(src):
    col = JsonColumn(loader=_user)
    col.scan(src)
    assert col.valid is True
    assert col.val == User(name="Tom")


def test_json_scan_int():
    col = JsonColumn(loader=_user)
    with pytest.raises(TypeError) as info:
        col.scan(123)
    assert str(info.value) == "ekit: JsonColumn.scan does not support src type 123"


def test_json_scan_invalid_json():
    col = JsonColumn()
    with pytest.raises(ValueError):
        col.scan("{not json")
    assert col.valid is False


def test_json_scan_types():
    js_list = JsonColumn()
    js_list.scan('["a", "b", "c"]')
    assert js_list.val == ["a", "b", "c"]
    assert js_list.value() == b'["a","b","c"]'

    js_map = JsonColumn()
    js_map.scan('{"a":"a value"}')
    assert js_map.value() == b'{"a":"a value"}'