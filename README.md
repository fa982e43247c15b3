# ekit

A small toolkit of generic helpers for lists, sets, typed values,
thread-safe containers and database column values.

## Modules

- **`ekit.slices`**
  - aggregation: `max_value`, `min_value` (both raise `ValueError` on an
    empty or `None` input), `sum_values` (0 for none);
  - membership: `contains`, `contains_any`, `contains_all`, and the
    `contains_func`, `contains_any_func`, `contains_all_func` variants that
    take an equality callable;
  - lookup: `index`, `last_index`, `index_all` and their `*_func` variants
    (`-1` when nothing matches);
  - transformation: `map_slice` and `filter_map`, whose callables receive
    `(index, element)`; `filter_map`'s callable returns `(value, keep)`;
  - removal: `delete(src, index)` returns a new list and raises
    `IndexOutOfRangeError` for an index outside the list;
    `filter_delete(src, m)` removes matching elements in place;
  - `reverse` (new list), `reverse_self` (in place), `deduplicate` and
    `deduplicate_func`.

  `None` is accepted wherever a list is read and behaves as an empty one.

- **`ekit.sets`**: deduplicated set operations on lists: `diff_set`,
  `intersect_set`, `symmetric_diff_set`, `union_set`, each with a `*_func`
  variant for elements compared with a custom equality callable.

- **`ekit.value`**: `AnyValue(val, err)` holds a value or the error that
  prevented obtaining it. Accessors such as `as_int()`, `as_uint32()`,
  `as_float32()`, `as_str()`, `as_bytes()` and `as_bool()` re-raise `err` if
  it is set and raise `InvalidTypeError` if the value has the wrong type or
  lies outside the integer range; each has an `*_or_default(default)`
  counterpart that returns `default` instead of raising.

- **`ekit.syncx`**: thread-safe containers:
  - `SyncMap`: `load`, `store`, `load_or_store`, `load_and_delete`,
    `delete`, and `range(f)` which stops when `f` returns `False`. A missing
    key and a key stored with `None` are told apart by the returned flag.
  - `Pool(factory)`: `get` reuses a returned object or calls `factory`;
    `put` returns one.
  - `AtomicValue(value)`: `load`, `store`, `swap`, `compare_and_swap`.

- **`ekit.columns`**: values prepared for storing in a database column:
  - `JsonColumn`: `value()` returns the JSON bytes of `val` (or `None` when
    not `valid`); `scan(src)` decodes bytes or str, and ignores `None`.
  - `EncryptColumn`: `value()` encrypts with AES-GCM using a 16, 24 or 32
    byte `key` and returns nonce + ciphertext; `scan(src)` decrypts and
    decodes into `val`. Strings and bytes are encrypted as they are, numbers
    in big-endian binary form chosen by a `ColumnKind`, everything else
    (including dataclasses) as JSON. Without an explicit `kind` it is picked
    from the value on write and JSON is assumed on read, so set the same
    `kind` on both sides for non-JSON values. An optional `loader` builds
    the value from decoded JSON on both column types.

- **`ekit.comparator`**: `compare_real_number(src, dst)` returns -1, 0 or 1.

## Installation

```
pip install .
```

## Examples

```python
from ekit.slices import index_all, delete
from ekit.sets import union_set

index_all([1, 2, 3, 4, 5, 3, 9], 3)         # [2, 5]
delete([1, 2, 3, 4], 2)                     # [1, 2, 4]
sorted(union_set([1, 3, 4, 5], [1, 4, 7]))  # [1, 3, 4, 5, 7]
```

```python
from ekit.value import AnyValue

AnyValue(val="111").as_str()              # "111"
AnyValue(val=1).as_str_or_default("222")  # "222"
```

```python
from ekit.syncx import SyncMap, AtomicValue

m = SyncMap()
m.store("key1", 123)
m.load("key1")                # (123, True)

v = AtomicValue(123)
v.compare_and_swap(123, 456)  # True
```

```python
import secrets
from ekit.columns import ColumnKind, EncryptColumn, JsonColumn

JsonColumn(val={"a": "a value"}, valid=True).value()  # b'{"a":"a value"}'

key = secrets.token_hex(16)  # 32 characters
stored = EncryptColumn(val=123, valid=True, key=key, kind=ColumnKind.INT32).value()
col = EncryptColumn(key=key, kind=ColumnKind.INT32)
col.scan(stored)
col.val    # 123
col.valid  # True
```

## What it does not do

`ekit.columns` does not connect to a database or register itself with any
driver: `value()` produces the bytes to hand to your driver and `scan()`
takes what the driver returns.

## Running the tests

```
pip install .[test]
pytest
```