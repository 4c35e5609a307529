# chainprims

Small building blocks for blockchain-style data handling, in plain Python
with no third-party dependencies:

- `chainprims.stream`: a streaming RLP (Recursive Length Prefix) encoder, `RlpStream`, plus the `Encodable` base class and the `rlp_bytes` shortcut.
- `chainprims.hexser`: hex serialization of byte strings, unsigned integers and fixed-size hashes, with optional length checks.
- `chainprims.bytesutil`: hex pretty-printing (`pretty`, `PrettySlice`, `to_hex`) and writable byte references (`FixedBytes`, `FlexibleBytes`).
- `chainprims.kvdb`: a key-value store abstraction: `KeyValueDB`, `DBTransaction`, the operations `Insert`, `Delete` and `DeletePrefix`, `IoStats`, `IoStatsKind` and `end_prefix`.

## Installation

```
pip install chainprims
```

## RLP encoding

`RlpStream` builds an encoding item by item. Its appending methods return the
stream, so calls can be chained. `out()` returns the finished bytes. It raises
`RuntimeError` while a list is still open.

```python
from chainprims.stream import RlpStream, rlp_bytes

stream = RlpStream.new_list(2)
stream.append("cat").append("dog")
assert stream.out() == bytes.fromhex("c88363617483646f67")

assert rlp_bytes("cat") == b"\x83cat"
assert rlp_bytes([1, 2, 3, 7, 0xFF]) == bytes.fromhex("c60102030781ff")

stream = RlpStream()
stream.begin_unbounded_list()
stream.append(40).append(41)
assert not stream.is_finished()
stream.finalize_unbounded_list()
assert stream.is_finished()
```

`append` accepts the following values:

- non-negative `int`, encoded as minimal big-endian bytes;
- `bool`;
- `str`, encoded as UTF-8;
- `bytes`, `bytearray` and `memoryview`;
- `list` and `tuple`, encoded as RLP lists;
- any object with an `rlp_append(stream)` method, such as subclasses of `Encodable`.

The stream has several other methods:

- `append_optional` writes `None` as an empty list and any other value as a one-item list.
- `append_raw` and `append_raw_checked` insert pre-encoded data. `append_raw_checked` appends only when the result stays within a size limit.
- `estimate_size` and `len()` report the encoded size so far.
- `clear()` discards what was written.

Bytes passed to `RlpStream(buffer)` are kept as a prefix of the output.

## Hex helpers

```python
from chainprims.hexser import (
    ExpectedLen, deserialize_check_len, deserialize_uint_value,
    from_hex, serialize_uint_value, to_hex,
)

assert to_hex(bytes([0, 1, 2]), True) == "0x102"
assert to_hex(bytes([0, 1, 2]), False) == "0x000102"
assert from_hex("0x102") == bytes([1, 2])
assert from_hex("0102") == bytes([1, 2])

assert deserialize_check_len([1, 2, 3], ExpectedLen.between(2, 5)) == bytes([1, 2, 3])
assert serialize_uint_value(255, 32) == "0xff"
assert deserialize_uint_value("0xff", 32) == 255
```

The module raises two errors:

- `FromHexError` for a non-hex character. Spaces, tabs and newlines are skipped.
- `InvalidLengthError` when the input does not have an accepted length.

`serialize_hash` and `deserialize_hash` handle fixed-size hashes, which always have every byte printed.

## Byte utilities

```python
from chainprims.bytesutil import FixedBytes, FlexibleBytes, pretty

assert str(pretty(b"\x01\x02")) == "0102"
assert repr(pretty(b"\x01\x02")) == "01·02"

fixed = bytearray(3)
assert FixedBytes(fixed).write(1, b"\x01\x01\x01") == 2
assert fixed == bytearray([0, 1, 1])

flexible = bytearray(3)
assert FlexibleBytes(flexible).write(5, b"\x01\x01\x01") == 5
assert flexible == bytearray([0, 0, 0, 0, 0, 1, 1, 1])
```

## Key-value store

```python
from chainprims.kvdb import DBTransaction, end_prefix

tx = DBTransaction()
tx.put(0, b"key", b"value")
tx.delete_prefix(0, b"ke")
assert len(tx.ops) == 2

assert end_prefix(bytes([5, 6, 255])) == bytes([5, 7])
assert end_prefix(bytes([255, 255])) is None
```

`KeyValueDB` is an abstract base class. To provide a concrete store, subclass
it and implement these methods:

- `get`
- `get_by_prefix`
- `write`
- `iter`
- `iter_with_prefix`

`has_key`, `has_prefix`, `transaction` and `io_stats` come with it. By default,
`io_stats` returns an empty `IoStats`.

## What the package does not do

- It encodes RLP but has no RLP decoder or read-only view over encoded bytes.
- It has no fixed-width integer or hash types. Integers and hashes are handled as plain `int` and `bytes` values through the hex helpers.
- It has no decorators that derive RLP codecs for dataclasses.
- `KeyValueDB` defines an interface only. The package ships no storage backend.

## Running the tests

```
pip install -e ".[test]"
pytest
```