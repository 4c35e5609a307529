"""Appendable RLP encoder."""

from __future__ import annotations

import abc
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


def _be_bytes(value: int) -> bytes:
    """Minimal big-endian representation of a non-negative integer."""
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


class Encodable(abc.ABC):
    """An object that knows how to append itself to an RlpStream."""

    @abc.abstractmethod
    def rlp_append(self, stream: RlpStream) -> None:
        """Append this value to the stream."""

    def rlp_bytes(self) -> bytes:
        """Return the RLP encoding of this value."""
        return rlp_bytes(self)


@dataclass
class _ListInfo:
    position: int
    maximum: int | None
    current: int = 0


class RlpStream:
    """Builds an RLP encoding piece by piece.

    Any bytes passed as ``buffer`` are kept as a prefix of the output; the
    encoding is written after them.
    """

    def __init__(self, buffer: bytes | bytearray = b"") -> None:
        self._buffer = bytearray(buffer)
        self._start = len(self._buffer)
        self._lists: list[_ListInfo] = []
        self._finished_list = False

    @classmethod
    def new_list(cls, length: int) -> RlpStream:
        """Create a stream that starts with a list of ``length`` items."""
        stream = cls()
        stream.begin_list(length)
        return stream

    def _total_written(self) -> int:
        return len(self._buffer) - self._start

    def append_empty_data(self) -> RlpStream:
        """Append the empty value."""
        self._buffer.append(0x80)
        self._note_appended(1)
        return self

    def append_raw(self, data: bytes, item_count: int) -> RlpStream:
        """Append pre-encoded RLP data counting as ``item_count`` items."""
        self._buffer.extend(data)
        self._note_appended(item_count)
        return self

    def append(self, value: Any) -> RlpStream:
        """Append a value as one item."""
        self._finished_list = False
        self._encode(value)
        if not self._finished_list:
            self._note_appended(1)
        return self

    def append_optional(self, value: Any) -> RlpStream:
        """Append an optional value: an empty list for None, else a one-item list."""
        self._finished_list = False
        if value is None:
            self.begin_list(0)
        else:
            self.begin_list(1)
            self.append(value)
        if not self._finished_list:
            self._note_appended(1)
        return self

    def append_iter(self, values: Iterable[int]) -> RlpStream:
        """Append the bytes produced by an iterable as one value."""
        self._finished_list = False
        self.encode_value(bytes(values))
        if not self._finished_list:
            self._note_appended(1)
        return self

    def append_list(self, values: Iterable[Any]) -> RlpStream:
        """Append a list holding every value of ``values``."""
        items = list(values)
        self.begin_list(len(items))
        for item in items:
            self.append(item)
        return self

    def append_internal(self, value: Any) -> RlpStream:
        """Append a value without counting it as an item."""
        self._encode(value)
        return self

    def begin_list(self, length: int) -> RlpStream:
        """Start a list that will hold exactly ``length`` items."""
        if length < 0:
            raise ValueError("list length cannot be negative")
        self._finished_list = False
        if length == 0:
            self._buffer.append(0xC0)
            self._note_appended(1)
            self._finished_list = True
        else:
            # one byte is reserved for the header; longer headers are inserted later
            self._buffer.append(0)
            self._lists.append(_ListInfo(self._total_written(), length))
        return self

    def begin_unbounded_list(self) -> RlpStream:
        """Start a list whose length is given by finalize_unbounded_list."""
        self._finished_list = False
        self._buffer.append(0)
        self._lists.append(_ListInfo(self._total_written(), None))
        return self

    def finalize_unbounded_list(self) -> None:
        """Close the innermost unbounded list."""
        if not self._lists:
            raise RuntimeError("no open list")
        if self._lists[-1].maximum is not None:
            raise RuntimeError("list type mismatch")
        info = self._lists.pop()
        self._insert_list_payload(self._total_written() - info.position, info.position)
        self._note_appended(1)
        self._finished_list = True

    def append_raw_checked(self, data: bytes, item_count: int, max_size: int) -> bool:
        """Append raw data only if the result stays within ``max_size`` bytes."""
        if self.estimate_size(len(data)) > max_size:
            return False
        self.append_raw(data, item_count)
        return True

    def estimate_size(self, add: int) -> int:
        """Total encoded size once ``add`` more payload bytes are appended."""
        total = self._total_written() + add
        size = total
        for info in self._lists:
            length = total - info.position
            if length > 55:
                size += (length.bit_length() + 7) // 8
        return size

    def __len__(self) -> int:
        return self.estimate_size(0)

    def clear(self) -> None:
        """Discard everything written so far."""
        del self._buffer[self._start :]
        self._lists.clear()

    def is_finished(self) -> bool:
        """True when no list is waiting for more items."""
        return not self._lists

    def as_raw(self) -> bytes:
        """The bytes written so far, including any initial buffer."""
        return bytes(self._buffer)

    def out(self) -> bytes:
        """Return the finished encoding."""
        if not self.is_finished():
            raise RuntimeError("stream has unfinished lists")
        return bytes(self._buffer)

    def encode_value(self, data: bytes) -> None:
        """Write ``data`` as an RLP string without counting it as an item."""
        data = bytes(data)
        length = len(data)
        if length == 1 and data[0] < 0x80:
            self._buffer.append(data[0])
        elif length <= 55:
            self._buffer.append(0x80 + length)
            self._buffer.extend(data)
        else:
            size = _be_bytes(length)
            self._buffer.append(0xB7 + len(size))
            self._buffer.extend(size)
            self._buffer.extend(data)

    def _encode(self, value: Any) -> None:
        rlp_append = getattr(value, "rlp_append", None)
        if callable(rlp_append) and not isinstance(value, type):
            rlp_append(self)
        elif isinstance(value, bool):
            self.encode_value(b"\x01" if value else b"")
        elif isinstance(value, int):
            if value < 0:
                raise ValueError("cannot encode a negative integer")
            self.encode_value(_be_bytes(value))
        elif isinstance(value, str):
            self.encode_value(value.encode("utf-8"))
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self.encode_value(bytes(value))
        elif isinstance(value, (list, tuple)):
            self.append_list(value)
        else:
            raise TypeError(f"cannot RLP-encode value of type {type(value).__name__}")

    def _note_appended(self, inserted_items: int) -> None:
        if not self._lists:
            return
        top = self._lists[-1]
        top.current += inserted_items
        should_finish = False
        if top.maximum is not None:
            if top.current > top.maximum:
                raise RuntimeError("cannot append more items than the list expects")
            should_finish = top.current == top.maximum
        if should_finish:
            self._lists.pop()
            self._insert_list_payload(self._total_written() - top.position, top.position)
            self._note_appended(1)
        self._finished_list = should_finish

    def _insert_list_payload(self, length: int, position: int) -> None:
        header = self._start + position - 1
        if length <= 55:
            self._buffer[header] = 0xC0 + length
        else:
            size = _be_bytes(length)
            self._buffer[header + 1 : header + 1] = size
            self._buffer[header] = 0xF7 + len(size)


def rlp_bytes(value: Any) -> bytes:
    """Return the RLP encoding of a single value."""
    stream = RlpStream()
    stream.append_internal(value)
    return stream.out()