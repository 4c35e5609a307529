"""Hex string serialization of byte strings, unsigned integers and fixed hashes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

HexInput = Union[str, bytes, bytearray, memoryview, Iterable[int]]

_WHITESPACE = frozenset(b" \r\n\t")


class FromHexError(ValueError):
    """A non-hex character was found while decoding a hex string."""

    def __init__(self, character: str, index: int) -> None:
        super().__init__(f"invalid hex character: {character}, at {index}")
        self.character = character
        self.index = index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FromHexError):
            return NotImplemented
        return (self.character, self.index) == (other.character, other.index)

    def __hash__(self) -> int:
        return hash((self.character, self.index))


@dataclass(frozen=True)
class ExpectedLen:
    """Accepted byte length: exactly ``size``, or in ``(minimum; size]``."""

    size: int
    minimum: int | None = None

    @classmethod
    def exact(cls, size: int) -> ExpectedLen:
        """Exactly ``size`` bytes."""
        return cls(size)

    @classmethod
    def between(cls, minimum: int, size: int) -> ExpectedLen:
        """More than ``minimum`` and at most ``size`` bytes."""
        return cls(size, minimum)

    def __str__(self) -> str:
        if self.minimum is None:
            return f"{self.size} bytes"
        return f"between ({self.minimum}; {self.size}] bytes"

    def _accepts(self, length: int, per_byte: int) -> bool:
        if self.minimum is None:
            return length == per_byte * self.size
        return per_byte * self.minimum < length <= per_byte * self.size


class InvalidLengthError(ValueError):
    """The input does not have an accepted length."""

    def __init__(self, length: int, expected: ExpectedLen) -> None:
        description = (
            "a (both 0x-prefixed or not) hex string or byte array "
            f"containing {expected}"
        )
        super().__init__(f"invalid length {length}, expected {description}")
        self.length = length
        self.expected = expected


def to_hex(data: bytes, skip_leading_zero: bool) -> str:
    """Encode ``data`` as a 0x-prefixed lowercase hex string.

    With ``skip_leading_zero`` leading zeros are dropped and empty input
    gives ``0x0``; otherwise every byte is printed and empty input gives ``0x``.
    """
    data = bytes(data)
    if skip_leading_zero:
        digits = data.lstrip(b"\x00").hex()
        if not digits:
            return "0x0"
        if digits[0] == "0":
            digits = digits[1:]
        return "0x" + digits
    return "0x" + data.hex()


def _strip_prefix(text: str) -> tuple[str, bool]:
    if text.startswith("0x"):
        return text[2:], True
    return text, False


def _from_hex_raw(text: str, stripped: bool) -> bytes:
    """Decode a prefix-free hex string; whitespace is skipped."""
    raw = text.encode("utf-8")
    modulus = len(raw) % 2
    buf = 0
    out = bytearray()
    for index, byte in enumerate(raw):
        buf = (buf << 4) & 0xFF
        if 0x41 <= byte <= 0x46:
            buf |= byte - 0x41 + 10
        elif 0x61 <= byte <= 0x66:
            buf |= byte - 0x61 + 10
        elif 0x30 <= byte <= 0x39:
            buf |= byte - 0x30
        elif byte in _WHITESPACE:
            buf >>= 4
            continue
        else:
            raise FromHexError(chr(byte), index + (2 if stripped else 0))
        modulus += 1
        if modulus == 2:
            modulus = 0
            out.append(buf)
    return bytes(out)


def from_hex(text: str) -> bytes:
    """Decode a hex string, with or without the ``0x`` prefix.

    An odd number of digits is read as if a leading zero were present.
    """
    body, stripped = _strip_prefix(text)
    size = (len(body.encode("utf-8")) + 1) // 2
    decoded = _from_hex_raw(body, stripped)
    return decoded + bytes(size - len(decoded))


def serialize_raw(data: bytes) -> str:
    """Hex representation of ``data`` with every byte printed."""
    return to_hex(data, False)


def serialize_uint(data: bytes) -> str:
    """Hex representation of big-endian integer bytes, leading zeros trimmed."""
    return to_hex(data, True)


def deserialize(value: HexInput) -> bytes:
    """Read bytes from a hex string, a bytes-like object or a sequence of ints."""
    if isinstance(value, str):
        return from_hex(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, Iterable):
        return bytes(value)
    raise TypeError(
        "expected a (both 0x-prefixed or not) hex string or byte array, "
        f"got {type(value).__name__}"
    )


def deserialize_check_len(value: HexInput, expected: ExpectedLen) -> bytes:
    """Read bytes like :func:`deserialize`, enforcing ``expected`` length."""
    if isinstance(value, str):
        body, stripped = _strip_prefix(value)
        length = len(body.encode("utf-8"))
        if not expected._accepts(length, 2):
            raise InvalidLengthError(length, expected)
        return _from_hex_raw(body, stripped)
    data = deserialize(value)
    if not expected._accepts(len(data), 1):
        raise InvalidLengthError(len(data), expected)
    return data


def serialize_uint_value(value: int, byte_len: int) -> str:
    """Hex representation of an unsigned integer of ``byte_len`` bytes."""
    if value < 0:
        raise ValueError("cannot serialize a negative integer")
    return serialize_uint(value.to_bytes(byte_len, "big"))


def deserialize_uint_value(value: HexInput, byte_len: int) -> int:
    """Read an unsigned integer of at most ``byte_len`` bytes."""
    data = deserialize_check_len(value, ExpectedLen.between(0, byte_len))
    return int.from_bytes(data, "big")


def serialize_hash(data: bytes) -> str:
    """Hex representation of a fixed-size hash."""
    return serialize_raw(data)


def deserialize_hash(value: HexInput, byte_len: int) -> bytes:
    """Read a fixed-size hash of exactly ``byte_len`` bytes."""
    return deserialize_check_len(value, ExpectedLen.exact(byte_len))