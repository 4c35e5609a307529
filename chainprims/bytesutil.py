"""Byte helpers: hex pretty-printing and writable byte references."""

from __future__ import annotations


class PrettySlice:
    """Hex view of bytes: ``str`` gives plain hex, ``repr`` separates bytes with ``·``."""

    __slots__ = ("data",)

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self.data = bytes(data)

    def __str__(self) -> str:
        return self.data.hex()

    def __repr__(self) -> str:
        return "·".join(f"{byte:02x}" for byte in self.data)


def pretty(data: bytes | bytearray | memoryview) -> PrettySlice:
    """Wrap ``data`` for pretty-printing."""
    return PrettySlice(data)


def to_hex(data: bytes | bytearray | memoryview) -> str:
    """Lowercase hex string of ``data`` without a prefix."""
    return str(PrettySlice(data))


class FlexibleBytes:
    """A growable byte buffer that writes may extend."""

    __slots__ = ("buffer",)

    def __init__(self, buffer: bytearray) -> None:
        if not isinstance(buffer, bytearray):
            raise TypeError("a flexible reference needs a bytearray")
        self.buffer = buffer

    def write(self, offset: int, data: bytes) -> int:
        """Write ``data`` at ``offset``, dropping anything after it.

        The buffer is zero-padded up to ``offset`` if needed. Returns the number
        of bytes written, padding included.
        """
        if offset < 0:
            raise ValueError("offset cannot be negative")
        data = bytes(data)
        current = len(self.buffer)
        written = len(data) + max(0, offset - current)
        if offset < current:
            del self.buffer[offset:]
        else:
            self.buffer.extend(bytes(offset - current))
        self.buffer.extend(data)
        return written

    def __bytes__(self) -> bytes:
        return bytes(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)


class FixedBytes:
    """A fixed-size writable byte buffer; writes past its end are dropped."""

    __slots__ = ("buffer", "_view")

    def __init__(self, buffer: bytearray | memoryview) -> None:
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError("a fixed reference needs a writable buffer")
        self.buffer = buffer
        self._view = view.cast("B")

    def write(self, offset: int, data: bytes) -> int:
        """Copy as much of ``data`` as fits at ``offset``; return the count copied."""
        if offset < 0:
            raise ValueError("offset cannot be negative")
        size = len(self._view)
        if offset >= size:
            return 0
        data = bytes(data)
        count = min(size - offset, len(data))
        self._view[offset : offset + count] = data[:count]
        return count

    def __bytes__(self) -> bytes:
        return self._view.tobytes()

    def __len__(self) -> int:
        return len(self._view)