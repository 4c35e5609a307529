"""Key-value store abstraction: transactions, statistics and prefix helpers."""

from __future__ import annotations

import abc
import enum
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union

PREFIX_LEN = 12
"""Required length of prefixes."""

_U32_LIMIT = 1 << 32


class IoStatsKind(enum.Enum):
    """Which statistics period to query."""

    OVERALL = "overall"
    SINCE_PREVIOUS = "since_previous"


@dataclass
class IoStats:
    """Input/output statistics over a period of ``span`` seconds."""

    transactions: int = 0
    reads: int = 0
    cache_reads: int = 0
    writes: int = 0
    bytes_read: int = 0
    cache_read_bytes: int = 0
    bytes_written: int = 0
    started: float = field(default_factory=time.monotonic)
    span: float = 0.0

    @classmethod
    def empty(cls) -> IoStats:
        """An empty report starting now."""
        return cls()

    def _per_sec(self, amount: float) -> float:
        if self.span == 0.0:
            return 0.0
        return amount / self.span

    def avg_batch_size(self) -> float:
        """Transactions per write, or 0 when nothing was written."""
        if self.writes == 0:
            return 0.0
        return self.transactions / self.writes

    def reads_per_sec(self) -> float:
        """Read operations per second."""
        return self._per_sec(self.reads)

    def byte_reads_per_sec(self) -> float:
        """Bytes read per second."""
        return self._per_sec(self.bytes_read)

    def writes_per_sec(self) -> float:
        """Write operations per second."""
        return self._per_sec(self.writes)

    def byte_writes_per_sec(self) -> float:
        """Bytes written per second."""
        return self._per_sec(self.bytes_written)

    def ops_per_sec(self) -> float:
        """Read and write operations per second."""
        return self._per_sec(self.writes + self.reads)

    def transactions_per_sec(self) -> float:
        """Transactions per second."""
        return self._per_sec(self.transactions)

    def avg_transaction_size(self) -> float:
        """Bytes written per transaction."""
        if self.transactions == 0:
            return 0.0
        return self.bytes_written / self.transactions

    def cache_hit_ratio(self) -> float:
        """Fraction of reads served from cache."""
        if self.reads == 0:
            return 0.0
        return self.cache_reads / self.reads


def _check_col(col: int) -> int:
    if not 0 <= col < _U32_LIMIT:
        raise ValueError(f"column {col} is out of range")
    return col


@dataclass(frozen=True)
class Insert:
    """Store ``value`` under ``key`` in column ``col``."""

    col: int
    key: bytes
    value: bytes


@dataclass(frozen=True)
class Delete:
    """Remove ``key`` from column ``col``."""

    col: int
    key: bytes


@dataclass(frozen=True)
class DeletePrefix:
    """Remove every key starting with ``prefix`` from column ``col``."""

    col: int
    prefix: bytes

    @property
    def key(self) -> bytes:
        """The key associated with this operation: the prefix."""
        return self.prefix


DBOp = Union[Insert, Delete, DeletePrefix]


@dataclass
class DBTransaction:
    """A batch of put and delete operations applied together."""

    ops: list[DBOp] = field(default_factory=list)

    def put(self, col: int, key: bytes, value: bytes) -> None:
        """Insert a key-value pair; any existing value is overwritten on write."""
        self.ops.append(Insert(_check_col(col), bytes(key), bytes(value)))

    def delete(self, col: int, key: bytes) -> None:
        """Delete the value stored under ``key``."""
        self.ops.append(Delete(_check_col(col), bytes(key)))

    def delete_prefix(self, col: int, prefix: bytes) -> None:
        """Delete every value whose key starts with ``prefix``.

        An empty prefix removes all keys.
        """
        self.ops.append(DeletePrefix(_check_col(col), bytes(prefix)))


class KeyValueDB(abc.ABC):
    """Generic key-value database with distinct column families."""

    def transaction(self) -> DBTransaction:
        """A new empty transaction."""
        return DBTransaction()

    @abc.abstractmethod
    def get(self, col: int, key: bytes) -> bytes | None:
        """The value stored under ``key``, or None."""

    @abc.abstractmethod
    def get_by_prefix(self, col: int, prefix: bytes) -> bytes | None:
        """The first value whose key starts with ``prefix``, or None."""

    @abc.abstractmethod
    def write(self, transaction: DBTransaction) -> None:
        """Apply a transaction to the backing store."""

    @abc.abstractmethod
    def iter(self, col: int) -> Iterator[tuple[bytes, bytes]]:
        """Iterate over the key-value pairs of a column."""

    @abc.abstractmethod
    def iter_with_prefix(self, col: int, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        """Iterate over the key-value pairs of a column whose key starts with ``prefix``."""

    def io_stats(self, kind: IoStatsKind) -> IoStats:
        """Statistics of the given kind; empty unless the store collects them."""
        return IoStats.empty()

    def has_key(self, col: int, key: bytes) -> bool:
        """True if a value is stored under ``key``."""
        return self.get(col, key) is not None

    def has_prefix(self, col: int, prefix: bytes) -> bool:
        """True if any key starts with ``prefix``."""
        return self.get_by_prefix(col, prefix) is not None


def end_prefix(prefix: bytes) -> bytes | None:
    """The exclusive end of the key range that starts at ``prefix``.

    Returns None when there is no bounded end, as for empty or all-0xff prefixes.
    """
    trimmed = bytes(prefix).rstrip(b"\xff")
    if not trimmed:
        return None
    return trimmed[:-1] + bytes([trimmed[-1] + 1])