"""RLP stream encoding, hex serialization, byte helpers and key-value store primitives."""

__version__ = "0.1.0"

__all__ = ["bytesutil", "hexser", "kvdb", "stream"]