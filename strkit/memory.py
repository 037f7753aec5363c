"""Byte-buffer operations: search, compare, copy, move and fill.

Every function works on the first ``n`` bytes of its buffers. A range that
runs past the end of a buffer raises ``ValueError``; buffers are never
silently grown or truncated.
"""

from __future__ import annotations

from typing import Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]


def _check_range(length: int, offset: int, n: int, what: str) -> None:
    if n < 0:
        raise ValueError(f"{what}: byte count must not be negative, got {n}")
    if offset < 0:
        raise ValueError(f"{what}: offset must not be negative, got {offset}")
    if offset + n > length:
        raise ValueError(
            f"{what}: range [{offset}, {offset + n}) exceeds buffer of {length} bytes"
        )


def memchr(data: BytesLike, c: int, n: int) -> Optional[int]:
    """Return the index of the first byte equal to ``c & 0xFF`` in ``data[:n]``, or None."""
    _check_range(len(data), 0, n, "memchr")
    index = bytes(data[:n]).find(c & 0xFF)
    return None if index < 0 else index


def memcmp(a: BytesLike, b: BytesLike, n: int) -> int:
    """Compare the first ``n`` bytes; return the difference of the first unequal pair, or 0."""
    _check_range(len(a), 0, n, "memcmp")
    _check_range(len(b), 0, n, "memcmp")
    for left, right in zip(bytes(a[:n]), bytes(b[:n])):
        if left != right:
            return left - right
    return 0


def memcpy(dest: bytearray, src: BytesLike, n: int) -> bytearray:
    """Copy ``n`` bytes from the start of ``src`` to the start of ``dest`` and return ``dest``."""
    _check_range(len(src), 0, n, "memcpy source")
    _check_range(len(dest), 0, n, "memcpy destination")
    dest[:n] = bytes(src[:n])
    return dest


def memmove(
    dest: bytearray,
    src: BytesLike,
    n: int,
    dest_offset: int = 0,
    src_offset: int = 0,
) -> bytearray:
    """Copy ``n`` bytes from ``src[src_offset:]`` to ``dest[dest_offset:]``.

    The regions may overlap (``src`` may be ``dest`` itself): the bytes are
    read in full before any are written. Returns ``dest``.
    """
    _check_range(len(src), src_offset, n, "memmove source")
    _check_range(len(dest), dest_offset, n, "memmove destination")
    dest[dest_offset : dest_offset + n] = bytes(src[src_offset : src_offset + n])
    return dest


def memset(buf: bytearray, c: int, n: int) -> bytearray:
    """Fill the first ``n`` bytes of ``buf`` with ``c & 0xFF`` and return ``buf``."""
    _check_range(len(buf), 0, n, "memset")
    buf[:n] = bytes([c & 0xFF]) * n
    return buf