"""Fixed-width symbol extraction from a byte buffer.

Bits are consumed least-significant-bit first within each byte, in increasing
byte order.  The first bit read becomes the most significant bit of the
symbol.  A symbol window of *width* bits starts every *advance* bits, so
``advance < width`` gives overlapping windows and ``advance > width`` skips
bits between symbols.

Two readers are provided:

* :func:`next_bit` / :func:`next_symbol` walk a :class:`BitCursor` one bit at
  a time and are the reference behaviour.
* :func:`extract_symbols` produces the same symbols as a ``uint64`` array
  using numpy, processed in chunks so memory stays bounded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

import numpy as np

from entropy_density.errors import EndOfStream, InvalidConfigurationError

Buffer = Union[bytes, bytearray, memoryview, np.ndarray]

MAX_WIDTH = 64
CHUNK_BITS = 1 << 16  # window bits materialised per extraction chunk


@dataclass
class BitCursor:
    """Position of the next bit to read."""

    byte_offset: int = 0
    bit_offset: int = 0

    @property
    def position(self) -> int:
        """Absolute bit position."""
        return self.byte_offset * 8 + self.bit_offset

    @classmethod
    def at(cls, position: int) -> BitCursor:
        byte_offset, bit_offset = divmod(position, 8)
        return cls(byte_offset, bit_offset)

    def exhausted(self, buffer: Buffer) -> bool:
        return self.byte_offset >= len(buffer)


def check_width(width: int, advance: int | None = None) -> int:
    """Validate *width* / *advance* and return the effective advance."""
    if not 1 <= width <= MAX_WIDTH:
        raise InvalidConfigurationError(
            f"symbol width must be in [1, {MAX_WIDTH}], got {width}"
        )
    if advance is None:
        return width
    if advance < 1:
        raise InvalidConfigurationError(f"advance must be >= 1, got {advance}")
    return advance


def symbol_count(n_bytes: int, width: int, advance: int | None = None) -> int:
    """Number of complete symbols a buffer of *n_bytes* yields."""
    step = check_width(width, advance)
    n_bits = n_bytes * 8
    if n_bits < width:
        return 0
    return (n_bits - width) // step + 1


# ── bit-at-a-time reader ──


def next_bit(buffer: Buffer, cursor: BitCursor) -> int:
    """Read one bit and advance *cursor*.  Raises :class:`EndOfStream`."""
    if cursor.exhausted(buffer):
        raise EndOfStream
    bit = (int(buffer[cursor.byte_offset]) >> cursor.bit_offset) & 1
    cursor.bit_offset += 1
    if cursor.bit_offset == 8:
        cursor.bit_offset = 0
        cursor.byte_offset += 1
    return bit


def next_symbol(
    buffer: Buffer, cursor: BitCursor, width: int, advance: int | None = None
) -> int:
    """Read a *width*-bit symbol starting at *cursor*.

    On success the cursor moves *advance* bits (default: *width*) past the
    symbol's first bit.  If fewer than *width* bits remain, raises
    :class:`EndOfStream` and leaves *cursor* where it was.
    """
    step = check_width(width, advance)
    scratch = BitCursor(cursor.byte_offset, cursor.bit_offset)
    value = 0
    for _ in range(width):
        value = (value << 1) | next_bit(buffer, scratch)
    moved = BitCursor.at(cursor.position + step)
    cursor.byte_offset, cursor.bit_offset = moved.byte_offset, moved.bit_offset
    return value


def iter_symbols(
    buffer: Buffer, width: int, advance: int | None = None
) -> Iterator[int]:
    """Yield every complete symbol of *buffer*; a trailing partial one is dropped."""
    check_width(width, advance)
    cursor = BitCursor()
    while True:
        try:
            yield next_symbol(buffer, cursor, width, advance)
        except EndOfStream:
            return


# ── vectorised reader ──


def as_uint8(buffer: Buffer) -> np.ndarray:
    """View *buffer* as a flat ``uint8`` array of its raw bytes.

    Wider numpy dtypes are reinterpreted byte by byte, never truncated.
    """
    if isinstance(buffer, np.ndarray):
        return np.ascontiguousarray(buffer).reshape(-1).view(np.uint8)
    return np.frombuffer(buffer, dtype=np.uint8)


def iter_symbol_chunks(
    buffer: Buffer, width: int, advance: int | None = None
) -> Iterator[np.ndarray]:
    """Yield the symbols of :func:`iter_symbols` as consecutive ``uint64`` arrays.

    Only the bytes under the current chunk are unpacked, so working memory
    is set by ``CHUNK_BITS`` rather than by the buffer size.
    """
    step = check_width(width, advance)
    data = as_uint8(buffer)
    count = symbol_count(len(data), width, step)
    if count == 0:
        return

    weights = np.uint64(1) << np.arange(width - 1, -1, -1, dtype=np.uint64)
    offsets = np.arange(width, dtype=np.int64)
    chunk = max(1, CHUNK_BITS // max(width, step))

    for start in range(0, count, chunk):
        stop = min(start + chunk, count)
        lo = start * step // 8
        hi = ((stop - 1) * step + width + 7) // 8
        bits = np.unpackbits(data[lo:hi], bitorder="little")
        first = np.arange(start, stop, dtype=np.int64) * step - lo * 8
        windows = bits[first[:, None] + offsets].astype(np.uint64)
        yield (windows * weights).sum(axis=1, dtype=np.uint64)


def extract_symbols(
    buffer: Buffer, width: int, advance: int | None = None
) -> np.ndarray:
    """Return all complete symbols of *buffer* as a ``uint64`` array.

    Produces exactly the sequence of :func:`iter_symbols`.
    """
    step = check_width(width, advance)
    out = np.empty(symbol_count(len(as_uint8(buffer)), width, step), dtype=np.uint64)
    pos = 0
    for symbols in iter_symbol_chunks(buffer, width, step):
        out[pos: pos + len(symbols)] = symbols
        pos += len(symbols)
    return out
