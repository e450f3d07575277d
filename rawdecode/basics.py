"""Byte-order readers, row-wise decode drivers and dithered lookup tables."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

__all__ = [
    "BIG_ENDIAN",
    "LITTLE_ENDIAN",
    "Endian",
    "LookupTable",
    "be_i32",
    "be_u16",
    "be_u32",
    "clampbits",
    "decode_multiline",
    "decode_rows",
    "le_f32",
    "le_i32",
    "le_u16",
    "le_u32",
]


def clampbits(val: int, bits: int) -> int:
    """Clamp ``val`` into the unsigned range representable with ``bits`` bits."""
    if val < 0:
        return 0
    return min(val, (1 << bits) - 1)


def _unpack(fmt: str, buf: bytes, pos: int):
    size = struct.calcsize(fmt)
    if pos < 0 or pos + size > len(buf):
        raise IndexError(
            f"read of {size} bytes at offset {pos} is outside a buffer of {len(buf)} bytes"
        )
    return struct.unpack_from(fmt, buf, pos)[0]


def be_i32(buf: bytes, pos: int) -> int:
    return _unpack(">i", buf, pos)


def le_i32(buf: bytes, pos: int) -> int:
    return _unpack("<i", buf, pos)


def be_u32(buf: bytes, pos: int) -> int:
    return _unpack(">I", buf, pos)


def le_u32(buf: bytes, pos: int) -> int:
    return _unpack("<I", buf, pos)


def le_f32(buf: bytes, pos: int) -> float:
    return _unpack("<f", buf, pos)


def be_u16(buf: bytes, pos: int) -> int:
    return _unpack(">H", buf, pos)


def le_u16(buf: bytes, pos: int) -> int:
    return _unpack("<H", buf, pos)


@dataclass(frozen=True)
class Endian:
    """A byte order used to read multi-byte integers from a buffer."""

    big: bool

    @property
    def little(self) -> bool:
        return not self.big

    @property
    def _prefix(self) -> str:
        return ">" if self.big else "<"

    def read_i32(self, buf: bytes, pos: int) -> int:
        return _unpack(self._prefix + "i", buf, pos)

    def read_u32(self, buf: bytes, pos: int) -> int:
        return _unpack(self._prefix + "I", buf, pos)

    def read_u16(self, buf: bytes, pos: int) -> int:
        return _unpack(self._prefix + "H", buf, pos)


BIG_ENDIAN = Endian(big=True)
LITTLE_ENDIAN = Endian(big=False)


def decode_rows(
    width: int, height: int, dummy: bool, fill: Callable[[int], Iterable[int]]
) -> list[int]:
    """Build an image row by row; ``fill(row)`` yields the ``width`` pixels of a row.

    In dummy mode no decoding happens and a single-pixel placeholder is returned.
    """
    if dummy:
        return [0]
    out: list[int] = []
    for row in range(height):
        values = list(fill(row))
        if len(values) != width:
            raise ValueError(f"row {row} produced {len(values)} pixels, expected {width}")
        out.extend(values)
    return out


def decode_multiline(
    width: int,
    height: int,
    lines: int,
    dummy: bool,
    fill: Callable[[int, int], Iterable[int]],
) -> list[int]:
    """Build an image in strips of ``lines`` rows.

    ``fill(first_row, nlines)`` yields the ``nlines * width`` pixels of a strip;
    the last strip may hold fewer rows than ``lines``.
    """
    if dummy:
        return [0]
    if lines <= 0:
        raise ValueError("strip height must be positive")
    out: list[int] = []
    for first_row in range(0, height, lines):
        nlines = min(lines, height - first_row)
        values = list(fill(first_row, nlines))
        if len(values) != nlines * width:
            raise ValueError(
                f"strip at row {first_row} produced {len(values)} pixels, "
                f"expected {nlines * width}"
            )
        out.extend(values)
    return out


class LookupTable:
    """A curve that maps encoded values to output values with random dithering."""

    def __init__(self, table: Sequence[int]) -> None:
        values = list(table)
        if values:
            lowers = [values[0], *values[:-1]]
            uppers = [*values[1:], values[-1]]
        else:
            lowers = uppers = []
        entries = []
        for center, lower, upper in zip(values, lowers, uppers):
            delta = (upper - lower) & 0xFFFF
            base = 0 if center == 0 else (center - ((delta + 2) & 0xFFFF) // 4) & 0xFFFF
            entries.append((center, base, delta))
        self._table = tuple(entries)

    def __len__(self) -> int:
        return len(self._table)

    def __getitem__(self, value: int) -> int:
        return self._table[value][0]

    def dither(self, value: int, rand: int) -> tuple[int, int]:
        """Return the dithered output for ``value`` and the next random state."""
        _, base, delta = self._table[value]
        pixel = base + ((delta * (rand & 2047) + 1024) >> 12)
        next_rand = (15700 * (rand & 65535) + (rand >> 16)) & 0xFFFFFFFF
        return pixel & 0xFFFF, next_rand