"""Pixel decoders and white balance readers for Kodak KDC and DCR files."""

from __future__ import annotations

from .basics import LookupTable, be_u16, decode_rows

__all__ = [
    "dcr_white_balance",
    "decode_dc120",
    "decode_kodak65000",
    "decode_segment",
    "kodak_white_balance",
]

_NAN = float("nan")

_DC120_WIDTH = 848
_DC120_MUL = (162, 192, 187, 92)
_DC120_ADD = (0, 636, 424, 212)

_SEGMENT = 256


def decode_dc120(src: bytes, width: int, height: int, dummy: bool) -> list[int]:
    """Unscramble the 8-bit rows of a Kodak DC120, each rotated by its own shift."""

    def fill(row: int) -> list[int]:
        shift = row * _DC120_MUL[row & 3] + _DC120_ADD[row & 3]
        base = row * width
        return [src[base + (col + shift) % _DC120_WIDTH] for col in range(width)]

    return decode_rows(width, height, dummy, fill)


def decode_segment(buf: bytes, pos: int, size: int) -> tuple[list[int], int]:
    """Decode one segment of up to 256 differences starting at ``pos``.

    Returns the signed differences and the position after the segment.
    """

    def next_byte() -> int:
        nonlocal pos
        value = buf[pos]
        pos += 1
        return value

    lens: list[int] = []
    for _ in range(0, size, 2):
        byte = next_byte()
        lens.append(byte & 15)
        lens.append(byte >> 4)

    bitbuf = 0
    bits = 0
    if size & 7 == 4:
        high = next_byte()
        bitbuf = (high << 8) | next_byte()
        bits = 16

    out: list[int] = []
    for length in lens[:size]:
        if bits < length:
            for j in (0, 8, 16, 24):
                bitbuf += next_byte() << (bits + (j ^ 8))
            bits += 32
        value = bitbuf & (0xFFFF >> (16 - length))
        bitbuf >>= length
        bits -= length
        if length and value & (1 << (length - 1)) == 0:
            value -= (1 << length) - 1
        out.append(value)
    return out, pos


def decode_kodak65000(
    buf: bytes, curve: LookupTable, width: int, height: int, dummy: bool
) -> list[int]:
    """Decode Kodak 65000 compressed data through a dithered linearisation curve."""
    if dummy:
        return [0]
    out: list[int] = []
    pos = 0
    random = 0
    for _ in range(height):
        for col in range(0, width, _SEGMENT):
            pred = [0, 0]
            diffs, pos = decode_segment(buf, pos, min(_SEGMENT, width - col))
            for i, diff in enumerate(diffs):
                pred[i & 1] += diff
                if pred[i & 1] < 0:
                    raise ValueError("Found a negative pixel!")
                pixel, random = curve.dither(pred[i & 1] & 0xFFFF, random)
                out.append(pixel)
    return out


def _ratio(numerator: float, value: int) -> float:
    return numerator / value if value else float("inf")


def dcr_white_balance(levels: bytes, count: int) -> tuple[float, float, float, float]:
    """White balance from a DCR white balance tag of ``count`` elements."""
    if count < 46:
        return (_NAN, _NAN, _NAN, _NAN)
    return (
        _ratio(2048.0, be_u16(levels, 40)),
        _ratio(2048.0, be_u16(levels, 42)),
        _ratio(2048.0, be_u16(levels, 44)),
        _NAN,
    )


def kodak_white_balance(levels: bytes, count: int) -> tuple[float, float, float, float]:
    """White balance from a Kodak white balance tag of ``count`` elements."""
    if count not in (734, 1502):
        raise ValueError("KDC: Levels count is off")
    red = be_u16(levels, 148)
    blue = be_u16(levels, 150)
    return (red / 256.0, 1.0, blue / 256.0, _NAN)