"""Sony raw helpers: the ARW/SRF stream cipher, tone curves and A100 white balance."""

from __future__ import annotations

from typing import Sequence

from .basics import LookupTable, be_u32, le_u16, le_u32

__all__ = ["a100_white_balance", "calculate_curve", "sony_decrypt"]

_MASK32 = 0xFFFFFFFF
_PAD_SIZE = 128
_WBG_TAG = 0x574247


def _byteswap32(value: int) -> int:
    return int.from_bytes(value.to_bytes(4, "little"), "big")


def _key_pad(key: int) -> list[int]:
    pad = [0] * _PAD_SIZE
    mkey = key & _MASK32
    for p in range(4):
        mkey = (mkey * 48828125 + 1) & _MASK32
        pad[p] = mkey
    pad[3] = ((pad[3] << 1) | ((pad[0] ^ pad[2]) >> 31)) & _MASK32
    for p in range(4, 127):
        pad[p] = (((pad[p - 4] ^ pad[p - 2]) << 1) | ((pad[p - 3] ^ pad[p - 1]) >> 31)) & _MASK32
    # The pad is kept as big-endian words read back in host (little-endian) order.
    for p in range(127):
        pad[p] = _byteswap32(pad[p])
    return pad


def sony_decrypt(buf: bytes, offset: int, length: int, key: int) -> bytes:
    """Decrypt ``length`` bytes at ``offset`` with Sony's XOR key stream.

    Whole 32-bit words are processed, one more than ``length // 4``, so the
    result is ``(length // 4 + 1) * 4`` bytes long. The same call encrypts.
    """
    pad = _key_pad(key)
    out = bytearray()
    for i in range(length // 4 + 1):
        p = i + 127
        pad[p & 127] = pad[(p + 1) & 127] ^ pad[(p + 1 + 64) & 127]
        word = le_u32(buf, offset + i * 4) ^ pad[p & 127]
        out += word.to_bytes(4, "little")
    return bytes(out)


def calculate_curve(curve: Sequence[int]) -> LookupTable:
    """Build the piecewise-linear ARW2 tone curve from its six knee points.

    Between knee ``i`` and ``i + 1`` each step of the input adds ``2**i``.
    """
    knees = list(curve)
    if len(knees) != 6:
        raise ValueError(f"a tone curve needs 6 knee points, got {len(knees)}")
    out = [0] * (knees[5] + 1)
    for i, (start, stop) in enumerate(zip(knees, knees[1:])):
        step = 1 << i
        for j in range(start + 1, stop + 1):
            out[j] = out[j - 1] + step
    return LookupTable(out)


def a100_white_balance(buf: bytes) -> tuple[float, float, float, float]:
    """Read the white balance of a DSLR-A100 from its private MRW-style blocks.

    ``buf`` starts at the private data area. Blocks are walked until the
    ``WBG`` block; without one the coefficients are zero.
    """
    wb = [0.0, 0.0, 0.0, float("nan")]
    pos = 8
    while pos + 20 < len(buf):
        tag = be_u32(buf, pos)
        size = le_u32(buf, pos + 4)
        if tag == _WBG_TAG:
            wb[0] = float(le_u16(buf, pos + 12))
            wb[1] = float(le_u16(buf, pos + 14))
            wb[2] = float(le_u16(buf, pos + 18))
            break
        pos += size + 8
    return (wb[0], wb[1], wb[2], wb[3])