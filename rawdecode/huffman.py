"""Huffman tables for lossless JPEG style difference coding."""

from __future__ import annotations

from typing import Protocol, Sequence

__all__ = ["BitReader", "HuffTable"]

DECODE_CACHE_BITS = 13


class _Pump(Protocol):
    def peek_bits(self, num: int) -> int: ...

    def consume_bits(self, num: int) -> None: ...

    def get_bits(self, num: int) -> int: ...


class BitReader:
    """Reads a byte string most-significant bit first; bits past the end read as zero."""

    def __init__(self, data: bytes, position: int = 0) -> None:
        self.data = bytes(data)
        self.position = position

    def peek_bits(self, num: int) -> int:
        if num <= 0:
            return 0
        start = self.position >> 3
        offset = self.position & 7
        nbytes = (offset + num + 7) >> 3
        chunk = self.data[start:start + nbytes].ljust(nbytes, b"\0")
        value = int.from_bytes(chunk, "big")
        return (value >> (nbytes * 8 - offset - num)) & ((1 << num) - 1)

    def consume_bits(self, num: int) -> None:
        self.position += num

    def get_bits(self, num: int) -> int:
        value = self.peek_bits(num)
        self.consume_bits(num)
        return value


class _MockPump:
    """A fixed window of bits used to precompute the decode cache."""

    def __init__(self, bits: int, nbits: int) -> None:
        self.bits = bits << 32
        self.nbits = nbits + 32

    @property
    def valid_bits(self) -> int:
        return self.nbits - 32

    def peek_bits(self, num: int) -> int:
        return (self.bits >> (self.nbits - num)) & 0xFFFFFFFF

    def consume_bits(self, num: int) -> None:
        self.nbits -= num
        self.bits &= (1 << self.nbits) - 1

    def get_bits(self, num: int) -> int:
        value = self.peek_bits(num)
        self.consume_bits(num)
        return value


def _padded(values: Sequence[int] | None, size: int, what: str) -> list[int]:
    items = list(values or ())
    if len(items) > size:
        raise ValueError(f"{what} holds {len(items)} values, at most {size} allowed")
    return items + [0] * (size - len(items))


def _to_i16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


class HuffTable:
    """A Huffman table as given by a JPEG DHT marker, ready for decoding.

    ``bits[n]`` is the number of codes of length ``n`` and ``huffval`` the
    decoded lengths in code order. ``shiftval`` holds extra shifts some formats
    apply to the differences. A table built without ``bits`` stays empty until
    ``initialize`` is called.
    """

    def __init__(
        self,
        bits: Sequence[int] | None = None,
        huffval: Sequence[int] | None = None,
        shiftval: Sequence[int] | None = None,
        dng_bug: bool = False,
        disable_cache: bool = False,
    ) -> None:
        self.bits = _padded(bits, 17, "bits")
        self.huffval = _padded(huffval, 256, "huffval")
        self.shiftval = _padded(shiftval, 256, "shiftval")
        self.dng_bug = dng_bug
        self.disable_cache = disable_cache
        self.nbits = 0
        self.initialized = False
        self._table: list[tuple[int, int, int]] = []
        self._cache: list[tuple[int, int] | None] = [None] * (1 << DECODE_CACHE_BITS)
        if bits is not None:
            self.initialize()

    def initialize(self) -> None:
        """Build the lookup table and, unless disabled, the decode cache."""
        nbits = 16
        for count in reversed(self.bits[1:17]):
            if count:
                break
            nbits -= 1
        size = 1 << nbits

        total = sum(self.bits[1:nbits + 1])
        if total > 256:
            raise ValueError("invalid Huffman table: more than 256 codes")

        table: list[tuple[int, int, int]] = []
        pos = 0
        for length in range(1, nbits + 1):
            for _ in range(self.bits[length]):
                entry = (length, self.huffval[pos] & 0xFF, self.shiftval[pos] & 0xFF)
                table.extend([entry] * (1 << (nbits - length)))
                pos += 1
        if len(table) > size:
            raise ValueError("invalid Huffman table: code lengths overflow the code space")
        table.extend([(0, 0, 0)] * (size - len(table)))
        self.nbits = nbits
        self._table = table

        cache: list[tuple[int, int] | None] = [None] * (1 << DECODE_CACHE_BITS)
        if not self.disable_cache:
            for code in range(1 << DECODE_CACHE_BITS):
                pump = _MockPump(code, DECODE_CACHE_BITS)
                consumed, diff = self.huff_decode_slow(pump)
                if pump.valid_bits >= 0:
                    cache[code] = (consumed & 0xFF, _to_i16(diff))
        self._cache = cache
        self.initialized = True

    def huff_decode(self, pump: _Pump) -> int:
        """Decode one difference, using the cache where it covers the code."""
        entry = self._cache[pump.peek_bits(DECODE_CACHE_BITS)]
        if entry is not None:
            consumed, diff = entry
            pump.consume_bits(consumed)
            return diff
        return self.huff_decode_slow(pump)[1]

    def huff_decode_slow(self, pump: _Pump) -> tuple[int, int]:
        """Decode one difference; returns the bit count it stands for and the value."""
        code = self.huff_len(pump)
        return code[0] + code[1], self.huff_diff(pump, code)

    def huff_len(self, pump: _Pump) -> tuple[int, int, int]:
        """Read one code; returns its length, the decoded length and the shift."""
        entry = self._table[pump.peek_bits(self.nbits)]
        pump.consume_bits(entry[0])
        return entry

    def huff_get_bits(self, pump: _Pump) -> int:
        """Read one code and return only the value it decodes to."""
        bits, length, _ = self._table[pump.peek_bits(self.nbits)]
        pump.consume_bits(bits)
        return length

    def huff_diff(self, pump: _Pump, code: tuple[int, int, int]) -> int:
        """Read and sign-extend the difference that follows a code."""
        _, length, shift = code
        if length == 0:
            return 0
        if length == 16:
            if self.dng_bug:
                pump.get_bits(16)
            return -32768
        fulllen = length + shift
        bits = pump.get_bits(length)
        diff = (((bits << 1) + 1) << shift) >> 1
        if diff & (1 << (fulllen - 1)) == 0:
            diff -= (1 << fulllen) - (1 if shift == 0 else 0)
        return diff

    def __repr__(self) -> str:
        if self.initialized:
            return f"HuffTable(bits={self.bits!r}, huffval={self.huffval!r})"
        return "HuffTable(uninitialized)"