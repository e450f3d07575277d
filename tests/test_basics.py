import struct

import pytest

from rawdecode.basics import (
    BIG_ENDIAN,
    LITTLE_ENDIAN,
    LookupTable,
    be_i32,
    be_u16,
    be_u32,
    clampbits,
    decode_multiline,
    decode_rows,
    le_f32,
    le_i32,
    le_u16,
    le_u32,
)


def test_clampbits_ranges():
    assert clampbits(-5, 12) == 0
    assert clampbits(100, 12) == 100
    assert clampbits(1 << 20, 12) == (1 << 12) - 1
    assert clampbits(70000, 16) == 65535


def test_big_and_little_u32():
    data = b"\x01\x02\x03\x04"
    assert be_u32(data, 0) == 0x01020304
    assert le_u32(data, 0) == 0x04030201


def test_u16_at_offset():
    data = b"\x00\x12\x34"
    assert be_u16(data, 1) == 0x1234
    assert le_u16(data, 1) == 0x3412


def test_signed_round_trip():
    assert le_i32(struct.pack("<i", -123456), 0) == -123456
    assert be_i32(struct.pack(">i", -7), 0) == -7


def test_le_f32_round_trip():
    assert le_f32(b"xx" + struct.pack("<f", 1.5), 2) == 1.5


@pytest.mark.parametrize("reader", [be_u32, le_u32, le_i32, be_i32, le_f32])
def test_read_past_end_raises(reader):
    with pytest.raises(IndexError):
        reader(b"\x00\x00\x00", 0)


def test_negative_offset_raises():
    with pytest.raises(IndexError):
        le_u16(b"\x00\x00\x00", -1)


def test_endian_objects_match_functions():
    data = struct.pack(">I", 0xDEADBEEF) + struct.pack("<I", 0xCAFEBABE)
    assert BIG_ENDIAN.read_u32(data, 0) == be_u32(data, 0)
    assert LITTLE_ENDIAN.read_u32(data, 4) == le_u32(data, 4)
    assert BIG_ENDIAN.read_u16(data, 0) == be_u16(data, 0)
    assert LITTLE_ENDIAN.read_i32(data, 4) == le_i32(data, 4)
    assert BIG_ENDIAN.little is False
    assert LITTLE_ENDIAN.little is True


def test_decode_rows_assembles_rows_in_order():
    out = decode_rows(3, 2, False, lambda row: [row * 10 + c for c in range(3)])
    assert out == [0, 1, 2, 10, 11, 12]


def test_decode_rows_dummy_skips_fill():
    calls = []
    out = decode_rows(4, 4, True, lambda row: calls.append(row) or [0] * 4)
    assert out == [0]
    assert calls == []


def test_decode_rows_wrong_width_raises():
    with pytest.raises(ValueError):
        decode_rows(3, 1, False, lambda row: [1, 2])


def test_decode_multiline_strips():
    calls = []

    def fill(first, nlines):
        calls.append((first, nlines))
        return [first] * (nlines * 2)

    out = decode_multiline(2, 5, 2, False, fill)
    assert calls == [(0, 2), (2, 2), (4, 1)]
    assert out == [0, 0, 0, 0, 2, 2, 2, 2, 4, 4]


def test_decode_multiline_bad_length_raises():
    with pytest.raises(ValueError):
        decode_multiline(2, 2, 2, False, lambda first, n: [0])


def test_lookup_table_lookup():
    table = LookupTable([1, 2, 3])
    assert len(table) == 3
    assert table[1] == 2


def test_dither_constant_table_returns_constant():
    table = LookupTable([7] * 5)
    rand = 12345
    for _ in range(20):
        pixel, rand = table.dither(2, rand)
        assert pixel == 7


def test_dither_zero_state_stays_zero():
    assert LookupTable([0, 0, 0]).dither(1, 0) == (0, 0)


def test_dither_stays_between_neighbours():
    values = [i * 4 for i in range(100)]
    table = LookupTable(values)
    rand = 99
    for value in range(1, 99):
        for _ in range(5):
            pixel, rand = table.dither(value, rand)
            assert values[value - 1] <= pixel <= values[value + 1]
            assert 0 <= rand < 2**32