import pytest

from rawdecode.huffman import BitReader, HuffTable


def _bits(text: str) -> bytes:
    padded = text + "0" * (-len(text) % 8)
    return int(padded, 2).to_bytes(len(padded) // 8, "big")


STREAM = "0" + "101" + "100" + "11000" + "11011" + "111000"


def _table(**kwargs) -> HuffTable:
    return HuffTable(bits=[0, 1, 1, 2], huffval=[0, 1, 2, 3], **kwargs)


def test_bit_reader_reads_msb_first():
    reader = BitReader(bytes([0xA5]))
    assert reader.peek_bits(4) == 0xA
    assert reader.get_bits(4) == 0xA
    assert reader.get_bits(4) == 0x5
    assert reader.position == 8


def test_bit_reader_pads_with_zeros():
    reader = BitReader(bytes([0xFF]))
    assert reader.get_bits(12) == 0xFF0
    assert reader.get_bits(8) == 0


def test_bit_reader_consume_skips():
    reader = BitReader(bytes([0x0F, 0xF0]))
    reader.consume_bits(4)
    assert reader.get_bits(8) == 0xFF


def test_decode_standard_differences():
    table = _table()
    reader = BitReader(_bits(STREAM))
    assert [table.huff_decode(reader) for _ in range(6)] == [0, 1, -1, -3, 3, -7]
    assert reader.position == len(STREAM)


def test_slow_and_cached_paths_agree():
    cached = _table()
    uncached = _table(disable_cache=True)
    fast = BitReader(_bits(STREAM))
    slow = BitReader(_bits(STREAM))
    for _ in range(6):
        assert cached.huff_decode(fast) == uncached.huff_decode(slow)
        assert fast.position == slow.position


def test_huff_len_and_get_bits():
    table = _table()
    reader = BitReader(_bits("110"))
    assert table.huff_len(reader) == (3, 2, 0)
    assert reader.position == 3
    reader = BitReader(_bits("111"))
    assert table.huff_get_bits(reader) == 3
    assert reader.position == 3


def test_sixteen_bit_difference_with_dng_bug_consumes_bits():
    table = HuffTable(bits=[0, 1], huffval=[16], dng_bug=True)
    reader = BitReader(_bits("0" + "1" * 16))
    assert table.huff_decode_slow(reader) == (17, -32768)
    assert reader.position == 17


def test_sixteen_bit_difference_without_dng_bug_is_implied():
    table = HuffTable(bits=[0, 1], huffval=[16])
    reader = BitReader(_bits("0" + "1" * 16))
    assert table.huff_decode_slow(reader) == (17, -32768)
    assert reader.position == 1


def test_shift_is_symmetric():
    table = HuffTable(bits=[0, 1], huffval=[1], shiftval=[1])
    positive = table.huff_decode(BitReader(_bits("01")))
    negative = table.huff_decode(BitReader(_bits("00")))
    assert positive > 0
    assert negative == -positive


def test_overfull_table_is_rejected():
    with pytest.raises(ValueError):
        HuffTable(bits=[0, 3], huffval=[0, 1, 2])


def test_too_many_values_rejected():
    with pytest.raises(ValueError):
        HuffTable(bits=[0, 1], huffval=[0] * 257)


def test_empty_table_is_uninitialized_until_initialize():
    table = HuffTable()
    assert table.initialized is False
    table.bits[1] = 1
    table.huffval[0] = 0
    table.disable_cache = True
    table.initialize()
    assert table.initialized is True
    assert table.huff_get_bits(BitReader(_bits("0"))) == 0