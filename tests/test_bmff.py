import struct

import pytest

from rawdecode.bmff import Bmff, BmffError


def ftyp(size, major, brands, minor=b"\x00\x00\x00\x01"):
    return struct.pack(">I", size) + b"ftyp" + major + minor + b"".join(brands)


def test_reads_major_and_compatible_brands():
    data = ftyp(24, b"crx ", [b"crx ", b"isom"])
    assert Bmff(data).brands() == [b"crx ", b"crx ", b"isom"]


def test_brands_after_box_are_ignored():
    data = ftyp(20, b"crx ", [b"crx ", b"isom"])
    assert Bmff(data).brands() == [b"crx ", b"crx "]


def test_truncated_brand_list_stops():
    data = ftyp(24, b"crx ", [b"crx "])
    assert Bmff(data).brands() == [b"crx ", b"crx "]


def test_only_header_gives_major_brand():
    data = struct.pack(">I", 24) + b"ftyp" + b"crx "
    assert Bmff(data).brands() == [b"crx "]


def test_small_box_size_gives_major_brand():
    assert Bmff(ftyp(12, b"crx ", [b"isom"])).brands() == [b"crx "]


def test_excessive_brand_count_gives_major_brand():
    data = ftyp(16 + 4 * 101, b"crx ", [b"isom"] * 101)
    assert Bmff(data).brands() == [b"crx "]


def test_short_data_raises():
    with pytest.raises(BmffError):
        Bmff(b"\x00\x00\x00\x08ftyp").brands()


def test_not_ftyp_raises():
    data = struct.pack(">I", 16) + b"moov" + b"crx " + b"\x00" * 4
    with pytest.raises(BmffError):
        Bmff(data).brands()