"""Locating and reading the CRAW image box of Canon CR3 files."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

__all__ = [
    "Box",
    "CrawHeader",
    "Cr3Error",
    "decode_craw_pixels",
    "find_craw_header",
    "is_container_box",
    "is_cr3_brand",
    "parse_craw_header",
    "read_box",
]

_log = logging.getLogger(__name__)

BOX_TYPE_CRAW = b"CRAW"
BOX_TYPE_UUID = b"uuid"

_CONTAINER_BOXES = frozenset({b"moov", b"trak", b"mdia", b"minf", b"stbl", b"uuid"})
_CR3_BRANDS = frozenset({b"crx ", b"crx2", b"crxm"})

_CRAW_HEADER_SIZE = 28
_UUID_SIZE = 16


class Cr3Error(ValueError):
    """Raised when CR3 data cannot be read."""


@dataclass(frozen=True)
class Box:
    """The header of one box in the file."""

    box_type: bytes
    size: int
    offset: int
    data_offset: int

    @property
    def end(self) -> int:
        return self.offset + self.size


@dataclass(frozen=True)
class CrawHeader:
    """The fixed header at the start of a CRAW box."""

    width: int
    height: int
    bit_depth: int
    components: int
    component_bit_depth: int


def is_cr3_brand(brand: bytes) -> bool:
    """Whether a file brand marks a CR3 file."""
    return bytes(brand) in _CR3_BRANDS


def is_container_box(box_type: bytes) -> bool:
    """Whether boxes of this type hold further boxes."""
    return bytes(box_type) in _CONTAINER_BOXES


def read_box(data: bytes, offset: int) -> Box:
    """Read the box header that starts at ``offset``."""
    if offset + 4 > len(data):
        raise Cr3Error("Failed to read box size")
    if offset + 8 > len(data):
        raise Cr3Error("Failed to read box type")
    size, box_type = struct.unpack_from(">I4s", data, offset)
    data_offset = offset + 8

    if size == 1:
        raise Cr3Error("Large boxes not supported yet")

    if box_type == BOX_TYPE_UUID:
        if data_offset + _UUID_SIZE > len(data):
            raise Cr3Error("Failed to read UUID")
        _log.debug("Found UUID box: %s", bytes(data[data_offset:data_offset + _UUID_SIZE]).hex())
        data_offset += _UUID_SIZE

    if size < 8:
        raise Cr3Error(f"Invalid box size {size} at offset {offset}")
    if offset + size > len(data):
        raise Cr3Error(f"Box extends beyond file end: size {size} at offset {offset}")

    return Box(box_type=bytes(box_type), size=size, offset=offset, data_offset=data_offset)


def parse_craw_header(data: bytes, offset: int) -> CrawHeader:
    """Read and validate the CRAW header at ``offset``."""
    if offset + _CRAW_HEADER_SIZE > len(data):
        raise Cr3Error("Failed to read CRAW header")
    width, height, bit_depth, components, component_bit_depth = struct.unpack_from(
        ">IIBBB", data, offset
    )
    if width == 0 or height == 0:
        raise Cr3Error("Invalid CRAW dimensions")
    if bit_depth == 0 or bit_depth > 32:
        raise Cr3Error("Invalid CRAW bit depth")
    if components == 0:
        raise Cr3Error("Invalid CRAW components")

    _log.debug("CRAW header: %dx%d, %d bit, %d components", width, height, bit_depth, components)
    return CrawHeader(
        width=width,
        height=height,
        bit_depth=bit_depth,
        components=components,
        component_bit_depth=component_bit_depth,
    )


def _search(data: bytes, pos: int, end: int | None) -> tuple[CrawHeader, int] | None:
    while True:
        try:
            box = read_box(data, pos)
        except Cr3Error:
            return None
        if end is not None and box.offset >= end:
            return None

        _log.debug(
            "Found box: %s at offset %d (size: %d, data offset: %d)",
            box.box_type.decode("latin-1"), box.offset, box.size, box.data_offset,
        )

        if box.box_type == BOX_TYPE_CRAW:
            header = parse_craw_header(data, box.data_offset)
            return header, box.data_offset + _CRAW_HEADER_SIZE

        if box.size > 8 and is_container_box(box.box_type):
            found = _search(data, box.data_offset, box.end)
            if found is not None:
                return found

        pos = box.end


def find_craw_header(data: bytes) -> tuple[CrawHeader, int]:
    """Find the CRAW box, descending into container boxes.

    Returns the parsed header and the offset where its pixel data starts.
    """
    found = _search(data, 0, None)
    if found is None:
        raise Cr3Error("Could not find CRAW box")
    return found


def decode_craw_pixels(data: bytes, offset: int, header: CrawHeader, dummy: bool) -> list[int]:
    """Read uncompressed 8 or 16 bit little-endian pixels starting at ``offset``."""
    if dummy:
        return [0]
    width, height = header.width, header.height
    bytes_per_pixel = (header.bit_depth + 7) // 8
    row_size = width * bytes_per_pixel

    out: list[int] = []
    for row in range(height):
        pos = offset + row * row_size
        if pos + row_size > len(data):
            raise Cr3Error(f"Failed to read raw data at offset {pos} (row {row})")
        if bytes_per_pixel == 1:
            out.extend(data[pos:pos + row_size])
        elif bytes_per_pixel == 2:
            out.extend(struct.unpack_from(f"<{width}H", data, pos))
        else:
            raise Cr3Error("Unsupported bit depth")
    return out