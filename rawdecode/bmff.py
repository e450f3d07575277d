"""Reading the brand list of ISO base media files."""

from __future__ import annotations

import struct

__all__ = ["Bmff", "BmffError"]

_MAX_BRANDS = 100


class BmffError(ValueError):
    """Raised when data is not a readable base media file."""


class Bmff:
    """An ISO base media file held in memory."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    def brands(self) -> list[bytes]:
        """Major brand followed by the compatible brands of the ``ftyp`` box."""
        data = self.data
        if len(data) < 12:
            raise BmffError("Failed to read ftyp box header")
        box_size, box_type = struct.unpack_from(">I4s", data, 0)
        if box_type != b"ftyp":
            raise BmffError("Not a valid BMFF file (no ftyp box)")

        brands = [data[8:12]]
        if len(data) < 16 or box_size < 16:
            return brands
        count = (box_size - 16) // 4
        if count > _MAX_BRANDS:
            return brands

        for pos in range(16, 16 + 4 * count, 4):
            brand = data[pos:pos + 4]
            if len(brand) < 4:
                break
            brands.append(brand)
        return brands