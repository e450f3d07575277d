"""The CIFF heap container used by older Canon raw files."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .basics import le_u16, le_u32

__all__ = ["CiffEntry", "CiffError", "CiffIFD", "CiffTag", "is_ciff"]

_MAX_DEPTH = 10
_SUBIFD_TYPES = (0x2800, 0x3000)
_BYTE_TYPES = (0x0000, 0x8000)
_SHORT_TYPES = (0x1000,)
_LONG_TYPES = (0x1800, 0x2000, 0x2800, 0x3000)


class CiffError(ValueError):
    """Raised for CIFF structures that cannot be interpreted."""


class CiffTag(IntEnum):
    COLOR_INFO1 = 0x0032
    MAKE_MODEL = 0x080A
    COLOR_INFO2 = 0x102C
    WHITE_BALANCE = 0x10A9
    SENSOR_INFO = 0x1031
    DECODER_TABLE = 0x1835


def is_ciff(buf: bytes) -> bool:
    """Whether the data starts like a CIFF file."""
    return bytes(buf[6:14]) == b"HEAPCCDR"


@dataclass(frozen=True)
class CiffEntry:
    """One directory entry of a CIFF heap."""

    tag: int
    typ: int
    count: int
    bytesize: int
    data_offset: int
    data: bytes = field(repr=False)

    @classmethod
    def parse(cls, buf: bytes, value_data: int, offset: int) -> "CiffEntry":
        """Read the entry at ``offset``; ``value_data`` is the start of its heap."""
        p = le_u16(buf, offset)
        tag = p & 0x3FFF
        location = p & 0xC000
        typ = p & 0x3800

        if location == 0x0000:
            bytesize = le_u32(buf, offset + 2)
            data_offset = le_u32(buf, offset + 6) + value_data
        elif location == 0x4000:
            bytesize, data_offset = 8, offset + 2
        else:
            raise CiffError(f"CIFF: Don't know about data location {location:x}")

        if data_offset + bytesize > len(buf):
            raise IndexError(
                f"CIFF: entry data at {data_offset}+{bytesize} is outside the buffer"
            )
        data = bytes(buf[data_offset:data_offset + bytesize])
        return cls(
            tag=tag,
            typ=typ,
            count=bytesize >> cls.element_shift(typ),
            bytesize=bytesize,
            data_offset=data_offset,
            data=data,
        )

    @staticmethod
    def element_shift(typ: int) -> int:
        """log2 of the element size for an entry type."""
        if typ in _SHORT_TYPES:
            return 1
        if typ in _LONG_TYPES:
            return 2
        return 0

    def strings(self) -> list[str]:
        """The NUL-terminated strings stored in the entry."""
        parts = self.data.decode("utf-8", errors="replace").split("\0")
        if parts and parts[-1] == "":
            parts.pop()
        return parts

    def get_u32(self, idx: int) -> int:
        if self.typ in _BYTE_TYPES:
            return self.data[idx]
        if self.typ in _SHORT_TYPES:
            return le_u16(self.data, idx * 2)
        if self.typ in _LONG_TYPES:
            return le_u32(self.data, idx * 4)
        raise ValueError(f"Trying to read typ {self.typ} for a u32")

    def get_f32(self, idx: int) -> float:
        return float(self.get_u32(idx))

    def get_force_u16(self, idx: int) -> int:
        """Read a 16-bit value whatever the entry's declared type."""
        return le_u16(self.data, idx * 2)


@dataclass
class CiffIFD:
    """A CIFF directory with its entries and nested directories."""

    entries: dict[int, CiffEntry] = field(default_factory=dict)
    subifds: list["CiffIFD"] = field(default_factory=list)

    @classmethod
    def parse(cls, buf: bytes, start: int, end: int, depth: int) -> "CiffIFD":
        """Parse the heap spanning ``buf[start:end]``."""
        ifd = cls()
        valuedata_size = le_u32(buf, end - 4)
        directory = start + valuedata_size
        dircount = le_u16(buf, directory)

        for entry_offset in range(directory + 2, directory + 2 + 10 * dircount, 10):
            entry = CiffEntry.parse(buf, start, entry_offset)
            if entry.typ in _SUBIFD_TYPES:
                if depth < _MAX_DEPTH:
                    try:
                        sub = cls.parse(
                            buf,
                            entry.data_offset,
                            entry.data_offset + entry.bytesize,
                            depth + 1,
                        )
                    except CiffError:
                        ifd.entries[entry.tag] = entry
                    else:
                        ifd.subifds.append(sub)
            else:
                ifd.entries[entry.tag] = entry
        return ifd

    @classmethod
    def from_file(cls, buf: bytes) -> "CiffIFD":
        """Parse the root heap of a whole CIFF file."""
        return cls.parse(buf, le_u32(buf, 2), len(buf), 1)

    def find_entry(self, tag: int) -> CiffEntry | None:
        """Find an entry here or, failing that, in the nested directories."""
        entry = self.entries.get(tag)
        if entry is not None:
            return entry
        for sub in self.subifds:
            found = sub.find_entry(tag)
            if found is not None:
                return found
        return None