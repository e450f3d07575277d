"""Huffman tables of the Canon CRW compressed format."""

from __future__ import annotations

from typing import Sequence

from .huffman import HuffTable

__all__ = ["CRW_FIRST_TREE", "CRW_SECOND_TREE", "create_hufftable", "create_hufftables"]

CRW_FIRST_TREE: tuple[tuple[int, ...], ...] = (
    (0, 1, 4, 2, 3, 1, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0,
     0x04, 0x03, 0x05, 0x06, 0x02, 0x07, 0x01, 0x08, 0x09, 0x00, 0x0A, 0x0B, 0xFF),
    (0, 2, 2, 3, 1, 1, 1, 1, 2, 0, 0, 0, 0, 0, 0, 0,
     0x03, 0x02, 0x04, 0x01, 0x05, 0x00, 0x06, 0x07, 0x09, 0x08, 0x0A, 0x0B, 0xFF),
    (0, 0, 6, 3, 1, 1, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0,
     0x06, 0x05, 0x07, 0x04, 0x08, 0x03, 0x09, 0x02, 0x00, 0x0A, 0x01, 0x0B, 0xFF),
)

CRW_SECOND_TREE: tuple[tuple[int, ...], ...] = (
    (0, 2, 2, 2, 1, 4, 2, 1, 2, 5, 1, 1, 0, 0, 0, 139,
     0x03, 0x04, 0x02, 0x05, 0x01, 0x06, 0x07, 0x08,
     0x12, 0x13, 0x11, 0x14, 0x09, 0x15, 0x22, 0x00, 0x21, 0x16, 0x0A, 0xF0,
     0x23, 0x17, 0x24, 0x31, 0x32, 0x18, 0x19, 0x33, 0x25, 0x41, 0x34, 0x42,
     0x35, 0x51, 0x36, 0x37, 0x38, 0x29, 0x79, 0x26, 0x1A, 0x39, 0x56, 0x57,
     0x28, 0x27, 0x52, 0x55, 0x58, 0x43, 0x76, 0x59, 0x77, 0x54, 0x61, 0xF9,
     0x71, 0x78, 0x75, 0x96, 0x97, 0x49, 0xB7, 0x53, 0xD7, 0x74, 0xB6, 0x98,
     0x47, 0x48, 0x95, 0x69, 0x99, 0x91, 0xFA, 0xB8, 0x68, 0xB5, 0xB9, 0xD6,
     0xF7, 0xD8, 0x67, 0x46, 0x45, 0x94, 0x89, 0xF8, 0x81, 0xD5, 0xF6, 0xB4,
     0x88, 0xB1, 0x2A, 0x44, 0x72, 0xD9, 0x87, 0x66, 0xD4, 0xF5, 0x3A, 0xA7,
     0x73, 0xA9, 0xA8, 0x86, 0x62, 0xC7, 0x65, 0xC8, 0xC9, 0xA1, 0xF4, 0xD1,
     0xE9, 0x5A, 0x92, 0x85, 0xA6, 0xE7, 0x93, 0xE8, 0xC1, 0xC6, 0x7A, 0x64,
     0xE1, 0x4A, 0x6A, 0xE6, 0xB3, 0xF1, 0xD3, 0xA5, 0x8A, 0xB2, 0x9A, 0xBA,
     0x84, 0xA4, 0x63, 0xE5, 0xC5, 0xF3, 0xD2, 0xC4, 0x82, 0xAA, 0xDA, 0xE4,
     0xF2, 0xCA, 0x83, 0xA3, 0xA2, 0xC3, 0xEA, 0xC2, 0xE2, 0xE3, 0xFF, 0xFF),
    (0, 2, 2, 1, 4, 1, 4, 1, 3, 3, 1, 0, 0, 0, 0, 140,
     0x02, 0x03, 0x01, 0x04, 0x05, 0x12, 0x11, 0x06,
     0x13, 0x07, 0x08, 0x14, 0x22, 0x09, 0x21, 0x00, 0x23, 0x15, 0x31, 0x32,
     0x0A, 0x16, 0xF0, 0x24, 0x33, 0x41, 0x42, 0x19, 0x17, 0x25, 0x18, 0x51,
     0x34, 0x43, 0x52, 0x29, 0x35, 0x61, 0x39, 0x71, 0x62, 0x36, 0x53, 0x26,
     0x38, 0x1A, 0x37, 0x81, 0x27, 0x91, 0x79, 0x55, 0x45, 0x28, 0x72, 0x59,
     0xA1, 0xB1, 0x44, 0x69, 0x54, 0x58, 0xD1, 0xFA, 0x57, 0xE1, 0xF1, 0xB9,
     0x49, 0x47, 0x63, 0x6A, 0xF9, 0x56, 0x46, 0xA8, 0x2A, 0x4A, 0x78, 0x99,
     0x3A, 0x75, 0x74, 0x86, 0x65, 0xC1, 0x76, 0xB6, 0x96, 0xD6, 0x89, 0x85,
     0xC9, 0xF5, 0x95, 0xB4, 0xC7, 0xF7, 0x8A, 0x97, 0xB8, 0x73, 0xB7, 0xD8,
     0xD9, 0x87, 0xA7, 0x7A, 0x48, 0x82, 0x84, 0xEA, 0xF4, 0xA6, 0xC5, 0x5A,
     0x94, 0xA4, 0xC6, 0x92, 0xC3, 0x68, 0xB5, 0xC8, 0xE4, 0xE5, 0xE6, 0xE9,
     0xA2, 0xA3, 0xE3, 0xC2, 0x66, 0x67, 0x93, 0xAA, 0xD4, 0xD5, 0xE7, 0xF8,
     0x88, 0x9A, 0xD7, 0x77, 0xC4, 0x64, 0xE2, 0x98, 0xA5, 0xCA, 0xDA, 0xE8,
     0xF3, 0xF6, 0xA9, 0xB2, 0xB3, 0xF2, 0xD2, 0x83, 0xBA, 0xD3, 0xFF, 0xFF),
    (0, 0, 6, 2, 1, 3, 3, 2, 5, 1, 2, 2, 8, 10, 0, 117,
     0x04, 0x05, 0x03, 0x06, 0x02, 0x07, 0x01, 0x08,
     0x09, 0x12, 0x13, 0x14, 0x11, 0x15, 0x0A, 0x16, 0x17, 0xF0, 0x00, 0x22,
     0x21, 0x18, 0x23, 0x19, 0x24, 0x32, 0x31, 0x25, 0x33, 0x38, 0x37, 0x34,
     0x35, 0x36, 0x39, 0x79, 0x57, 0x58, 0x59, 0x28, 0x56, 0x78, 0x27, 0x41,
     0x29, 0x77, 0x26, 0x42, 0x76, 0x99, 0x1A, 0x55, 0x98, 0x97, 0xF9, 0x48,
     0x54, 0x96, 0x89, 0x47, 0xB7, 0x49, 0xFA, 0x75, 0x68, 0xB6, 0x67, 0x69,
     0xB9, 0xB8, 0xD8, 0x52, 0xD7, 0x88, 0xB5, 0x74, 0x51, 0x46, 0xD9, 0xF8,
     0x3A, 0xD6, 0x87, 0x45, 0x7A, 0x95, 0xD5, 0xF6, 0x86, 0xB4, 0xA9, 0x94,
     0x53, 0x2A, 0xA8, 0x43, 0xF5, 0xF7, 0xD4, 0x66, 0xA7, 0x5A, 0x44, 0x8A,
     0xC9, 0xE8, 0xC8, 0xE7, 0x9A, 0x6A, 0x73, 0x4A, 0x61, 0xC7, 0xF4, 0xC6,
     0x65, 0xE9, 0x72, 0xE6, 0x71, 0x91, 0x93, 0xA6, 0xDA, 0x92, 0x85, 0x62,
     0xF3, 0xC5, 0xB2, 0xA4, 0x84, 0xBA, 0x64, 0xA5, 0xB3, 0xD2, 0x81, 0xE5,
     0xD3, 0xAA, 0xC4, 0xCA, 0xF2, 0xB1, 0xE4, 0xD1, 0x83, 0x63, 0xEA, 0xC3,
     0xE2, 0x82, 0xF1, 0xA3, 0xC2, 0xA1, 0xC1, 0xE3, 0xA2, 0xE1, 0xFF, 0xFF),
)


def create_hufftable(table: Sequence[int]) -> HuffTable:
    """Build a table from 16 code-length counts followed by the code values.

    CRW decoding only needs the code values, so no decode cache is built.
    """
    values = list(table)
    if len(values) < 16:
        raise ValueError("a CRW tree needs at least 16 code-length counts")
    return HuffTable(
        bits=[0, *values[:16]],
        huffval=values[16:],
        disable_cache=True,
    )


def create_hufftables(num: int) -> tuple[HuffTable, HuffTable]:
    """The first- and second-difference tables of CRW decoder table ``num``."""
    if not 0 <= num < len(CRW_FIRST_TREE):
        raise ValueError(f"CRW: Unknown decoder table {num}")
    return create_hufftable(CRW_FIRST_TREE[num]), create_hufftable(CRW_SECOND_TREE[num])