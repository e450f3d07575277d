# rawdecode

Pure-Python building blocks for reading camera raw image files: byte-order
readers, colour filter array patterns, Huffman tables for lossless-JPEG style
difference coding, container parsers, and pixel decoders and white balance
readers for several camera formats. It has no dependencies outside the
standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `rawdecode.basics`: fixed-width readers (`le_u16`, `be_u16`, `le_u32`,
  `be_u32`, `le_i32`, `be_i32`, `le_f32`) that raise `IndexError` when a read
  runs past the buffer; `Endian` with `read_u16`, `read_u32`, `read_i32` and the
  `BIG_ENDIAN` / `LITTLE_ENDIAN` instances; `clampbits`; `decode_rows` and
  `decode_multiline`, which assemble an image from a per-row or per-strip
  callback (and return the one-pixel placeholder `[0]` in dummy mode); and
  `LookupTable`, whose `dither(value, rand)` returns the dithered pixel and the
  next random state.
- `rawdecode.cfa`: `CFA`, a repeating colour filter pattern built from a string
  such as `"RGGB"` (2x2, 6x6, 2x8 and 12x12 patterns) or from numeric colour
  codes with `CFA.from_colors`; `color_at`, `shift` and `is_valid`. Unknown
  sizes or colours raise `ValueError`.
- `rawdecode.bmff`: `Bmff(data).brands()` returns the major brand and the
  compatible brands of an ISO base media `ftyp` box; `BmffError` otherwise.
- `rawdecode.ciff`: `CiffIFD` (`from_file`, `parse`, `find_entry`),
  `CiffEntry` (`strings`, `get_u32`, `get_f32`, `get_force_u16`), the
  `CiffTag` enum, `CiffError` and `is_ciff` for the Canon CIFF heap format.
- `rawdecode.huffman`: `HuffTable`, built from DHT-style `bits` and `huffval`
  lists, with `huff_decode`, `huff_len`, `huff_get_bits` and `huff_diff`; and
  `BitReader`, a most-significant-bit-first reader over bytes.
- `rawdecode.image`: `RawImage`, a dataclass holding pixel data and metadata,
  with `cam_to_xyz`, `cam_to_xyz_normalized`, `neutralwb`, `cropped_cfa` and
  `is_monochrome`; plus `pseudoinverse`, `normalized_pseudoinverse`,
  `average_black_levels` and `masked_areas`.
- `rawdecode.cr3`: `read_box`, `is_container_box`, `is_cr3_brand`,
  `parse_craw_header`, `find_craw_header` (which descends into container boxes
  and returns the header and the pixel offset) and `decode_craw_pixels` for
  uncompressed 8 or 16 bit data; errors raise `Cr3Error`.
- `rawdecode.kodak`: `decode_dc120`, `decode_segment`, `decode_kodak65000`,
  `dcr_white_balance` and `kodak_white_balance`.
- `rawdecode.sony`: `sony_decrypt` (the XOR key stream; the same call encrypts),
  `calculate_curve` for the six-knee tone curve, and `a100_white_balance`.
- `rawdecode.crw`: the `CRW_FIRST_TREE` / `CRW_SECOND_TREE` tables and
  `create_hufftable` / `create_hufftables` for Canon CRW compression.

## Examples

```python
from rawdecode.cfa import CFA

cfa = CFA("RGGB")
assert cfa.color_at(1, 1) == 2
assert str(cfa.shift(1, 1)) == "BGGR"
```

```python
from rawdecode.sony import sony_decrypt

data = bytes(range(16))
scrambled = sony_decrypt(data, 0, 12, 0x1234)
assert sony_decrypt(scrambled, 0, 12, 0x1234) == data
```

## What it does not do

The package holds the pieces, not a complete reader. It does not detect a
file's format, parse TIFF structures, look cameras up in a database or turn a
whole file into a `RawImage`; callers pass buffers, offsets, sizes and tag
values themselves. There is no command-line tool.