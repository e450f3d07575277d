"""Building blocks for camera raw files: byte readers, CFA patterns, Huffman tables,
container parsers and format-specific pixel decoders."""

__version__ = "0.1.0"