"""Colour filter array patterns of raw camera sensors."""

from __future__ import annotations

from typing import Iterable

__all__ = ["CFA"]

_SIZES = {0: (0, 0), 4: (2, 2), 36: (6, 6), 16: (2, 8), 144: (12, 12)}
_COLOR_INDEX = {"R": 0, "G": 1, "B": 2, "E": 3, "M": 1, "Y": 3}
_COLOR_NAMES = "RGBE"
_TAG_COLORS = {0: "R", 1: "G", 2: "B"}


class CFA:
    """A repeating colour filter pattern.

    The pattern is given as the colours of each row concatenated, each one of
    R/G/B/E for colours 0/1/2/3 (M and Y count as 1 and 3). Its size decides the
    shape: 4 is 2x2, 36 is 6x6, 16 is 2 wide by 8 high and 144 is 12x12.
    """

    __slots__ = ("name", "width", "height", "_grid")

    def __init__(self, pattern: str = "") -> None:
        try:
            width, height = _SIZES[len(pattern)]
        except KeyError:
            raise ValueError(f'Unknown CFA size "{pattern}"') from None
        colors = []
        for char in pattern:
            try:
                colors.append(_COLOR_INDEX[char])
            except KeyError:
                raise ValueError(
                    f'Unknown CFA color "{char}" in pattern "{pattern}"'
                ) from None
        self.name = pattern
        self.width = width
        self.height = height
        self._grid = tuple(
            tuple(colors[row * width:(row + 1) * width]) for row in range(height)
        )

    @classmethod
    def from_colors(cls, colors: Iterable[int]) -> "CFA":
        """Build a pattern from numeric colour codes (0=R, 1=G, 2=B)."""
        return cls("".join(_TAG_COLORS.get(color, "U") for color in colors))

    def color_at(self, row: int, col: int) -> int:
        """Colour index at a sensor position."""
        if not self.width:
            return 0
        return self._grid[row % self.height][col % self.width]

    def shift(self, x: int, y: int) -> "CFA":
        """The pattern seen when the image is cropped by ``x`` columns and ``y`` rows."""
        return CFA(
            "".join(
                _COLOR_NAMES[self.color_at(row + y, col + x)]
                for row in range(self.height)
                for col in range(self.width)
            )
        )

    def is_valid(self) -> bool:
        return self.width != 0 and self.height != 0

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"CFA({self.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CFA):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)