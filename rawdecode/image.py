"""Decoded raw images and the colour matrix helpers that go with them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Sequence

from .cfa import CFA

__all__ = [
    "RawImage",
    "average_black_levels",
    "masked_areas",
    "normalized_pseudoinverse",
    "pseudoinverse",
]

_NAN = float("nan")

_RGB_TO_XYZ = (
    # sRGB D65
    (0.412453, 0.357580, 0.180423),
    (0.212671, 0.715160, 0.072169),
    (0.019334, 0.119193, 0.950227),
)

Matrix = list[list[float]]


def _div(a: float, b: float) -> float:
    """Floating point division that yields inf or nan instead of raising."""
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return _NAN
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def pseudoinverse(inm: Sequence[Sequence[float]]) -> Matrix:
    """Invert a 4x3 matrix into its 3x4 pseudoinverse."""
    temp = [
        [sum(inm[k][i] * inm[k][j] for k in range(4)) for j in range(3)]
        + [1.0 if j == i else 0.0 for j in range(3)]
        for i in range(3)
    ]

    for i in range(3):
        pivot = temp[i][i]
        temp[i] = [_div(value, pivot) for value in temp[i]]
        for k in range(3):
            if k == i:
                continue
            factor = temp[k][i]
            temp[k] = [a - b * factor for a, b in zip(temp[k], temp[i])]

    return [
        [sum(temp[j][k + 3] * inm[i][k] for k in range(3)) for i in range(4)]
        for j in range(3)
    ]


def normalized_pseudoinverse(inm: Sequence[Sequence[float]]) -> Matrix:
    """Scale each row so the matrix maps (1,1,1) to ones, then invert it."""
    normalized = []
    for row in inm:
        total = sum(row)
        normalized.append([0.0 if total == 0 else value / total for value in row])
    return pseudoinverse(normalized)


def average_black_levels(
    data: Sequence[int],
    width: int,
    height: int,
    cfa: CFA,
    horizontal: tuple[int, int],
    vertical: tuple[int, int],
) -> tuple[int, int, int, int]:
    """Average the masked pixels per colour.

    ``horizontal`` is (first row, row count) of a masked band across the whole
    width and ``vertical`` is (first column, column count) of a band across the
    whole height. Colours without samples get a level of 0.
    """
    sums = [0.0] * 4
    counts = [0] * 4
    hstart, hlen = horizontal
    vstart, vlen = vertical
    for row in range(hstart, hstart + hlen):
        for col in range(width):
            color = cfa.color_at(row, col)
            sums[color] += data[row * width + col]
            counts[color] += 1
    for row in range(height):
        for col in range(vstart, vstart + vlen):
            color = cfa.color_at(row, col)
            sums[color] += data[row * width + col]
            counts[color] += 1

    def level(total: float, count: int) -> int:
        if not count:
            return 0
        return max(0, min(0xFFFF, int(total / count)))

    return tuple(level(s, c) for s, c in zip(sums, counts))  # type: ignore[return-value]


def masked_areas(
    width: int,
    height: int,
    horizontal: tuple[int, int],
    vertical: tuple[int, int],
) -> list[tuple[int, int, int, int]]:
    """Masked rectangles as (top, right, bottom, left) for the given bands."""
    areas = []
    hstart, hlen = horizontal
    vstart, vlen = vertical
    if hlen != 0:
        areas.append((hstart, width, hstart + hlen, 0))
    if vlen != 0:
        areas.append((0, vstart + vlen, height, vstart))
    return areas


def _zero_matrix() -> Matrix:
    return [[0.0] * 3 for _ in range(4)]


@dataclass(kw_only=True)
class RawImage:
    """A decoded raw image with the metadata needed to process it.

    ``data`` holds ``width * height * cpp`` values, integers for almost every
    format and floats for some DNGs. Colour levels are in RGBE order and
    ``crops`` is top, right, bottom, left.
    """

    make: str
    model: str
    clean_make: str
    clean_model: str
    width: int
    height: int
    data: list[Any]
    cpp: int = 1
    wb_coeffs: tuple[float, float, float, float] = (_NAN, _NAN, _NAN, _NAN)
    whitelevels: tuple[int, int, int, int] = (65535, 65535, 65535, 65535)
    blacklevels: tuple[int, int, int, int] = (0, 0, 0, 0)
    xyz_to_cam: Matrix = field(default_factory=_zero_matrix)
    cfa: CFA = field(default_factory=CFA)
    crops: tuple[int, int, int, int] = (0, 0, 0, 0)
    blackareas: list[tuple[int, int, int, int]] = field(default_factory=list)
    orientation: Any = None

    def cam_to_xyz(self) -> Matrix:
        """Matrix converting camera colour values to XYZ."""
        return pseudoinverse(self.xyz_to_cam)

    def cam_to_xyz_normalized(self) -> Matrix:
        """Camera to XYZ matrix normalised for conversion to Lab or RGB spaces."""
        return normalized_pseudoinverse(self.xyz_to_cam)

    def neutralwb(self) -> list[float]:
        """A neutral 6500K white balance for images that carry none."""
        rgb_to_cam = [
            [sum(row[k] * _RGB_TO_XYZ[k][j] for k in range(3)) for j in range(3)]
            for row in self.xyz_to_cam
        ]
        neutral = [_div(1.0, sum(row)) for row in rgb_to_cam]
        green = neutral[1]
        return [_div(value, green) for value in neutral]

    def cropped_cfa(self) -> CFA:
        """The CFA pattern as seen after the crop is applied."""
        return self.cfa.shift(self.crops[3], self.crops[0])

    def is_monochrome(self) -> bool:
        return self.cpp == 1 and not self.cfa.is_valid()