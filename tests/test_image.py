import math

import pytest

from rawdecode.cfa import CFA
from rawdecode.image import (
    RawImage,
    average_black_levels,
    masked_areas,
    normalized_pseudoinverse,
    pseudoinverse,
)

MATRIX = [[2.0, 1.0, 0.0], [0.0, 1.0, 1.0], [1.0, 0.0, 3.0], [1.0, 1.0, 1.0]]
IDENTITY_43 = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0], [0.0, 0.0, 0.0]]


def _image(**kwargs):
    base = dict(
        make="Make", model="Model", clean_make="Make", clean_model="Model",
        width=4, height=4, data=[0] * 16,
    )
    base.update(kwargs)
    return RawImage(**base)


def _product(p, a):
    return [[sum(p[i][k] * a[k][j] for k in range(4)) for j in range(3)] for i in range(3)]


def _assert_identity(m):
    for i in range(3):
        for j in range(3):
            assert m[i][j] == pytest.approx(1.0 if i == j else 0.0, abs=1e-9)


def test_pseudoinverse_is_left_inverse():
    _assert_identity(_product(pseudoinverse(MATRIX), MATRIX))


def test_pseudoinverse_of_padded_identity():
    inv = pseudoinverse(IDENTITY_43)
    for j in range(3):
        for i in range(4):
            assert inv[j][i] == pytest.approx(IDENTITY_43[i][j])


def test_pseudoinverse_of_zero_matrix_is_nan():
    inv = pseudoinverse([[0.0] * 3 for _ in range(4)])
    nan_flags = [[math.isnan(v) for v in row] for row in inv]
    assert nan_flags == [[True] * 4 for _ in range(3)]


def test_normalized_pseudoinverse_inverts_normalized_rows():
    normalized = [[v / sum(row) for v in row] for row in MATRIX]
    _assert_identity(_product(normalized_pseudoinverse(MATRIX), normalized))


def test_cam_to_xyz_methods():
    image = _image(xyz_to_cam=MATRIX)
    assert image.cam_to_xyz() == pseudoinverse(MATRIX)
    assert image.cam_to_xyz_normalized() == normalized_pseudoinverse(MATRIX)


def test_neutralwb_with_identity():
    wb = _image(xyz_to_cam=IDENTITY_43).neutralwb()
    assert wb[1] == 1.0
    assert wb[0] == pytest.approx(1 / 0.950456, rel=1e-5)
    assert math.isinf(wb[3])


def test_cropped_cfa_shifts_pattern():
    image = _image(cfa=CFA("RGGB"), crops=(1, 0, 0, 1))
    assert str(image.cropped_cfa()) == "BGGR"


def test_is_monochrome():
    assert _image().is_monochrome() is True
    assert _image(cfa=CFA("RGGB")).is_monochrome() is False
    assert _image(cpp=3).is_monochrome() is False


def test_average_black_levels_per_color():
    cfa = CFA("RGGB")
    data = [(cfa.color_at(r, c) + 1) * 10 for r in range(4) for c in range(4)]
    assert average_black_levels(data, 4, 4, cfa, (0, 2), (0, 0)) == (10, 20, 30, 0)


def test_average_black_levels_vertical_band():
    cfa = CFA("RGGB")
    data = [(cfa.color_at(r, c) + 1) * 10 for r in range(4) for c in range(4)]
    assert average_black_levels(data, 4, 4, cfa, (0, 0), (2, 2)) == (10, 20, 30, 0)


def test_average_black_levels_truncates():
    cfa = CFA("RRRR")
    data = [1, 2, 1, 2]
    assert average_black_levels(data, 2, 2, cfa, (0, 2), (0, 0)) == (1, 0, 0, 0)


def test_masked_areas():
    assert masked_areas(10, 8, (0, 2), (1, 3)) == [(0, 10, 2, 0), (0, 4, 8, 1)]
    assert masked_areas(10, 8, (0, 0), (5, 0)) == []


def test_defaults():
    image = _image()
    assert image.cpp == 1
    assert image.blackareas == []
    assert all(math.isnan(v) for v in image.wb_coeffs)