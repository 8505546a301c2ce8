"""Serialized text reads back to an equal matrix."""

import numpy as np
import pytest

from mtxio import Dense, Sparse, parse, serialize


def roundtrip(matrix, dtype=None):
    return parse(serialize(matrix), dtype=dtype)


@pytest.mark.parametrize(
    "matrix",
    [
        Sparse([0, 1, 0], [0, 1, 2], [1, -3, 2], (2, 3)),
        Sparse([4, 0, 4], [4, 0, 4], [0.1, -2.5e-300, 1e300], (5, 5), symmetry="symmetric"),
        Sparse([1, 2], [0, 1], [1.0, -1.0], (3, 3), symmetry="skew-symmetric"),
        Sparse([0, 1], [0, 0], [2.0 + 0j, 1.5 - 0.5j], (2, 2), symmetry="hermitian"),
        Sparse([3, 0], [0, 2], None, (4, 3), field="pattern"),
        Sparse([], [], np.array([], dtype=np.float64), (0, 0)),
        Dense([1.0 / 3.0, 2.0, 3e-12, -0.0], (2, 2)),
        Dense([1, 2, 3, 4, 5, 6], (3, 3), symmetry="symmetric"),
        Dense([-1, -2, -3], (3, 3), symmetry="skew-symmetric"),
        Dense([1 + 1j, 2 - 2j, 3 + 0j], (2, 2), symmetry="hermitian"),
    ],
    ids=lambda m: f"{m.format}-{m.field}-{m.symmetry}",
)
def test_roundtrip_equal(matrix):
    assert roundtrip(matrix) == matrix


def test_roundtrip_preserves_count_and_order():
    rs = np.random.RandomState(0)
    n = 200
    row = rs.randint(0, 50, size=n)
    col = rs.randint(0, 40, size=n)
    data = rs.standard_normal(n)
    A = Sparse(row, col, data, (50, 40))
    B = roundtrip(A)
    assert B.nnz == n
    np.testing.assert_array_equal(B.row, row)
    np.testing.assert_array_equal(B.col, col)
    np.testing.assert_array_equal(B.data, data)


def test_roundtrip_float32_exact():
    data = np.array([0.1, 1.0 / 3.0, 3.4e38], dtype=np.float32)
    A = Dense(data, (3, 1))
    text = serialize(A)
    assert text.splitlines()[2] == "0.1"
    np.testing.assert_array_equal(parse(text, dtype=np.float32).values, data)


def test_roundtrip_special_values():
    A = Dense([np.inf, -np.inf], (1, 2))
    assert roundtrip(A) == A
    B = roundtrip(Dense([np.nan], (1, 1)))
    assert np.isnan(B.values[0])


def test_text_roundtrip_is_stable():
    text = (
        "%%MatrixMarket matrix coordinate real general\n"
        "3 3 2\n"
        "3 1 1.5e-3\n"
        "1 2 -7\n"
    )
    once = serialize(parse(text))
    assert serialize(parse(once)) == once


def test_roundtrip_pattern_with_explicit_ones():
    A = Sparse([0, 2], [1, 1], [1.0, 1.0], (3, 2), field="pattern")
    assert roundtrip(A) == A
