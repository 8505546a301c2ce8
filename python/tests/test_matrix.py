import numpy as np
import pytest

from mtxio import Dense, ElementKind, FormatKind, Sparse, SymmetryKind


def make_simple_sparse():
    # A = [[1,0,2],[0,3,0]]
    return Sparse([0, 1, 0], [0, 1, 2], [1.0, 3.0, 2.0], (2, 3))


def test_sparse_basic_attributes():
    A = make_simple_sparse()
    assert A.shape == (2, 3)
    assert A.ndim == 2
    assert A.nnz == 3
    assert A.format is FormatKind.COORDINATE
    assert A.field is ElementKind.REAL
    assert A.symmetry is SymmetryKind.GENERAL
    assert A.row.dtype == np.int64 and A.col.dtype == np.int64
    assert A.indices == [(0, 0), (1, 1), (0, 2)]


def test_sparse_toarray_accumulates_without_mirroring():
    D = Sparse([0, 0, 1], [1, 1, 0], [2.0, 3.0, 4.0], (2, 2), symmetry="symmetric")
    np.testing.assert_allclose(D.toarray(), np.array([[0.0, 5.0], [4.0, 0.0]]))


def test_sparse_storage_is_read_only():
    row = np.array([0, 1])
    A = Sparse(row, [0, 1], [1.0, 2.0], (2, 2))
    with pytest.raises(ValueError):
        A.data[0] = 5.0
    row[0] = 1
    assert A.row[0] == 0


def test_sparse_validation():
    with pytest.raises(ValueError):
        Sparse([0, 1], [0], [1.0, 2.0], (2, 2))
    with pytest.raises(ValueError):
        Sparse([2], [0], [1.0], (2, 2))
    with pytest.raises(ValueError):
        Sparse([0], [-1], [1.0], (2, 2))
    with pytest.raises(ValueError):
        Sparse([0], [0], [1.0], (2, 3), symmetry="symmetric")
    with pytest.raises(ValueError):
        Sparse([0], [0], None, (2, 2))
    with pytest.raises(ValueError):
        Sparse([0], [0], [1.0], (2, 2, 2))
    # unchecked construction skips bounds validation
    assert Sparse([5], [0], [1.0], (2, 2), check=False).nnz == 1


def test_sparse_pattern_defaults_to_ones():
    P = Sparse.from_arrays([0, 1], [1, 0], None, (2, 2), field="pattern")
    assert P.field is ElementKind.PATTERN
    np.testing.assert_array_equal(P.data, [1.0, 1.0])


def test_sparse_pattern_rejects_non_unit_data():
    with pytest.raises(ValueError):
        Sparse([0, 1], [0, 1], [2.0, 3.0], (2, 2), field="pattern")
    P = Sparse([0, 1], [0, 1], [1.0, 1.0], (2, 2), field="pattern")
    np.testing.assert_array_equal(P.data, [1.0, 1.0])
    B = Sparse([0], [0], np.array([True]), (1, 1), field="pattern")
    assert B.data.dtype == np.bool_


def test_field_inference_and_parsing():
    assert Sparse([0], [0], np.array([1], dtype=np.uint8), (1, 1)).field is ElementKind.INTEGER
    assert Sparse([0], [0], [1j], (1, 1)).field is ElementKind.COMPLEX
    assert Sparse([0], [0], [1], (1, 1), field="REAL").field is ElementKind.REAL
    with pytest.raises(ValueError):
        Sparse([0], [0], [1.0], (1, 1), field="float")


def test_dense_counts_follow_symmetry():
    assert Dense(np.arange(6), (2, 3)).values.size == 6
    assert Dense(np.arange(6), (3, 3), symmetry="symmetric").values.size == 6
    assert Dense(np.arange(3.0), (3, 3), symmetry="skew-symmetric").values.size == 3
    with pytest.raises(ValueError):
        Dense(np.arange(9), (3, 3), symmetry="symmetric")
    with pytest.raises(ValueError):
        Dense(np.arange(5), (2, 3))


def test_dense_rejects_pattern():
    with pytest.raises(ValueError):
        Dense([1.0], (1, 1), field="pattern")


def test_dense_from_array_roundtrip():
    arr = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
    A = Dense.from_array(arr)
    np.testing.assert_array_equal(A.values, [1.0, 3.0, 5.0, 2.0, 4.0, 6.0])
    np.testing.assert_array_equal(A.toarray(), arr)
    with pytest.raises(ValueError):
        Dense.from_array(np.arange(3))


def test_equality():
    assert make_simple_sparse() == make_simple_sparse()
    assert make_simple_sparse() != Sparse([0, 1, 0], [0, 1, 2], [1.0, 3.0, 2.5], (2, 3))
    assert make_simple_sparse() != Sparse([0, 1, 0], [0, 1, 2], [1.0, 3.0, 2.0], (3, 3))
    A = Dense([1, 2, 3], (2, 2), symmetry="symmetric")
    assert A == Dense(np.array([1, 2, 3], dtype=np.int16), (2, 2), symmetry="symmetric")
    assert A != Dense([1, 2, 3, 2], (2, 2))
    assert A != Sparse([0], [0], [1], (2, 2), symmetry="symmetric")
    assert A != "not a matrix"


def test_repr_names_header():
    text = repr(make_simple_sparse())
    assert "Sparse" in text and "real" in text and "general" in text
