import io

import numpy as np
import pytest

import mtxio
from mtxio import ElementKind, FormatKind, MatrixInfo, Sparse, SymmetryKind
from mtxio.errors import InvalidHeader, ParseIOError, WriteIOError, WriteKindMismatch

SMALL_DENSE = "%%MatrixMarket matrix array integer general\n% 2x3\n2 3\n1\n2\n3\n4\n5\n6\n"


@pytest.fixture
def small_dense(tmp_path):
    path = tmp_path / "small_dense.mtx"
    path.write_text(SMALL_DENSE)
    return path


def test_read_dense_from_path(small_dense):
    A = mtxio.read(small_dense)
    assert A.shape == (2, 3)
    assert A.values.tolist() == [1, 2, 3, 4, 5, 6]
    assert A.symmetry is SymmetryKind.GENERAL
    assert mtxio.read(str(small_dense)) == A


def test_read_from_open_file(small_dense):
    with open(small_dense) as f:
        A = mtxio.read(f, dtype=np.float64)
    assert A.values.dtype == np.float64


def test_write_then_read(tmp_path):
    A = Sparse([0, 2, 1], [0, 2, 0], [1.25, -3.0, 7.5], (3, 3), symmetry="symmetric")
    path = tmp_path / "out.mtx"
    mtxio.write(A, path, comment="written by test")
    assert path.read_text().splitlines()[1] == "%written by test"
    assert mtxio.read(path) == A


def test_write_to_open_file():
    buf = io.StringIO()
    A = Sparse([0], [0], [1], (1, 1))
    mtxio.write(A, buf)
    assert mtxio.parse(buf.getvalue()) == A


def test_write_invalid_matrix_leaves_file_untouched(tmp_path):
    path = tmp_path / "keep.mtx"
    path.write_text(SMALL_DENSE)
    A = Sparse([0], [0], [1.0 + 1.0j], (1, 1))
    with pytest.raises(WriteKindMismatch):
        mtxio.write(A, path, field="real")
    assert path.read_text() == SMALL_DENSE


def test_read_missing_file(tmp_path):
    with pytest.raises(ParseIOError) as info:
        mtxio.read(tmp_path / "missing.mtx")
    assert isinstance(info.value.__cause__, OSError)


def test_write_into_missing_directory(tmp_path):
    with pytest.raises(WriteIOError):
        mtxio.write(Sparse([0], [0], [1], (1, 1)), tmp_path / "nope" / "a.mtx")


def test_read_undecodable_file(tmp_path):
    path = tmp_path / "binary.mtx"
    path.write_bytes(b"%%MatrixMarket matrix array real general\n1 1\n\xff\xfe\n")
    with pytest.raises(ParseIOError):
        mtxio.read(path)


class FailingLines:
    def __iter__(self):
        yield "%%MatrixMarket matrix array real general\n"
        raise OSError("device unplugged")


def test_read_errors_from_source_become_parse_errors():
    with pytest.raises(ParseIOError):
        mtxio.parse(FailingLines())


def test_info_reads_header_only(tmp_path):
    path = tmp_path / "big.mtx"
    # the data section is garbage: info must not look at it
    path.write_text("%%MatrixMarket matrix coordinate pattern symmetric\n5120 5120 9\ngarbage\n")
    meta = mtxio.info(path)
    assert meta == MatrixInfo(5120, 5120, 9, FormatKind.COORDINATE, ElementKind.PATTERN, SymmetryKind.SYMMETRIC)
    assert meta.rows == 5120


def test_info_of_array_file(small_dense):
    with open(small_dense) as f:
        meta = mtxio.info(f)
    assert meta.format is FormatKind.ARRAY
    assert meta.entries == 6


def test_info_propagates_header_errors():
    with pytest.raises(InvalidHeader):
        mtxio.info(io.StringIO("%%MatrixMarket matrix coordinate bogus general\n1 1 1\n"))
