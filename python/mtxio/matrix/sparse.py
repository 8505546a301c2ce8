import numpy as np

from ..kinds import ElementKind, FormatKind, SymmetryKind
from .base import Matrix, frozen


class Sparse(Matrix):
    """Coordinate (``coordinate`` format) matrix.

    Parameters
    ----------
    row : array_like of int64
        0-based row indices, length ``nnz``.
    col : array_like of int64
        0-based column indices, length ``nnz``.
    data : array_like or None
        Stored values, length ``nnz``. ``None`` is only accepted for the
        ``pattern`` field, which carries the sentinel value one. Pattern
        data, when given, must be all ones.
    shape : tuple of int
        Matrix shape ``(nrows, ncols)``.
    field : ElementKind or str, optional
        Declared field; inferred from the dtype of ``data`` when omitted.
    symmetry : SymmetryKind or str, optional
        Symmetry tag, ``general`` by default.
    dtype : numpy.dtype, optional
        Value dtype; taken from ``data`` when omitted, ``float64`` for
        pattern matrices without data.
    check : bool, optional
        If True, validate that every index lies within ``shape``.

    Attributes
    ----------
    row, col, data : numpy.ndarray
        Read-only storage, in the order entries were given.
    nnz : int
        Number of stored entries (duplicates allowed).

    Notes
    -----
    Entries are kept exactly as given: no deduplication, sorting or
    symmetric mirroring.

    Examples
    --------
    ::

        >>> from mtxio.matrix import Sparse
        >>> a = Sparse([0, 1], [0, 1], [3, 4], (2, 2), symmetry="symmetric")
        >>> a.indices
        [(0, 0), (1, 1)]
    """

    format = FormatKind.COORDINATE

    def __init__(
        self,
        row,
        col,
        data,
        shape,
        field=None,
        symmetry=SymmetryKind.GENERAL,
        dtype=None,
        check=True,
    ):
        row = frozen(row, np.int64)
        col = frozen(col, np.int64)
        if data is None:
            if field is None or ElementKind.parse(field) is not ElementKind.PATTERN:
                raise ValueError("data may only be omitted for the pattern field")
            data = np.ones(row.size, dtype=np.float64 if dtype is None else dtype)
        data = frozen(data, dtype)
        super().__init__(shape, data.dtype, field=field, symmetry=symmetry)
        if not row.size == col.size == data.size:
            raise ValueError("row, col and data must have the same length")
        if self.field is ElementKind.PATTERN and not np.all(data == 1):
            raise ValueError("pattern values must all be one")
        if check and row.size:
            nrows, ncols = self.shape
            if row.min() < 0 or row.max() >= nrows:
                raise ValueError("row index out of bounds")
            if col.min() < 0 or col.max() >= ncols:
                raise ValueError("column index out of bounds")
        self.row = row
        self.col = col
        self.data = data

    @classmethod
    def from_arrays(cls, row, col, data, shape, field=None, symmetry=SymmetryKind.GENERAL, check=True):
        """Construct from index/value arrays.

        Parameters
        ----------
        row, col, data : array_like
            Coordinate indices and values.
        shape : tuple[int, int]
            Matrix shape.
        field, symmetry : optional
            Banner metadata.
        check : bool, optional
            Validate index bounds.
        """
        return cls(row, col, data, shape, field=field, symmetry=symmetry, check=check)

    @property
    def nnz(self):
        """Number of stored values (including duplicates)."""
        return int(self.data.size)

    @property
    def indices(self):
        """Stored positions as a list of ``(row, col)`` tuples, in order."""
        return list(zip(self.row.tolist(), self.col.tolist()))

    def toarray(self):
        """Convert to a dense NumPy ``ndarray`` of shape ``(nrows, ncols)``.

        Only stored entries are placed; symmetric counterparts are not
        mirrored.
        """
        out = np.zeros(self.shape, dtype=self.data.dtype)
        if self.data.size == 0:
            return out
        # accumulate duplicates
        np.add.at(out, (self.row, self.col), self.data)
        return out

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._same_header(other)
            and np.array_equal(self.row, other.row)
            and np.array_equal(self.col, other.col)
            and np.array_equal(self.data, other.data)
        )
