import numpy as np

from ..kinds import ElementKind, FormatKind, SymmetryKind
from .base import Matrix, frozen


class Dense(Matrix):
    """Dense (``array`` format) matrix.

    Parameters
    ----------
    values : array_like
        Flat values in column-major order. General matrices hold
        ``nrows * ncols`` of them; symmetric and hermitian matrices hold the
        lower triangle including the diagonal, skew-symmetric ones the
        strictly lower triangle, each column by column.
    shape : tuple of int
        Matrix shape ``(nrows, ncols)``.
    field : ElementKind or str, optional
        ``integer``, ``real`` or ``complex``; inferred from the values'
        dtype when omitted.
    symmetry : SymmetryKind or str, optional
        Symmetry tag, ``general`` by default.
    dtype : numpy.dtype, optional
        Element type; taken from ``values`` when omitted.

    Attributes
    ----------
    values : numpy.ndarray
        Read-only flat storage.

    Raises
    ------
    ValueError
        If the number of values does not match shape and symmetry, or
        ``field`` is ``pattern``.

    Examples
    --------
    A symmetric 3x3 matrix stores six values::

        >>> from mtxio.matrix import Dense
        >>> a = Dense([1, 2, 3, 4, 5, 6], (3, 3), symmetry="symmetric")
        >>> a.values.size
        6
    """

    format = FormatKind.ARRAY

    def __init__(self, values, shape, field=None, symmetry=SymmetryKind.GENERAL, dtype=None):
        values = frozen(values, dtype)
        super().__init__(shape, values.dtype, field=field, symmetry=symmetry)
        if self.field is ElementKind.PATTERN:
            raise ValueError("pattern field requires coordinate format")
        expected = self.symmetry.stored_count(*self.shape)
        if values.size != expected:
            raise ValueError(
                f"{self.symmetry} {self.shape[0]}x{self.shape[1]} matrix stores "
                f"{expected} values, got {values.size}"
            )
        self.values = values

    @classmethod
    def from_array(cls, array, field=None):
        """Construct a general matrix from a 2D array."""
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError("array must be 2D")
        return cls(arr.ravel(order="F"), arr.shape, field=field)

    def toarray(self):
        """Return the 2D ``ndarray`` of a general matrix.

        Packed triangles of symmetric classes are not expanded; callers do
        that themselves, consulting :attr:`symmetry`.
        """
        if self.symmetry is not SymmetryKind.GENERAL:
            raise ValueError(f"{self.symmetry} array matrix holds a packed triangle")
        return self.values.reshape(self.shape, order="F").copy()

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._same_header(other) and np.array_equal(self.values, other.values)
