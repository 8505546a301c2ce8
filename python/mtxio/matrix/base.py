"""Base class for the in-memory matrices produced by the reader.

These classes define the bookkeeping shared by :class:`~mtxio.matrix.Dense`
and :class:`~mtxio.matrix.Sparse`: shape, dtype, the declared field and the
symmetry tag.
"""

import numpy as np

from ..kinds import ElementKind, SymmetryKind


def frozen(values, dtype=None):
    """Return a read-only 1-D copy of ``values``."""
    arr = np.array(values, dtype=dtype).reshape(-1)
    arr.flags.writeable = False
    return arr


class Matrix:
    """Abstract base class for Matrix Market matrices.

    Parameters
    ----------
    shape : tuple[int, int]
        Matrix shape ``(nrows, ncols)``.
    dtype : numpy.dtype
        Element type of the stored values.
    field : ElementKind or str, optional
        Declared field; inferred from ``dtype`` when omitted.
    symmetry : SymmetryKind or str, optional
        Symmetry tag, ``general`` by default. The tag is metadata: mirrored
        entries are never materialized.

    Attributes
    ----------
    shape : tuple[int, int]
        Matrix shape.
    ndim : int
        Always 2.
    dtype : numpy.dtype
        Element type.
    field : ElementKind
        Field written to and read from the banner.
    symmetry : SymmetryKind
        Symmetry class.

    Raises
    ------
    ValueError
        If ``shape`` is not 2D or holds negative sizes.
    """

    format = None

    def __init__(self, shape, dtype, field=None, symmetry=SymmetryKind.GENERAL):
        if len(shape) != 2:
            raise ValueError("Matrix requires 2D shape")
        self.shape = tuple(int(n) for n in shape)
        if min(self.shape) < 0:
            raise ValueError("shape must be non-negative")
        self.ndim = 2
        self.dtype = np.dtype(dtype)
        self.field = ElementKind.from_dtype(self.dtype) if field is None else ElementKind.parse(field)
        self.symmetry = SymmetryKind.parse(symmetry)
        if self.symmetry is not SymmetryKind.GENERAL and self.shape[0] != self.shape[1]:
            raise ValueError(f"{self.symmetry} matrix must be square")

    def _same_header(self, other):
        return (
            type(self) is type(other)
            and self.shape == other.shape
            and self.field is other.field
            and self.symmetry is other.symmetry
        )

    def __repr__(self):
        return (
            f"{type(self).__name__}(shape={self.shape}, field={self.field}, "
            f"symmetry={self.symmetry}, dtype={self.dtype})"
        )
