"""Enumerations for the three classifiers carried by a Matrix Market banner.

``%%MatrixMarket matrix <format> <field> <symmetry>``

All three are matched case-insensitively when read and always written in
lower case.
"""

from enum import Enum

import numpy as np


class _Keyword(str, Enum):
    @classmethod
    def parse(cls, token):
        """Return the member spelled by ``token`` (case-insensitive).

        Raises
        ------
        ValueError
            If ``token`` names no member.
        """
        if isinstance(token, cls):
            return token
        try:
            return cls(str(token).lower())
        except ValueError:
            raise ValueError(f"{token!r} is not a valid {cls.__name__}") from None

    def __str__(self):
        return self.value


class FormatKind(_Keyword):
    """Storage layout: dense ``array`` or sparse ``coordinate``."""

    ARRAY = "array"
    COORDINATE = "coordinate"


class ElementKind(_Keyword):
    """Value field declared by the banner."""

    INTEGER = "integer"
    REAL = "real"
    COMPLEX = "complex"
    PATTERN = "pattern"

    @property
    def width(self):
        """Number of whitespace-separated tokens encoding one value."""
        return _WIDTHS[self]

    @classmethod
    def from_dtype(cls, dtype):
        """Field matching a numpy dtype.

        Booleans and integers map to ``integer``, floats to ``real`` and
        complex types to ``complex``.

        Raises
        ------
        TypeError
            If ``dtype`` is not numeric.
        """
        kind = np.dtype(dtype).kind
        if kind in "biu":
            return cls.INTEGER
        if kind == "f":
            return cls.REAL
        if kind == "c":
            return cls.COMPLEX
        raise TypeError(f"no Matrix Market field for dtype {np.dtype(dtype)}")


_WIDTHS = {
    ElementKind.INTEGER: 1,
    ElementKind.REAL: 1,
    ElementKind.COMPLEX: 2,
    ElementKind.PATTERN: 0,
}


class SymmetryKind(_Keyword):
    """Symmetry class declared by the banner.

    This is metadata only: a symmetric matrix holds exactly the entries its
    file states, never the mirrored ones.
    """

    GENERAL = "general"
    SYMMETRIC = "symmetric"
    SKEW_SYMMETRIC = "skew-symmetric"
    HERMITIAN = "hermitian"

    def stored_count(self, rows, cols):
        """Number of values an ``array`` matrix of this class stores.

        General matrices store every value. Symmetric and hermitian matrices
        store the lower triangle including the diagonal; skew-symmetric ones
        store the strictly lower triangle since their diagonal is zero.
        """
        if self is SymmetryKind.GENERAL:
            return rows * cols
        if self is SymmetryKind.SKEW_SYMMETRIC:
            return rows * (rows - 1) // 2
        return rows * (rows + 1) // 2
