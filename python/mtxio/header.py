"""Banner and size line of a Matrix Market file.

The banner ``%%MatrixMarket matrix <format> <field> <symmetry>`` fixes how the
rest of the file is read; the size line that follows gives ``rows cols`` for
array files and ``rows cols entries`` for coordinate files.
"""

import re
from typing import NamedTuple

from .errors import DimensionMismatch, InvalidDimensions, InvalidHeader
from .kinds import ElementKind, FormatKind, SymmetryKind

_INT_RE = re.compile(r"[+-]?\d+\Z")


class MatrixInfo(NamedTuple):
    """Header and size of a Matrix Market file.

    ``entries`` is the declared nonzero count for coordinate files and the
    number of stored values for array files.
    """

    rows: int
    cols: int
    entries: int
    format: FormatKind
    field: ElementKind
    symmetry: SymmetryKind


def _keyword(kind, token, lineno, what):
    try:
        return kind.parse(token)
    except ValueError:
        raise InvalidHeader(f"unknown {what}", lineno, token) from None


def parse_banner(line, lineno=1):
    """Classify a banner line.

    Parameters
    ----------
    line : str
        The banner text.
    lineno : int, optional
        Line number reported in errors.

    Returns
    -------
    tuple[FormatKind, ElementKind, SymmetryKind]

    Raises
    ------
    InvalidHeader
        If a token is missing, extra or unknown, or the combination is not
        allowed by the format.
    """
    tokens = line.split()
    if not tokens or tokens[0].lower() != "%%matrixmarket":
        raise InvalidHeader(
            "expected '%%MatrixMarket' banner", lineno, tokens[0] if tokens else None
        )
    if len(tokens) < 2 or tokens[1].lower() != "matrix":
        raise InvalidHeader(
            "expected object 'matrix'", lineno, tokens[1] if len(tokens) > 1 else None
        )
    if len(tokens) < 5:
        raise InvalidHeader(
            "banner needs format, field and symmetry", lineno, " ".join(tokens[2:]) or None
        )
    if len(tokens) > 5:
        raise InvalidHeader("unexpected token after symmetry", lineno, tokens[5])

    fmt = _keyword(FormatKind, tokens[2], lineno, "format")
    field = _keyword(ElementKind, tokens[3], lineno, "field")
    symmetry = _keyword(SymmetryKind, tokens[4], lineno, "symmetry")
    check_combination(fmt, field, symmetry, lineno)
    return fmt, field, symmetry


def check_combination(fmt, field, symmetry, lineno=None):
    """Reject the kind combinations the Matrix Market format rules out."""
    if fmt is FormatKind.ARRAY and field is ElementKind.PATTERN:
        raise InvalidHeader("pattern field requires coordinate format", lineno, "array pattern")
    if symmetry is SymmetryKind.HERMITIAN and field is not ElementKind.COMPLEX:
        raise InvalidHeader("hermitian symmetry requires complex field", lineno, str(field))
    if symmetry is SymmetryKind.SKEW_SYMMETRIC and field is ElementKind.PATTERN:
        raise InvalidHeader("skew-symmetric symmetry cannot have pattern field", lineno, str(field))


def format_banner(fmt, field, symmetry):
    """Banner line (without newline) for the given kinds."""
    return f"%%MatrixMarket matrix {fmt} {field} {symmetry}"


def parse_dimensions(tokens, lineno, fmt, symmetry=SymmetryKind.GENERAL):
    """Parse the size line.

    Parameters
    ----------
    tokens : list[str]
        Whitespace-split size line.
    lineno : int
        Line number reported in errors.
    fmt : FormatKind
        Two integers are expected for array files, three for coordinate.
    symmetry : SymmetryKind, optional
        Non-general classes require a square shape.

    Returns
    -------
    tuple[int, int, int]
        ``(rows, cols, entries)`` where ``entries`` is the stored value count
        for array files.
    """
    expected = 2 if fmt is FormatKind.ARRAY else 3
    if len(tokens) != expected:
        what = "rows cols" if expected == 2 else "rows cols entries"
        raise InvalidDimensions(
            f"{fmt} size line must be '{what}'", lineno, " ".join(tokens)
        )
    sizes = []
    for token in tokens:
        if not _INT_RE.match(token):
            raise InvalidDimensions("size is not an integer", lineno, token)
        try:
            value = int(token)
        except ValueError:
            raise InvalidDimensions("size is too large", lineno, token[:32]) from None
        if value < 0:
            raise InvalidDimensions("size is negative", lineno, token)
        sizes.append(value)

    rows, cols = sizes[0], sizes[1]
    if symmetry is not SymmetryKind.GENERAL and rows != cols:
        raise DimensionMismatch(
            f"{symmetry} matrix must be square", lineno, f"{rows} {cols}"
        )
    if fmt is FormatKind.ARRAY:
        return rows, cols, symmetry.stored_count(rows, cols)
    nnz = sizes[2]
    if nnz > rows * cols:
        raise DimensionMismatch(
            f"{nnz} entries exceed {rows}x{cols} positions", lineno, tokens[2]
        )
    return rows, cols, nnz
