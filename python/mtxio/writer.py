"""Writing matrices as Matrix Market text.

The writer emits precisely what the matrix holds: coordinate entries in
stored order and array values in their stored (possibly packed) column-major
order. Nothing is expanded, sorted or deduplicated.
"""

import logging
import os

from . import _runtime
from .elements import ElementEncoder, check_writable
from .errors import InvalidHeader, WriteIOError, WriteKindMismatch
from .header import check_combination, format_banner
from .kinds import ElementKind, FormatKind

logger = logging.getLogger(__name__)


def _resolve_field(matrix, field):
    if field is None:
        field = matrix.field
    else:
        try:
            field = ElementKind.parse(field)
        except ValueError as exc:
            raise WriteKindMismatch(str(exc)) from None
    try:
        check_combination(matrix.format, field, matrix.symmetry)
    except InvalidHeader as exc:
        raise WriteKindMismatch(exc.message) from None
    check_writable(field, matrix.dtype)
    return field


def _lines(matrix, field, comment, precision):
    yield format_banner(matrix.format, field, matrix.symmetry)
    if comment:
        for line in comment.splitlines():
            yield f"%{line}"
    nrows, ncols = matrix.shape
    encoder = ElementEncoder(field, precision)
    if matrix.format is FormatKind.COORDINATE:
        yield f"{nrows} {ncols} {matrix.nnz}"
        coords = zip(matrix.row.tolist(), matrix.col.tolist())
        if field is ElementKind.PATTERN:
            for i, j in coords:
                yield f"{i + 1} {j + 1}"
        else:
            for (i, j), value in zip(coords, matrix.data):
                yield f"{i + 1} {j + 1} {encoder.encode(value)}"
    else:
        yield f"{nrows} {ncols}"
        for value in matrix.values:
            yield encoder.encode(value)


def _emit(lines, sink):
    for line in lines:
        try:
            sink.write(line + "\n")
        except OSError as exc:
            raise WriteIOError(f"cannot write matrix: {exc}") from exc
        except TypeError as exc:
            raise WriteIOError(f"sink must accept text: {exc}") from exc


def serialize(matrix, sink=None, *, field=None, comment=None, precision=None):
    """Serialize a matrix as Matrix Market text.

    Parameters
    ----------
    matrix : Dense or Sparse
        Matrix to write.
    sink : writable text stream, optional
        Destination; when omitted the text is returned.
    field : ElementKind or str, optional
        Field to declare instead of ``matrix.field``. Values must be
        representable under it (integers may be written as ``real``, any
        coordinate matrix as ``pattern``).
    comment : str, optional
        Written after the banner, each line prefixed with ``%``.
    precision : int, optional
        Significant digits for real and complex values. Defaults to
        :func:`mtxio.get_precision`, itself defaulting to the shortest text
        that reads back exactly.

    Returns
    -------
    str or None
        The text if ``sink`` is ``None``.

    Raises
    ------
    WriteKindMismatch
        If the values cannot be written under ``field``, or ``field`` does
        not combine with the matrix's format and symmetry.
    WriteIOError
        If ``sink`` fails, or is a binary stream rather than a text one.
    """
    field = _resolve_field(matrix, field)
    if precision is None:
        precision = _runtime.get_precision()
    lines = _lines(matrix, field, comment, precision)
    if sink is None:
        text = "".join(line + "\n" for line in lines)
    else:
        text = None
        _emit(lines, sink)
    logger.debug(
        "wrote %s %s %s matrix %dx%d",
        matrix.format,
        field,
        matrix.symmetry,
        matrix.shape[0],
        matrix.shape[1],
    )
    return text


def write(matrix, target, *, field=None, comment=None, precision=None):
    """Write a matrix to a path or an open text file.

    The matrix is validated before a path is opened, so an invalid matrix
    never truncates an existing file. See :func:`serialize` for the options.
    """
    if hasattr(target, "write"):
        serialize(matrix, target, field=field, comment=comment, precision=precision)
        return
    _resolve_field(matrix, field)
    try:
        f = open(os.fspath(target), "w", encoding="utf-8")
    except OSError as exc:
        raise WriteIOError(f"cannot open {os.fspath(target)!r}: {exc}") from exc
    with f:
        serialize(matrix, f, field=field, comment=comment, precision=precision)
