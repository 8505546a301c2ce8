"""Reading Matrix Market text into :class:`Dense` and :class:`Sparse` matrices.

Reading is all-or-nothing: any problem raises a :class:`~mtxio.errors.ParseError`
subclass and no partial matrix is returned. Symmetric, skew-symmetric and
hermitian matrices hold exactly the entries the file states.
"""

import logging
import os
import re

import numpy as np

from ._lines import LineReader
from .elements import ElementDecoder, resolve_dtype
from .errors import (
    IndexOutOfBounds,
    InvalidFormat,
    MalformedNumber,
    ParseIOError,
    UnexpectedEof,
)
from .header import MatrixInfo, parse_banner, parse_dimensions
from .kinds import FormatKind
from .matrix import Dense, Sparse

logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"[+-]?\d+\Z")


def _source_lines(source):
    if isinstance(source, str):
        return source.splitlines()
    return source


def _read_info(reader):
    lineno, banner = reader.banner()
    fmt, field, symmetry = parse_banner(banner, lineno)
    size_lineno, tokens = reader.next_line("size line")
    rows, cols, entries = parse_dimensions(tokens, size_lineno, fmt, symmetry)
    return MatrixInfo(rows, cols, entries, fmt, field, symmetry), lineno


def _index(token, bound, lineno, what):
    if not _INDEX_RE.match(token):
        raise MalformedNumber(f"{what} index is not an integer", lineno, token)
    try:
        value = int(token)
    except ValueError:
        raise IndexOutOfBounds(f"{what} index outside 1..{bound}", lineno, token[:32]) from None
    if not 1 <= value <= bound:
        raise IndexOutOfBounds(f"{what} index outside 1..{bound}", lineno, token)
    return value - 1


def _expect_end(reader):
    for lineno, tokens in reader:
        raise InvalidFormat("data after the last declared entry", lineno, tokens[0])


def _read_coordinate(reader, meta, decoder):
    nnz = meta.entries
    ntokens = 2 + decoder.width
    row = np.empty(nnz, dtype=np.int64)
    col = np.empty(nnz, dtype=np.int64)
    values = []
    for k in range(nnz):
        lineno, tokens = reader.next_line(f"entry {k + 1} of {nnz}")
        if len(tokens) != ntokens:
            raise InvalidFormat(
                f"{meta.field} entry needs {ntokens} tokens, got {len(tokens)}",
                lineno,
                " ".join(tokens),
            )
        row[k] = _index(tokens[0], meta.rows, lineno, "row")
        col[k] = _index(tokens[1], meta.cols, lineno, "column")
        values.append(decoder.decode(tokens[2:], lineno))
    _expect_end(reader)
    return Sparse(
        row,
        col,
        np.array(values, dtype=decoder.dtype),
        (meta.rows, meta.cols),
        field=meta.field,
        symmetry=meta.symmetry,
        check=False,
    )


def _read_array(reader, meta, decoder):
    count = meta.entries
    values = []
    group = []
    for lineno, token in reader.tokens():
        if len(values) == count:
            raise InvalidFormat("data after the last declared value", lineno, token)
        group.append(token)
        if len(group) == decoder.width:
            values.append(decoder.decode(group, lineno))
            group = []
    if len(values) < count:
        raise UnexpectedEof(f"expected {count} values, got {len(values)}", reader.lineno)
    return Dense(
        np.array(values, dtype=decoder.dtype),
        (meta.rows, meta.cols),
        field=meta.field,
        symmetry=meta.symmetry,
    )


def _parse(reader, dtype):
    meta, banner_lineno = _read_info(reader)
    decoder = ElementDecoder(meta.field, resolve_dtype(meta.field, dtype, banner_lineno))
    if meta.format is FormatKind.COORDINATE:
        matrix = _read_coordinate(reader, meta, decoder)
    else:
        matrix = _read_array(reader, meta, decoder)
    logger.debug(
        "read %s %s %s matrix %dx%d with %d stored entries as %s",
        meta.format,
        meta.field,
        meta.symmetry,
        meta.rows,
        meta.cols,
        meta.entries,
        decoder.dtype,
    )
    return matrix


def parse(source, dtype=None):
    """Parse Matrix Market text.

    Parameters
    ----------
    source : str or iterable of str
        The whole text, or its lines (an open text file works).
    dtype : numpy.dtype, optional
        Element type of the result. Defaults to ``int64``, ``float64`` or
        ``complex128`` by declared field (``float64`` ones for pattern).
        Integer and real files may be widened into complex targets; narrower
        targets raise :class:`~mtxio.errors.KindMismatch`.

    Returns
    -------
    Dense or Sparse
        ``Dense`` for array files, ``Sparse`` for coordinate files.

    Raises
    ------
    ParseError
        One of its subclasses, naming the offending line and token.

    Examples
    --------
    ::

        >>> from mtxio import parse
        >>> a = parse("%%MatrixMarket matrix coordinate integer symmetric\\n"
        ...           "2 2 2\\n1 1 3\\n2 2 4\\n")
        >>> a.indices, a.data.tolist()
        ([(0, 0), (1, 1)], [3, 4])
    """
    reader = LineReader(_source_lines(source))
    try:
        return _parse(reader, dtype)
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseIOError(f"cannot read source: {exc}", reader.lineno) from exc


def _open(target):
    try:
        return open(os.fspath(target), "r", encoding="utf-8")
    except OSError as exc:
        raise ParseIOError(f"cannot open source: {exc}", token=os.fspath(target)) from exc


def read(target, dtype=None):
    """Read a matrix from a path or an open text file.

    A path is opened and closed within the call, including when parsing
    fails. See :func:`parse` for ``dtype`` and the errors raised.
    """
    if hasattr(target, "read"):
        return parse(target, dtype)
    with _open(target) as f:
        return parse(f, dtype)


def _info(lines):
    reader = LineReader(lines)
    try:
        return _read_info(reader)[0]
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseIOError(f"cannot read source: {exc}", reader.lineno) from exc


def info(target):
    """Return the :class:`~mtxio.header.MatrixInfo` of a path or open text file.

    Only the banner and size line are read.
    """
    if hasattr(target, "read"):
        return _info(target)
    with _open(target) as f:
        return _info(f)
