"""Per-field decoding and encoding of single values.

A value occupies one token for ``integer`` and ``real`` fields, two for
``complex`` (real then imaginary part) and none for ``pattern``.

Reading may widen: integer files can be read into float or complex targets
and real files into complex targets, with a zero imaginary part. Narrowing
(complex into real, real into integer) is refused rather than coerced.
"""

import math
import re

import numpy as np

from .errors import KindMismatch, MalformedNumber, ValueOutOfRange, WriteKindMismatch
from .kinds import ElementKind

_INT_RE = re.compile(r"[+-]?\d+\Z")
_REAL_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)\Z",
    re.IGNORECASE,
)

_DEFAULT_DTYPES = {
    ElementKind.INTEGER: np.int64,
    ElementKind.REAL: np.float64,
    ElementKind.COMPLEX: np.complex128,
    ElementKind.PATTERN: np.float64,
}

# numpy dtype kinds each field can be read into
_READABLE = {
    ElementKind.INTEGER: "iufc",
    ElementKind.REAL: "fc",
    ElementKind.COMPLEX: "c",
    ElementKind.PATTERN: "biufc",
}

# numpy dtype kinds each field can be written from
_WRITABLE = {
    ElementKind.INTEGER: "biu",
    ElementKind.REAL: "biuf",
    ElementKind.COMPLEX: "biufc",
    ElementKind.PATTERN: "biufc",
}


def default_dtype(field):
    """Element type used when the caller does not request one."""
    return np.dtype(_DEFAULT_DTYPES[field])


def resolve_dtype(field, dtype=None, lineno=None):
    """Validate a requested element type against a declared field.

    Parameters
    ----------
    field : ElementKind
        Field declared by the banner.
    dtype : numpy.dtype or None
        Requested type; ``None`` picks :func:`default_dtype`.
    lineno : int, optional
        Banner line number, reported in errors.

    Returns
    -------
    numpy.dtype

    Raises
    ------
    KindMismatch
        If ``dtype`` is not numeric or narrower than ``field``.
    """
    if dtype is None:
        return default_dtype(field)
    try:
        dt = np.dtype(dtype)
    except TypeError:
        raise KindMismatch("not a numpy dtype", lineno, repr(dtype)) from None
    if dt.kind not in _READABLE[field]:
        raise KindMismatch(f"cannot read {field} values into {dt}", lineno, str(dt))
    return dt


def check_writable(field, dtype):
    """Raise :class:`WriteKindMismatch` if ``dtype`` values cannot be written as ``field``."""
    dt = np.dtype(dtype)
    if dt.kind not in _WRITABLE[field]:
        raise WriteKindMismatch(f"cannot write {dt} values under field {field}")


class ElementDecoder:
    """Turns the value tokens of one entry into a Python scalar of ``dtype``'s kind.

    Parameters
    ----------
    field : ElementKind
        Declared field.
    dtype : numpy.dtype
        Target type, already checked with :func:`resolve_dtype`.
    """

    def __init__(self, field, dtype):
        self.field = field
        self.dtype = np.dtype(dtype)
        self.width = field.width
        self._one = self.dtype.type(1)
        if self.dtype.kind in "iu":
            info = np.iinfo(self.dtype)
            self._bounds = (int(info.min), int(info.max))
        elif self.dtype.kind in "fc":
            self._fmax = float(np.finfo(self.dtype).max)

    def decode(self, tokens, lineno):
        """Decode ``tokens`` (exactly :attr:`width` of them)."""
        if self.field is ElementKind.PATTERN:
            return self._one
        if self.field is ElementKind.INTEGER:
            return self._from_integer(tokens[0], lineno)
        if self.field is ElementKind.REAL:
            value = self._real(tokens[0], lineno)
            return value if self.dtype.kind == "f" else complex(value, 0.0)
        return complex(self._real(tokens[0], lineno), self._real(tokens[1], lineno))

    def _from_integer(self, token, lineno):
        if not _INT_RE.match(token):
            raise MalformedNumber("expected an integer", lineno, token)
        try:
            value = int(token)
        except ValueError:
            # beyond the interpreter's integer string conversion limit
            raise ValueOutOfRange(
                f"value does not fit {self.dtype}", lineno, token[:32]
            ) from None
        if self.dtype.kind in "iu":
            lo, hi = self._bounds
            if not lo <= value <= hi:
                raise ValueOutOfRange(f"value does not fit {self.dtype}", lineno, token)
            return value
        if abs(value) > self._fmax:
            raise ValueOutOfRange(f"value does not fit {self.dtype}", lineno, token)
        return float(value) if self.dtype.kind == "f" else complex(value, 0)

    def _real(self, token, lineno):
        if not _REAL_RE.match(token):
            raise MalformedNumber("expected a real number", lineno, token)
        value = float(token)
        if math.isfinite(value):
            if abs(value) > self._fmax:
                raise ValueOutOfRange(f"value does not fit {self.dtype}", lineno, token)
        elif math.isinf(value) and "inf" not in token.lower():
            raise ValueOutOfRange("value overflows double precision", lineno, token)
        return value


def _format_real(value, precision=None):
    if isinstance(value, (bool, int, np.bool_, np.integer)):
        return str(int(value))
    if precision is not None:
        return format(float(value), f".{precision}g")
    text = str(value) if isinstance(value, np.floating) else repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


class ElementEncoder:
    """Formats one stored value as the tokens of ``field``.

    Reals use the shortest text that reads back to the same value of its own
    float type, unless ``precision`` significant digits are requested.
    """

    def __init__(self, field, precision=None):
        self.field = field
        self.precision = precision

    def encode(self, value):
        if self.field is ElementKind.PATTERN:
            return ""
        if self.field is ElementKind.INTEGER:
            return str(int(value))
        if self.field is ElementKind.REAL:
            return _format_real(value, self.precision)
        return (
            f"{_format_real(value.real, self.precision)} "
            f"{_format_real(value.imag, self.precision)}"
        )
