"""Exceptions raised while reading or writing Matrix Market text."""


class MatrixMarketError(Exception):
    """Base class for every error raised by :mod:`mtxio`."""


class ParseError(MatrixMarketError, ValueError):
    """Input could not be turned into a matrix.

    Parameters
    ----------
    message : str
        What went wrong.
    lineno : int, optional
        1-based physical line number of the offending input.
    token : str, optional
        The offending token, if a single one is to blame.
    """

    def __init__(self, message, lineno=None, token=None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.token = token

    def __str__(self):
        parts = []
        if self.lineno is not None:
            parts.append(f"line {self.lineno}")
        parts.append(self.message)
        text = ": ".join(parts)
        if self.token is not None:
            text += f" (got {self.token!r})"
        return text


class InvalidHeader(ParseError):
    """Banner line is missing, incomplete or names an unknown kind."""


class InvalidDimensions(ParseError):
    """Size line has the wrong token count or a non-integer/negative value."""


class DimensionMismatch(ParseError):
    """Size line values contradict each other or the declared symmetry."""


class MalformedNumber(ParseError):
    """A value or index token is not a number of the expected form."""


class ValueOutOfRange(ParseError):
    """A value does not fit the requested element type."""


class KindMismatch(ParseError):
    """Requested element type is narrower than the declared field."""


class IndexOutOfBounds(ParseError):
    """A coordinate entry lies outside the declared shape."""


class UnexpectedEof(ParseError):
    """Input ended before the declared content was read."""


class InvalidFormat(ParseError):
    """A data line has the wrong number of tokens, or data follows the last entry."""


class ParseIOError(ParseError):
    """The source could not be opened or read."""


class WriteError(MatrixMarketError):
    """A matrix could not be written."""


class WriteKindMismatch(WriteError, ValueError):
    """Stored values cannot be represented under the requested field."""


class WriteIOError(WriteError):
    """The sink rejected the output."""
