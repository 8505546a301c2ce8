import logging as _logging
from importlib.metadata import PackageNotFoundError as _PackageNotFoundError
from importlib.metadata import version as _pkg_version

from . import errors as errors
from ._runtime import get_precision, set_precision
from .errors import MatrixMarketError, ParseError, WriteError
from .header import MatrixInfo
from .kinds import ElementKind, FormatKind, SymmetryKind
from .matrix import Dense, Matrix, Sparse
from .reader import info, parse, read
from .writer import serialize, write

try:
    __version__ = _pkg_version("mtxio")
except _PackageNotFoundError:
    __version__ = "0.1.0"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__all__ = [
    "__version__",
    "set_precision",
    "get_precision",
    "parse",
    "read",
    "info",
    "serialize",
    "write",
    "Matrix",
    "Dense",
    "Sparse",
    "MatrixInfo",
    "FormatKind",
    "ElementKind",
    "SymmetryKind",
    "MatrixMarketError",
    "ParseError",
    "WriteError",
    "errors",
]
