from .base import Matrix
from .dense import Dense
from .sparse import Sparse

__all__ = [
    "Matrix",
    "Dense",
    "Sparse",
]
