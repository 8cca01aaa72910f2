"""Dense matrix and simplex tableau primitives."""

from .matrix import DenseMatrix
from .tableau import Tableau

__all__ = ["DenseMatrix", "Tableau"]
