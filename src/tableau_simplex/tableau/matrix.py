from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class DenseMatrix:
    """
    Dense ``m x n`` matrix stored in a row-major float64 buffer.

    Exposes the elementary row/column operations the tableau engine is built
    on, plus Gauss-Jordan inversion and multiplication. Every operation checks
    its indices before touching the buffer, so a rejected call leaves the
    matrix exactly as it was.
    """

    def __init__(self, m: int, n: int, buffer: Optional[Sequence[float]] = None) -> None:
        if m < 1 or n < 1:
            raise ValueError(f"Matrix dimensions must be positive, got {m}x{n}.")
        if buffer is None:
            data = np.zeros((m, n), dtype=float)
        else:
            flat = np.array(buffer, dtype=float).reshape(-1)
            if flat.size != m * n:
                raise ValueError(f"Buffer holds {flat.size} values, expected {m * n}.")
            data = flat.reshape(m, n).copy(order="C")
        self._data = data

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "DenseMatrix":
        data = np.array(rows, dtype=float)
        if data.ndim != 2:
            raise ValueError("Rows must form a 2-D grid.")
        m, n = data.shape
        return cls(m, n, data.reshape(-1))

    @classmethod
    def identity(cls, n: int) -> "DenseMatrix":
        matrix = cls(n, n)
        matrix._data[np.arange(n), np.arange(n)] = 1.0
        return matrix

    @property
    def m(self) -> int:
        return self._data.shape[0]

    @property
    def n(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.m, self.n

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.m:
            raise IndexError(f"Row {row} out of range [0, {self.m}).")

    def _check_column(self, col: int) -> None:
        if not 0 <= col < self.n:
            raise IndexError(f"Column {col} out of range [0, {self.n}).")

    def __getitem__(self, key: Tuple[int, int]) -> float:
        row, col = key
        self._check_row(row)
        self._check_column(col)
        return float(self._data[row, col])

    def __setitem__(self, key: Tuple[int, int], value: float) -> None:
        row, col = key
        self._check_row(row)
        self._check_column(col)
        self._data[row, col] = value

    def row(self, row: int) -> np.ndarray:
        self._check_row(row)
        return self._data[row, :].copy()

    def column(self, col: int) -> np.ndarray:
        self._check_column(col)
        return self._data[:, col].copy()

    # elementary row/column operations

    def swap_rows(self, row1: int, row2: int) -> None:
        self._check_row(row1)
        self._check_row(row2)
        if row1 == row2:
            raise ValueError(f"Cannot swap row {row1} with itself.")
        self._data[[row1, row2], :] = self._data[[row2, row1], :]

    def swap_columns(self, col1: int, col2: int) -> None:
        self._check_column(col1)
        self._check_column(col2)
        if col1 == col2:
            raise ValueError(f"Cannot swap column {col1} with itself.")
        self._data[:, [col1, col2]] = self._data[:, [col2, col1]]

    def scale_row(self, row: int, k: float) -> None:
        self._check_row(row)
        self._data[row, :] *= k

    def scale_column(self, col: int, k: float) -> None:
        self._check_column(col)
        self._data[:, col] *= k

    def add_scaled_row(self, src: int, k: float, dst: int) -> None:
        """Add ``k`` times row ``src`` to row ``dst``."""
        self._check_row(src)
        self._check_row(dst)
        if src == dst:
            raise ValueError("Source and destination rows must differ.")
        self._data[dst, :] += k * self._data[src, :]

    def add_scaled_column(self, src: int, k: float, dst: int) -> None:
        """Add ``k`` times column ``src`` to column ``dst``."""
        self._check_column(src)
        self._check_column(dst)
        if src == dst:
            raise ValueError("Source and destination columns must differ.")
        self._data[:, dst] += k * self._data[:, src]

    def delete_row(self, row: int) -> None:
        self._check_row(row)
        if self.m == 1:
            raise ValueError("Cannot delete the only row of a matrix.")
        self._data = np.delete(self._data, row, axis=0)

    def delete_column(self, col: int) -> None:
        self._check_column(col)
        if self.n == 1:
            raise ValueError("Cannot delete the only column of a matrix.")
        self._data = np.delete(self._data, col, axis=1)

    # matrix operations

    def invert(self) -> bool:
        """
        Invert in place by Gauss-Jordan elimination.

        The same row operations that reduce this matrix to the identity are
        replayed on an identity matrix, which ends up holding the inverse.
        Returns False, leaving the matrix untouched, when it is singular.
        """

        if self.m != self.n:
            raise ValueError(f"Only square matrices can be inverted, got {self.m}x{self.n}.")

        work = self.clone()
        inverse = DenseMatrix.identity(self.n)

        for j in range(self.n):
            pivot = 0.0
            for i in range(j, self.m):
                value = work[i, j]
                if value != 0.0:
                    if i != j:
                        work.swap_rows(j, i)
                        inverse.swap_rows(j, i)
                    pivot = value
                    break

            if pivot == 0.0:
                logger.warning("Tried to invert a singular %dx%d matrix.", self.m, self.n)
                return False

            work.scale_row(j, 1.0 / pivot)
            inverse.scale_row(j, 1.0 / pivot)

            for i in range(self.m):
                if i == j:
                    continue
                multiplier = -work[i, j]
                work.add_scaled_row(j, multiplier, i)
                inverse.add_scaled_row(j, multiplier, i)

        self._data = inverse._data
        return True

    def multiply_by(self, other: "DenseMatrix") -> "DenseMatrix":
        if self.n != other.m:
            raise ValueError(
                f"Cannot multiply {self.m}x{self.n} by {other.m}x{other.n}: inner dimensions differ."
            )
        product = self._data @ other._data
        return DenseMatrix(self.m, other.n, product.reshape(-1))

    def clone(self) -> "DenseMatrix":
        return DenseMatrix(self.m, self.n, self._data.reshape(-1))

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def tolist(self) -> List[List[float]]:
        return self._data.tolist()

    def format(self, precision: int = 5) -> str:
        return "\n".join(
            " ".join(f"{value:.{precision}f}" for value in row) for row in self._data
        )

    def __repr__(self) -> str:
        return f"DenseMatrix({self.m}, {self.n}, {self.tolist()!r})"
