from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .matrix import DenseMatrix


class Tableau:
    """
    Simplex tableau: ``m - 1`` constraint rows over an objective row, and
    ``n - 1`` variable columns followed by the right-hand-side column.

    The grid is held privately; only the operations that keep the basis map
    consistent with it are exposed. ``basis_at(i)`` is the column of the basic
    variable of constraint row ``i``; rows never assigned a basic variable are
    reported as unset and read as column 0.
    """

    def __init__(
        self,
        m: int,
        n: int,
        buffer: Optional[Sequence[float]] = None,
        basis: Optional[Sequence[int]] = None,
    ) -> None:
        self._grid = DenseMatrix(m, n, buffer)
        self._basis: List[int] = [0] * (m - 1)
        self._basis_set: List[bool] = [False] * (m - 1)

        if basis is not None:
            if len(basis) != m - 1:
                raise ValueError(f"Expected {m - 1} basis indices, got {len(basis)}.")
            for row, col in enumerate(basis):
                self.set_basis(row, int(col))

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[float]], basis: Optional[Sequence[int]] = None
    ) -> "Tableau":
        data = np.array(rows, dtype=float)
        if data.ndim != 2:
            raise ValueError("Rows must form a 2-D grid.")
        m, n = data.shape
        return cls(m, n, data.reshape(-1), basis)

    @property
    def m(self) -> int:
        return self._grid.m

    @property
    def n(self) -> int:
        return self._grid.n

    @property
    def shape(self) -> Tuple[int, int]:
        return self._grid.shape

    @property
    def num_constraints(self) -> int:
        return self.m - 1

    @property
    def num_variables(self) -> int:
        return self.n - 1

    @property
    def objective_row(self) -> int:
        return self.m - 1

    @property
    def rhs_column(self) -> int:
        return self.n - 1

    def __getitem__(self, key: Tuple[int, int]) -> float:
        return self._grid[key]

    def row(self, row: int) -> np.ndarray:
        return self._grid.row(row)

    def column(self, col: int) -> np.ndarray:
        return self._grid.column(col)

    def rhs(self, row: int) -> float:
        return self._grid[row, self.rhs_column]

    def reduced_cost(self, col: int) -> float:
        self._check_variable_column(col)
        return self._grid[self.objective_row, col]

    @property
    def objective_value(self) -> float:
        # the objective row carries the negated cost of the current solution
        return -self._grid[self.objective_row, self.rhs_column]

    # basis bookkeeping

    def _check_constraint_row(self, row: int) -> None:
        if not 0 <= row < self.num_constraints:
            raise IndexError(f"Constraint row {row} out of range [0, {self.num_constraints}).")

    def _check_variable_column(self, col: int) -> None:
        if not 0 <= col < self.num_variables:
            raise IndexError(f"Variable column {col} out of range [0, {self.num_variables}).")

    def basis_at(self, row: int) -> int:
        self._check_constraint_row(row)
        return self._basis[row]

    def set_basis(self, row: int, col: int) -> None:
        self._check_constraint_row(row)
        self._check_variable_column(col)
        self._basis[row] = col
        self._basis_set[row] = True

    def unset_basis(self, row: int) -> None:
        self._check_constraint_row(row)
        self._basis[row] = 0
        self._basis_set[row] = False

    def is_basis_set(self, row: int) -> bool:
        self._check_constraint_row(row)
        return self._basis_set[row]

    @property
    def basis(self) -> List[int]:
        return list(self._basis)

    # tableau operations

    def scale_row(self, row: int, k: float) -> None:
        self._check_constraint_row(row)
        self._grid.scale_row(row, k)

    def pivot(self, row: int, col: int) -> None:
        """Make ``(row, col)`` 1 and clear the rest of its column, objective row included."""
        self._check_constraint_row(row)
        self._check_variable_column(col)
        value = self._grid[row, col]
        if value == 0.0:
            raise ValueError(f"Cannot pivot on zero element ({row}, {col}).")

        if value != 1.0:
            self._grid.scale_row(row, 1.0 / value)
            self._grid[row, col] = 1.0

        for i in range(self.m):
            if i == row:
                continue
            entry = self._grid[i, col]
            if entry == 0.0:
                continue
            self._grid.add_scaled_row(row, -entry, i)
            self._grid[i, col] = 0.0

    def load_constraint_row(self, row: int, values: Sequence[float], basic_col: int) -> None:
        """Overwrite constraint row ``row`` (variables then RHS) and make ``basic_col`` its basic variable."""
        self._check_constraint_row(row)
        self._check_variable_column(basic_col)
        if len(values) != self.n:
            raise ValueError(f"Expected {self.n} values for row {row}, got {len(values)}.")
        for col, value in enumerate(values):
            self._grid[row, col] = float(value)
        self.set_basis(row, basic_col)

    def canonicalize(self) -> None:
        for row in range(self.num_constraints):
            if not self._basis_set[row]:
                raise ValueError(f"Row {row} has no basic variable; cannot canonicalize.")
            self.pivot(row, self._basis[row])

    def delete_row(self, row: int) -> None:
        self._check_constraint_row(row)
        self._grid.delete_row(row)
        del self._basis[row]
        del self._basis_set[row]

    def delete_column(self, col: int) -> None:
        self._check_variable_column(col)
        self._grid.delete_column(col)
        for row, basic in enumerate(self._basis):
            if basic == col:
                self._basis[row] = 0
                self._basis_set[row] = False
            elif basic > col:
                self._basis[row] = basic - 1

    def solution(self) -> np.ndarray:
        """Values of the variables at the current basis."""
        x = np.zeros(self.num_variables, dtype=float)
        for row, col in enumerate(self._basis):
            if self._basis_set[row]:
                x[col] = self.rhs(row)
        return x

    def clone(self) -> "Tableau":
        copy = Tableau(self.m, self.n, self._grid.to_array().reshape(-1))
        copy._basis = list(self._basis)
        copy._basis_set = list(self._basis_set)
        return copy

    def to_array(self) -> np.ndarray:
        return self._grid.to_array()

    def tolist(self) -> List[List[float]]:
        return self._grid.tolist()

    def format(self, precision: int = 5) -> str:
        lines = [self._grid.format(precision)]
        for row in range(self.num_constraints):
            state = "set" if self._basis_set[row] else "unset"
            lines.append(f"index[{row}] = {self._basis[row]} ({state})")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Tableau({self.m}, {self.n}, basis={self._basis!r})"
