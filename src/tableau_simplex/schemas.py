from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .tableau import Tableau

Method = Literal["simplex", "two_phase", "dual"]
Sense = Literal["min", "max"]
Status = Literal["optimal", "unbounded", "infeasible", "invalid_form", "iteration_limit"]


class SolveOptions(BaseModel):
    tol: float = Field(default=0.0, ge=0.0)
    max_iters: Optional[int] = Field(default=None, ge=1)
    sense: Sense = "min"


class TableauSolution(BaseModel):
    status: Status
    objective_value: Optional[float]
    basis: List[int] | None
    x: List[float] | None
    iterations: int
    message: str = ""

    @property
    def is_optimal(self) -> bool:
        return self.status == "optimal"


class TableauProblem(BaseModel):
    """A tableau as read from a problem file: method, rows and optional basis."""

    method: Method
    rows: List[List[float]]
    basis: List[int] | None = None

    @field_validator("rows")
    @classmethod
    def _rows_are_rectangular(cls, rows: List[List[float]]) -> List[List[float]]:
        if not rows or not rows[0]:
            raise ValueError("Tableau must have at least one row and one column.")
        width = len(rows[0])
        for idx, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {idx} has {len(row)} values, expected {width}.")
        if len(rows) > width:
            raise ValueError("Tableau cannot have more rows than columns.")
        return rows

    @field_validator("basis")
    @classmethod
    def _empty_basis_is_absent(cls, basis: List[int] | None) -> List[int] | None:
        # a one-row tableau has no basis line to write
        return basis or None

    @model_validator(mode="after")
    def _basis_fits(self) -> "TableauProblem":
        if self.basis is None:
            return self
        if len(self.basis) != self.m - 1:
            raise ValueError(f"Expected {self.m - 1} basis indices, got {len(self.basis)}.")
        for col in self.basis:
            if col < 0 or col >= self.n - 1:
                raise ValueError(f"Basis index {col} is not a variable column.")
        return self

    @property
    def m(self) -> int:
        return len(self.rows)

    @property
    def n(self) -> int:
        return len(self.rows[0])

    def to_tableau(self) -> Tableau:
        return Tableau.from_rows(self.rows, self.basis)
