"""Tableau simplex: primal, two-phase and dual simplex on dense tableaux."""

from .tableau import DenseMatrix, Tableau
from .schemas import SolveOptions, TableauProblem, TableauSolution
from .lp import dual_simplex, primal_simplex, solve_tableau, two_phase

__all__ = [
    "DenseMatrix",
    "Tableau",
    "SolveOptions",
    "TableauProblem",
    "TableauSolution",
    "primal_simplex",
    "two_phase",
    "dual_simplex",
    "solve_tableau",
]
