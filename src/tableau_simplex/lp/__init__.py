"""Simplex algorithms operating on tableaux."""

from .simplex import primal_simplex, two_phase
from .dual import dual_simplex
from .solve import solve_tableau
from .parser import parse_problem, load_problem, dump_problem

__all__ = [
    "primal_simplex",
    "two_phase",
    "dual_simplex",
    "solve_tableau",
    "parse_problem",
    "load_problem",
    "dump_problem",
]
