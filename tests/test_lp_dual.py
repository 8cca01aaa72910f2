import math
from pathlib import Path

import numpy as np
import pytest

from tableau_simplex.lp.dual import dual_simplex
from tableau_simplex.lp.parser import load_problem
from tableau_simplex.schemas import SolveOptions
from tableau_simplex.tableau import Tableau


def load_example(name: str) -> Tableau:
    return load_problem(Path(__file__).parent.parent.joinpath("examples", name)).to_tableau()


def test_dual_simplex_restores_feasibility():
    tab = load_example("dual.txt")
    solution = dual_simplex(tab)

    assert solution.status == "optimal"
    assert solution.objective_value == pytest.approx(11.0)
    assert solution.basis == [0, 1]
    assert solution.x == pytest.approx([1.0, 2.0, 0.0, 0.0, 0.0])
    assert solution.iterations == 2

    final = tab.to_array()
    assert np.all(final[:-1, -1] >= 0)
    assert np.all(final[-1, :-1] >= 0)


def test_invalid_form_rejected_before_pivoting():
    tab = Tableau.from_rows([[1, 1, 0, -1], [-1, 2, 0, 0]], basis=[2])
    before = tab.to_array()
    solution = dual_simplex(tab)

    assert solution.status == "invalid_form"
    assert solution.iterations == 0
    assert solution.basis is None
    np.testing.assert_array_equal(tab.to_array(), before)


def test_dual_unbounded_when_row_has_no_negative_entry():
    tab = Tableau.from_rows([[1, 1, 1, -1], [1, 1, 0, 0]], basis=[2])
    solution = dual_simplex(tab)

    assert solution.status == "unbounded"
    assert solution.basis == [2]
    assert solution.objective_value is None


def test_ratio_tie_takes_smallest_column():
    tab = Tableau.from_rows([[-1, -1, 1, -2], [1, 1, 0, 0]], basis=[2])
    solution = dual_simplex(tab)

    assert solution.status == "optimal"
    assert solution.basis == [0]
    assert solution.objective_value == pytest.approx(2.0)


def test_already_feasible_tableau_is_optimal():
    tab = Tableau.from_rows([[1, 0, 1, 3], [0, 1, 1, 2], [0, 0, 2, 0]], basis=[0, 1])
    solution = dual_simplex(tab)

    assert solution.status == "optimal"
    assert solution.iterations == 0
    assert solution.objective_value == pytest.approx(0.0)


def test_dual_iteration_limit():
    solution = dual_simplex(load_example("dual.txt"), SolveOptions(max_iters=1))

    assert solution.status == "iteration_limit"
    assert solution.iterations == 1
    assert solution.basis == [0, 4]


def make_reversed_basis_tableau(costs):
    # x1 + x2 >= 2 and 2 x1 + x2 >= 3 as negated rows, slacks declared in reverse order
    return Tableau.from_rows(
        [
            [-1, -1, 0, 1, -2],
            [-2, -1, 1, 0, -3],
            costs + [0, 0, 0],
        ],
        basis=[3, 2],
    )


def test_leaving_row_is_smallest_basic_column_not_first_row():
    solution = dual_simplex(make_reversed_basis_tableau([1, 1]), SolveOptions(max_iters=1))

    # row 1 holds column 2 and leaves first although row 0 is also negative
    assert solution.status == "iteration_limit"
    assert solution.basis == [3, 0]


def test_reversed_basis_reaches_optimum():
    tab = make_reversed_basis_tableau([1, 1])
    solution = dual_simplex(tab)

    assert solution.status == "optimal"
    assert solution.objective_value == pytest.approx(2.0)
    assert solution.basis == [1, 0]
    assert solution.x == pytest.approx([1.0, 1.0, 0.0, 0.0])
    assert solution.iterations == 2


def test_dual_degenerate_ties_terminate():
    # zero reduced costs make every ratio a candidate for a tie at 0
    tab = make_reversed_basis_tableau([0, 1])
    solution = dual_simplex(tab, SolveOptions(max_iters=10))

    assert solution.status == "optimal"
    assert solution.iterations == 2
    assert solution.basis == [2, 0]
    assert solution.x == pytest.approx([2.0, 0.0, 1.0, 0.0])
    assert solution.objective_value == 0.0
    assert math.copysign(1.0, solution.objective_value) == 1.0
