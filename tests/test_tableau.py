import numpy as np
import pytest

from tableau_simplex.tableau import Tableau


def make_textbook_tableau() -> Tableau:
    return Tableau.from_rows(
        [
            [12, 8, 2, 0, 48],
            [6, -4, 0, 2, 12],
            [-1, -1, 0, 0, 0],
        ],
        basis=[2, 3],
    )


def test_construction_without_basis_marks_rows_unset():
    tab = Tableau(3, 4, [0.0] * 12)
    assert tab.num_constraints == 2
    assert tab.num_variables == 3
    assert not tab.is_basis_set(0)
    assert tab.basis_at(1) == 0


def test_construction_validates_basis():
    with pytest.raises(ValueError):
        Tableau(3, 4, None, [0])
    with pytest.raises(IndexError):
        Tableau(3, 4, None, [0, 3])


def test_pivot_makes_unit_column():
    tab = Tableau.from_rows([[2, 4, 8], [1, 3, 5], [-1, -2, 0]])
    tab.pivot(0, 0)
    np.testing.assert_array_equal(tab.to_array(), [[1, 2, 4], [0, 1, 1], [0, 0, 4]])


def test_repeated_pivot_is_noop():
    tab = Tableau.from_rows([[2, 4, 8], [1, 3, 5], [-1, -2, 0]])
    tab.pivot(0, 0)
    after_first = tab.to_array()
    tab.pivot(0, 0)
    np.testing.assert_array_equal(tab.to_array(), after_first)


def test_pivot_preconditions():
    tab = Tableau.from_rows([[0, 4, 8], [1, 3, 5], [-1, -2, 0]])
    before = tab.to_array()

    with pytest.raises(ValueError):
        tab.pivot(0, 0)
    with pytest.raises(IndexError):
        tab.pivot(2, 0)  # objective row
    with pytest.raises(IndexError):
        tab.pivot(0, 2)  # rhs column

    np.testing.assert_array_equal(tab.to_array(), before)


def test_canonicalize_produces_unit_basis_columns():
    tab = make_textbook_tableau()
    tab.canonicalize()

    np.testing.assert_array_equal(
        tab.to_array(),
        [[6, 4, 1, 0, 24], [3, -2, 0, 1, 6], [-1, -1, 0, 0, 0]],
    )
    for row in range(tab.num_constraints):
        col = tab.basis_at(row)
        for k in range(tab.m):
            assert tab[k, col] == (1.0 if k == row else 0.0)


def test_canonicalize_clears_objective_entries_of_basic_columns():
    tab = Tableau.from_rows([[1, 1, 1, 0, 4], [1, 0, 0, 1, 3], [-1, -1, 0, 0, 0]], basis=[1, 0])
    tab.canonicalize()
    assert tab.reduced_cost(0) == 0.0
    assert tab.reduced_cost(1) == 0.0
    assert tab.objective_value == pytest.approx(-4.0)


def test_canonicalize_requires_full_basis():
    tab = Tableau.from_rows([[1, 0, 1], [0, 1, 1], [0, 0, 0]])
    tab.set_basis(0, 0)
    with pytest.raises(ValueError):
        tab.canonicalize()


def test_delete_row_shifts_basis():
    tab = Tableau.from_rows(
        [[1, 0, 1], [0, 1, 2], [1, 1, 3], [5, 6, 0]],
        basis=[0, 1, 1],
    )
    tab.delete_row(1)

    assert tab.shape == (3, 3)
    assert tab.basis == [0, 1]
    np.testing.assert_array_equal(tab.to_array(), [[1, 0, 1], [1, 1, 3], [5, 6, 0]])

    with pytest.raises(IndexError):
        tab.delete_row(2)  # objective row


def test_delete_column_shrinks_basis_map():
    tab = Tableau.from_rows([[1, 0, 0, 1], [0, 0, 1, 2], [3, 4, 5, 0]], basis=[0, 2])
    tab.delete_column(1)

    np.testing.assert_array_equal(tab.to_array(), [[1, 0, 1], [0, 1, 2], [3, 5, 0]])
    assert tab.basis == [0, 1]

    tab.delete_column(0)
    assert not tab.is_basis_set(0)
    assert tab.is_basis_set(1)
    assert tab.basis_at(1) == 0

    with pytest.raises(IndexError):
        tab.delete_column(1)  # rhs column


def test_scale_row_only_on_constraints():
    tab = make_textbook_tableau()
    tab.scale_row(1, -1.0)
    assert tab.rhs(1) == -12.0
    with pytest.raises(IndexError):
        tab.scale_row(2, 2.0)


def test_solution_reads_basic_rhs():
    tab = make_textbook_tableau()
    tab.canonicalize()
    np.testing.assert_array_equal(tab.solution(), [0, 0, 24, 6])


def test_clone_is_independent():
    tab = make_textbook_tableau()
    copy = tab.clone()
    copy.set_basis(0, 1)
    copy.scale_row(0, 2.0)

    assert tab.basis == [2, 3]
    assert tab[0, 0] == 12.0


def test_format_lists_basis_state():
    tab = Tableau.from_rows([[1, 0, 1], [0, 1, 1], [0, 0, 0]])
    tab.set_basis(1, 1)
    lines = tab.format().splitlines()
    assert lines[0] == "1.00000 0.00000 1.00000"
    assert lines[3] == "index[0] = 0 (unset)"
    assert lines[4] == "index[1] = 1 (set)"


def test_load_constraint_row_writes_row_and_basis():
    tab = make_textbook_tableau()
    tab.load_constraint_row(1, [1, 0, 0, 0.5, 6], 0)

    np.testing.assert_array_equal(tab.row(1), [1, 0, 0, 0.5, 6])
    assert tab.basis == [2, 0]
    with pytest.raises(ValueError):
        tab.load_constraint_row(0, [1, 2, 3], 0)
    with pytest.raises(IndexError):
        tab.load_constraint_row(2, [0, 0, 0, 0, 0], 0)


def test_unset_basis_clears_row_state():
    tab = make_textbook_tableau()
    tab.unset_basis(0)

    assert not tab.is_basis_set(0)
    assert tab.is_basis_set(1)
    with pytest.raises(ValueError):
        tab.canonicalize()
