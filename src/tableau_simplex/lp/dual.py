import logging
from typing import Optional

from ..schemas import SolveOptions, TableauSolution
from ..tableau import Tableau
from .simplex import to_solution

logger = logging.getLogger(__name__)


def dual_simplex(tab: Tableau, opts: Optional[SolveOptions] = None) -> TableauSolution:
    """
    Dual simplex on a dual-feasible tableau (all reduced costs >= 0).

    Negative RHS entries are allowed; each iteration picks a row with
    negative RHS (smallest basic column index first) and pivots on the column
    with the smallest ratio reducedCost / -entry, so reduced costs stay
    non-negative while primal feasibility is restored. A tableau with a
    negative reduced cost is rejected untouched with status ``invalid_form``.
    """

    opts = opts or SolveOptions()
    tol = opts.tol

    if not _check_correct_form(tab, tol):
        logger.warning("Invalid tableau for the dual simplex method: a reduced cost is negative.")
        return TableauSolution(
            status="invalid_form",
            objective_value=None,
            basis=None,
            x=None,
            iterations=0,
            message="Invalid form: the dual simplex needs every reduced cost >= 0.",
        )

    iterations = 0
    while True:
        if _test_feasibility(tab, tol):
            logger.info("Optimal solution found after %d iterations.", iterations)
            return to_solution(tab, "optimal", iterations, opts)

        if opts.max_iters is not None and iterations >= opts.max_iters:
            logger.warning("Stopped after %d iterations without reaching feasibility.", iterations)
            return to_solution(tab, "iteration_limit", iterations, opts, "Hit iteration limit.")

        row = _select_pivot_row(tab, tol)

        if _test_unbounded(tab, row, tol):
            logger.info("Dual problem is unbounded along row %d.", row)
            return to_solution(
                tab,
                "unbounded",
                iterations,
                opts,
                f"Unbounded dual: row {row} has no negative entry.",
            )

        col = _select_pivot_column(tab, row, tol)
        logger.debug("Selected pivot: row=%d, column=%d (leaving column %d).", row, col, tab.basis_at(row))

        tab.set_basis(row, col)
        tab.pivot(row, col)
        iterations += 1


def _check_correct_form(tab: Tableau, tol: float) -> bool:
    return all(tab.reduced_cost(j) >= -tol for j in range(tab.num_variables))


def _test_feasibility(tab: Tableau, tol: float) -> bool:
    return all(tab.rhs(i) >= -tol for i in range(tab.num_constraints))


def _select_pivot_row(tab: Tableau, tol: float) -> int:
    # Bland: among negative RHS rows, the one whose basic variable comes first
    min_row = -1
    for i in range(tab.num_constraints):
        if tab.rhs(i) >= -tol:
            continue
        if min_row == -1 or tab.basis_at(i) < tab.basis_at(min_row):
            min_row = i
    return min_row


def _test_unbounded(tab: Tableau, row: int, tol: float) -> bool:
    return all(tab[row, j] >= -tol for j in range(tab.num_variables))


def _select_pivot_column(tab: Tableau, row: int, tol: float) -> int:
    min_col = -1
    min_ratio = 0.0
    for j in range(tab.num_variables):
        entry = tab[row, j]
        if entry >= -tol:
            continue
        ratio = tab.reduced_cost(j) / -entry
        if min_col == -1 or ratio < min_ratio:
            min_ratio = ratio
            min_col = j
    return min_col
