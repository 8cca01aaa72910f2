import logging
from typing import Any, Dict, List, Optional

import numpy as np

from ..schemas import SolveOptions, Status, TableauSolution
from ..tableau import Tableau

logger = logging.getLogger(__name__)


def primal_simplex(tab: Tableau, opts: Optional[SolveOptions] = None) -> TableauSolution:
    """
    Full-tableau primal simplex.

    The tableau must already be in feasible canonical form for the basis it
    declares (every RHS >= 0). Bland's rule picks both the entering column and
    the leaving row, so degenerate tableaux terminate. The tableau is pivoted
    in place and left holding the final basis.
    """

    opts = opts or SolveOptions()
    result = _run_simplex(tab, opts, opts.max_iters)
    return to_solution(tab, result["status"], result["iterations"], opts, result["message"])


def two_phase(tab: Tableau, opts: Optional[SolveOptions] = None) -> TableauSolution:
    """
    Two-phase method for tableaux without a known feasible basis.

    Phase I: flip rows so b >= 0, reuse columns that already look like basic
    variables, add one artificial column per remaining row and minimise the
    sum of the artificials. A positive optimum means the problem is
    infeasible. Otherwise artificials still in the basis are pivoted out, or
    their rows dropped as redundant.

    Phase II: copy the Phase I rows and basis back into ``tab`` (which keeps
    its own objective row), canonicalize and run the primal simplex.
    """

    opts = opts or SolveOptions()
    tol = opts.tol

    for i in range(tab.num_constraints):
        if tab.rhs(i) < 0:
            tab.scale_row(i, -1.0)

    _release_unusable_basis(tab, tol)
    found = _search_usable_variables(tab, tol)
    logger.debug("Found %d usable basic variables out of %d rows.", found, tab.num_constraints)

    art_tab = _create_artificial_tableau(tab)
    art_tab.canonicalize()

    phase1 = _run_simplex(art_tab, opts, opts.max_iters)
    iterations = phase1["iterations"]
    if phase1["status"] == "iteration_limit":
        return _phase_I_failure("iteration_limit", iterations, "Hit iteration limit in Phase I.")
    if phase1["status"] == "unbounded":
        return _phase_I_failure(
            "unbounded", iterations, "Phase I detected unbounded auxiliary problem (malformed tableau)."
        )

    cost = art_tab.objective_value
    if cost > tol:
        logger.info("Phase I optimum %g is positive; problem is infeasible.", cost)
        return _phase_I_failure("infeasible", iterations, f"Infeasible: Phase I optimum is {cost:g}.")

    _drive_out_artificials(tab, art_tab, tol)
    _copy_phase_I_rows(tab, art_tab)
    tab.canonicalize()
    logger.debug("Phase II starting from basis %s.", tab.basis)

    remaining = None if opts.max_iters is None else max(opts.max_iters - iterations, 0)
    phase2 = _run_simplex(tab, opts, remaining)
    iterations += phase2["iterations"]
    message = phase2["message"]
    if phase2["status"] == "iteration_limit":
        message = "Hit iteration limit in Phase II."
    return to_solution(tab, phase2["status"], iterations, opts, message)


def _run_simplex(tab: Tableau, opts: SolveOptions, max_iterations: Optional[int]) -> Dict[str, Any]:
    tol = opts.tol
    iterations = 0

    while True:
        if _test_optimality(tab, tol):
            logger.info("Optimal solution found after %d iterations.", iterations)
            return {"status": "optimal", "iterations": iterations, "message": ""}

        if max_iterations is not None and iterations >= max_iterations:
            logger.warning("Stopped after %d iterations without reaching optimality.", iterations)
            return {
                "status": "iteration_limit",
                "iterations": iterations,
                "message": "Hit iteration limit.",
            }

        col = _select_entering_column(tab, tol)

        if _test_unbounded(tab, col, tol):
            logger.info("Problem is unbounded along column %d.", col)
            return {
                "status": "unbounded",
                "iterations": iterations,
                "message": f"Unbounded: column {col} has no positive entry.",
            }

        row = _select_leaving_row(tab, col, tol)
        logger.debug("Selected pivot: row=%d, column=%d (leaving column %d).", row, col, tab.basis_at(row))

        tab.set_basis(row, col)
        tab.pivot(row, col)
        iterations += 1


def _test_optimality(tab: Tableau, tol: float) -> bool:
    return all(tab.reduced_cost(j) >= -tol for j in range(tab.num_variables))


def _select_entering_column(tab: Tableau, tol: float) -> int:
    # Bland: first negative reduced cost
    for j in range(tab.num_variables):
        if tab.reduced_cost(j) < -tol:
            return j
    raise ValueError("No negative reduced cost; tableau is already optimal.")


def _test_unbounded(tab: Tableau, col: int, tol: float) -> bool:
    return all(tab[i, col] <= tol for i in range(tab.num_constraints))


def _select_leaving_row(tab: Tableau, col: int, tol: float) -> int:
    """Minimum ratio test, ties broken by the smallest basic column index."""
    best_row = -1
    best_ratio = 0.0

    for i in range(tab.num_constraints):
        entry = tab[i, col]
        if entry <= tol:
            continue
        ratio = tab.rhs(i) / entry
        if (
            best_row == -1
            or ratio < best_ratio - tol
            or (abs(ratio - best_ratio) <= tol and tab.basis_at(i) < tab.basis_at(best_row))
        ):
            best_ratio = ratio
            best_row = i

    return best_row


def _release_unusable_basis(tab: Tableau, tol: float) -> None:
    """
    Keep a declared basic column only if it is a unit column up to a positive
    scale: a single positive entry in its own row and zeros in the other
    constraint rows. Canonicalizing on anything else could make a RHS negative.
    """

    for i in range(tab.num_constraints):
        if not tab.is_basis_set(i):
            continue
        col = tab.basis_at(i)
        others = (abs(tab[k, col]) <= tol for k in range(tab.num_constraints) if k != i)
        if tab[i, col] > tol and all(others):
            continue
        logger.debug("Declared basic column %d does not fit row %d; releasing it.", col, i)
        tab.unset_basis(i)


def _search_usable_variables(tab: Tableau, tol: float) -> int:
    """
    Take as basic any column with a single positive entry and zeros elsewhere
    whose row still lacks a basic variable; that row is scaled so the entry
    becomes 1. Columns reachable only through further row operations are not
    considered.
    """

    found = 0
    free_rows = sum(not tab.is_basis_set(i) for i in range(tab.num_constraints))

    for j in range(tab.num_variables):
        if found >= free_rows:
            break

        elem_row = -1
        positive_elements = 0
        for i in range(tab.num_constraints):
            value = tab[i, j]
            if value < -tol:
                positive_elements = 0
                break
            if value > tol:
                elem_row = i
                positive_elements += 1
            if positive_elements > 1:
                break

        if positive_elements == 1 and not tab.is_basis_set(elem_row):
            tab.set_basis(elem_row, j)
            tab.scale_row(elem_row, 1.0 / tab[elem_row, j])
            found += 1

    return found


def _create_artificial_tableau(tab: Tableau) -> Tableau:
    """Auxiliary tableau: one artificial column per row without a basic variable."""
    unset_rows = [i for i in range(tab.num_constraints) if not tab.is_basis_set(i)]
    first_artificial = tab.num_variables

    grid = tab.to_array()
    data = np.zeros((tab.m, tab.n + len(unset_rows)), dtype=float)
    data[:-1, :first_artificial] = grid[:-1, :-1]
    data[:-1, -1] = grid[:-1, -1]

    basis: List[int] = [tab.basis_at(i) for i in range(tab.num_constraints)]
    for k, row in enumerate(unset_rows):
        data[row, first_artificial + k] = 1.0
        data[-1, first_artificial + k] = 1.0  # minimise the sum of artificials
        basis[row] = first_artificial + k

    m, n = data.shape
    return Tableau(m, n, data.reshape(-1), basis)


def _drive_out_artificials(tab: Tableau, art_tab: Tableau, tol: float) -> None:
    first_artificial = tab.num_variables

    while True:
        art_row = next(
            (i for i in range(art_tab.num_constraints) if art_tab.basis_at(i) >= first_artificial),
            None,
        )
        if art_row is None:
            return

        col = next(
            (j for j in range(first_artificial) if abs(art_tab[art_row, j]) > tol),
            None,
        )
        if col is None:
            logger.info("Constraint row %d is redundant; removing it.", art_row)
            art_tab.delete_row(art_row)
            tab.delete_row(art_row)
        else:
            logger.debug("Driving artificial out of row %d via column %d.", art_row, col)
            art_tab.set_basis(art_row, col)
            art_tab.pivot(art_row, col)


def _copy_phase_I_rows(tab: Tableau, art_tab: Tableau) -> None:
    for i in range(tab.num_constraints):
        values = [art_tab[i, j] for j in range(tab.num_variables)] + [art_tab.rhs(i)]
        tab.load_constraint_row(i, values, art_tab.basis_at(i))


def _phase_I_failure(status: Status, iterations: int, message: str) -> TableauSolution:
    return TableauSolution(
        status=status,
        objective_value=None,
        basis=None,
        x=None,
        iterations=iterations,
        message=message,
    )


def to_solution(
    tab: Tableau, status: Status, iterations: int, opts: SolveOptions, message: str = ""
) -> TableauSolution:
    if status != "optimal":
        return TableauSolution(
            status=status,
            objective_value=None,
            basis=tab.basis,
            x=None,
            iterations=iterations,
            message=message,
        )

    objective = tab.objective_value
    if opts.sense == "max":
        objective = -objective

    return TableauSolution(
        status="optimal",
        objective_value=float(objective) + 0.0,
        basis=tab.basis,
        x=[float(v) + 0.0 for v in tab.solution()],
        iterations=iterations,
        message=message,
    )
