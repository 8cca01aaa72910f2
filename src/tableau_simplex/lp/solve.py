from typing import Callable, Dict, Optional

from ..schemas import Method, SolveOptions, TableauSolution
from ..tableau import Tableau
from .dual import dual_simplex
from .simplex import primal_simplex, two_phase

_SOLVERS: Dict[str, Callable[[Tableau, Optional[SolveOptions]], TableauSolution]] = {
    "simplex": primal_simplex,
    "two_phase": two_phase,
    "dual": dual_simplex,
}


def solve_tableau(
    tab: Tableau, method: Method = "two_phase", opts: Optional[SolveOptions] = None
) -> TableauSolution:
    "Run one of the tableau algorithms on ``tab`` in place and return its outcome."
    try:
        solver = _SOLVERS[method]
    except KeyError:
        raise ValueError(f"Unknown solve method '{method}'.") from None
    return solver(tab, opts)
