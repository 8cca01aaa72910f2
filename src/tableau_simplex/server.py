from typing import List

from mcp.server.fastmcp import FastMCP

from .schemas import Method, SolveOptions
from .tableau import DenseMatrix, Tableau
from .lp.solve import solve_tableau as _solve
from .lp.parser import parse_problem

mcp = FastMCP("Tableau Simplex")


@mcp.tool()
def solve_tableau(
    rows: List[List[float]],
    basis: List[int] | None = None,
    method: Method = "two_phase",
    options: SolveOptions | None = None,
) -> dict:
    "Solve a tableau (objective row last, RHS column last) and return the outcome plus final tableau."
    tab = Tableau.from_rows(rows, basis)
    solution = _solve(tab, method, options or SolveOptions())
    return {**solution.model_dump(), "tableau": tab.tolist()}


@mcp.tool()
def solve_problem_text(text: str, options: SolveOptions | None = None) -> dict:
    "Parse a problem file (method keyword, tableau rows, basis line) and solve it."
    problem = parse_problem(text)
    tab = problem.to_tableau()
    solution = _solve(tab, problem.method, options or SolveOptions())
    return {**solution.model_dump(), "tableau": tab.tolist()}


@mcp.tool()
def invert_matrix(rows: List[List[float]]) -> dict:
    "Invert a square matrix by Gauss-Jordan elimination."
    matrix = DenseMatrix.from_rows(rows)
    if not matrix.invert():
        return {"invertible": False, "inverse": None}
    return {"invertible": True, "inverse": matrix.tolist()}


if __name__ == "__main__":
    # Allow: `uv run mcp dev src/tableau_simplex/server.py` or pack as stdio/http via CLI
    mcp.run()
