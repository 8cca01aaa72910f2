"""Command-line front end: solve a tableau problem file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .lp.parser import load_problem
from .lp.solve import solve_tableau
from .schemas import SolveOptions


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tableau-simplex",
        description="Solve a linear program given as a simplex tableau.",
    )
    parser.add_argument("file", type=Path, help="Problem file (method, tableau rows, basis).")
    parser.add_argument("--tol", type=float, default=0.0, help="Zero/sign comparison tolerance")
    parser.add_argument("--max-iters", type=int, default=None, help="Pivot limit per run")
    parser.add_argument(
        "--sense",
        choices=("min", "max"),
        default="min",
        help="Report the objective as a minimisation or as a negated maximisation",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every pivot")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        problem = load_problem(args.file)
    except (OSError, ValueError) as exc:
        print(f"tableau-simplex: {args.file}: {exc}", file=sys.stderr)
        return 1

    opts = SolveOptions(tol=args.tol, max_iters=args.max_iters, sense=args.sense)
    tab = problem.to_tableau()

    print("Initial Tableau:")
    print(tab.format())
    print()

    solution = solve_tableau(tab, problem.method, opts)
    if solution.status != "optimal":
        print(f"No solution found ({solution.status}): {solution.message}")
        return 0

    print("Final Tableau:")
    print(tab.format())
    print(f"Solution value: {solution.objective_value:f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
