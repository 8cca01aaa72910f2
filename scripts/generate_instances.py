#!/usr/bin/env python3
import argparse
import random
from pathlib import Path
from typing import List, Optional

from tableau_simplex.lp.parser import dump_problem
from tableau_simplex.schemas import Method, TableauProblem


def generate_random_problem(
    num_vars: int,
    num_constraints: int,
    seed: Optional[int] = None,
    method: Method = "simplex",
    with_basis: bool = True,
) -> TableauProblem:
    """
    Random feasible, bounded LP: maximise c^T x s.t. A x <= b, x >= 0 with
    positive A, b, c. Slack columns are appended; the slack basis is declared
    when ``with_basis`` is set.
    """

    rng = random.Random(seed)
    width = num_vars + num_constraints + 1
    rows: List[List[float]] = []
    for i in range(num_constraints):
        row = [0.0] * width
        for j in range(num_vars):
            row[j] = rng.uniform(0.5, 5.0)
        row[num_vars + i] = 1.0
        row[-1] = rng.uniform(num_vars * 2.0, num_vars * 6.0)
        rows.append(row)

    objective = [0.0] * width
    for j in range(num_vars):
        objective[j] = -rng.uniform(1.0, 4.0)
    rows.append(objective)

    basis = [num_vars + i for i in range(num_constraints)] if with_basis else None
    return TableauProblem(method=method, rows=rows, basis=basis)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random feasible tableau problems.")
    parser.add_argument("--vars", type=int, default=3, help="Number of variables")
    parser.add_argument("--constraints", type=int, default=3, help="Number of constraints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument(
        "--method", choices=("simplex", "two_phase", "dual"), default="simplex", help="Method keyword"
    )
    parser.add_argument("--out", type=Path, default=None, help="Optional output directory")
    args = parser.parse_args()

    for idx in range(args.count):
        problem = generate_random_problem(
            args.vars, args.constraints, (args.seed or 0) + idx, method=args.method
        )
        text = dump_problem(problem)
        if args.out:
            args.out.mkdir(parents=True, exist_ok=True)
            (args.out / f"random-{idx}.txt").write_text(text)
        else:
            print(text)


if __name__ == "__main__":
    main()
