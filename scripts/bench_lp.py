#!/usr/bin/env python3
import time
from pathlib import Path

from tableau_simplex.lp.parser import load_problem
from tableau_simplex.lp.solve import solve_tableau
from tableau_simplex.schemas import SolveOptions
from scripts.generate_instances import generate_random_problem


def load_example(name: str):
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return load_problem(path)


def main() -> None:
    opts = SolveOptions(tol=1e-9)
    cases = [("examples/bounded.txt", load_example("bounded.txt"))]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_problem(3, 3, seed)))

    print("name,method,status,objective,iterations,time_ms")
    for name, problem in cases:
        # the two-phase run discards the declared basis and finds its own
        runs = [
            ("simplex", problem),
            ("two_phase", problem.model_copy(update={"basis": None})),
        ]
        for method, variant in runs:
            tab = variant.to_tableau()
            start = time.perf_counter()
            solution = solve_tableau(tab, method, opts)
            elapsed_ms = (time.perf_counter() - start) * 1000
            print(
                f"{name},{method},{solution.status},{solution.objective_value},"
                f"{solution.iterations},{elapsed_ms:.2f}"
            )


if __name__ == "__main__":
    main()
