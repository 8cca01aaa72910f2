from pathlib import Path
from typing import List, Optional, Union

from ..schemas import Method, TableauProblem

_METHOD_KEYWORDS = (
    ("SIMPLEX", "simplex"),
    ("TWO_PHASE", "two_phase"),
    ("DUAL", "dual"),
)


def parse_problem(text: str) -> TableauProblem:
    """
    Parse the line-oriented problem format:

        # comment
        TWO_PHASE
        12   8  2  0  48
         6  -4  0  2  12
        -1  -1  0  0   0

        2 3

    A method keyword, then tableau rows (objective row last) ending at the
    first blank or comment line, then an optional line of basis columns.
    """

    method: Optional[Method] = None
    rows: List[List[float]] = []
    basis: Optional[List[int]] = None
    phase = "method"

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            if phase == "rows":
                phase = "basis"
            continue

        if phase == "method":
            method = _parse_method(line, lineno)
            phase = "rows"
        elif phase == "rows":
            rows.append(_parse_row(line, lineno, rows))
        elif phase == "basis":
            basis = _parse_basis(line, lineno, rows)
            phase = "done"

    if method is None:
        raise ValueError("Problem does not name a solve method.")
    if not rows:
        raise ValueError("Problem contains no tableau rows.")

    return TableauProblem(method=method, rows=rows, basis=basis)


def load_problem(path: Union[str, Path]) -> TableauProblem:
    return parse_problem(Path(path).read_text())


def dump_problem(problem: TableauProblem) -> str:
    keyword = next(word for word, method in _METHOD_KEYWORDS if method == problem.method)
    lines = [keyword]
    lines.extend(" ".join(repr(float(value)) for value in row) for row in problem.rows)
    if problem.basis:
        lines.append("")
        lines.append(" ".join(str(col) for col in problem.basis))
    return "\n".join(lines) + "\n"


def _parse_method(line: str, lineno: int) -> Method:
    for keyword, method in _METHOD_KEYWORDS:
        if line.startswith(keyword):
            return method  # type: ignore[return-value]
    raise ValueError(f"Line {lineno}: unknown method '{line.split()[0]}'.")


def _parse_row(line: str, lineno: int, rows: List[List[float]]) -> List[float]:
    tokens = line.split()
    if rows and len(tokens) != len(rows[0]):
        raise ValueError(
            f"Line {lineno}: invalid number of elements in row (got {len(tokens)}, expected {len(rows[0])})."
        )
    if rows and len(rows) + 1 > len(rows[0]):
        raise ValueError(f"Line {lineno}: tableau has more rows than columns.")
    try:
        return [float(token) for token in tokens]
    except ValueError:
        raise ValueError(f"Line {lineno}: invalid element in tableau.") from None


def _parse_basis(line: str, lineno: int, rows: List[List[float]]) -> List[int]:
    tokens = line.split()
    expected = len(rows) - 1
    if len(tokens) != expected:
        raise ValueError(
            f"Line {lineno}: invalid number of variables in basis (got {len(tokens)}, expected {expected})."
        )
    basis: List[int] = []
    for token in tokens:
        try:
            col = int(token)
        except ValueError:
            raise ValueError(f"Line {lineno}: invalid variable in basis '{token}'.") from None
        if col < 0 or col >= len(rows[0]) - 1:
            raise ValueError(f"Line {lineno}: basis column {col} is not a variable column.")
        basis.append(col)
    return basis
