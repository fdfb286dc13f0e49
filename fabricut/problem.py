"""Problem description, fabric grid and solution output for strip cutting."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence


@dataclass(frozen=True)
class Order:
    """An order of ``n`` identical rectangles of sides ``p`` and ``q``."""

    n: int
    p: int
    q: int

    def __post_init__(self) -> None:
        if self.n < 0 or self.p <= 0 or self.q <= 0:
            raise ValueError(f"invalid order: {self}")

    @property
    def area(self) -> int:
        return self.p * self.q


@dataclass(frozen=True)
class Position:
    """Upper-left and bottom-right cells (column, row) of a placed piece."""

    left: int
    top: int
    right: int
    bottom: int


@dataclass(frozen=True)
class Problem:
    """A fabric roll of fixed width and the orders to cut from it."""

    width: int
    count: int
    orders: tuple[Order, ...]

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("fabric width must be positive")
        if self.count < 0:
            raise ValueError("number of pieces must not be negative")

    @property
    def max_length(self) -> int:
        """Length reached by stacking every piece with side ``q`` as height."""
        return sum(order.q * order.n for order in self.orders)

    @property
    def area(self) -> int:
        return sum(order.area * order.n for order in self.orders)

    @property
    def min_length(self) -> int:
        """Theoretical lower bound on the used length."""
        return -(-self.area // self.width)


class Fabric:
    """A grid of cells, each empty (0) or holding the mark of a piece."""

    def __init__(self, length: int, width: int) -> None:
        if length < 0 or width < 0:
            raise ValueError("fabric dimensions must not be negative")
        self.length = length
        self.width = width
        self._cells = [[0] * width for _ in range(length)]

    def __getitem__(self, cell: tuple[int, int]) -> int:
        row, col = cell
        return self._cells[row][col]

    def _inside(self, top: int, left: int, height: int, width: int) -> bool:
        return (
            top >= 0
            and left >= 0
            and top + height <= self.length
            and left + width <= self.width
        )

    def fits(self, top: int, left: int, height: int, width: int) -> bool:
        """Whether the given rectangle lies inside the fabric on empty cells."""
        if not self._inside(top, left, height, width):
            return False
        return not any(
            any(row[left:left + width]) for row in self._cells[top:top + height]
        )

    def place(self, top: int, left: int, height: int, width: int, mark: int) -> Position:
        """Fill the rectangle with ``mark`` and return its position."""
        if mark == 0:
            raise ValueError("mark must be non-zero")
        if not self.fits(top, left, height, width):
            raise ValueError("piece does not fit at the given cell")
        for row in self._cells[top:top + height]:
            row[left:left + width] = [mark] * width
        return Position(left, top, left + width - 1, top + height - 1)

    def clear(self, top: int, left: int, height: int, width: int) -> None:
        """Empty every cell of the rectangle."""
        if not self._inside(top, left, height, width):
            raise ValueError("rectangle lies outside the fabric")
        for row in self._cells[top:top + height]:
            row[left:left + width] = [0] * width

    def next_free(self, row: int, col: int) -> tuple[int, int] | None:
        """First empty cell at or after (row, col) in reading order, or None."""
        for r in range(max(row, 0), self.length):
            cells = self._cells[r]
            start = col if r == row else 0
            for c in range(max(start, 0), self.width):
                if not cells[c]:
                    return r, c
        return None


def parse_problem(text: str) -> Problem:
    """Parse ``W N`` followed by ``n p q`` triples; a trailing partial triple is ignored."""
    tokens = text.split()
    if len(tokens) < 2:
        raise ValueError("input must start with the fabric width and piece count")
    try:
        numbers = [int(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(f"non-integer value in input: {exc}") from None
    width, count, *rest = numbers
    triples = zip(*[iter(rest)] * 3)
    orders = tuple(Order(n, p, q) for n, p, q in triples)
    return Problem(width, count, orders)


def read_problem(path: str | Path) -> Problem:
    return parse_problem(Path(path).read_text())


def sort_by_area(orders: Iterable[Order]) -> list[Order]:
    """Orders by decreasing area, ties broken by decreasing side ``q``."""
    return sorted(orders, key=lambda order: (-order.area, -order.q))


def format_solution(
    elapsed: float,
    length: int,
    positions: Sequence[Position],
    separator: str = "   ",
) -> str:
    """Render elapsed seconds (one decimal), the length and each piece's corners."""
    lines = [f"{round(elapsed, 1):g}", str(length)]
    lines.extend(
        f"{pos.left} {pos.top}{separator}{pos.right} {pos.bottom}" for pos in positions
    )
    return "\n".join(lines) + "\n"


def write_solution(
    path: str | Path,
    elapsed: float,
    length: int,
    positions: Sequence[Position],
    separator: str = "   ",
) -> None:
    """Write the solution to ``path``, replacing any previous content."""
    Path(path).write_text(format_solution(elapsed, length, positions, separator))