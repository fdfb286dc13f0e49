"""Exhaustive branch-and-bound search for the shortest fabric layout."""

from __future__ import annotations

import argparse
import math
import time
from dataclasses import replace
from typing import Callable, Optional, Sequence

from fabricut.problem import Fabric, Order, Position, Problem, read_problem, write_solution

SEPARATOR = "     "

SolutionCallback = Callable[[int, tuple[Position, ...]], None]


def _orientations(order: Order) -> list[tuple[int, int]]:
    """(height, width) pairs to try: side ``p`` as height first, then turned."""
    shapes = [(order.p, order.q)]
    if order.p != order.q:
        shapes.append((order.q, order.p))
    return shapes


def exhaustive_search(
    problem: Problem,
    on_solution: Optional[SolutionCallback] = None,
) -> tuple[int, tuple[Position, ...]] | None:
    """Search every layout, pruning on the best length so far.

    ``on_solution`` is called with (length, positions) each time a better
    layout is found. Returns the best layout, or None if none exists.
    """
    orders = problem.orders
    width = problem.width
    count = problem.count
    max_length = problem.max_length
    min_length = problem.min_length
    remaining = [order.n for order in orders]
    fabric = Fabric(max_length, width)
    slots: list[Optional[Position]] = [None] * count
    best: float = math.inf
    best_positions: Optional[tuple[Position, ...]] = None

    def record(length: int) -> None:
        nonlocal best, best_positions
        best = min(best, length)
        best_positions = tuple(slots)  # type: ignore[arg-type]
        if on_solution is not None:
            on_solution(int(best), best_positions)

    def advance(row: int, col: int, step: int) -> tuple[int, int]:
        if col + step < width:
            return row, col + step
        return row + 1, 0

    def search(placed: int, row: int, col: int, length: int) -> None:
        while True:
            if placed == count:
                record(length)
                return
            if not (
                length < best
                and length <= max_length
                and row < best
                and row < max_length
                and best > min_length
            ):
                return
            if not fabric[row, col]:
                for index, order in enumerate(orders):
                    if not remaining[index]:
                        continue
                    for height, span in _orientations(order):
                        if row + height >= best or not fabric.fits(row, col, height, span):
                            continue
                        next_row, next_col = advance(row, col, span)
                        if next_row >= best or next_row >= max_length:
                            continue
                        slots[placed] = fabric.place(row, col, height, span, placed + 1)
                        remaining[index] -= 1
                        search(placed + 1, next_row, next_col, max(length, row + height))
                        fabric.clear(row, col, height, span)
                        remaining[index] += 1
            row, col = advance(row, col, 1)
            if row >= best or row >= max_length:
                return
            length = max(length, row)

    search(0, 0, 0, 0)
    if best_positions is None:
        return None
    return int(best), best_positions


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Exhaustive fabric cutting.")
    parser.add_argument("input", help="problem file")
    parser.add_argument("output", help="solution file, rewritten on every improvement")
    args = parser.parse_args(argv)

    problem = read_problem(args.input)
    ordered = replace(
        problem, orders=tuple(sorted(problem.orders, key=lambda order: -order.area))
    )
    start = time.process_time()

    def save(length: int, positions: tuple[Position, ...]) -> None:
        write_solution(
            args.output, time.process_time() - start, length, positions, SEPARATOR
        )

    exhaustive_search(ordered, save)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())