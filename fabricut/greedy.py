"""Greedy placement of pieces on a fabric roll."""

from __future__ import annotations

import argparse
import time
from dataclasses import replace
from typing import Sequence

from fabricut.problem import Fabric, Position, Problem, read_problem, sort_by_area, write_solution


def greedy(problem: Problem) -> tuple[int, list[Position]]:
    """Place pieces in order at the next free cell; return (length, positions)."""
    orders = problem.orders
    for order in orders:
        if order.n and min(order.p, order.q) > problem.width:
            raise ValueError(f"order {order} cannot fit in width {problem.width}")
    if problem.count > sum(order.n for order in orders):
        raise ValueError("fewer pieces are ordered than the count requires")

    capacity = sum(max(order.p, order.q) * order.n for order in orders)
    fabric = Fabric(capacity, problem.width)
    used = [0] * len(orders)
    positions: list[Position] = []
    length = 0
    row = col = 0

    while len(positions) < problem.count:
        placed = False
        for index, order in enumerate(orders):
            if used[index] >= order.n:
                continue
            for height, width in ((order.p, order.q), (order.q, order.p)):
                if fabric.fits(row, col, height, width):
                    positions.append(
                        fabric.place(row, col, height, width, len(positions) + 1)
                    )
                    used[index] += 1
                    length = max(length, row + height)
                    placed = True
                    break
            if placed:
                break
        nxt = fabric.next_free(row, col) if placed else fabric.next_free(row, col + 1)
        if nxt is None:
            if len(positions) < problem.count:
                raise RuntimeError("ran out of fabric while placing pieces")
            break
        row, col = nxt
    return length, positions


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Greedy fabric cutting.")
    parser.add_argument("input", help="problem file")
    parser.add_argument("output", help="solution file")
    args = parser.parse_args(argv)

    problem = read_problem(args.input)
    start = time.process_time()
    ordered = replace(problem, orders=tuple(sort_by_area(problem.orders)))
    length, positions = greedy(ordered)
    write_solution(args.output, time.process_time() - start, length, positions)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())