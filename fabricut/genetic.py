"""Genetic metaheuristic over the order in which pieces are fed to a greedy placer."""

from __future__ import annotations

import argparse
import random
import time
from dataclasses import dataclass, replace
from typing import Sequence

from fabricut.problem import Fabric, Position, Problem, read_problem, sort_by_area, write_solution

UNDEF = -1
POPULATION_SIZE = 30
PARENT_COUNT = 20
ITERATIONS = 2000
SEPARATOR = "   "


@dataclass(frozen=True)
class Rectangle:
    """A single piece with an identity kept through crossovers."""

    id: int
    p: int
    q: int

    def turned(self) -> "Rectangle":
        return replace(self, p=self.q, q=self.p)


@dataclass
class Individual:
    """A piece ordering and its fitness; greater fitness is better."""

    rectangles: list[Rectangle]
    fitness: int


def expand_rectangles(problem: Problem) -> list[Rectangle]:
    """One rectangle per piece, sorted by area, numbered from 1."""
    pieces = (
        (order.p, order.q)
        for order in sort_by_area(problem.orders)
        for _ in range(order.n)
    )
    return [Rectangle(index, p, q) for index, (p, q) in enumerate(pieces, 1)]


def greedy_sequence(
    rectangles: Sequence[Rectangle], width: int, count: int, max_length: int
) -> tuple[int, list[Position]]:
    """Place each rectangle once, first fitting in sequence order, at the next free cell."""
    if count > len(rectangles):
        raise ValueError("fewer rectangles than the count requires")
    for rect in rectangles:
        if min(rect.p, rect.q) > width:
            raise ValueError(f"rectangle {rect} cannot fit in width {width}")

    fabric = Fabric(max_length, width)
    used = [False] * len(rectangles)
    positions: list[Position] = []
    length = 0
    row = col = 0

    while len(positions) < count:
        placed = False
        for index, rect in enumerate(rectangles):
            if used[index]:
                continue
            for height, span in ((rect.p, rect.q), (rect.q, rect.p)):
                if fabric.fits(row, col, height, span):
                    positions.append(
                        fabric.place(row, col, height, span, len(positions) + 1)
                    )
                    used[index] = True
                    length = max(length, row + height)
                    placed = True
                    break
            if placed:
                break
        if len(positions) == count:
            break
        nxt = fabric.next_free(row, col if placed else col + 1)
        if nxt is None:
            raise RuntimeError("ran out of fabric while placing pieces")
        row, col = nxt
    return length, positions


def order_crossover(
    cut1: int, cut2: int, parent: Sequence[Rectangle], offspring: Sequence[Rectangle]
) -> list[Rectangle]:
    """Keep ``offspring[cut1:cut2]`` and fill the ends with ``parent``'s other pieces in order."""
    size = len(offspring)
    if not 0 <= cut1 <= cut2 <= size:
        raise ValueError("cuts must satisfy 0 <= cut1 <= cut2 <= len(offspring)")
    middle = list(offspring[cut1:cut2])
    middle_ids = {rect.id for rect in middle}
    rest = [rect for rect in parent if rect.id not in middle_ids]
    if len(rest) != size - len(middle):
        raise ValueError("parent and offspring do not hold the same pieces")
    return rest[:cut1] + middle + rest[cut1:]


def _random_swap(rectangles: list[Rectangle], rng: random.Random) -> list[Rectangle]:
    result = list(rectangles)
    a = rng.randrange(len(result))
    b = rng.randrange(len(result))
    result[a], result[b] = result[b], result[a]
    return result


def _random_turn(rectangles: list[Rectangle], rng: random.Random) -> list[Rectangle]:
    result = list(rectangles)
    a = rng.randrange(len(result))
    result[a] = result[a].turned()
    return result


def genetic_metaheuristic(
    problem: Problem, rng: random.Random | None = None
) -> tuple[int, list[Position]]:
    """Evolve piece orderings and return the best greedy layout found."""
    rng = rng if rng is not None else random.Random()
    rectangles = expand_rectangles(problem)
    size = len(rectangles)
    if size != problem.count:
        raise ValueError("piece count does not match the orders")
    capacity = sum(max(rect.p, rect.q) for rect in rectangles)

    def layout(sequence: Sequence[Rectangle]) -> tuple[int, list[Position]]:
        return greedy_sequence(sequence, problem.width, size, capacity)

    if size < 2:
        return layout(rectangles)

    def evaluate(sequence: list[Rectangle]) -> Individual:
        return Individual(sequence, problem.max_length - layout(sequence)[0])

    def by_fitness(individuals: list[Individual]) -> list[Individual]:
        return sorted(individuals, key=lambda ind: -ind.fitness)

    def recombine(parents: list[Individual]) -> list[Individual]:
        cut1 = rng.randrange(1, size)
        cut2 = rng.randrange(1, size + 1)
        if cut1 > cut2:
            cut1, cut2 = cut2, cut1
        elif cut1 == cut2:
            cut2 += 1
        children = []
        for dad, mom in zip(parents[0::2], parents[1::2]):
            children.append(
                evaluate(order_crossover(cut1, cut2, mom.rectangles, dad.rectangles))
            )
            children.append(
                evaluate(order_crossover(cut1, cut2, dad.rectangles, mom.rectangles))
            )
        return children

    population = [evaluate(rectangles)]
    population.extend(
        evaluate(_random_turn(_random_swap(rectangles, rng), rng))
        for _ in range(POPULATION_SIZE - 1)
    )
    population = by_fitness(population)

    for _ in range(ITERATIONS):
        offspring = recombine(population[:PARENT_COUNT])
        population = by_fitness(population + offspring)[:POPULATION_SIZE]

    return layout(population[0].rectangles)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Genetic fabric cutting.")
    parser.add_argument("input", help="problem file")
    parser.add_argument("output", help="solution file")
    args = parser.parse_args(argv)

    problem = read_problem(args.input)
    start = time.process_time()
    length, positions = genetic_metaheuristic(problem)
    write_solution(args.output, time.process_time() - start, length, positions, SEPARATOR)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())