# fabricut

Solvers for a strip-packing problem. Rectangular pieces are cut from a fabric
roll of fixed width `W`. The goal is to use as little roll length `L` as
possible. Any piece may be turned by 90 degrees.

The package has three solvers:

- `fabricut-greedy` sorts the orders by decreasing area, breaking ties by the
  larger side `q`. It then places pieces at the next free cell of the roll,
  scanning row by row.
- `fabricut-exhaustive` sorts the orders by decreasing area. It then searches
  every placement with branch and bound, and rewrites the output file each
  time it finds a shorter layout.
- `fabricut-genetic` evolves orderings of the individual pieces. Each ordering
  is scored by the length that a greedy placer reaches with it. The search
  runs a population of 30 over 2000 generations, using order crossover. The
  starting population gets random swaps and turns of pieces.

## Installation

```
pip install .
```

## Input format

The input is a plain text file of whitespace-separated integers:

1. the roll width `W` and the total number of pieces `N`;
2. then one triple per order: the number of units, followed by the two sides
   `p q` of the piece.

A trailing incomplete triple is ignored.

```
5 4
2 2 3
1 1 5
1 3 1
```

## Running

Each command takes an input file and an output file:

```
fabricut-greedy input.txt output.txt
fabricut-exhaustive input.txt output.txt
fabricut-genetic input.txt output.txt
```

The output file holds:

1. the processor time used, in seconds, rounded to one decimal;
2. the roll length used;
3. one line per piece, giving the column and row of its upper-left cell and
   then of its lower-right cell.

The two corners are separated by three spaces, or by five in the output of
`fabricut-exhaustive`. If the exhaustive search finds no layout, it writes no
file.

## Library use

```python
import random

from dataclasses import replace

from fabricut.problem import read_problem, sort_by_area
from fabricut.greedy import greedy
from fabricut.exhaustive import exhaustive_search
from fabricut.genetic import genetic_metaheuristic

problem = read_problem("input.txt")

# greedy() places the orders in the order given; sort them first if wanted.
ordered = replace(problem, orders=tuple(sort_by_area(problem.orders)))
length, positions = greedy(ordered)

result = exhaustive_search(problem, lambda length, positions: print(length))

length, positions = genetic_metaheuristic(problem, random.Random(1))
```

`fabricut.problem` provides the following:

- `Order`, `Problem` and `Position`;
- `parse_problem` and `read_problem`;
- `sort_by_area`;
- the `Fabric` grid, with `fits`, `place`, `clear` and `next_free`;
- `format_solution` and `write_solution`.

`exhaustive_search` returns `(length, positions)` for the best layout, or
`None` if there is none. Its optional callback is called with every improved
solution.

`fabricut.genetic` also exposes the following:

- `Rectangle` and `Individual`;
- `expand_rectangles`, which gives one numbered rectangle per piece, sorted by
  area;
- `greedy_sequence`, the placer that scores an ordering;
- `order_crossover`.

Errors in the input are raised as `ValueError`. Examples are malformed
numbers, non-positive sides or width, a piece wider than the roll in both
orientations, and a piece count that the orders do not supply.

## Tests

```
pip install .[test]
pytest
```