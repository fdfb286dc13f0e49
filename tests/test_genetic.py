import random

import pytest

from fabricut.genetic import (
    Individual,
    Rectangle,
    expand_rectangles,
    genetic_metaheuristic,
    greedy_sequence,
    main,
    order_crossover,
)
from fabricut.problem import Order, Problem, parse_problem

SAMPLE = "4 3\n2 1 2\n1 2 2\n"


def _check_layout(width, rectangles, positions):
    cells = set()
    for pos in positions:
        assert 0 <= pos.left <= pos.right < width
        for r in range(pos.top, pos.bottom + 1):
            for c in range(pos.left, pos.right + 1):
                assert (r, c) not in cells
                cells.add((r, c))
    shapes = sorted(
        tuple(sorted((p.right - p.left + 1, p.bottom - p.top + 1))) for p in positions
    )
    assert shapes == sorted(tuple(sorted((r.p, r.q))) for r in rectangles)


def test_expand_rectangles_numbers_pieces_by_area():
    problem = parse_problem("5 4\n1 1 1\n3 2 2\n")
    rects = expand_rectangles(problem)
    assert [r.id for r in rects] == list(range(1, problem.count + 1))
    areas = [r.p * r.q for r in rects]
    assert areas == sorted(areas, reverse=True)
    assert sum(areas) == problem.area


def test_rectangle_turned_swaps_sides_and_keeps_id():
    rect = Rectangle(7, 2, 5)
    assert rect.turned() == Rectangle(7, 5, 2)


def test_greedy_sequence_produces_valid_layout():
    problem = parse_problem(SAMPLE)
    rects = expand_rectangles(problem)
    length, positions = greedy_sequence(rects, problem.width, problem.count, 20)
    assert len(positions) == problem.count
    _check_layout(problem.width, rects, positions)
    assert max(p.bottom for p in positions) + 1 == length
    assert length >= problem.min_length


def test_greedy_sequence_rejects_too_large_count():
    rects = [Rectangle(1, 1, 1)]
    with pytest.raises(ValueError):
        greedy_sequence(rects, 3, 2, 5)


def test_greedy_sequence_rejects_too_wide_piece():
    with pytest.raises(ValueError):
        greedy_sequence([Rectangle(1, 4, 5)], 3, 1, 10)


def test_greedy_sequence_runs_out_of_fabric():
    rects = [Rectangle(1, 2, 2), Rectangle(2, 2, 2)]
    with pytest.raises(RuntimeError):
        greedy_sequence(rects, 2, 2, 3)


def test_order_crossover_worked_example():
    parent = [Rectangle(i, 1, i) for i in range(1, 6)]
    offspring = [Rectangle(0, 1, 1), Rectangle(4, 1, 4), Rectangle(2, 1, 2),
                 Rectangle(0, 1, 1), Rectangle(0, 1, 1)]
    result = order_crossover(1, 3, parent, offspring)
    assert [r.id for r in result] == [1, 4, 2, 3, 5]


def test_order_crossover_keeps_middle_and_parent_order():
    rng = random.Random(3)
    ids = list(range(1, 9))
    parent = [Rectangle(i, 1, i) for i in ids]
    shuffled = ids[:]
    rng.shuffle(shuffled)
    other = [Rectangle(i, i, 1) for i in shuffled]
    for cut1 in range(0, 8):
        for cut2 in range(cut1, 9):
            result = order_crossover(cut1, cut2, parent, other)
            assert sorted(r.id for r in result) == ids
            assert result[cut1:cut2] == other[cut1:cut2]
            outside = result[:cut1] + result[cut2:]
            assert outside == [r for r in parent if r in outside]


def test_order_crossover_rejects_bad_cuts():
    rects = [Rectangle(1, 1, 1), Rectangle(2, 1, 1)]
    with pytest.raises(ValueError):
        order_crossover(2, 1, rects, rects)


def test_order_crossover_rejects_mismatched_pieces():
    parent = [Rectangle(1, 1, 1), Rectangle(2, 1, 1)]
    other = [Rectangle(3, 1, 1), Rectangle(4, 1, 1)]
    with pytest.raises(ValueError):
        order_crossover(0, 1, parent, other)


def test_individual_holds_fitness():
    ind = Individual([Rectangle(1, 1, 1)], 4)
    assert ind.fitness == 4 and ind.rectangles[0].id == 1


def test_genetic_never_worse_than_initial_greedy():
    problem = parse_problem(SAMPLE)
    rects = expand_rectangles(problem)
    capacity = sum(max(r.p, r.q) for r in rects)
    initial, _ = greedy_sequence(rects, problem.width, problem.count, capacity)
    length, positions = genetic_metaheuristic(problem, random.Random(1))
    assert problem.min_length <= length <= initial
    _check_layout(problem.width, rects, positions)
    assert max(p.bottom for p in positions) + 1 == length


def test_genetic_is_deterministic_for_a_seed():
    problem = parse_problem(SAMPLE)
    first = genetic_metaheuristic(problem, random.Random(5))
    second = genetic_metaheuristic(problem, random.Random(5))
    assert first == second


def test_genetic_single_piece():
    problem = Problem(3, 1, (Order(1, 1, 3),))
    length, positions = genetic_metaheuristic(problem, random.Random(0))
    assert length == problem.min_length
    assert len(positions) == 1


def test_genetic_rejects_count_mismatch():
    problem = Problem(3, 4, (Order(2, 1, 1),))
    with pytest.raises(ValueError):
        genetic_metaheuristic(problem, random.Random(0))


def test_main_writes_solution(tmp_path):
    source = tmp_path / "in.txt"
    target = tmp_path / "out.txt"
    source.write_text("3 2\n2 1 2\n")
    assert main([str(source), str(target)]) == 0
    lines = target.read_text().splitlines()
    problem = parse_problem(source.read_text())
    assert float(lines[0]) >= 0
    assert len(lines) == 2 + problem.count
    assert all("   " in line for line in lines[2:])
    bottoms = [int(line.split()[3]) for line in lines[2:]]
    assert int(lines[1]) == max(bottoms) + 1