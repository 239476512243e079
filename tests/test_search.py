# tests/test_search.py
import random

import pytest

from pathgrid.core.engine import ALGORITHMS, iter_steps, make_algo, run, solve
from pathgrid.core.grid import Grid
from pathgrid.core.path import full_route, path_cost, reconstruct
from pathgrid.core.types import InvalidInput, NotFound

ALL = sorted(ALGORITHMS)
SHORTEST = ["bfs", "dijkstra", "astar"]


def make_grid(rows, cols, start, end, walls=(), weights=None):
    grid = Grid(rows, cols)
    for c in walls:
        grid.set_blocked(c)
    for c, w in (weights or {}).items():
        grid.set_weight(c, w)
    grid.set_start(start)
    grid.set_end(end)
    return grid


def random_grid(rng, rows, cols, wall_p=0.25, weighted=True):
    grid = Grid(rows, cols)
    cells = list(grid.cells())
    start, end = rng.sample(cells, 2)
    for c in cells:
        if c in (start, end):
            continue
        roll = rng.random()
        if roll < wall_p:
            grid.set_blocked(c)
        elif weighted and roll < wall_p + 0.3:
            grid.set_weight(c, rng.randint(2, 9))
    grid.set_start(start)
    grid.set_end(end)
    return grid


def assert_valid_route(grid, route):
    assert route[0] == grid.start and route[-1] == grid.end
    assert len(set(route)) == len(route)
    for a, b in zip(route, route[1:]):
        assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
    for c in route:
        assert not grid.is_block(c)


# -------------------- concrete scenarios --------------------

def test_bfs_five_by_five_corner_to_corner():
    grid = make_grid(5, 5, (0, 0), (4, 4))
    result, path = solve("bfs", grid)
    assert path.length == 7
    assert path.steps == 8
    # the far corner is the last cell dequeued
    assert result.visited_count == 25


@pytest.mark.parametrize("algo", SHORTEST)
@pytest.mark.parametrize("start,end", [((0, 0), (4, 4)), ((2, 1), (0, 4)), ((4, 0), (4, 3)), ((1, 3), (3, 1))])
def test_open_grid_path_matches_manhattan(algo, start, end):
    grid = make_grid(5, 5, start, end)
    _, path = solve(algo, grid)
    manhattan = abs(start[0] - end[0]) + abs(start[1] - end[1])
    assert path.steps == manhattan
    assert path.length == manhattan - 1


@pytest.mark.parametrize("algo", ALL)
def test_adjacent_endpoints_have_empty_path(algo):
    grid = make_grid(5, 5, (2, 2), (2, 3))
    _, path = solve(algo, grid)
    assert path.path == []
    assert path.length == 0
    assert path.steps == 1


@pytest.mark.parametrize("algo", SHORTEST)
@pytest.mark.parametrize("end", [(1, 2), (3, 2), (2, 1)])
def test_adjacent_endpoints_any_side(algo, end):
    grid = make_grid(5, 5, (2, 2), end)
    _, path = solve(algo, grid)
    assert path.length == 0


@pytest.mark.parametrize("start,end", [((0, 0), (4, 4)), ((0, 0), (0, 4)), ((4, 0), (0, 4))])
def test_dijkstra_routes_through_the_only_gap(start, end):
    walls = [(r, 2) for r in range(5) if r != 2]
    grid = make_grid(5, 5, start, end, walls=walls)
    _, path = solve("dijkstra", grid)
    assert (2, 2) in path.path
    assert [c for c in path.path if c[1] == 2] == [(2, 2)]


@pytest.mark.parametrize("algo", ALL)
def test_enclosed_end_is_not_found(algo):
    walls = [(1, 2), (3, 2), (2, 1), (2, 3)]
    grid = make_grid(5, 5, (0, 0), (2, 2), walls=walls)
    assert run(algo, grid) is NotFound
    assert solve(algo, grid) is NotFound


@pytest.mark.parametrize("algo", ALL)
def test_enclosed_corner_is_not_found(algo):
    grid = make_grid(4, 4, (0, 0), (3, 3), walls=[(2, 3), (3, 2)])
    assert not run(algo, grid)


def test_not_found_is_falsy_singleton():
    assert not NotFound
    assert repr(NotFound) == "NotFound"


# -------------------- algorithm-specific behaviour --------------------

def test_astar_does_not_count_the_end_cell():
    grid = make_grid(1, 3, (0, 0), (0, 2))
    for algo in ("bfs", "dfs", "dijkstra"):
        result = run(algo, grid)
        assert result.visited_count == 3
        assert (0, 2) in result.visited
    result = run("astar", grid)
    assert result.visited_count == 2
    assert (0, 2) not in result.visited


def test_dijkstra_visit_order_breaks_ties_by_frontier_order():
    algo = make_algo("dijkstra")
    grid = make_grid(3, 3, (0, 0), (2, 2))
    for _ in iter_steps(algo, grid):
        pass
    assert algo.visit_order == [(0, 0), (1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2), (2, 2)]
    assert algo.path == [(1, 0), (2, 0), (2, 1)]


def test_astar_visits_one_fewer_on_open_three_by_three():
    grid = make_grid(3, 3, (0, 0), (2, 2))
    assert run("dijkstra", grid).visited_count == 9
    assert run("astar", grid).visited_count == 8
    _, path = solve("astar", grid)
    assert path.path == [(1, 0), (2, 0), (2, 1)]


def test_bfs_path_on_open_three_by_three():
    grid = make_grid(3, 3, (0, 0), (2, 2))
    result, path = solve("bfs", grid)
    assert result.visited_count == 9
    assert path.path == [(1, 0), (2, 0), (2, 1)]


def test_dfs_snakes_and_is_not_shortest():
    grid = make_grid(3, 3, (0, 0), (2, 2))
    result, path = solve("dfs", grid)
    assert result.visited_count == 9
    assert path.path == [(0, 1), (0, 2), (1, 2), (1, 1), (1, 0), (2, 0), (2, 1)]
    assert_valid_route(grid, full_route(grid.start, path, grid.end))


def test_bfs_and_dfs_ignore_weights():
    grid = make_grid(3, 3, (0, 0), (0, 2), weights={(0, 1): 9})
    _, bfs_path = solve("bfs", grid)
    assert bfs_path.path == [(0, 1)]

    _, dijkstra_path = solve("dijkstra", grid)
    assert dijkstra_path.path == [(1, 0), (1, 1), (1, 2)]
    route = full_route(grid.start, dijkstra_path, grid.end)
    assert path_cost(grid, route) == 4


def test_astar_prefers_cheap_detour():
    grid = make_grid(3, 3, (0, 0), (0, 2), weights={(0, 1): 9})
    algo = make_algo("astar")
    steps = list(iter_steps(algo, grid))
    assert steps[-1].status == "done"
    assert steps[-1].metrics["total_cost"] == 4
    assert algo.path == [(1, 0), (1, 1), (1, 2)]


# -------------------- properties on random grids --------------------

@pytest.mark.parametrize("seed", range(40))
def test_dijkstra_and_astar_agree_on_cost(seed):
    rng = random.Random(seed)
    grid = random_grid(rng, rng.randint(3, 12), rng.randint(3, 12))
    d = solve("dijkstra", grid)
    a = solve("astar", grid)
    if d is NotFound:
        assert a is NotFound
        return
    (d_result, d_path), (a_result, a_path) = d, a
    d_cost = path_cost(grid, full_route(grid.start, d_path, grid.end))
    a_cost = path_cost(grid, full_route(grid.start, a_path, grid.end))
    assert d_cost == a_cost
    assert a_result.visited_count <= d_result.visited_count
    assert a_result.visited <= d_result.visited


@pytest.mark.parametrize("seed", range(30))
@pytest.mark.parametrize("algo", ALL)
def test_routes_are_connected_and_simple(algo, seed):
    rng = random.Random(seed)
    rows, cols = rng.randint(2, 10), rng.randint(2, 10)
    grid = random_grid(rng, rows, cols)
    result = solve(algo, grid)
    if result is NotFound:
        return
    search, path = result
    assert 1 <= search.visited_count <= rows * cols
    assert path.length == len(path.path)
    assert_valid_route(grid, full_route(grid.start, path, grid.end))


@pytest.mark.parametrize("seed", range(20))
def test_unweighted_shortest_algorithms_agree_on_length(seed):
    rng = random.Random(1000 + seed)
    grid = random_grid(rng, rng.randint(3, 10), rng.randint(3, 10), weighted=False)
    results = [solve(algo, grid) for algo in SHORTEST]
    if results[0] is NotFound:
        assert all(r is NotFound for r in results)
        return
    assert len({r[1].length for r in results}) == 1


# -------------------- engine facade --------------------

@pytest.mark.parametrize("algo", ALL)
def test_observer_sees_each_visit_in_order(algo):
    grid = make_grid(4, 5, (0, 0), (3, 4), walls=[(1, 1), (2, 3)])
    seen = []
    result = run(algo, grid, on_step=lambda cell, count: seen.append((cell, count)))
    assert [count for _, count in seen] == list(range(1, len(seen) + 1))
    assert {cell for cell, _ in seen} == result.visited
    assert seen[0][0] == (0, 0)


def test_path_observer_walks_back_from_end():
    grid = make_grid(1, 4, (0, 0), (0, 3))
    seen = []
    _, path = solve("bfs", grid, on_path_step=lambda cell, n: seen.append((cell, n)))
    assert seen == [((0, 2), 1), ((0, 1), 2)]
    assert path.path == [(0, 1), (0, 2)]


@pytest.mark.parametrize("algo", ALL)
def test_step_after_finish_keeps_terminal_status(algo):
    searcher = make_algo(algo)
    grid = make_grid(2, 2, (0, 0), (1, 1))
    statuses = [res.status for res in iter_steps(searcher, grid)]
    assert statuses[-1] == "done"
    assert all(s == "running" for s in statuses[:-1])
    again = searcher.step()
    assert again.status == "done"
    assert again.path == searcher.path


def test_step_without_grid_is_idle():
    assert make_algo("bfs").step().status == "idle"


def test_reset_restarts_the_search():
    searcher = make_algo("dijkstra")
    grid = make_grid(3, 3, (0, 0), (2, 2))
    first = [res.status for res in iter_steps(searcher, grid)]
    searcher.reset()
    assert searcher.visited_count == 0 and not searcher.done
    second = []
    while not second or second[-1] not in ("done", "no_path"):
        second.append(searcher.step().status)
    assert first == second


def test_unknown_algorithm_is_invalid():
    with pytest.raises(InvalidInput):
        make_algo("greedy")


def test_missing_or_blocked_endpoints_fail_fast():
    grid = Grid(3, 3)
    with pytest.raises(InvalidInput):
        run("bfs", grid)
    grid.set_start((0, 0))
    grid.set_end((2, 2))
    grid.walls.add((2, 2))
    with pytest.raises(InvalidInput):
        run("astar", grid)


def test_reconstruct_from_hand_built_map():
    prev = {(0, 1): (0, 0), (0, 2): (0, 1), (1, 2): (0, 2)}
    seen = []
    result = reconstruct(prev, (0, 0), (1, 2), on_step=lambda c, n: seen.append(c))
    assert result.path == [(0, 1), (0, 2)]
    assert result.length == 2
    assert seen == [(0, 2), (0, 1)]
