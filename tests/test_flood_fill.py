from caverns import flood_fill
from caverns.cellular import generate_noise_grid
from caverns.connectivity import find_room_islands
from caverns.grid import Grid
from game_rng import GameRNG


def test_run_collects_whole_region_and_marks_visited():
    grid = Grid.from_rows(
        [
            [1, 1, 0],
            [0, 1, 0],
            [0, 1, 1],
        ]
    )
    visited = flood_fill.new_visited(grid)
    region = flood_fill.run(grid, visited, (0, 0))
    assert region[0] == (0, 0)
    assert set(region) == {(0, 0), (0, 1), (1, 1), (2, 1), (2, 2)}
    for x, y in region:
        assert visited[y, x]
    assert not visited[0, 1]


def test_diagonal_cells_are_separate_regions():
    grid = Grid.from_rows(
        [
            [1, 0],
            [0, 1],
        ]
    )
    visited = flood_fill.new_visited(grid)
    assert flood_fill.run(grid, visited, (0, 0)) == [(0, 0)]
    assert flood_fill.run(grid, visited, (1, 1)) == [(1, 1)]


def test_shared_visited_map_prevents_rediscovery():
    grid = Grid(3, 1, fill=1)
    visited = flood_fill.new_visited(grid)
    first = flood_fill.run(grid, visited, (0, 0))
    assert len(first) == 3
    assert visited.all()


def test_islands_partition_every_floor_cell_exactly_once():
    for seed in range(10):
        grid = generate_noise_grid(30, 20, 50, GameRNG(seed=seed))
        islands = find_room_islands(grid)
        cells = [cell for island in islands for cell in island]
        assert len(cells) == len(set(cells))
        assert set(cells) == set(grid.floor_positions())


def test_islands_are_maximal():
    grid = generate_noise_grid(25, 25, 50, GameRNG(seed=42))
    islands = find_room_islands(grid)
    owner = {}
    for index, island in enumerate(islands):
        for cell in island:
            owner[cell] = index
    for (x, y), index in owner.items():
        for dx, dy in flood_fill.DIRECTIONS:
            neighbour = (x + dx, y + dy)
            if neighbour in owner:
                assert owner[neighbour] == index


def test_no_islands_in_solid_grid():
    assert find_room_islands(Grid(6, 6)) == []
