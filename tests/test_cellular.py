import numpy as np

from caverns import cellular
from caverns.config import CellularConfig
from caverns.grid import TILE_ID_FLOOR, TILE_ID_WALL, Grid
from game_rng import GameRNG

BIRTH_LIMIT = 5
SURVIVAL_LIMIT = 4

# The eight neighbours of the centre of a 5x5 grid.
CENTRE_NEIGHBOURS = [(1, 1), (2, 1), (3, 1), (1, 2), (3, 2), (1, 3), (2, 3), (3, 3)]


def _centre_case(centre: int, wall_neighbours: int) -> Grid:
    """5x5 floor grid whose centre has exactly ``wall_neighbours`` wall neighbours."""
    grid = Grid(5, 5, fill=TILE_ID_FLOOR)
    grid[2, 2] = centre
    for pos in CENTRE_NEIGHBOURS[:wall_neighbours]:
        grid[pos] = TILE_ID_WALL
    return grid


def _step(grid: Grid) -> Grid:
    return cellular.apply_rules(grid, 1, BIRTH_LIMIT, SURVIVAL_LIMIT)


def test_zero_density_gives_all_walls():
    grid = cellular.generate_noise_grid(50, 50, 0, GameRNG(seed=1))
    assert grid.floor_count() == 0


def test_full_density_gives_all_floors():
    grid = cellular.generate_noise_grid(50, 50, 100, GameRNG(seed=1))
    assert grid.floor_count() == 50 * 50


def test_noise_grid_has_requested_dimensions():
    grid = cellular.generate_noise_grid(25, 50, 55, GameRNG(seed=2))
    assert grid.width == 25
    assert grid.height == 50


def test_noise_density_is_roughly_respected():
    grid = cellular.generate_noise_grid(100, 100, 55, GameRNG(seed=3))
    ratio = grid.floor_count() / 10000
    assert 0.5 < ratio < 0.6


def test_noise_is_reproducible_with_same_seed():
    a = cellular.generate_noise_grid(30, 20, 55, GameRNG(seed=9))
    b = cellular.generate_noise_grid(30, 20, 55, GameRNG(seed=9))
    assert a == b


def test_all_walls_stay_walls():
    result = cellular.apply_rules(Grid(5, 5), 5)
    assert result.floor_count() == 0


def test_all_floors_keep_interior_floors():
    result = cellular.apply_rules(Grid(10, 10, fill=TILE_ID_FLOOR), 5)
    for x in range(1, 9):
        for y in range(1, 9):
            assert result[x, y] == TILE_ID_FLOOR


def test_all_floors_lose_corners_to_out_of_bounds_walls():
    result = cellular.apply_rules(Grid(10, 10, fill=TILE_ID_FLOOR), 1)
    for corner in [(0, 0), (9, 0), (0, 9), (9, 9)]:
        assert result[corner] == TILE_ID_WALL
    # Edge cells only see three out-of-bounds walls.
    assert result[5, 0] == TILE_ID_FLOOR


def test_apply_rules_does_not_mutate_input():
    grid = Grid(5, 5, fill=TILE_ID_FLOOR)
    before = grid.copy()
    cellular.apply_rules(grid, 3)
    assert grid == before


def test_count_wall_neighbours_treats_outside_as_walls():
    counts = cellular.count_wall_neighbours(np.ones((3, 3), dtype=np.uint8))
    assert counts.tolist() == [[5, 3, 5], [3, 0, 3], [5, 3, 5]]


def test_survival_limit_wall_becomes_floor():
    grid = Grid.from_rows(
        [
            [1, 1, 1, 1, 1],
            [1, 1, 1, 0, 1],
            [1, 1, 0, 1, 1],
            [1, 0, 1, 1, 1],
            [1, 1, 1, 1, 1],
        ]
    )
    assert _step(grid)[2, 2] == TILE_ID_FLOOR


def test_survival_limit_wall_stays_wall():
    grid = Grid.from_rows(
        [
            [0, 0, 0, 0, 1],
            [1, 0, 0, 1, 1],
            [1, 0, 0, 1, 0],
            [1, 0, 0, 0, 0],
            [1, 0, 1, 1, 1],
        ]
    )
    assert _step(grid)[2, 2] == TILE_ID_WALL


def test_birth_limit_floor_becomes_wall():
    grid = Grid.from_rows(
        [
            [0, 0, 0, 0, 0],
            [0, 0, 0, 1, 0],
            [0, 0, 1, 0, 0],
            [0, 1, 0, 0, 0],
            [0, 0, 0, 0, 0],
        ]
    )
    assert _step(grid)[2, 2] == TILE_ID_WALL


def test_birth_limit_floor_stays_floor():
    grid = Grid.from_rows(
        [
            [0, 0, 0, 0, 0],
            [0, 1, 1, 0, 0],
            [0, 1, 1, 1, 0],
            [0, 0, 1, 1, 0],
            [0, 0, 0, 0, 0],
        ]
    )
    assert _step(grid)[2, 2] == TILE_ID_FLOOR


def test_exact_limit_boundaries():
    # Floor: one below the birth limit survives, at the limit it closes.
    assert _step(_centre_case(TILE_ID_FLOOR, BIRTH_LIMIT - 1))[2, 2] == TILE_ID_FLOOR
    assert _step(_centre_case(TILE_ID_FLOOR, BIRTH_LIMIT))[2, 2] == TILE_ID_WALL
    # Wall: one below the survival limit opens, at the limit it stays.
    assert _step(_centre_case(TILE_ID_WALL, SURVIVAL_LIMIT - 1))[2, 2] == TILE_ID_FLOOR
    assert _step(_centre_case(TILE_ID_WALL, SURVIVAL_LIMIT))[2, 2] == TILE_ID_WALL


def test_custom_limits_are_honoured():
    grid = _centre_case(TILE_ID_FLOOR, 3)
    assert cellular.apply_rules(grid, 1, birth_limit=3, survival_limit=4)[2, 2] == TILE_ID_WALL


def test_smooth_noise_uses_config():
    config = CellularConfig(density=0, iterations=2)
    grid = cellular.smooth_noise(12, 8, config, GameRNG(seed=4))
    assert grid.shape == (12, 8)
    assert grid.floor_count() == 0
