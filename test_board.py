"""
Tests for the board engine
"""
import random

import pytest

from merge2048.board import (
    DOWN,
    LEFT,
    RIGHT,
    UP,
    InvalidGrid,
    can_move,
    check_grid,
    count_tiles,
    create_empty_grid,
    empty_positions,
    evaluate,
    grids_equal,
    has_won,
    initialize_grid,
    max_tile,
    merge_row,
    move,
    move_left,
    rotate_clockwise,
    spawn_tile,
)


BOARD = [
    [2, 0, 4, 8],
    [0, 16, 0, 2],
    [32, 2, 2, 0],
    [4, 0, 0, 64],
]

# full board, no equal neighbours in any row or column
STUCK = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


class SequenceRandom:
    """random source returning fixed indices and fixed floats"""

    def __init__(self, indices, floats):
        self.indices = list(indices)
        self.floats = list(floats)

    def randrange(self, n):
        index = self.indices.pop(0)
        assert 0 <= index < n
        return index

    def random(self):
        return self.floats.pop(0)


def test_create_empty_grid():
    grid = create_empty_grid(3)
    assert grid == [[0, 0, 0], [0, 0, 0], [0, 0, 0]]

    # rows are independent lists
    grid[0][0] = 2
    assert grid[1][0] == 0


def test_empty_positions_row_major():
    assert empty_positions(BOARD) == [(0, 1), (1, 0), (1, 2), (2, 3), (3, 1), (3, 2)]
    assert empty_positions(STUCK) == []


def test_grids_equal():
    assert grids_equal(BOARD, [row[:] for row in BOARD])
    assert not grids_equal(BOARD, STUCK)
    assert not grids_equal(create_empty_grid(3), create_empty_grid(4))


def test_count_and_max_tile():
    assert count_tiles(BOARD) == 10
    assert max_tile(BOARD) == 64
    assert max_tile(create_empty_grid(4)) == 0


def test_rotate_clockwise_moves_cells():
    grid = [
        [1, 2, 3],
        [4, 5, 6],
        [7, 8, 9],
    ]
    assert rotate_clockwise(grid) == [
        [7, 4, 1],
        [8, 5, 2],
        [9, 6, 3],
    ]


@pytest.mark.parametrize("size", [3, 4, 5, 8])
def test_rotate_four_times_is_identity(size):
    rng = random.Random(size)
    grid = [[rng.choice([0, 2, 4, 8, 16]) for _ in range(size)] for _ in range(size)]

    rotated = grid
    for _ in range(4):
        rotated = rotate_clockwise(rotated)

    assert rotated == grid
    assert rotate_clockwise(grid, 4) == grid
    assert rotate_clockwise(rotate_clockwise(grid, 3)) == grid


def test_rotate_does_not_modify_input():
    grid = [row[:] for row in BOARD]
    rotate_clockwise(grid, 2)
    assert grid == BOARD


@pytest.mark.parametrize("row, expected, points", [
    ([2, 2, 2, 2], [4, 4, 0, 0], 8),
    ([2, 0, 2, 2], [4, 2, 0, 0], 4),
    ([2, 2, 4, 4], [4, 8, 0, 0], 12),
    ([4, 2, 2, 0], [4, 4, 0, 0], 4),
    ([0, 0, 0, 2], [2, 0, 0, 0], 0),
    ([2, 4, 8, 16], [2, 4, 8, 16], 0),
    ([0, 0, 0, 0], [0, 0, 0, 0], 0),
    ([8, 8, 8], [16, 8, 0], 16),
])
def test_merge_row(row, expected, points):
    assert merge_row(row) == (expected, points)


def test_move_left_sums_row_points():
    grid = [
        [2, 2, 2, 2],
        [2, 0, 2, 2],
        [0, 0, 0, 0],
        [4, 4, 0, 8],
    ]
    new_grid, points = move_left(grid)
    assert new_grid == [
        [4, 4, 0, 0],
        [4, 2, 0, 0],
        [0, 0, 0, 0],
        [8, 8, 0, 0],
    ]
    assert points == 8 + 4 + 8


def test_move_left_and_right():
    grid = [
        [2, 2, 0, 4],
        [0, 0, 0, 0],
        [8, 0, 8, 8],
        [2, 4, 8, 16],
    ]
    assert move(grid, LEFT) == ([
        [4, 4, 0, 0],
        [0, 0, 0, 0],
        [16, 8, 0, 0],
        [2, 4, 8, 16],
    ], 20)
    assert move(grid, RIGHT) == ([
        [0, 0, 4, 4],
        [0, 0, 0, 0],
        [0, 0, 8, 16],
        [2, 4, 8, 16],
    ], 20)


def test_move_up_and_down():
    grid = [
        [2, 0, 4, 0],
        [2, 0, 4, 0],
        [2, 0, 0, 0],
        [2, 8, 4, 0],
    ]
    assert move(grid, UP) == ([
        [4, 8, 8, 0],
        [4, 0, 4, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ], 16)
    assert move(grid, DOWN) == ([
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [4, 0, 4, 0],
        [4, 8, 8, 0],
    ], 16)


def test_move_on_odd_size_grid():
    grid = [
        [0, 0, 2],
        [0, 2, 0],
        [2, 0, 0],
    ]
    assert move(grid, DOWN) == ([
        [0, 0, 0],
        [0, 0, 0],
        [2, 2, 2],
    ], 0)
    assert move(grid, UP)[0] == [
        [2, 2, 2],
        [0, 0, 0],
        [0, 0, 0],
    ]


def test_move_does_not_modify_input():
    grid = [row[:] for row in BOARD]
    for direction in (UP, DOWN, LEFT, RIGHT):
        move(grid, direction)
    assert grid == BOARD


def test_move_rejects_unknown_direction():
    with pytest.raises(ValueError):
        move(BOARD, 'diagonal')
    with pytest.raises(ValueError):
        move(BOARD, None)


def test_stuck_board_moves_change_nothing():
    for direction in (UP, DOWN, LEFT, RIGHT):
        new_grid, points = move(STUCK, direction)
        assert grids_equal(STUCK, new_grid)
        assert points == 0


def test_spawn_tile_uses_index_and_probability():
    rng = SequenceRandom(indices=[2], floats=[0.95])
    grid = spawn_tile(BOARD, 0.9, rng)

    # third empty cell in row-major order is (1, 2); 0.95 >= 0.9 gives a 4
    assert grid[1][2] == 4
    assert count_tiles(grid) == count_tiles(BOARD) + 1

    rng = SequenceRandom(indices=[0], floats=[0.1])
    assert spawn_tile(BOARD, 0.9, rng)[0][1] == 2


def test_spawn_tile_probability_edges():
    rng = random.Random(1)
    empty = create_empty_grid(4)
    for _ in range(20):
        assert max_tile(spawn_tile(empty, 1.0, rng)) == 2
        assert max_tile(spawn_tile(empty, 0.0, rng)) == 4


def test_spawn_tile_full_grid_is_noop():
    grid = spawn_tile(STUCK, 0.9, random.Random(0))
    assert grid == STUCK
    assert grid is not STUCK


def test_spawn_tile_does_not_modify_input():
    grid = [row[:] for row in BOARD]
    spawn_tile(grid, 0.5, random.Random(3))
    assert grid == BOARD


def test_spawn_tile_is_deterministic_with_seed():
    first = spawn_tile(BOARD, 0.5, random.Random(42))
    second = spawn_tile(BOARD, 0.5, random.Random(42))
    assert first == second


def test_initialize_grid():
    grid = initialize_grid(5, 3, 0.9, random.Random(7))
    assert len(grid) == 5
    assert all(len(row) == 5 for row in grid)
    assert count_tiles(grid) == 3
    assert all(value in (0, 2, 4) for row in grid for value in row)

    assert initialize_grid(5, 3, 0.9, random.Random(7)) == grid


def test_has_won():
    grid = [row[:] for row in BOARD]
    assert not has_won(grid)
    grid[2][2] = 2048
    assert has_won(grid)
    assert has_won(BOARD, win_value=64)
    assert not has_won(BOARD, win_value=128)


def test_can_move_full_board_without_pairs():
    assert not can_move(STUCK)


def test_can_move_with_one_empty_cell():
    for r in range(4):
        for c in range(4):
            grid = [row[:] for row in STUCK]
            grid[r][c] = 0
            assert can_move(grid)


def test_can_move_detects_pairs_in_both_directions():
    horizontal = [row[:] for row in STUCK]
    horizontal[3][3] = 4  # equal to its left neighbour
    assert can_move(horizontal)

    vertical = [row[:] for row in STUCK]
    vertical[3][0] = 2  # equal to the cell above
    assert can_move(vertical)


def test_empty_cell_always_leaves_a_direction_open():
    # the only empty cell is the top right corner: left and down do nothing
    grid = [
        [2, 4, 2, 0],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ]
    assert grids_equal(move(grid, LEFT)[0], grid)
    assert grids_equal(move(grid, DOWN)[0], grid)
    assert not grids_equal(move(grid, RIGHT)[0], grid)
    assert not grids_equal(move(grid, UP)[0], grid)

    # every single-hole board of the stuck pattern has some changing move
    for r in range(4):
        for c in range(4):
            holed = [row[:] for row in STUCK]
            holed[r][c] = 0
            results = [move(holed, d)[0] for d in (UP, DOWN, LEFT, RIGHT)]
            assert any(not grids_equal(holed, result) for result in results)


def test_evaluate():
    assert evaluate(BOARD, already_won=False) == {
        'is_over': False,
        'should_announce_win': False,
        'has_won': False,
    }
    assert evaluate(STUCK, already_won=False)['is_over']

    won = [row[:] for row in BOARD]
    won[0][0] = 2048
    assert evaluate(won, already_won=False) == {
        'is_over': False,
        'should_announce_win': True,
        'has_won': True,
    }

    # already announced
    assert evaluate(won, already_won=True)['should_announce_win'] is False
    assert evaluate(won, already_won=True)['has_won'] is True
    assert evaluate(BOARD, already_won=True)['has_won'] is True


def test_evaluate_custom_win_value():
    assert evaluate(BOARD, already_won=False, win_value=64)['should_announce_win']


def test_check_grid():
    check_grid(BOARD)
    check_grid(BOARD, size=4)

    with pytest.raises(InvalidGrid):
        check_grid(BOARD, size=5)
    with pytest.raises(InvalidGrid):
        check_grid([[2, 0], [0]])
    with pytest.raises(InvalidGrid):
        check_grid([[3, 0], [0, 0]])
    with pytest.raises(InvalidGrid):
        check_grid([[-2, 0], [0, 0]])
    with pytest.raises(InvalidGrid):
        check_grid([[1, 0], [0, 0]])
    with pytest.raises(ValueError):
        check_grid([])
