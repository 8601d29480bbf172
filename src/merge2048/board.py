"""
board transformations for 2048

pure functions over a square grid (list of lists of ints, 0 = empty cell).
every function returns a new grid, inputs are never modified.
all four move directions reuse move_left through rotation.
"""
import random


UP = 'up'
DOWN = 'down'
LEFT = 'left'
RIGHT = 'right'

DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

# direction -> (clockwise turns before move_left, clockwise turns after)
ROTATIONS = {
    LEFT: (0, 0),
    RIGHT: (2, 2),
    UP: (3, 1),
    DOWN: (1, 3),
}

DEFAULT_WIN_VALUE = 2048


class InvalidGrid(ValueError):
    """raised when an explicit board is not a well-formed grid"""


def create_empty_grid(n):
    """n x n grid of zeros"""
    return [[0 for _ in range(n)] for _ in range(n)]


def copy_grid(grid):
    return [row[:] for row in grid]


def empty_positions(grid):
    """(row, col) of every empty cell, in row-major order"""
    empty_cells = []
    for i, row in enumerate(grid):
        for j, value in enumerate(row):
            if value == 0:
                empty_cells.append((i, j))
    return empty_cells


def grids_equal(a, b):
    """true if both grids have the same shape and cell values"""
    if len(a) != len(b):
        return False
    for row_a, row_b in zip(a, b):
        if len(row_a) != len(row_b):
            return False
        if any(x != y for x, y in zip(row_a, row_b)):
            return False
    return True


def count_tiles(grid):
    return sum(1 for row in grid for value in row if value != 0)


def max_tile(grid):
    return max((value for row in grid for value in row), default=0)


def _is_tile_value(value):
    # 0 or a power of two >= 2
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return value == 0 or (value >= 2 and value & (value - 1) == 0)


def check_grid(grid, size=None):
    """
    make sure grid is a well-formed board

    args:
        grid: board to check
        size: expected side length, any side length if None

    raises:
        InvalidGrid: grid is not square, has the wrong size or holds
            a value that is neither 0 nor a power of two
    """
    n = len(grid)
    if n == 0:
        raise InvalidGrid("grid is empty")
    if size is not None and n != size:
        raise InvalidGrid(f"expected a {size}x{size} grid, got {n} rows")
    for i, row in enumerate(grid):
        if len(row) != n:
            raise InvalidGrid(f"row {i} has {len(row)} cells, expected {n}")
        for j, value in enumerate(row):
            if not _is_tile_value(value):
                raise InvalidGrid(f"invalid tile value {value!r} at ({i}, {j})")


def rotate_clockwise(grid, times=1):
    """
    rotate the grid 90 degrees clockwise, `times` times

    the cell at (r, c) ends up at (c, n - 1 - r), four turns give
    back the original grid
    """
    n = len(grid)
    rotated = copy_grid(grid)
    for _ in range(times % 4):
        turned = create_empty_grid(n)
        for r in range(n):
            for c in range(n):
                turned[c][n - 1 - r] = rotated[r][c]
        rotated = turned
    return rotated


def merge_row(row):
    """
    slide one row to the left and merge equal neighbours

    returns:
        merged_row: new row, same length as the input
        points: sum of the merged tile values
    """
    # all non-zero values in this row
    tiles = [value for value in row if value != 0]

    merged_row = []
    points = 0
    j = 0
    while j < len(tiles):
        if j < len(tiles) - 1 and tiles[j] == tiles[j + 1]:
            merged_value = tiles[j] * 2
            merged_row.append(merged_value)
            points += merged_value
            j += 2  # a tile merges at most once per move
        else:
            merged_row.append(tiles[j])
            j += 1

    merged_row += [0] * (len(row) - len(merged_row))
    return merged_row, points


def move_left(grid):
    """move all tiles left and merge them, returns (grid, points)"""
    new_grid = []
    points = 0
    for row in grid:
        merged_row, row_points = merge_row(row)
        new_grid.append(merged_row)
        points += row_points
    return new_grid, points


def move(grid, direction):
    """
    move the grid in a direction

    the grid is rotated so the move becomes a left move, merged with
    move_left and rotated back (see ROTATIONS)

    args:
        grid: current board
        direction: 'up', 'down', 'left' or 'right'

    returns:
        new_grid: board after the move (no random tile added)
        points: points earned from merging
    """
    if direction not in ROTATIONS:
        raise ValueError(f"Invalid direction: {direction}. Must be one of {DIRECTIONS}")

    before, after = ROTATIONS[direction]
    moved, points = move_left(rotate_clockwise(grid, before))
    return rotate_clockwise(moved, after), points


def spawn_tile(grid, probability_of_two, rng=None):
    """
    add a random tile (2 or 4) to an empty cell

    the cell is drawn uniformly from empty_positions(grid), the value is 2
    with probability `probability_of_two`, else 4. a full grid comes back
    unchanged.

    args:
        grid: board to add the tile to
        probability_of_two: chance of spawning a 2
        rng: random source with randrange() and random(), defaults to
            the random module
    """
    if rng is None:
        rng = random

    new_grid = copy_grid(grid)
    empty_cells = empty_positions(grid)
    if not empty_cells:
        return new_grid

    row, col = empty_cells[rng.randrange(len(empty_cells))]
    new_grid[row][col] = 2 if rng.random() < probability_of_two else 4
    return new_grid


def initialize_grid(size, initial_tile_count, probability_of_two, rng=None):
    """empty size x size grid with `initial_tile_count` random tiles"""
    grid = create_empty_grid(size)
    for _ in range(initial_tile_count):
        grid = spawn_tile(grid, probability_of_two, rng)
    return grid


def has_won(grid, win_value=DEFAULT_WIN_VALUE):
    """check if any tile reached the win value"""
    return any(value == win_value for row in grid for value in row)


def can_move(grid):
    """check if at least one move is still possible"""
    n = len(grid)

    # an empty cell always leaves some direction open
    for row in grid:
        if 0 in row:
            return True

    # right and lower neighbour of every cell
    for i in range(n):
        for j in range(n):
            if j < n - 1 and grid[i][j] == grid[i][j + 1]:
                return True
            if i < n - 1 and grid[i][j] == grid[i + 1][j]:
                return True

    return False


def evaluate(grid, already_won, win_value=DEFAULT_WIN_VALUE):
    """
    classify a board after an accepted move

    args:
        grid: board after the move and the spawned tile
        already_won: whether the win value was reached earlier this game
        win_value: tile value that wins the game

    returns:
        dict with
            is_over: no move is possible
            should_announce_win: the win value was reached for the first time
            has_won: the win value was reached now or earlier
    """
    board_has_win = has_won(grid, win_value)
    return {
        'is_over': not can_move(grid),
        'should_announce_win': not already_won and board_has_win,
        'has_won': already_won or board_has_win,
    }
