"""
game settings

values are validated here once, the board engine trusts them
"""

MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 8
MIN_INITIAL_TILES = 1
MAX_INITIAL_TILES = 4

# distribution slider moves in steps of 10%
PROBABILITY_STEP = 0.1


class GameSettings:
    def __init__(self, grid_size=4, initial_tile_count=2, probability_of_two=0.9, win_value=2048):
        """
        args:
            grid_size: side length of the board (3-8)
            initial_tile_count: tiles placed at the start of a game (1-4)
            probability_of_two: chance a spawned tile is a 2 instead of a 4
            win_value: tile value that wins the game
        """
        self.grid_size = grid_size
        self.initial_tile_count = initial_tile_count
        self.probability_of_two = probability_of_two
        self.win_value = win_value

    def validate(self):
        """raise ValueError if any setting is out of range"""
        for name in ('grid_size', 'initial_tile_count', 'win_value'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")

        if not isinstance(self.probability_of_two, (int, float)) or isinstance(self.probability_of_two, bool):
            raise ValueError(f"probability_of_two must be a number, got {self.probability_of_two!r}")

        if not MIN_GRID_SIZE <= self.grid_size <= MAX_GRID_SIZE:
            raise ValueError(
                f"grid_size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}, got {self.grid_size}")

        if not MIN_INITIAL_TILES <= self.initial_tile_count <= MAX_INITIAL_TILES:
            raise ValueError(
                f"initial_tile_count must be between {MIN_INITIAL_TILES} and {MAX_INITIAL_TILES}, "
                f"got {self.initial_tile_count}")

        if not 0.0 <= self.probability_of_two <= 1.0:
            raise ValueError(f"probability_of_two must be between 0 and 1, got {self.probability_of_two}")

        win_value = self.win_value
        if win_value < 4 or win_value & (win_value - 1) != 0:
            raise ValueError(f"win_value must be a power of two >= 4, got {win_value}")

        return self

    def copy(self, **changes):
        """copy of these settings with some fields replaced"""
        values = self.as_dict()
        for key, value in changes.items():
            if key not in values:
                raise ValueError(f"Unknown setting: {key}")
            values[key] = value
        return GameSettings(**values)

    def as_dict(self):
        return {
            'grid_size': self.grid_size,
            'initial_tile_count': self.initial_tile_count,
            'probability_of_two': self.probability_of_two,
            'win_value': self.win_value,
        }

    def __eq__(self, other):
        if not isinstance(other, GameSettings):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"GameSettings({fields})"


DEFAULT_SETTINGS = GameSettings()
