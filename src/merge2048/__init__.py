"""
2048 sliding tile game: board engine, game session, gymnasium environment
and pygame GUI
"""
from merge2048.board import (
    DIRECTIONS,
    DOWN,
    LEFT,
    RIGHT,
    UP,
    InvalidGrid,
    evaluate,
    initialize_grid,
    move,
    spawn_tile,
)
from merge2048.game import Game2048
from merge2048.settings import DEFAULT_SETTINGS, GameSettings

__version__ = "0.1.0"
