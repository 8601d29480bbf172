"""
game session: board, score, moves and win/lose state of one game
"""
import random

from merge2048.best_score import BestScoreStore
from merge2048.board import (
    check_grid,
    evaluate,
    grids_equal,
    initialize_grid,
    max_tile,
    move,
    spawn_tile,
)
from merge2048.settings import GameSettings


PLAYING = 'playing'
WON = 'won'
CONTINUING = 'continuing'
OVER = 'over'


class Game2048:
    def __init__(self, settings=None, rng=None, best_score_store=None):
        """
        start a new game

        args:
            settings: GameSettings, defaults if None
            rng: random source for tile spawns (e.g. random.Random(seed))
            best_score_store: BestScoreStore, in-memory store if None
        """
        self.settings = (settings or GameSettings()).validate()
        self.rng = rng if rng is not None else random.Random()
        self.best_score_store = best_score_store or BestScoreStore()
        self.reset()

    @property
    def size(self):
        return self.settings.grid_size

    @property
    def best_score(self):
        return self.best_score_store.best_score

    @property
    def phase(self):
        if self.game_over:
            return OVER
        if self.show_win_message:
            return WON
        if self.has_won:
            return CONTINUING
        return PLAYING

    def reset(self):
        """reset the game"""
        self.board = initialize_grid(
            self.settings.grid_size,
            self.settings.initial_tile_count,
            self.settings.probability_of_two,
            self.rng,
        )
        self.score = 0
        self.moves = 0
        self.game_over = False
        self.has_won = False
        self.show_win_message = False

    new_game = reset

    def apply_settings(self, settings):
        """switch to new settings, always starts a new game"""
        self.settings = settings.validate()
        self.reset()
        print(f"Settings applied: {self.settings}")

    def make_move(self, direction):
        """
        make a move in the specified direction

        returns:
            moved: False if the move was rejected (no direction, game over
                or nothing would change)
            points: points earned from merging
        """
        if direction is None or self.game_over:
            return False, 0

        new_board, points = move(self.board, direction)

        # only accept moves that change something
        if grids_equal(self.board, new_board):
            return False, 0

        self.board = spawn_tile(new_board, self.settings.probability_of_two, self.rng)
        self.moves += 1
        self.score += points

        state = evaluate(self.board, self.has_won, self.settings.win_value)
        if state['should_announce_win']:
            self.show_win_message = True
        self.has_won = state['has_won']

        if state['is_over']:
            self.game_over = True

        # game state is settled before the store touches the disk
        self.best_score_store.update(self.score)

        return True, points

    def continue_game(self):
        """dismiss the win message and keep playing"""
        self.show_win_message = False

    def load_board(self, board):
        """
        replace the board with an explicit one

        the board is checked against the configured size, score and moves
        are kept. the win state is taken from the board without announcing
        it.
        """
        check_grid(board, self.size)
        self.board = [list(row) for row in board]

        state = evaluate(self.board, self.has_won, self.settings.win_value)
        self.has_won = state['has_won']
        self.game_over = state['is_over']

    def max_tile(self):
        return max_tile(self.board)

    def print_board(self):
        """print the board to console"""
        width = self.size * 5 + 1
        print(f"Score: {self.score}  Moves: {self.moves}  Best: {self.best_score}")
        print("-" * width)
        for row in self.board:
            print("|", end="")
            for cell in row:
                if cell == 0:
                    print("    |", end="")
                else:
                    print(f"{cell:4}|", end="")
            print()
        print("-" * width)
        if self.game_over:
            print("GAME OVER!")
        elif self.show_win_message:
            print(f"YOU WIN! Reached {self.settings.win_value}")
        print()
