import gymnasium as gym
from gymnasium import spaces
import numpy as np

from merge2048.board import grids_equal, move
from merge2048.game import Game2048


class Game2048Env(gym.Env):
    """
    gymnasium environment for 2048 game

    - observation is the raw board (tile values, not log2)
    - reward is the points earned from merging
    - afterstate (board after the move, before the random tile) is
      reported in info
    """

    metadata = {"render_modes": ["human"]}

    def __init__(self, settings=None, best_score_store=None):
        super().__init__()

        self.game = Game2048(settings=settings, best_score_store=best_score_store)
        size = self.game.size

        # actions -> 4 possible moves
        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        self.observation_space = spaces.Box(
            low=0,
            high=131072,
            shape=(size, size),
            dtype=np.int32
        )

        # map actions to game directions
        self.action_to_direction = {
            0: 'up',
            1: 'down',
            2: 'left',
            3: 'right'
        }

        # board after the last valid move, before random tile
        self.last_afterstate = None

    def _get_observation(self):
        return np.array(self.game.board, dtype=np.int32)

    def get_afterstate(self, action):
        """
        board after a move but before the random tile

        returns:
            afterstate_board: board after move (None if the move is invalid)
            reward: points earned from merging
            valid: if the move changes the board
        """
        direction = self.action_to_direction[action]
        new_board, points = move(self.game.board, direction)

        if self.game.game_over or grids_equal(self.game.board, new_board):
            return None, 0, False

        return np.array(new_board, dtype=np.int32), points, True

    def valid_actions(self):
        """actions that would change the board"""
        return [action for action in self.action_to_direction
                if self.get_afterstate(action)[2]]

    def reset(self, seed=None, options=None):
        """reset the game to start a new episode"""
        super().reset(seed=seed)

        if seed is not None:
            self.game.rng.seed(seed)

        self.game.reset()
        self.last_afterstate = None

        observation = self._get_observation()
        info = {"score": self.game.score, "moves": self.game.moves}

        return observation, info

    def step(self, action):
        """take one step in the environment"""
        afterstate_board, _, valid = self.get_afterstate(action)

        direction = self.action_to_direction[action]
        moved, points = self.game.make_move(direction)

        reward = float(points) if moved else 0.0
        observation = self._get_observation()

        terminated = self.game.game_over
        truncated = False

        if valid:
            self.last_afterstate = afterstate_board

        info = {
            "score": self.game.score,
            "moves": self.game.moves,
            "moved": moved,
            "points_gained": points,
            "afterstate": afterstate_board if valid else None,
            "max_tile": int(np.max(observation)),
            "has_won": self.game.has_won,
            "valid_actions": self.valid_actions(),
        }

        return observation, reward, terminated, truncated, info

    def render(self, mode="human"):
        """display the game state"""
        if mode == "human":
            self.game.print_board()

    def close(self):
        pass
