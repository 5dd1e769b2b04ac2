"""
Gymnasium environment wrapper for the Minesweeper engine.

Drives a single GameSession through the standard reset/step interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, Difficulty
from .cell import FLAGGED_CODE, MINE_CODE
from .session import GameSession, new_session


# ============================================================================
# Rewards
# ============================================================================

SAFE_REVEAL_REWARD = 1.0
WIN_REWARD = 10.0
MINE_PENALTY = -10.0
INVALID_ACTION_PENALTY = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine (after a loss)

    Actions:
        Discrete action space of size rows * cols.
        Action i reveals the cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged/out of range)
    """

    metadata = {"render_modes": [], "render_fps": 4}

    def __init__(
        self,
        config: Optional[Union[BoardConfig, Difficulty]] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration or preset (default: easy 8x8/10).
            render_mode: Must be None; the engine does not draw itself.
        """
        super().__init__()

        if render_mode is not None:
            raise ValueError(f"Unsupported render mode: {render_mode!r}")
        self.render_mode = render_mode

        if config is None:
            config = Difficulty.EASY
        if isinstance(config, Difficulty):
            config = config.config
        self.config = config
        self.session: GameSession = new_session(config)

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=MINE_CODE,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session.restart()
        self.session.rng = self.np_random
        self._steps = 0

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)

        observation = self.session.board.get_observation()
        terminated = self.session.state.is_terminal
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        action = int(action)
        if not 0 <= action < self.config.total_cells:
            return -1, -1
        return action // self.config.cols, action % self.config.cols

    def _calculate_reward(self, row: int, col: int) -> float:
        """
        Reveal a cell and score the outcome.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        if not self.session.reveal(row, col):
            return INVALID_ACTION_PENALTY

        if self.session.is_won:
            return WIN_REWARD
        if self.session.is_lost:
            return MINE_PENALTY
        return SAFE_REVEAL_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.session.board
        return {
            "steps": self._steps,
            "revealed": board.count_revealed(),
            "total_safe": self.config.safe_cells,
            "game_state": self.session.state.name,
            "valid_actions": len(board.get_valid_actions()),
            "mines_remaining": self.session.mines_remaining,
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.session.board.get_valid_actions():
            mask[row * self.config.cols + col] = True
        return mask
