"""
Evaluation harness for the Minesweeper engine.

Plays many games through the Gymnasium environment with a uniformly
random player and reports aggregate outcome statistics.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

import numpy as np

from minesweeper.board import BoardConfig, Difficulty
from minesweeper.environment import MinesweeperEnv

logger = logging.getLogger(__name__)

ConfigLike = Union[BoardConfig, Difficulty]


def _as_config(config: Optional[ConfigLike]) -> BoardConfig:
    if config is None:
        return Difficulty.EASY.config
    if isinstance(config, Difficulty):
        return config.config
    return config


# ============================================================================
# Episode Statistics
# ============================================================================

@dataclass
class EpisodeStats:
    """Statistics for a single game."""

    total_reward: float = 0.0
    steps: int = 0
    won: bool = False
    revealed_cells: int = 0


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Play batches of random games and compare board configurations.

    Each move reveals a uniformly random cell from the environment's action
    mask. Because the first reveal is always safe, the random player opens
    every game with a free flood fill. With a seed, both the mine layouts
    and the player's choices are reproducible.
    """

    def __init__(
        self,
        board_config: Optional[ConfigLike] = None,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Default board configuration or preset.
            num_episodes: Number of games per configuration.
            max_steps: Step cap per game (default: one per cell).
            seed: Seed for mine layouts and move selection.
        """
        self.board_config = _as_config(board_config)
        self.num_episodes = num_episodes
        self.max_steps = max_steps
        self.seed = seed

    def select_action(
        self, valid_actions: np.ndarray, rng: np.random.Generator
    ) -> int:
        """Pick a random revealable cell, or 0 when none is left."""
        valid_indices = np.flatnonzero(valid_actions)
        if len(valid_indices) == 0:
            return 0
        return int(rng.choice(valid_indices))

    def play_episode(
        self,
        env: MinesweeperEnv,
        rng: np.random.Generator,
        seed: Optional[int] = None,
    ) -> EpisodeStats:
        """Play one game to completion or the step cap."""
        env.reset(seed=seed)
        stats = EpisodeStats()
        max_steps = self.max_steps or env.config.total_cells

        for _ in range(max_steps):
            action = self.select_action(env.get_action_mask(), rng)
            _, reward, terminated, truncated, info = env.step(action)

            stats.total_reward += float(reward)
            stats.steps += 1
            stats.revealed_cells = info["revealed"]

            if terminated or truncated:
                stats.won = info["game_state"] == "WON"
                break

        return stats

    def evaluate(self, board_config: Optional[ConfigLike] = None) -> Dict[str, float]:
        """
        Evaluate random play on one configuration.

        Args:
            board_config: Configuration or preset (default: the evaluator's).

        Returns:
            Dictionary with evaluation metrics.
        """
        config = self.board_config if board_config is None else _as_config(board_config)
        env = MinesweeperEnv(config=config)
        rng = np.random.default_rng(self.seed)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            # Seed only the first reset; later games continue the stream
            seed = self.seed if episode == 0 else None
            stats = self.play_episode(env, rng, seed=seed)

            wins += stats.won
            total_reward += stats.total_reward
            total_steps += stats.steps
            total_revealed += stats.revealed_cells

        logger.debug(
            "Evaluated %d games on %dx%d/%d: %d wins",
            self.num_episodes, config.rows, config.cols, config.mines, wins,
        )

        episodes = max(self.num_episodes, 1)
        return {
            "win_rate": wins / episodes,
            "avg_reward": total_reward / episodes,
            "avg_steps": total_steps / episodes,
            "avg_revealed": total_revealed / episodes,
        }

    def compare(
        self, configs: Dict[str, ConfigLike]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare random play across configurations.

        Args:
            configs: Dictionary of name -> configuration or preset.

        Returns:
            Dictionary of name -> evaluation metrics.
        """
        results = {}
        for name, config in configs.items():
            logger.info("Evaluating %s...", name)
            results[name] = self.evaluate(config)
        return results
