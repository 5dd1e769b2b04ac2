"""
Unit tests for the random-play evaluator.
"""
import pytest
import numpy as np
from minesweeper import BoardConfig, Difficulty, MinesweeperEnv
from simulation import Evaluator


class TestActionSelection:
    """Test random move choice."""

    def test_picks_only_valid_action(self) -> None:
        evaluator = Evaluator()
        rng = np.random.default_rng(0)
        mask = np.array([False, False, True, False])
        for _ in range(10):
            assert evaluator.select_action(mask, rng) == 2

    def test_no_valid_action_returns_zero(self) -> None:
        evaluator = Evaluator()
        mask = np.zeros(4, dtype=bool)
        assert evaluator.select_action(mask, np.random.default_rng(0)) == 0

    def test_episode_never_repeats_a_cell(self) -> None:
        """Masked choices mean every step is a real reveal."""
        evaluator = Evaluator(Difficulty.EASY)
        env = MinesweeperEnv(Difficulty.EASY)
        stats = evaluator.play_episode(env, np.random.default_rng(4), seed=4)
        assert 1 <= stats.steps <= Difficulty.EASY.config.safe_cells + 1
        assert env.session.state.is_terminal is True


class TestEvaluator:
    """Test batch evaluation."""

    def test_default_config_is_easy(self) -> None:
        assert Evaluator().board_config == Difficulty.EASY.config

    def test_mine_free_board_always_wins(self) -> None:
        evaluator = Evaluator(BoardConfig(3, 3, 0), num_episodes=5, seed=0)
        results = evaluator.evaluate()
        assert results["win_rate"] == 1.0
        assert results["avg_steps"] == 1.0
        assert results["avg_reward"] == pytest.approx(10.0)
        assert results["avg_revealed"] == 9.0

    def test_metrics_are_bounded(self) -> None:
        evaluator = Evaluator(Difficulty.EASY, num_episodes=10, seed=0)
        results = evaluator.evaluate()
        assert set(results) == {"win_rate", "avg_reward", "avg_steps", "avg_revealed"}
        assert 0.0 <= results["win_rate"] <= 1.0
        assert 1.0 <= results["avg_steps"] <= 64
        assert results["avg_revealed"] >= 9

    def test_seeded_evaluation_is_reproducible(self) -> None:
        first = Evaluator(Difficulty.EASY, num_episodes=5, seed=2).evaluate()
        second = Evaluator(Difficulty.EASY, num_episodes=5, seed=2).evaluate()
        assert first == second

    def test_evaluate_accepts_other_config(self) -> None:
        evaluator = Evaluator(Difficulty.HARD, num_episodes=3, seed=0)
        results = evaluator.evaluate(BoardConfig(3, 3, 0))
        assert results["win_rate"] == 1.0

    def test_compare_reports_each_difficulty(self) -> None:
        evaluator = Evaluator(num_episodes=2, seed=0)
        results = evaluator.compare(
            {difficulty.name: difficulty for difficulty in Difficulty}
        )
        assert list(results) == ["EASY", "MEDIUM", "HARD"]
        for metrics in results.values():
            assert 0.0 <= metrics["win_rate"] <= 1.0

    def test_compare_matches_individual_runs(self) -> None:
        evaluator = Evaluator(num_episodes=3, seed=5)
        compared = evaluator.compare({"easy": Difficulty.EASY})
        assert compared["easy"] == evaluator.evaluate(Difficulty.EASY)
