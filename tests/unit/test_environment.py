"""
Unit tests for MinesweeperEnv.

Tests spaces, reset/step semantics, rewards, seeding, and action masks.
"""
import pytest
import numpy as np
from minesweeper import BoardConfig, Difficulty, MinesweeperEnv


@pytest.fixture
def env() -> MinesweeperEnv:
    return MinesweeperEnv(Difficulty.EASY)


class TestSpaces:
    """Test observation and action spaces."""

    def test_default_config_is_easy(self) -> None:
        assert MinesweeperEnv().config == Difficulty.EASY.config

    def test_spaces_match_board(self) -> None:
        env = MinesweeperEnv(Difficulty.MEDIUM)
        assert env.observation_space.shape == (12, 12)
        assert env.action_space.n == 144

    def test_render_modes_are_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported render mode"):
            MinesweeperEnv(render_mode="human")


class TestResetAndStep:
    """Test episode flow."""

    def test_reset_returns_hidden_board(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=0)
        assert obs.shape == (8, 8)
        assert np.all(obs == -1)
        assert info["steps"] == 0
        assert info["game_state"] == "PLAYING"
        assert info["mines_remaining"] == 10
        assert info["total_safe"] == 54

    def test_first_step_is_safe(self, env: MinesweeperEnv) -> None:
        for seed in range(10):
            env.reset(seed=seed)
            _, reward, terminated, truncated, info = env.step(0)
            assert reward in (1.0, 10.0)
            assert info["game_state"] != "LOST"
            assert truncated is False

    def test_repeated_action_is_invalid(self, env: MinesweeperEnv) -> None:
        env.reset(seed=3)
        env.step(27)
        _, reward, _, _, _ = env.step(27)
        assert reward == pytest.approx(-0.1)

    def test_out_of_range_action_is_invalid(self, env: MinesweeperEnv) -> None:
        env.reset(seed=3)
        _, reward, _, _, info = env.step(64)
        assert reward == pytest.approx(-0.1)
        assert info["revealed"] == 0

    def test_hitting_mine_terminates(self, env: MinesweeperEnv) -> None:
        env.reset(seed=5)
        env.step(0)
        mines = env.session.board.get_mine_mask().flatten()
        action = int(np.flatnonzero(mines)[0])
        obs, reward, terminated, _, info = env.step(action)
        assert reward == pytest.approx(-10.0)
        assert terminated is True
        assert info["game_state"] == "LOST"
        assert np.count_nonzero(obs == 9) == 10

    def test_mine_free_board_wins_on_first_step(self) -> None:
        env = MinesweeperEnv(BoardConfig(3, 3, 0))
        env.reset(seed=0)
        _, reward, terminated, _, info = env.step(4)
        assert reward == pytest.approx(10.0)
        assert terminated is True
        assert info["revealed"] == 9

    def test_reset_restarts_session(self, env: MinesweeperEnv) -> None:
        env.reset(seed=1)
        env.step(10)
        obs, info = env.reset()
        assert np.all(obs == -1)
        assert env.session.first_move_taken is False
        assert info["steps"] == 0

    def test_same_seed_same_layout(self) -> None:
        first, second = MinesweeperEnv(), MinesweeperEnv()
        first.reset(seed=11)
        second.reset(seed=11)
        obs_first = first.step(36)[0]
        obs_second = second.step(36)[0]
        assert np.array_equal(obs_first, obs_second)


class TestActionMask:
    """Test valid action masks."""

    def test_new_episode_all_valid(self, env: MinesweeperEnv) -> None:
        env.reset(seed=0)
        mask = env.get_action_mask()
        assert mask.dtype == bool
        assert mask.sum() == 64

    def test_revealed_cells_masked_out(self, env: MinesweeperEnv) -> None:
        env.reset(seed=0)
        _, _, _, _, info = env.step(0)
        mask = env.get_action_mask()
        assert mask[0] == False  # noqa: E712
        assert mask.sum() == info["valid_actions"]
        assert mask.sum() == 64 - info["revealed"]
