"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    Board,
    BoardConfig,
    Cell,
    Difficulty,
    GameSession,
    new_session,
)


# ============================================================================
# Random Generator Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible mine layouts."""
    return np.random.default_rng(1234)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def easy_session(rng: np.random.Generator) -> GameSession:
    """Fresh 8x8 session with 10 mines and a seeded generator."""
    return new_session(Difficulty.EASY, rng=rng)


@pytest.fixture
def corner_mine_session() -> GameSession:
    """3x3 session with a single mine in the top-left corner, already laid out."""
    board = Board.from_mine_positions(3, 3, [(0, 0)])
    return GameSession(board=board, first_move_taken=True)


@pytest.fixture
def two_mine_session() -> GameSession:
    """4x4 session with mines in opposite corners, already laid out."""
    board = Board.from_mine_positions(4, 4, [(0, 0), (3, 3)])
    return GameSession(board=board, first_move_taken=True)


@pytest.fixture
def corridor_session() -> GameSession:
    """Mine-free 1x5 strip for flood-fill barrier tests."""
    board = Board.from_mine_positions(1, 5, [])
    return GameSession(board=board, first_move_taken=True)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(8, 8, 10)
