"""
Minesweeper board engine.

Provides board generation with a safe first click, flood-fill revealing,
flag bookkeeping and win/loss tracking, plus a Gymnasium adapter.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, Difficulty, populate_board
from .errors import InvalidConfigurationError
from .session import GameSession, GameState, new_session
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "Difficulty",
    "populate_board",
    "InvalidConfigurationError",
    "GameSession",
    "GameState",
    "new_session",
    "MinesweeperEnv",
]
