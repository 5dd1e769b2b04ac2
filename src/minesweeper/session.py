"""
Game session module for the Minesweeper engine.

A session is the mutable unit a front end drives: it owns one board, the
game state, the first-move bookkeeping and the flag-mode input toggle.
Invalid commands are ignored rather than raised.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

import numpy as np

from .board import Board, BoardConfig, Difficulty, populate_board
from .cell import Cell

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not GameState.PLAYING


# ============================================================================
# Game Session
# ============================================================================

@dataclass
class GameSession:
    """
    One game in progress.

    Attributes:
        board: Grid being played. Unpopulated until the first reveal.
        state: Playing, won or lost.
        first_move_taken: Whether mines have been laid out.
        flag_mode: When set, a primary click flags instead of revealing.
        rng: Generator used to place mines on the first reveal.
    """

    board: Board = field(default_factory=Board)
    state: GameState = GameState.PLAYING
    first_move_taken: bool = False
    flag_mode: bool = False
    rng: np.random.Generator = field(
        default_factory=np.random.default_rng, repr=False
    )

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Primary click on a cell.

        In flag mode the click toggles the flag instead. The first reveal
        lays out mines around the clicked cell. Revealing a mine loses the
        game and exposes every mine; otherwise a flood fill opens the
        surrounding empty region and the win condition is checked.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the command changed the session, False if ignored.
        """
        if self.state != GameState.PLAYING:
            return False
        cell = self.board.get_cell(row, col)
        if cell is None or cell.is_revealed:
            return False

        if self.flag_mode:
            return self.toggle_flag(row, col)

        if cell.is_flagged:
            return False

        if not self.first_move_taken:
            self._handle_first_move(row, col)
            cell = self.board.get_cell(row, col)

        if cell.is_mine:
            self._lose()
            return True

        self.board.flood_reveal(row, col)
        self._check_win_condition()
        return True

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Secondary click on a cell: place or remove a flag.

        Works regardless of flag mode.

        Returns:
            True if the flag was toggled, False otherwise.
        """
        if self.state != GameState.PLAYING:
            return False
        cell = self.board.get_cell(row, col)
        if cell is None:
            return False
        return cell.toggle_flag()

    def set_flag_mode(self, enabled: bool) -> None:
        """Switch what a primary click does. No effect on the board."""
        self.flag_mode = enabled

    def restart(self) -> None:
        """
        Start over with the same dimensions and mine count.

        Raises:
            InvalidConfigurationError: If the board was built by hand with
                too many mines to honour a safe first click. The session is
                left untouched.
        """
        config = BoardConfig(self.board.rows, self.board.cols, self.board.mines)
        self.board = Board.from_config(config)
        self.state = GameState.PLAYING
        self.first_move_taken = False
        self.flag_mode = False

    # ========================================================================
    # Internals
    # ========================================================================

    def _handle_first_move(self, row: int, col: int) -> None:
        """Replace the unpopulated board with one safe around the click."""
        self.board = populate_board(
            self.board.rows,
            self.board.cols,
            self.board.mines,
            row,
            col,
            self.rng,
        )
        self.first_move_taken = True

    def _lose(self) -> None:
        self.state = GameState.LOST
        exposed = self.board.reveal_all_mines()
        logger.info("Game lost: %d mines exposed", exposed)

    def _check_win_condition(self) -> None:
        """Won once every non-mine cell is revealed."""
        if self.board.all_safe_revealed():
            self.state = GameState.WON
            logger.info(
                "Game won on %dx%d board with %d mines",
                self.board.rows, self.board.cols, self.board.mines,
            )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def mines_remaining(self) -> int:
        """Mine count minus placed flags. Can go negative."""
        return self.board.mines - self.board.count_flags()

    @property
    def is_playing(self) -> bool:
        return self.state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self.state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self.state == GameState.LOST

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        return self.board.get_cell(row, col)


# ============================================================================
# Factory
# ============================================================================

def new_session(
    difficulty: Union[Difficulty, BoardConfig] = Difficulty.EASY,
    rng: Optional[np.random.Generator] = None,
) -> GameSession:
    """
    Create a fresh session for a difficulty preset or custom configuration.

    Args:
        difficulty: Preset or validated board configuration.
        rng: Generator for mine placement; unseeded when omitted.

    Returns:
        Session with an unpopulated board in the playing state.
    """
    config = difficulty.config if isinstance(difficulty, Difficulty) else difficulty
    session = GameSession(board=Board.from_config(config))
    if rng is not None:
        session.rng = rng
    return session
