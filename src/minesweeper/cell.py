"""
Cell module for the Minesweeper board engine.

A cell carries its content (mine or adjacency count) and a single visual
state, which keeps "revealed" and "flagged" mutually exclusive.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes shared with the environment adapter
HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single square of the board.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Mines among the neighbouring cells (0-8). Only
            meaningful for non-mine cells of a populated board.
        state: Hidden, revealed or flagged.
        flag_kept: Set when a flagged cell is forced open on a loss, so
            the flag still counts toward the placed flags.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    flag_kept: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell was hidden and is now revealed, False if it was
            already revealed or is flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def expose(self) -> None:
        """Force the cell open on the loss screen, remembering any flag."""
        if self.state == CellState.FLAGGED:
            self.flag_kept = True
        self.state = CellState.REVEALED

    def toggle_flag(self) -> bool:
        """
        Toggle the flag on this cell.

        Returns:
            True if the flag was toggled, False if the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    @property
    def counts_as_flag(self) -> bool:
        """Flagged now, or flagged when the loss exposed it."""
        return self.is_flagged or self.flag_kept

    def to_observation(self) -> int:
        """
        Encode the cell as seen by a player.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_CODE
        if self.state == CellState.FLAGGED:
            return FLAGGED_CODE
        if self.is_mine:
            return MINE_CODE
        return self.adjacent_mines
