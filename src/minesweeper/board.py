"""
Board module for the Minesweeper engine.

Implements the grid of cells, board configuration and difficulty presets,
mine placement around a safe first click, and flood-fill revealing.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState
from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

# Cells in the 3x3 block kept mine-free around the first click
SAFE_ZONE_CELLS = 9


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines: Total mines to place.
    """

    rows: int = 8
    cols: int = 8
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure the first-click safe zone can always be honoured."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfigurationError("Board dimensions must be positive")
        if self.mines < 0:
            raise InvalidConfigurationError("Number of mines cannot be negative")
        max_mines = max(self.rows * self.cols - SAFE_ZONE_CELLS, 0)
        if self.mines > max_mines:
            raise InvalidConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        return self.rows * self.cols - self.mines


class Difficulty(Enum):
    """Built-in difficulty presets."""

    EASY = BoardConfig(8, 8, 10)
    MEDIUM = BoardConfig(12, 12, 30)
    HARD = BoardConfig(16, 16, 60)

    @property
    def config(self) -> BoardConfig:
        return self.value

    @property
    def rows(self) -> int:
        return self.value.rows

    @property
    def cols(self) -> int:
        return self.value.cols

    @property
    def mines(self) -> int:
        return self.value.mines

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Look up a preset by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise InvalidConfigurationError(
                f"Unknown difficulty: {name!r}"
            ) from None


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns the grid of cells. A fresh board is unpopulated: no mines and all
    adjacency counts zero until ``populate_board`` lays mines out around the
    first click.
    """

    rows: int = 8
    cols: int = 8
    mines: int = 10
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _populated: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if not self._grid:
            self._init_grid()

    @classmethod
    def from_config(cls, config: BoardConfig) -> "Board":
        """Create an unpopulated board with the configured dimensions."""
        return cls(config.rows, config.cols, config.mines)

    @classmethod
    def from_mine_positions(
        cls, rows: int, cols: int, positions: Iterable[Position]
    ) -> "Board":
        """
        Build a populated board with mines at exact positions.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            positions: (row, col) positions holding a mine.

        Returns:
            Populated board whose mine count is the number of positions.
        """
        unique = set(positions)
        board = cls(rows, cols, len(unique))
        for row, col in unique:
            if not board.is_valid_position(row, col):
                raise InvalidConfigurationError(
                    f"Mine position {(row, col)} is outside the board"
                )
        board._place_mines(unique)
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.cols)]
            for _ in range(self.rows)
        ]
        self._populated = False

    def _place_mines(self, positions: Iterable[Position]) -> None:
        """Mark mines and compute adjacency counts."""
        for row, col in positions:
            self._grid[row][col].is_mine = True
        self._calculate_adjacent_mines()
        self._populated = True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row, col in self.positions():
            if not self._grid[row][col].is_mine:
                count = self._count_adjacent_mines(row, col)
                self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighbouring cell positions, clipped at the grid edge.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def positions(self) -> Iterator[Position]:
        """Iterate over every (row, col) in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    # ========================================================================
    # Revealing (Mid-level)
    # ========================================================================

    def flood_reveal(self, row: int, col: int) -> int:
        """
        Reveal a cell and everything reachable through zero-count cells.

        Uses an explicit stack. Flagged and already revealed cells are
        skipped, so flags act as barriers.

        Args:
            row: Row index to start from.
            col: Column index to start from.

        Returns:
            Number of cells newly revealed.
        """
        if not self.is_valid_position(row, col):
            return 0

        revealed = 0
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if not cell.reveal():
                continue
            revealed += 1
            if not cell.is_mine and cell.adjacent_mines == 0:
                stack.extend(self.get_neighbors(current_row, current_col))
        return revealed

    def reveal_all_mines(self) -> int:
        """Expose every mine cell, flagged or not. Returns the mine count."""
        exposed = 0
        for row, col in self.positions():
            cell = self._grid[row][col]
            if cell.is_mine:
                cell.expose()
                exposed += 1
        return exposed

    def all_safe_revealed(self) -> bool:
        """Check if every non-mine cell is revealed."""
        return all(
            cell.is_mine or cell.is_revealed
            for row in self._grid
            for cell in row
        )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def is_populated(self) -> bool:
        """Whether mines have been laid out."""
        return self._populated

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def count_flags(self) -> int:
        return sum(cell.counts_as_flag for row in self._grid for cell in row)

    def count_revealed(self) -> int:
        return sum(cell.is_revealed for row in self._grid for cell in row)

    def count_mines(self) -> int:
        return sum(cell.is_mine for row in self._grid for cell in row)

    def get_observation(self) -> np.ndarray:
        """
        Get the player-visible board as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row, col in self.positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_mine_mask(self) -> np.ndarray:
        """Boolean array marking mine cells."""
        mask = np.zeros((self.rows, self.cols), dtype=bool)
        for row, col in self.positions():
            mask[row, col] = self._grid[row][col].is_mine
        return mask

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that a reveal could open.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        return [
            (row, col)
            for row, col in self.positions()
            if self._grid[row][col].state == CellState.HIDDEN
        ]


# ============================================================================
# Mine Placement
# ============================================================================

def _in_safe_zone(
    row: int, col: int, exclude_row: int, exclude_col: int
) -> bool:
    """Raw (unclipped) 3x3 range test around the excluded centre."""
    return (
        exclude_row - 1 <= row <= exclude_row + 1
        and exclude_col - 1 <= col <= exclude_col + 1
    )


def _safe_zone_size(
    rows: int, cols: int, exclude_row: int, exclude_col: int
) -> int:
    """Number of in-bounds cells inside the safe zone."""
    zone_rows = min(rows, exclude_row + 2) - max(0, exclude_row - 1)
    zone_cols = min(cols, exclude_col + 2) - max(0, exclude_col - 1)
    return max(zone_rows, 0) * max(zone_cols, 0)


def populate_board(
    rows: int,
    cols: int,
    mine_count: int,
    exclude_row: int,
    exclude_col: int,
    rng: Optional[np.random.Generator] = None,
) -> Board:
    """
    Lay out mines while keeping the 3x3 block around a click free.

    Mines are placed by rejection sampling: draw a uniformly random cell,
    keep it if it is neither a mine already nor inside the safe zone.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Exact number of mines to place.
        exclude_row: Row of the first click.
        exclude_col: Column of the first click.
        rng: Random generator; a fresh unseeded one when omitted.

    Returns:
        Populated board with adjacency counts computed.

    Raises:
        InvalidConfigurationError: If the click is off the board or there
            are fewer placeable cells than mines.
    """
    if rows < 1 or cols < 1:
        raise InvalidConfigurationError("Board dimensions must be positive")
    if not (0 <= exclude_row < rows and 0 <= exclude_col < cols):
        raise InvalidConfigurationError(
            f"Excluded cell {(exclude_row, exclude_col)} is outside the board"
        )
    if mine_count < 0:
        raise InvalidConfigurationError("Number of mines cannot be negative")

    placeable = rows * cols - _safe_zone_size(
        rows, cols, exclude_row, exclude_col
    )
    if mine_count > placeable:
        raise InvalidConfigurationError(
            f"Cannot place {mine_count} mines: only {placeable} cells lie "
            f"outside the safe zone around {(exclude_row, exclude_col)}"
        )

    rng = rng if rng is not None else np.random.default_rng()
    mine_positions = set()
    while len(mine_positions) < mine_count:
        row = int(rng.integers(rows))
        col = int(rng.integers(cols))
        if (row, col) in mine_positions:
            continue
        if _in_safe_zone(row, col, exclude_row, exclude_col):
            continue
        mine_positions.add((row, col))

    board = Board(rows, cols, mine_count)
    board._place_mines(mine_positions)
    logger.debug(
        "Placed %d mines on %dx%d board avoiding %s",
        mine_count, rows, cols, (exclude_row, exclude_col),
    )
    return board
