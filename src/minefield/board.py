"""
Board module for Minesweeper game.

Holds the actual mine layout: where the mines are, bounds checking,
and adjacency counting. Knows nothing about what the player can see.
"""
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np


logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

def _check_mine_density(rows: int, cols: int, mine_count: int) -> None:
    """Ensure dimensions and mine count satisfy the board invariants."""
    if rows < 1 or cols < 1:
        raise ValueError("Board dimensions must be positive")
    if mine_count < 0:
        raise ValueError("Number of mines cannot be negative")
    if mine_count >= rows * cols / 3:
        raise ValueError(
            f"Too many mines (must be under a third of {rows * cols} squares)"
        )


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        _check_mine_density(self.rows, self.cols, self.mine_count)


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Grid of mine locations for one game.

    A board built from dimensions starts empty: mine_count is the number
    of mines it will hold once populate() runs. A board built from
    explicit mine data reports the number of mines in that data.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        mine_count: int,
        seed: Optional[int] = None,
    ) -> None:
        """
        Create an empty board that may later hold mine_count mines.

        Args:
            rows: Number of rows, must be positive.
            cols: Number of columns, must be positive.
            mine_count: Mines to place on populate(), 0 <= n < rows*cols/3.
            seed: Random seed for reproducible mine placement.

        Raises:
            ValueError: If dimensions or mine count are invalid.
        """
        _check_mine_density(rows, cols, mine_count)
        self._rows = rows
        self._cols = cols
        self._mine_count = mine_count
        self._cells = np.zeros((rows, cols), dtype=bool)
        self._rng = random.Random(seed)

    @classmethod
    def from_config(
        cls, config: BoardConfig, seed: Optional[int] = None
    ) -> "Board":
        """Create an empty board sized by a BoardConfig."""
        return cls(config.rows, config.cols, config.mine_count, seed=seed)

    @classmethod
    def from_mine_data(cls, mine_data: Sequence[Sequence[bool]]) -> "Board":
        """
        Create a board holding exactly the mines in mine_data.

        has_mine(row, col) is true iff mine_data[row][col] is true, and
        mine_count is the number of true values.

        Args:
            mine_data: Rectangular grid of booleans, at least 1x1.

        Raises:
            ValueError: If mine_data is not 2-D, is empty or is ragged.
        """
        if any(np.ndim(row) != 1 for row in mine_data):
            raise ValueError("Mine data must be a 2-D grid")
        if len(mine_data) == 0 or len(mine_data[0]) == 0:
            raise ValueError("Mine data must have at least one row and column")
        width = len(mine_data[0])
        if any(len(row) != width for row in mine_data):
            raise ValueError("Mine data rows must all have the same length")

        cells = np.array(mine_data, dtype=bool)
        board = cls(cells.shape[0], cells.shape[1], 0)
        board._cells = cells
        board._mine_count = int(cells.sum())
        return board

    # ========================================================================
    # Mine Placement
    # ========================================================================

    def populate(self, avoid_row: int, avoid_col: int) -> None:
        """
        Place mine_count mines at random, never at (avoid_row, avoid_col).

        Any mines already on the board are removed first.

        Args:
            avoid_row: Row of the location to keep mine-free.
            avoid_col: Column of the location to keep mine-free.

        Raises:
            IndexError: If the avoided location is out of range.
        """
        self.check_range(avoid_row, avoid_col)
        self.reset_empty()

        positions = self._get_valid_mine_positions((avoid_row, avoid_col))
        if self._mine_count > len(positions):
            raise ValueError(
                f"Cannot place {self._mine_count} mines "
                f"in {len(positions)} free squares"
            )
        for row, col in self._rng.sample(positions, self._mine_count):
            self._cells[row, col] = True

        logger.debug(
            "Placed %d mines on %dx%d board avoiding (%d, %d)",
            self._mine_count, self._rows, self._cols, avoid_row, avoid_col,
        )

    def _get_valid_mine_positions(
        self, exclude: Tuple[int, int]
    ) -> List[Tuple[int, int]]:
        """Get all positions a mine may be placed at."""
        return [
            (row, col)
            for row in range(self._rows)
            for col in range(self._cols)
            if (row, col) != exclude
        ]

    def seed(self, seed: Optional[int] = None) -> None:
        """Re-seed mine placement so later populate() calls repeat."""
        self._rng.seed(seed)

    def reset_empty(self) -> None:
        """
        Remove every mine. mine_count is unchanged, so until the next
        populate() it no longer matches the mines actually on the board.
        """
        self._cells[:, :] = False

    # ========================================================================
    # Queries
    # ========================================================================

    def in_range(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self._rows and 0 <= col < self._cols

    def has_mine(self, row: int, col: int) -> bool:
        """Whether there is a mine at (row, col)."""
        self.check_range(row, col)
        return bool(self._cells[row, col])

    def adjacent_mine_count(self, row: int, col: int) -> int:
        """
        Count mines in the 8 squares around (row, col).

        A mine at (row, col) itself is not counted, and squares past the
        edge of the board are skipped, so the result is in [0, 8].
        """
        self.check_range(row, col)
        window = self._cells[
            max(row - 1, 0):row + 2,
            max(col - 1, 0):col + 2,
        ]
        return int(window.sum()) - int(self._cells[row, col])

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-range neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_range(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def check_range(self, row: int, col: int) -> None:
        """Raise IndexError unless (row, col) is on the board."""
        if not self.in_range(row, col):
            raise IndexError(
                f"Location ({row}, {col}) is outside "
                f"{self._rows}x{self._cols} board"
            )

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def mine_count(self) -> int:
        """Declared number of mines (see populate and reset_empty)."""
        return self._mine_count

    @property
    def placed_mines(self) -> int:
        """Number of mines actually on the board right now."""
        return int(self._cells.sum())

    def mine_mask(self) -> np.ndarray:
        """Copy of the mine layout as a boolean array."""
        return self._cells.copy()

    def __repr__(self) -> str:
        return (
            f"Board(rows={self._rows}, cols={self._cols}, "
            f"mine_count={self._mine_count})"
        )
