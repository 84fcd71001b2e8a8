"""
Display module for Minesweeper game.

Tracks what the player can see of a Board and implements the player
actions (flag cycling and uncovering) plus win/loss resolution.
"""
import logging
from enum import Enum, auto
from typing import List, Tuple

import numpy as np

from .board import Board
from .status import Status, MAX_ADJACENT


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class UncoverResult(Enum):
    """Outcome of an uncover action."""

    NO_EFFECT = auto()
    SAFE = auto()
    EXPLODED = auto()

    @property
    def hit_mine(self) -> bool:
        return self is UncoverResult.EXPLODED


# Flag cycle: covered -> mine guess -> question -> covered
_NEXT_GUESS = {
    Status.COVERED: Status.MINE_GUESS,
    Status.MINE_GUESS: Status.QUESTION,
    Status.QUESTION: Status.COVERED,
}


# ============================================================================
# Display Class
# ============================================================================

class Display:
    """
    Visible state of a game played on a Board.

    The display shares the board it was given rather than copying it,
    so re-populating the board is seen here. Every square starts out
    COVERED; see minefield.status for the full set of codes.
    """

    def __init__(self, board: Board) -> None:
        self._board = board
        self._state = np.full(
            (board.rows, board.cols), Status.COVERED, dtype=np.int8
        )
        self._flag_count = 0
        self._over = False
        self._won = False

    def reset(self) -> None:
        """Cover every square and start a new game on the same board."""
        self._state.fill(Status.COVERED)
        self._flag_count = 0
        self._over = False
        self._won = False

    # ========================================================================
    # Player Actions
    # ========================================================================

    def cycle_flag(self, row: int, col: int) -> bool:
        """
        Advance a covered square through COVERED -> MINE_GUESS -> QUESTION.

        Has no effect on uncovered squares or once the game is over.

        Returns:
            True if the square changed state.

        Raises:
            IndexError: If (row, col) is out of range.
        """
        current = self.status(row, col)
        if self._over or current not in _NEXT_GUESS:
            return False

        new_state = _NEXT_GUESS[current]
        if new_state == Status.MINE_GUESS:
            self._flag_count += 1
        elif current == Status.MINE_GUESS:
            self._flag_count = max(self._flag_count - 1, 0)

        self._state[row, col] = new_state
        logger.debug(
            "Square (%d, %d): %s -> %s",
            row, col, Status(current).name, new_state.name,
        )
        return True

    def uncover(self, row: int, col: int) -> UncoverResult:
        """
        Uncover a square.

        Hitting a mine loses the game. Otherwise the square is revealed,
        and if it has no adjacent mines the reveal spreads to the whole
        empty region around it. Squares guessed as mines are never
        uncovered by the spread.

        Out-of-range input, or any input after the game is over, is
        ignored rather than treated as an error.

        Returns:
            EXPLODED if (row, col) held a mine, SAFE if not, NO_EFFECT if
            nothing was done.
        """
        if self._over or not self._board.in_range(row, col):
            return UncoverResult.NO_EFFECT

        if self._board.has_mine(row, col):
            self._lose_game(row, col)
            return UncoverResult.EXPLODED

        self._flood_fill(row, col)
        if self._all_safe_uncovered():
            self._win_game()
        return UncoverResult.SAFE

    # ========================================================================
    # Resolution (Low-level)
    # ========================================================================

    def _flood_fill(self, row: int, col: int) -> None:
        """Reveal (row, col) and, through zero squares, its empty region."""
        revealed = 0
        stack: List[Tuple[int, int]] = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            state = self._state[current_row, current_col]
            if 0 <= state <= MAX_ADJACENT or state == Status.MINE_GUESS:
                continue

            count = self._board.adjacent_mine_count(current_row, current_col)
            self._state[current_row, current_col] = count
            revealed += 1
            if count == 0:
                stack.extend(self._board.neighbors(current_row, current_col))

        logger.debug("Uncovered %d squares from (%d, %d)", revealed, row, col)

    def _all_safe_uncovered(self) -> bool:
        """Check if every square without a mine has been revealed."""
        revealed = (self._state >= 0) & (self._state <= MAX_ADJACENT)
        return bool(np.all(revealed | self._board.mine_mask()))

    def _win_game(self) -> None:
        """Guess every remaining mine and end the game as won."""
        self._state[self._board.mine_mask()] = Status.MINE_GUESS
        self._over = True
        self._won = True
        logger.info("Game won")

    def _lose_game(self, row: int, col: int) -> None:
        """Show the final layout of a lost game exploded at (row, col)."""
        mines = self._board.mine_mask()
        self._state[(self._state == Status.MINE_GUESS) & ~mines] = (
            Status.INCORRECT_GUESS
        )
        self._state[(self._state == Status.COVERED) & mines] = Status.MINE
        self._state[row, col] = Status.EXPLODED_MINE
        self._over = True
        logger.info("Game lost: mine at (%d, %d)", row, col)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        """The board this display covers (shared, not a copy)."""
        return self._board

    @property
    def flag_count(self) -> int:
        return self._flag_count

    def status(self, row: int, col: int) -> int:
        """
        Get the visible status of a square.

        Returns:
            A Status member, or an int in 0-8 for a revealed count.

        Raises:
            IndexError: If (row, col) is out of range.
        """
        self._board.check_range(row, col)
        code = int(self._state[row, col])
        if 0 <= code <= MAX_ADJACENT:
            return code
        return Status(code)

    def is_uncovered(self, row: int, col: int) -> bool:
        """Whether the square shows an adjacent-mine count."""
        return 0 <= self.status(row, col) <= MAX_ADJACENT

    def mines_left(self) -> int:
        """
        Mines minus guesses placed. Says nothing about whether the
        guesses are right, and goes negative if there are more guesses
        than mines.
        """
        return self._board.mine_count - self._flag_count

    def is_over(self) -> bool:
        return self._over

    def is_won(self) -> bool:
        return self._won

    def is_lost(self) -> bool:
        return self._over and not self._won

    def observation(self) -> np.ndarray:
        """Copy of the status grid as an int8 array."""
        return self._state.copy()
