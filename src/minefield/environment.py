"""
Gymnasium environment wrapper for Minesweeper.

Drives a Board and Display pair: mines are placed on the first uncover
so the first click is always safe, and play stops once the display
reports the game over.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .display import Display, UncoverResult
from .status import Status, is_covered_status, status_symbol


_UNCOVERABLE = frozenset((Status.COVERED, Status.QUESTION))


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array of status codes (see minefield.status):
        - -1 = covered, -2 = mine guess, -3 = question
        - 0-8 = revealed square with adjacent mine count
        - 9, 10, 11 = mine, incorrect guess, exploded mine (lost game)

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols uncovers cell divmod(i, cols).
        Action i >= rows * cols cycles the guess on cell
        divmod(i - rows * cols, cols).

    Rewards:
        - +1 for uncovering a safe square
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for changing a guess
        - -0.1 for an action with no effect
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board.from_config(self.config)
        self.display = Display(self.board)
        self.render_mode = render_mode

        self._num_cells = self.config.rows * self.config.cols

        self.observation_space = spaces.Box(
            low=int(Status.QUESTION),
            high=int(Status.EXPLODED_MINE),
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._num_cells)

        self._steps = 0
        self._populated = False

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new game.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.board.seed(seed)
        self.board.reset_empty()
        self.display.reset()
        self._steps = 0
        self._populated = False

        return self.display.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Uncover or guess action index (see class docstring).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, row, col = self.decode_action(action)
        self._steps += 1

        if flag:
            reward = self._apply_guess(row, col)
        else:
            reward = self._apply_uncover(row, col)

        observation = self.display.observation()
        terminated = self.display.is_over()
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[bool, int, int]:
        """
        Split an action index into (is_guess, row, col).

        Raises:
            ValueError: If action is outside the action space.
        """
        action = int(action)
        if not 0 <= action < 2 * self._num_cells:
            raise ValueError(f"Invalid action: {action}")
        flag, cell = divmod(action, self._num_cells)
        row, col = divmod(cell, self.config.cols)
        return bool(flag), row, col

    def encode_action(self, row: int, col: int, flag: bool = False) -> int:
        """Convert (row, col) and action kind to a flat action index."""
        cell = row * self.config.cols + col
        return cell + self._num_cells if flag else cell

    def _apply_uncover(self, row: int, col: int) -> float:
        """Uncover a square, placing the mines first on the opening move."""
        if self.display.is_over() or not self._can_uncover(row, col):
            return -0.1

        if not self._populated:
            self.board.populate(row, col)
            self._populated = True

        result = self.display.uncover(row, col)
        if result is UncoverResult.EXPLODED:
            return -10.0
        if self.display.is_won():
            return 10.0
        return 1.0

    def _can_uncover(self, row: int, col: int) -> bool:
        """Mine guesses protect a square from being uncovered."""
        return self.display.status(row, col) in _UNCOVERABLE

    def _apply_guess(self, row: int, col: int) -> float:
        """Cycle the guess on a square."""
        if self.display.cycle_flag(row, col):
            return 0.0
        return -0.1

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "mines_left": self.display.mines_left(),
            "game_state": self.game_state,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    @property
    def game_state(self) -> str:
        """PLAYING, WON or LOST."""
        if self.display.is_won():
            return "WON"
        if self.display.is_lost():
            return "LOST"
        return "PLAYING"

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        obs = self.display.observation()
        lines = []
        for row in range(self.config.rows):
            lines.append(" ".join(status_symbol(val) for val in obs[row]))
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the game.

        Uncovering is offered on covered and questioned squares, guesses
        on any covered-family square. Nothing is valid once the game ends.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.display.is_over():
            return mask
        obs = self.display.observation().ravel()
        mask[:self._num_cells] = [int(val) in _UNCOVERABLE for val in obs]
        mask[self._num_cells:] = [is_covered_status(int(val)) for val in obs]
        return mask

    def action_masks(self) -> np.ndarray:
        """Alias used by maskable policy wrappers."""
        return self.get_action_mask()
