"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Display


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create an empty 9x9 board that will hold 10 mines."""
    return Board(9, 9, 10, seed=1234)


@pytest.fixture
def corner_mine_board() -> Board:
    """Create a 3x3 board with a single mine at (0, 0)."""
    return Board.from_mine_data([
        [True, False, False],
        [False, False, False],
        [False, False, False],
    ])


@pytest.fixture
def split_board() -> Board:
    """
    Create a 5x5 board with a wall of mines down column 2.

    Left and right halves are separate empty regions.
    """
    return Board.from_mine_data([
        [False, False, True, False, False],
        [False, False, True, False, False],
        [False, False, True, False, False],
        [False, False, True, False, False],
        [False, False, True, False, False],
    ])


@pytest.fixture
def scattered_board() -> Board:
    """Create a 4x4 board with mines at (0, 3), (1, 1) and (3, 0)."""
    return Board.from_mine_data([
        [False, False, False, True],
        [False, True, False, False],
        [False, False, False, False],
        [True, False, False, False],
    ])


@pytest.fixture
def empty_board() -> Board:
    """Create a 5x5 board with no mines for cascade testing."""
    return Board.from_mine_data([[False] * 5 for _ in range(5)])


# ============================================================================
# Display Fixtures
# ============================================================================

@pytest.fixture
def corner_display(corner_mine_board: Board) -> Display:
    """Display over the single-corner-mine board."""
    return Display(corner_mine_board)


@pytest.fixture
def split_display(split_board: Board) -> Display:
    """Display over the mine-wall board."""
    return Display(split_board)


@pytest.fixture
def scattered_display(scattered_board: Board) -> Display:
    """Display over the scattered-mines board."""
    return Display(scattered_board)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def small_config() -> BoardConfig:
    """Small board configuration for environment tests."""
    return BoardConfig(4, 4, 2)


@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
