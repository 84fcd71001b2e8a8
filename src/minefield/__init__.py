"""
Minesweeper game model.

Provides the mine layout (Board), the player-visible state machine
(Display), the status codes they share, and a Gymnasium environment
that plays games through them.
"""
from .status import (
    Status,
    is_covered_status,
    is_revealed_count,
    status_symbol,
)
from .board import Board, BoardConfig, BEGINNER, INTERMEDIATE, EXPERT, PRESETS
from .display import Display, UncoverResult
from .environment import MinefieldEnv

__version__ = "1.0.0"

__all__ = [
    "Status",
    "is_covered_status",
    "is_revealed_count",
    "status_symbol",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "Display",
    "UncoverResult",
    "MinefieldEnv",
]
