"""
Status codes for squares in the visible field.

Covered states are negative, uncovered states are non-negative. Values
0-8 are plain ints meaning "revealed, with this many adjacent mines".
"""
from enum import IntEnum


# ============================================================================
# Constants
# ============================================================================

class Status(IntEnum):
    """Named status codes a square can report."""

    # Covered family
    COVERED = -1
    MINE_GUESS = -2
    QUESTION = -3

    # Uncovered family, only shown once a game is lost
    MINE = 9
    INCORRECT_GUESS = 10
    EXPLODED_MINE = 11


MAX_ADJACENT = 8

COVERED_STATUSES = frozenset(
    (Status.COVERED, Status.MINE_GUESS, Status.QUESTION)
)

_SYMBOLS = {
    Status.COVERED: ".",
    Status.MINE_GUESS: "F",
    Status.QUESTION: "?",
    Status.MINE: "*",
    Status.INCORRECT_GUESS: "X",
    Status.EXPLODED_MINE: "@",
}


# ============================================================================
# Helpers
# ============================================================================

def is_covered_status(code: int) -> bool:
    """Check if code is one of the covered states."""
    return code in COVERED_STATUSES


def is_revealed_count(code: int) -> bool:
    """Check if code is a revealed adjacent-mine count (0-8)."""
    return 0 <= code <= MAX_ADJACENT


def status_symbol(code: int) -> str:
    """
    Convert a status code to a single display character.

    Returns:
        '.': covered
        'F': mine guess
        '?': question
        ' ': revealed with no adjacent mines
        '1'-'8': revealed with adjacent mine count
        '*': unguessed mine (lost game)
        'X': incorrect guess (lost game)
        '@': exploded mine
    """
    code = int(code)
    if code == 0:
        return " "
    if is_revealed_count(code):
        return str(code)
    try:
        return _SYMBOLS[Status(code)]
    except ValueError:
        raise ValueError(f"Unknown status code: {code}") from None
