"""
Win/Tie Oracle for a single 3x3 grid

A grid is a 9-bit mask, bit i = cell i (i = r*3 + c).
The same test is used for sub-boards and for the meta-board.
"""

import numpy as np

# Bitmask win patterns (position = r*3+c)
WIN_MASKS = (
    0o007,  # row 0
    0o070,  # row 1
    0o700,  # row 2
    0o111,  # col 0
    0o222,  # col 1
    0o444,  # col 2
    0o421,  # diag
    0o124,  # anti-diag
)

FULL_MASK = 0o777


def _build_win_table():
    # WIN_TABLE[mask] = True if mask contains any full line
    masks = np.arange(FULL_MASK + 1, dtype=np.uint16)
    won = np.zeros(FULL_MASK + 1, dtype=bool)
    for w in WIN_MASKS:
        won |= (masks & w) == w
    return tuple(won.tolist())


WIN_TABLE = _build_win_table()


def is_won_naive(mask: int) -> bool:
    """Direct check against the 8 line patterns."""
    for w in WIN_MASKS:
        if mask & w == w:
            return True
    return False


def is_won(mask: int) -> bool:
    return WIN_TABLE[mask]


def is_tied(mask: int) -> bool:
    return mask == FULL_MASK


def line_count(mask: int) -> int:
    """Number of complete lines in mask (0-8)."""
    return sum(1 for w in WIN_MASKS if mask & w == w)
