"""Shared fixtures: hand-checked legal move sequences, as (field, cell) pairs."""

import pytest

from game import Bitboard, play

# X takes the top row (cells 0, 1, 2) of field 0; O's replies keep sending X back.
ROW_WIN_SEQ = [(0, 1), (1, 0), (0, 2), (2, 0), (0, 0)]

# X wins fields 0 (row 3-4-5), 1 (row 6-7-8) and 2 (column 0-3-6):
# the top row of the meta-board, after 17 moves.
META_WIN_SEQ = [
    (0, 3), (3, 0), (0, 4), (4, 0), (0, 5),
    (5, 1), (1, 6), (6, 1), (1, 7), (7, 1), (1, 8),
    (8, 2), (2, 0), (4, 2), (2, 3), (3, 2), (2, 6),
]

# Filling one field in this cell order, alternating players, leaves no line:
# first mover gets {0, 2, 3, 4, 7}, second gets {1, 5, 6, 8}.
TIE_CELL_ORDER = [0, 1, 2, 5, 3, 6, 4, 8, 7]


def fill_tied(board, field):
    """Fill `field` to a draw, ignoring the sub-board constraint."""
    for cell in TIE_CELL_ORDER:
        board.make_move(field, 1 << cell, validate=False)
    return board


@pytest.fixture
def board():
    return Bitboard()


@pytest.fixture
def row_won_board():
    return play(Bitboard(), ROW_WIN_SEQ)


@pytest.fixture
def meta_won_board():
    return play(Bitboard(), META_WIN_SEQ)
