from .oracle import WIN_MASKS, FULL_MASK, is_won, is_won_naive, is_tied
from .move import FieldStatus, Move
from .board import (
    Bitboard, IllegalMoveError, X, O,
    cell_to_move, move_to_cell, derive_caches, play
)

__all__ = [
    'WIN_MASKS', 'FULL_MASK', 'is_won', 'is_won_naive', 'is_tied',
    'FieldStatus', 'Move',
    'Bitboard', 'IllegalMoveError', 'X', 'O',
    'cell_to_move', 'move_to_cell', 'derive_caches', 'play'
]
