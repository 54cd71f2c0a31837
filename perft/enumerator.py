"""
Perft Enumerator for Ultimate Tic-Tac-Toe

Counts every node of the move tree down to a fixed depth using make/undo
on a single Bitboard. Used as a move generation benchmark and as a
correctness oracle (known counts from the empty board: 81, 801, 7137, ...).
"""

from typing import Dict, Optional, Tuple
from tqdm import tqdm

from game import Bitboard


def enumerate_nodes(board: Bitboard, depth: int) -> int:
    """
    Count nodes below `board`.

    depth 0 counts the legal moves without playing them. A finished game
    contributes nothing, whatever depth is left.
    """
    if board.game_over():
        return 0

    # Each level owns its move list; siblings never see deeper moves
    moves = []
    n_moves = board.get_all_moves(moves)
    if depth == 0:
        return n_moves

    total = 0
    for move in moves:
        board.make_move(move.field, move.square, validate=False)
        total += 1 + enumerate_nodes(board, depth - 1)
        board.undo_move(move)
    return total


def count_leaves(board: Bitboard, plies: int) -> int:
    """Number of move sequences of exactly `plies` moves (classic perft)."""
    if plies == 0:
        return 1
    if board.game_over():
        return 0

    moves = []
    n_moves = board.get_all_moves(moves)
    if plies == 1:
        return n_moves

    total = 0
    for move in moves:
        board.make_move(move.field, move.square, validate=False)
        total += count_leaves(board, plies - 1)
        board.undo_move(move)
    return total


def _check_depth(depth):
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise TypeError(f"depth must be an int, got {type(depth).__name__}")
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")


def run_perft(depth: int) -> int:
    """Node count from the empty board."""
    _check_depth(depth)
    return enumerate_nodes(Bitboard(), depth)


def divide(depth: int, board: Optional[Bitboard] = None,
           show_progress: bool = False) -> Dict[Tuple[int, int], int]:
    """
    Per-root-move breakdown of the node count.

    Returns:
        {(field, cell): nodes} where nodes includes the root move itself.
        Values sum to enumerate_nodes(board, depth).
    """
    _check_depth(depth)
    if board is None:
        board = Bitboard()

    result = {}
    if board.game_over():
        return result

    moves = board.get_legal_moves()
    pbar = tqdm(total=len(moves), desc=f"Divide d={depth}") if show_progress else None

    for move in moves:
        if depth == 0:
            nodes = 1
        else:
            board.make_move(move.field, move.square, validate=False)
            nodes = 1 + enumerate_nodes(board, depth - 1)
            board.undo_move(move)
        result[(move.field, move.cell)] = nodes

        if show_progress:
            pbar.update(1)

    if show_progress:
        pbar.close()

    return result
