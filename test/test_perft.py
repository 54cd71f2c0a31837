"""
Perft enumerator tests.

Known node counts from the empty board, plus a cross-check against a
slow reference implementation that recomputes everything from a 9x9 grid.
"""

import random

import pytest

from game import Bitboard, play
from perft import enumerate_nodes, count_leaves, run_perft, divide
from perft.bench import make_random_position
from conftest import META_WIN_SEQ, ROW_WIN_SEQ

# Number of move sequences of exactly N plies from the empty board
LEAVES_BY_PLY = {1: 81, 2: 720, 3: 6336, 4: 55080}

WIN_PATTERNS = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6)              # diagonals
]


def _rc(field, cell):
    return (field // 3) * 3 + cell // 3, (field % 3) * 3 + cell % 3


def _field_state(grid, field):
    """0=open, 1=X won, 2=O won, 3=draw."""
    cells = [grid[r][c] for r, c in (_rc(field, i) for i in range(9))]
    for a, b, c in WIN_PATTERNS:
        if cells[a] == cells[b] == cells[c] != 0:
            return cells[a]
    if 0 not in cells:
        return 3
    return 0


def _reference_nodes(grid, active, player, depth):
    """Slow perft over a plain 9x9 grid (0 empty, 1 X, 2 O)."""
    meta = [_field_state(grid, f) for f in range(9)]
    for a, b, c in WIN_PATTERNS:
        if meta[a] == meta[b] == meta[c] and meta[a] in (1, 2):
            return 0
    if all(s != 0 for s in meta):
        return 0

    fields = range(9) if active is None else [active]
    moves = [
        (f, i) for f in fields if meta[f] == 0
        for i in range(9) if grid[_rc(f, i)[0]][_rc(f, i)[1]] == 0
    ]
    if depth == 0:
        return len(moves)

    total = 0
    for f, i in moves:
        r, c = _rc(f, i)
        grid[r][c] = player + 1
        nxt = i if _field_state(grid, i) == 0 else None
        total += 1 + _reference_nodes(grid, nxt, 1 - player, depth - 1)
        grid[r][c] = 0
    return total


def _reference_from_board(board, depth):
    grid = board.to_array().tolist()
    return _reference_nodes(grid, board.active, board.turn, depth)


class TestKnownCounts:
    """Node counts from the empty board."""

    def test_depth_0(self):
        # Empty board is unconstrained: every cell of every field
        assert run_perft(0) == 81

    def test_depth_1(self):
        # 72 replies get a fresh field (9 moves), 9 land in their own field (8)
        assert run_perft(1) == 81 + 72 * 9 + 9 * 8 == 801

    def test_depth_2(self):
        assert run_perft(2) == 7137

    def test_depth_3(self):
        assert run_perft(3) == 62217

    @pytest.mark.parametrize("plies,expected", sorted(LEAVES_BY_PLY.items()))
    def test_leaves_by_ply(self, plies, expected):
        assert count_leaves(Bitboard(), plies) == expected

    def test_nodes_are_sum_of_leaves(self):
        board = Bitboard()
        for depth in range(3):
            expected = sum(LEAVES_BY_PLY[p] for p in range(1, depth + 2))
            assert enumerate_nodes(board, depth) == expected

    def test_zero_plies_is_one_leaf(self):
        assert count_leaves(Bitboard(), 0) == 1


class TestEnumeratorContract:
    """Board state and edge cases."""

    def test_board_restored_after_walk(self):
        board = make_random_position(12, seed=3)
        before = board.snapshot()
        enumerate_nodes(board, 3)
        assert board.snapshot() == before

    def test_finished_game_counts_zero(self, meta_won_board):
        before = meta_won_board.snapshot()
        for depth in range(4):
            assert enumerate_nodes(meta_won_board, depth) == 0
            assert count_leaves(meta_won_board, depth + 1) == 0
        assert meta_won_board.snapshot() == before

    def test_game_ending_move_is_a_leaf(self):
        board = play(Bitboard(), META_WIN_SEQ[:-1])
        # The winning move still counts as a node but has no children
        counts = divide(3, board=board)
        assert counts[META_WIN_SEQ[-1]] == 1

    def test_after_sub_board_win(self, row_won_board):
        # 70 open cells, unconstrained
        assert enumerate_nodes(row_won_board, 0) == 70

    def test_negative_depth(self):
        with pytest.raises(ValueError):
            run_perft(-1)

    def test_non_int_depth(self):
        with pytest.raises(TypeError):
            run_perft(2.0)
        with pytest.raises(TypeError):
            run_perft(True)


class TestReference:
    """Agreement with the from-scratch reference implementation."""

    @pytest.mark.parametrize("depth", [0, 1, 2])
    def test_empty_board(self, depth):
        assert _reference_from_board(Bitboard(), depth) == run_perft(depth)

    @pytest.mark.parametrize("seed", range(12))
    def test_random_positions(self, seed):
        board = make_random_position(random.Random(seed).randint(10, 60), seed=seed)
        assert enumerate_nodes(board, 2) == _reference_from_board(board, 2)

    def test_near_meta_win(self):
        board = play(Bitboard(), META_WIN_SEQ[:-3])
        assert enumerate_nodes(board, 2) == _reference_from_board(board, 2)

    def test_after_row_win(self):
        board = play(Bitboard(), ROW_WIN_SEQ)
        assert enumerate_nodes(board, 1) == _reference_from_board(board, 1)


class TestDivide:
    """Per-root-move breakdown."""

    @pytest.mark.parametrize("depth", [0, 1, 2])
    def test_sums_to_total(self, depth):
        counts = divide(depth)
        assert len(counts) == 81
        assert sum(counts.values()) == run_perft(depth)

    def test_depth_0_all_ones(self):
        assert set(divide(0).values()) == {1}

    def test_depth_1_values(self):
        counts = divide(1)
        # Playing cell i in field i keeps the opponent in a field with 8 free cells
        for (field, cell), n in counts.items():
            assert n == (1 + 8 if field == cell else 1 + 9)

    def test_keys_are_field_cell(self):
        counts = divide(0)
        assert sorted(counts) == [(f, c) for f in range(9) for c in range(9)]

    def test_finished_game_empty(self, meta_won_board):
        assert divide(2, board=meta_won_board) == {}

    def test_progress_bar(self):
        counts = divide(1, show_progress=True)
        assert sum(counts.values()) == 801


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
