import numpy as np

from .move import FieldStatus, Move
from .oracle import WIN_TABLE, FULL_MASK, is_won, is_tied

X, O = 0, 1

UNDECIDED = FieldStatus.UNDECIDED
TIED = FieldStatus.TIED
_WON_BY = (FieldStatus.X_WON, FieldStatus.O_WON)

_ALL_FIELDS = tuple(range(9))
_SQUARES = tuple(1 << i for i in range(9))


class IllegalMoveError(ValueError):
    pass


def cell_to_move(r, c):
    """Global (row, col) on the 9x9 grid -> (field, square)."""
    if not (0 <= r < 9 and 0 <= c < 9):
        raise IllegalMoveError(f"Cell out of range: ({r}, {c})")
    field = (r // 3) * 3 + c // 3
    cell = (r % 3) * 3 + c % 3
    return field, 1 << cell


def move_to_cell(field, square):
    """(field, square) -> global (row, col) on the 9x9 grid."""
    cell = square.bit_length() - 1
    return (field // 3) * 3 + cell // 3, (field % 3) * 3 + cell % 3


def derive_caches(board0, board1):
    """
    Rebuild every cached value from the occupancy masks alone.

    Returns:
        (status, meta, decided, over) with status a list of 9 FieldStatus
        and meta the [X, O] meta-board masks
    """
    status = []
    meta = [0, 0]
    for field in range(9):
        x, o = board0[field], board1[field]
        if is_won(x):
            status.append(FieldStatus.X_WON)
            meta[X] |= 1 << field
        elif is_won(o):
            status.append(FieldStatus.O_WON)
            meta[O] |= 1 << field
        elif is_tied(x | o):
            status.append(TIED)
        else:
            status.append(UNDECIDED)
    decided = sum(1 for s in status if s.is_decided)
    over = is_won(meta[X]) or is_won(meta[O]) or decided == 9
    return status, meta, decided, over


class Bitboard:
    """
    Ultimate Tic-Tac-Toe position as 18 nine-bit masks.

    board[player][field] holds the cells of sub-board `field` owned by
    `player`. Sub-board status, meta-board masks, the decided count and the
    game-over flag are cached and updated in make_move/undo_move, never
    recomputed on read.

    active is None when every sub-board is playable, else the one field
    the side to move is sent to.
    """

    def __init__(self):
        self.board = [[0] * 9, [0] * 9]
        self.status = [UNDECIDED] * 9
        self.meta = [0, 0]
        self.active = None
        self.turn = X
        self.decided = 0
        self.over = False

    def clone(self):
        new_board = Bitboard.__new__(Bitboard)
        new_board.board = [self.board[0][:], self.board[1][:]]
        new_board.status = self.status[:]
        new_board.meta = self.meta[:]
        new_board.active = self.active
        new_board.turn = self.turn
        new_board.decided = self.decided
        new_board.over = self.over
        return new_board

    def snapshot(self):
        return (
            tuple(self.board[0]),
            tuple(self.board[1]),
            tuple(self.status),
            tuple(self.meta),
            self.active,
            self.turn,
            self.decided,
            self.over,
        )

    def game_over(self) -> bool:
        return self.over

    def game_tied(self) -> bool:
        return self.decided == 9 and self.winner() is None

    def winner(self):
        if is_won(self.meta[X]):
            return X
        if is_won(self.meta[O]):
            return O
        return None

    def get_all_moves(self, moves) -> int:
        """
        Append every legal move to `moves` and return how many were added.

        Order: field ascending, then cell ascending. A constraint that
        points at a decided field yields nothing for that field.
        """
        if self.over:
            return 0

        status = self.status
        board0, board1 = self.board
        active = self.active
        meta = self.meta[self.turn]
        decided = self.decided
        fields = _ALL_FIELDS if active is None else (active,)
        append = moves.append

        n_moves = 0
        for field in fields:
            field_status = status[field]
            if field_status is not UNDECIDED:
                continue
            taken = board0[field] | board1[field]
            for square in _SQUARES:
                if taken & square:
                    continue
                append(Move(field, square, active, field_status, meta, decided))
                n_moves += 1
        return n_moves

    def get_legal_moves(self):
        moves = []
        self.get_all_moves(moves)
        return moves

    def _check_move(self, field, square):
        if not (0 <= field < 9):
            raise IllegalMoveError(f"Field index out of range: {field}")
        if square not in _SQUARES:
            raise IllegalMoveError(f"Not a single-cell mask: {square!r}")
        if self.over:
            raise IllegalMoveError("Game is already over")
        if self.active is not None and field != self.active:
            raise IllegalMoveError(f"Must play in field {self.active}, got {field}")
        if self.status[field] is not UNDECIDED:
            raise IllegalMoveError(f"Field {field} is already decided")
        if (self.board[X][field] | self.board[O][field]) & square:
            raise IllegalMoveError("Illegal move: cell is occupied")

    def make_move(self, field, square, validate=True):
        if validate:
            self._check_move(field, square)

        turn = self.turn
        own = self.board[turn]
        mask = own[field] | square
        own[field] = mask

        if WIN_TABLE[mask]:
            self.status[field] = _WON_BY[turn]
            self.decided += 1
            meta = self.meta[turn] | (1 << field)
            self.meta[turn] = meta
            if WIN_TABLE[meta] or self.decided == 9:
                self.over = True
        elif mask | self.board[1 - turn][field] == FULL_MASK:
            self.status[field] = TIED
            self.decided += 1
            if self.decided == 9:
                self.over = True

        target = square.bit_length() - 1
        self.active = target if self.status[target] is UNDECIDED else None
        self.turn = 1 - turn

    def _check_undo(self, move, mover):
        if not (0 <= move.field < 9) or move.square not in _SQUARES:
            raise IllegalMoveError(f"Malformed move record: {move!r}")
        if not self.board[mover][move.field] & move.square:
            raise IllegalMoveError("Cell is not owned by the player who moved last")
        target = move.cell
        expected = target if self.status[target] is UNDECIDED else None
        if self.active != expected:
            raise IllegalMoveError("Move record does not match the last move played")

    def undo_move(self, move, validate=False):
        """Reverse `move`. Must be the most recent move still applied."""
        mover = 1 - self.turn
        if validate:
            self._check_undo(move, mover)

        field = move.field
        self.board[mover][field] &= ~move.square
        self.status[field] = move.status
        self.meta[mover] = move.meta
        self.active = move.active
        self.decided = move.decided
        self.over = False
        self.turn = mover

    def check_caches(self):
        """Assert the incremental caches equal a from-scratch rebuild."""
        status, meta, decided, over = derive_caches(self.board[X], self.board[O])
        stale = [
            f"{name}: cached {cached!r}, derived {derived!r}"
            for name, cached, derived in (
                ('status', self.status, status),
                ('meta', self.meta, meta),
                ('decided', self.decided, decided),
                ('over', self.over, over),
            )
            if cached != derived
        ]
        if stale:
            raise AssertionError("Stale caches: " + "; ".join(stale))

    def to_array(self):
        """(9, 9) int8 grid: 0 empty, 1 X, 2 O."""
        grid = np.zeros((9, 9), dtype=np.int8)
        for player in (X, O):
            for field in range(9):
                mask = self.board[player][field]
                for square in _SQUARES:
                    if mask & square:
                        r, c = move_to_cell(field, square)
                        grid[r, c] = player + 1
        return grid

    def count_playable_empty_cells(self) -> int:
        """Count only playable empty cells (excluding decided sub-boards)."""
        empty_count = 0
        for field in range(9):
            if self.status[field] is UNDECIDED:
                taken = self.board[X][field] | self.board[O][field]
                empty_count += 9 - bin(taken).count('1')
        return empty_count


def play(board, moves):
    """Apply (field, cell) pairs in order with validation. Returns board."""
    for field, cell in moves:
        board.make_move(field, 1 << cell)
    return board
