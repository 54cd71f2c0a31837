from enum import IntEnum
from typing import NamedTuple, Optional


class FieldStatus(IntEnum):
    """
    Outcome of a single sub-board.

    Same numbering as the meta-board states used elsewhere:
    0 = still in play, 1 = X (player 0) won, 2 = O (player 1) won, 3 = draw.
    """
    UNDECIDED = 0
    X_WON = 1
    O_WON = 2
    TIED = 3

    @classmethod
    def won_by(cls, player: int) -> 'FieldStatus':
        if player not in (0, 1):
            raise ValueError(f"Invalid player: {player}")
        return cls(player + 1)

    @property
    def winner(self) -> Optional[int]:
        if self is FieldStatus.X_WON or self is FieldStatus.O_WON:
            return self.value - 1
        return None

    @property
    def is_decided(self) -> bool:
        return self is not FieldStatus.UNDECIDED


class Move(NamedTuple):
    """
    A legal move plus the pre-move state it overwrites.

    Only the fields make_move can touch are saved, so undo is O(1):
    the constraint in effect, the sub-board's status, the mover's
    meta-board mask and the decided sub-board count.
    """
    field: int
    square: int
    active: Optional[int]
    status: FieldStatus
    meta: int
    decided: int

    @property
    def cell(self) -> int:
        return self.square.bit_length() - 1
