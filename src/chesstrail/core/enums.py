"""Core enumerations for the notation and replay domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveKind(IntEnum):
    """Shape of a SAN token, decided before any board lookup."""

    CASTLE_KINGSIDE = auto()
    CASTLE_QUEENSIDE = auto()
    PIECE_MOVE = auto()
    PAWN_PUSH = auto()
    PAWN_CAPTURE = auto()


class OpKind(StrEnum):
    """Transition op tag, as written in the colon wire form."""

    ADD = "a"
    REMOVE = "r"
    MOVE = "m"
