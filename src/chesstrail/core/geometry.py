"""Movement vectors and ray walking on the 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from chesstrail.core.enums import Color, PieceType
from chesstrail.core.types import Coord, is_on_board


@dataclass(frozen=True, slots=True)
class Vector:
    """A movement direction in grid terms plus how far a piece may travel.

    ``d_row`` is negative towards rank 8, ``d_col`` positive towards file h.
    """

    d_row: int
    d_col: int
    limit: int = 8

    def flipped(self) -> Vector:
        return Vector(-self.d_row, -self.d_col, self.limit)


# Scan order is part of the contract: the first surviving candidate wins.
ROOK_VECTORS: tuple[Vector, ...] = (
    Vector(-1, 0),  # towards rank 8
    Vector(0, 1),  # towards file h
    Vector(1, 0),  # towards rank 1
    Vector(0, -1),  # towards file a
)

BISHOP_VECTORS: tuple[Vector, ...] = (
    Vector(-1, 1),
    Vector(1, 1),
    Vector(1, -1),
    Vector(-1, -1),
)

KNIGHT_VECTORS: tuple[Vector, ...] = (
    Vector(-2, 1, 1),
    Vector(-1, 2, 1),
    Vector(1, 2, 1),
    Vector(2, 1, 1),
    Vector(2, -1, 1),
    Vector(1, -2, 1),
    Vector(-1, -2, 1),
    Vector(-2, -1, 1),
)

QUEEN_VECTORS: tuple[Vector, ...] = ROOK_VECTORS + BISHOP_VECTORS

KING_VECTORS: tuple[Vector, ...] = tuple(
    Vector(v.d_row, v.d_col, 1) for v in QUEEN_VECTORS
)

PIECE_VECTORS: dict[PieceType, tuple[Vector, ...]] = {
    PieceType.KNIGHT: KNIGHT_VECTORS,
    PieceType.BISHOP: BISHOP_VECTORS,
    PieceType.ROOK: ROOK_VECTORS,
    PieceType.QUEEN: QUEEN_VECTORS,
    PieceType.KING: KING_VECTORS,
}


def pawn_vector(color: Color) -> Vector:
    """Forward direction of *color*'s pawns; a push covers at most 2 squares."""
    return Vector(-1 if color == Color.WHITE else 1, 0, 2)


def walk(origin: Coord, vector: Vector, *, backward: bool = False) -> Iterator[Coord]:
    """Yield squares along *vector* from *origin*, excluding *origin*.

    With ``backward=True`` the walk goes against the vector, i.e. it
    visits the squares a piece moving along *vector* could have come from.
    Stops at the board edge or after ``vector.limit`` steps.
    """
    sign = -1 if backward else 1
    row, col = origin
    for step in range(1, vector.limit + 1):
        r = row + sign * vector.d_row * step
        c = col + sign * vector.d_col * step
        if not is_on_board(r, c):
            return
        yield r, c
