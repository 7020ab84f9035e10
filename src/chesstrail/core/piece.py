"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesstrail.core.enums import Color, PieceType

# FEN letter (either case) → PieceType
_TYPE_MAP: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

_TYPE_CHARS: dict[PieceType, str] = {v: k for k, v in _TYPE_MAP.items()}

PIECE_LETTERS = "pnbrqkPNBRQK"


def piece_symbol(color: Color, piece_type: PieceType) -> str:
    """FEN letter for *color*'s *piece_type*, e.g. (BLACK, KNIGHT) → 'n'."""
    char = _TYPE_CHARS[piece_type]
    return char.upper() if color == Color.WHITE else char


@dataclass(frozen=True, slots=True)
class Piece:
    """A physical piece: stable id plus its FEN symbol.

    The id is assigned once and follows the piece across moves, so a
    renderer can animate the same element from square to square.
    """

    id: int
    symbol: str

    def __post_init__(self) -> None:
        if len(self.symbol) != 1 or self.symbol not in PIECE_LETTERS:
            raise ValueError(f"Invalid piece character: {self.symbol!r}")

    def __str__(self) -> str:
        return self.symbol

    @property
    def color(self) -> Color:
        """Uppercase = white, lowercase = black."""
        return Color.WHITE if self.symbol.isupper() else Color.BLACK

    @property
    def piece_type(self) -> PieceType:
        return _TYPE_MAP[self.symbol.lower()]

    def is_a(self, color: Color, piece_type: PieceType) -> bool:
        return self.color == color and self.piece_type == piece_type
