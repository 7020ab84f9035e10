"""SAN token grammar.

Turns a move token such as ``"Nbxd7+"`` into a :class:`SanToken` without
looking at any board.  Finding the source square is the resolver's job.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chesstrail.core.enums import MoveKind, PieceType
from chesstrail.core.errors import IllegalMoveError

_SAN_PIECE_REV: dict[str, PieceType] = {
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}

_CASTLE_KINGSIDE = ("O-O", "0-0")
_CASTLE_QUEENSIDE = ("O-O-O", "0-0-0")

_PIECE_MOVE_RE = re.compile(
    r"(?P<piece>[NBRQK])(?P<file>[a-h])?(?P<rank>[1-8])?(?P<capture>x)?"
    r"(?P<dest>[a-h][1-8])"
)
_PAWN_RE = re.compile(
    r"(?:(?P<file>[a-h])(?P<capture>x))?(?P<dest>[a-h][1-8])"
    r"(?:=?(?P<promotion>[NBRQ]))?"
)


@dataclass(frozen=True, slots=True)
class SanToken:
    """One SAN move, split into its grammatical parts."""

    text: str
    kind: MoveKind
    piece: PieceType
    destination: str | None = None
    from_file: str | None = None
    from_rank: str | None = None
    capture: bool = False
    promotion: PieceType | None = None

    @property
    def is_castle(self) -> bool:
        return self.kind in (MoveKind.CASTLE_KINGSIDE, MoveKind.CASTLE_QUEENSIDE)

    @property
    def fully_specified(self) -> bool:
        return self.from_file is not None and self.from_rank is not None


def parse_san(token: str) -> SanToken:
    """Classify *token*; raises :class:`IllegalMoveError` if it is not SAN."""
    clean = token.rstrip("+#!?")

    if clean in _CASTLE_QUEENSIDE:
        return SanToken(token, MoveKind.CASTLE_QUEENSIDE, PieceType.KING)
    if clean in _CASTLE_KINGSIDE:
        return SanToken(token, MoveKind.CASTLE_KINGSIDE, PieceType.KING)

    match = _PIECE_MOVE_RE.fullmatch(clean)
    if match is not None:
        return SanToken(
            token,
            MoveKind.PIECE_MOVE,
            _SAN_PIECE_REV[match["piece"]],
            destination=match["dest"],
            from_file=match["file"],
            from_rank=match["rank"],
            capture=match["capture"] is not None,
        )

    match = _PAWN_RE.fullmatch(clean)
    if match is not None:
        promotion = match["promotion"]
        return SanToken(
            token,
            MoveKind.PAWN_CAPTURE if match["capture"] else MoveKind.PAWN_PUSH,
            PieceType.PAWN,
            destination=match["dest"],
            from_file=match["file"],
            capture=match["capture"] is not None,
            promotion=_SAN_PIECE_REV[promotion] if promotion else None,
        )

    raise IllegalMoveError(f"Unrecognised move: {token!r}", token=token)
