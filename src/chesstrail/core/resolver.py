"""Move resolution: find the source square of a SAN token and play it.

Only the geometry needed to read notation is implemented: movement
vectors, blocking pieces and absolute pins.  Check, mate and the other
rules of a full legality validator are out of scope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chesstrail.core.board import Board
from chesstrail.core.enums import Color, MoveKind, PieceType
from chesstrail.core.errors import IllegalMoveError
from chesstrail.core.geometry import (
    BISHOP_VECTORS,
    PIECE_VECTORS,
    ROOK_VECTORS,
    Vector,
    pawn_vector,
    walk,
)
from chesstrail.core.notation.san import SanToken
from chesstrail.core.piece import Piece, piece_symbol
from chesstrail.core.types import Coord, squares_between, to_coord, to_square

_LOGGER = logging.getLogger(__name__)

# (rook vectors, rook/queen pinners), (bishop vectors, bishop/queen pinners)
_PIN_LINES: tuple[tuple[tuple[Vector, ...], tuple[PieceType, ...]], ...] = (
    (ROOK_VECTORS, (PieceType.ROOK, PieceType.QUEEN)),
    (BISHOP_VECTORS, (PieceType.BISHOP, PieceType.QUEEN)),
)

# side -> (king from, king to, rook from, rook to) as files
_CASTLE_FILES: dict[MoveKind, tuple[str, str, str, str]] = {
    MoveKind.CASTLE_KINGSIDE: ("e", "g", "h", "f"),
    MoveKind.CASTLE_QUEENSIDE: ("e", "c", "a", "d"),
}


@dataclass(frozen=True, slots=True)
class Pin:
    """A piece pinned to its own king by an enemy slider."""

    king_square: str
    pinner_square: str

    def allows(self, destination: str) -> bool:
        """Whether moving to *destination* keeps the king covered."""
        return destination in squares_between(self.king_square, self.pinner_square)


class MoveResolver:
    """Resolves SAN tokens against a live :class:`Board`.

    :meth:`play` executes the move through the board's recorded
    primitives, so the caller decides when a half-move is committed.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def play(self, token: SanToken, color: Color) -> None:
        """Execute *token* for *color* on the board."""
        if token.is_castle:
            self._castle(token, color)
            return

        assert token.destination is not None
        destination = token.destination
        occupant = self._board[destination]
        if occupant is not None and occupant.color == color:
            raise IllegalMoveError(
                f"Illegal move {token.text!r}: {destination} holds a {color} piece",
                token=token.text,
            )
        source = self.resolve_source(token, color)
        _LOGGER.debug("%s %s: %s -> %s", color, token.text, source, destination)

        if token.kind == MoveKind.PAWN_CAPTURE and self._board.is_empty(destination):
            self._capture_en_passant(token, color, source)

        self._board.relocate(source, destination)

        if token.promotion is not None:
            self._board.clear(destination)
            symbol = piece_symbol(color, token.promotion)
            self._board.place(self._board.mint_id(), symbol, destination)

    def resolve_source(self, token: SanToken, color: Color) -> str:
        """Square the piece moved by *token* comes from.

        Raises :class:`IllegalMoveError` when no legal source exists.
        """
        if token.kind == MoveKind.PIECE_MOVE:
            return self._piece_source(token, color)
        if token.kind == MoveKind.PAWN_PUSH:
            return self._pawn_push_source(token, color)
        if token.kind == MoveKind.PAWN_CAPTURE:
            return self._pawn_capture_source(token, color)
        king_from = _CASTLE_FILES[token.kind][0] + _home_rank(color)
        self._expect(king_from, color, PieceType.KING, token)
        return king_from

    def find_absolute_pin(self, square: str, color: Color) -> Pin | None:
        """Pin on the *color* piece standing on *square*, if any.

        Looks for the own king along one rook/bishop line from *square*
        and a matching enemy slider directly behind on the opposite side.
        """
        origin = to_coord(square)
        for vectors, pinner_types in _PIN_LINES:
            for vector in vectors:
                hit = self._first_piece(origin, vector)
                if hit is None or not hit[1].is_a(color, PieceType.KING):
                    continue
                behind = self._first_piece(origin, vector.flipped())
                if (
                    behind is not None
                    and behind[1].color != color
                    and behind[1].piece_type in pinner_types
                ):
                    return Pin(to_square(*hit[0]), to_square(*behind[0]))
                break
        return None

    def is_pinned_away(self, square: str, color: Color, destination: str) -> bool:
        """Whether moving from *square* to *destination* exposes the king."""
        pin = self.find_absolute_pin(square, color)
        return pin is not None and not pin.allows(destination)

    # -- Source search ------------------------------------------------------

    def _piece_source(self, token: SanToken, color: Color) -> str:
        assert token.destination is not None
        destination = token.destination

        if token.fully_specified:
            source = f"{token.from_file}{token.from_rank}"
            self._expect(source, color, token.piece, token)
            if self.is_pinned_away(source, color, destination):
                raise IllegalMoveError(
                    f"Illegal move {token.text!r}: piece on {source} is pinned",
                    token=token.text,
                )
            return source

        target = to_coord(destination)
        for vector in PIECE_VECTORS[token.piece]:
            for row, col in walk(target, vector, backward=True):
                piece = self._board.at(row, col)
                if piece is None:
                    continue
                if piece.is_a(color, token.piece):
                    square = to_square(row, col)
                    if self._is_candidate(square, token, color, destination):
                        return square
                # Never look past the first piece on a line.
                break

        raise IllegalMoveError(f"Illegal move: {token.text!r}", token=token.text)

    def _is_candidate(self, square: str, token: SanToken, color: Color, destination: str) -> bool:
        if token.from_file is not None and square[0] != token.from_file:
            return False
        if token.from_rank is not None and square[1] != token.from_rank:
            return False
        return not self.is_pinned_away(square, color, destination)

    def _pawn_push_source(self, token: SanToken, color: Color) -> str:
        assert token.destination is not None
        if not self._board.is_empty(token.destination):
            raise IllegalMoveError(
                f"Illegal move {token.text!r}: {token.destination} is occupied",
                token=token.text,
            )
        for row, col in walk(to_coord(token.destination), pawn_vector(color), backward=True):
            piece = self._board.at(row, col)
            if piece is None:
                continue
            if not piece.is_a(color, PieceType.PAWN):
                break
            square = to_square(row, col)
            # Two-square advance only from the starting rank.
            if abs(row - to_coord(token.destination)[0]) == 2 and square[1] != _pawn_rank(color):
                break
            return square
        raise IllegalMoveError(f"Illegal move: {token.text!r}", token=token.text)

    def _pawn_capture_source(self, token: SanToken, color: Color) -> str:
        assert token.destination is not None and token.from_file is not None
        rank = int(token.destination[1]) + (-1 if color == Color.WHITE else 1)
        if not 1 <= rank <= 8:
            raise IllegalMoveError(f"Illegal move: {token.text!r}", token=token.text)
        source = f"{token.from_file}{rank}"
        self._expect(source, color, PieceType.PAWN, token)
        return source

    # -- Special moves ------------------------------------------------------

    def _castle(self, token: SanToken, color: Color) -> None:
        king_file, king_to, rook_file, rook_to = _CASTLE_FILES[token.kind]
        rank = _home_rank(color)
        self._expect(king_file + rank, color, PieceType.KING, token)
        self._expect(rook_file + rank, color, PieceType.ROOK, token)
        for target in (king_to + rank, rook_to + rank):
            if not self._board.is_empty(target):
                raise IllegalMoveError(
                    f"Illegal move {token.text!r}: {target} is occupied",
                    token=token.text,
                )
        _LOGGER.debug("%s %s", color, token.text)
        self._board.relocate(king_file + rank, king_to + rank)
        self._board.relocate(rook_file + rank, rook_to + rank)

    def _capture_en_passant(self, token: SanToken, color: Color, source: str) -> None:
        assert token.destination is not None
        victim_square = token.destination[0] + source[1]
        self._expect(victim_square, color.opposite, PieceType.PAWN, token)
        self._board.clear(victim_square)

    # -- Helpers ------------------------------------------------------------

    def _first_piece(self, origin: Coord, vector: Vector) -> tuple[Coord, Piece] | None:
        for row, col in walk(origin, vector):
            piece = self._board.at(row, col)
            if piece is not None:
                return (row, col), piece
        return None

    def _expect(self, square: str, color: Color, piece_type: PieceType, token: SanToken) -> None:
        piece = self._board[square]
        if piece is None or not piece.is_a(color, piece_type):
            raise IllegalMoveError(
                f"Illegal move {token.text!r}: no {color} {piece_type.name.lower()} on {square}",
                token=token.text,
            )


def _home_rank(color: Color) -> str:
    return "1" if color == Color.WHITE else "8"


def _pawn_rank(color: Color) -> str:
    return "2" if color == Color.WHITE else "7"
