"""Core domain layer — notation decoding, board model and move resolution.

Quick start::

    from chesstrail.core import STARTING_FEN, Board, Color, MoveResolver, decode, parse_san

    board = Board.from_grid(decode(STARTING_FEN))
    MoveResolver(board).resolve_source(parse_san("Nf3"), Color.WHITE)  # 'g1'
"""

from chesstrail.core.board import Board, initial_piece_id
from chesstrail.core.enums import Color, MoveKind, OpKind, PieceType
from chesstrail.core.errors import (
    AnnotationFormatError,
    ChessTrailError,
    FormatError,
    IllegalMoveError,
    ParseError,
)
from chesstrail.core.notation import (
    STARTING_FEN,
    decode,
    encode,
    parse_layout,
    parse_san,
    tokenize,
    validate,
)
from chesstrail.core.piece import Piece
from chesstrail.core.resolver import MoveResolver, Pin
from chesstrail.core.transitions import (
    AddOp,
    MoveOp,
    Op,
    RemoveOp,
    Transition,
    TransitionLog,
    TransitionRecorder,
    op_from_wire,
)
from chesstrail.core.types import Coord, squares_between, to_coord, to_square

__all__ = [
    # Enums
    "Color",
    "MoveKind",
    "OpKind",
    "PieceType",
    # Errors
    "AnnotationFormatError",
    "ChessTrailError",
    "FormatError",
    "IllegalMoveError",
    "ParseError",
    # Types / helpers
    "Coord",
    "squares_between",
    "to_coord",
    "to_square",
    # Domain objects
    "AddOp",
    "Board",
    "MoveOp",
    "MoveResolver",
    "Op",
    "Piece",
    "Pin",
    "RemoveOp",
    "Transition",
    "TransitionLog",
    "TransitionRecorder",
    "initial_piece_id",
    "op_from_wire",
    # Notation
    "STARTING_FEN",
    "decode",
    "encode",
    "parse_layout",
    "parse_san",
    "tokenize",
    "validate",
]
