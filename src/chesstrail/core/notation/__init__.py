"""Notation package: FEN layouts, SAN tokens, PGN movetext and annotations."""

from chesstrail.core.notation.annotations import Annotation, decode_annotation
from chesstrail.core.notation.fen import (
    STARTING_FEN,
    LayoutInfo,
    decode,
    encode,
    parse_layout,
    validate,
)
from chesstrail.core.notation.models import (
    AnnotationToken,
    MoveToken,
    ParsedMovetext,
    Token,
)
from chesstrail.core.notation.pgn import HEADER_KEYS, PGN_RESULT_TOKENS, tokenize
from chesstrail.core.notation.san import SanToken, parse_san

__all__ = [
    "STARTING_FEN",
    "HEADER_KEYS",
    "PGN_RESULT_TOKENS",
    "Annotation",
    "AnnotationToken",
    "LayoutInfo",
    "MoveToken",
    "ParsedMovetext",
    "SanToken",
    "Token",
    "decode",
    "decode_annotation",
    "encode",
    "parse_layout",
    "parse_san",
    "tokenize",
    "validate",
]
