"""Exception hierarchy for notation decoding and move resolution.

All errors derive from :class:`ValueError`, so callers that only care
about "bad input" can keep catching that.
"""

from __future__ import annotations


class ChessTrailError(ValueError):
    """Base class for every error raised while compiling a game."""


class FormatError(ChessTrailError):
    """Board layout string does not follow the FEN placement grammar."""


class ParseError(ChessTrailError):
    """Movetext could not be split into headers, annotations and moves."""


class AnnotationFormatError(ChessTrailError):
    """Structured annotation payload is not valid JSON."""


class IllegalMoveError(ChessTrailError):
    """A SAN token has no legal source square in the current position."""

    def __init__(self, message: str, *, token: str = "", halfmove: int | None = None) -> None:
        super().__init__(message)
        self.token = token
        self.halfmove = halfmove
