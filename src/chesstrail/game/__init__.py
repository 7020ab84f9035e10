"""Game layer — compile a game once, then replay it by half-move.

Quick start::

    from chesstrail.game import GameSession

    session = GameSession(movetext="1. e4 e5 2. Nf3 Nc6")
    session.seek_to(3)
    session.formatted_move_at()  # '2. Nf3'
"""

from chesstrail.game.config import SessionOptions
from chesstrail.game.session import GameSession, SessionEvents, initialize

__all__ = [
    "GameSession",
    "SessionEvents",
    "SessionOptions",
    "initialize",
]
