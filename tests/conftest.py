"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chesstrail.core.board import Board
from chesstrail.core.notation import STARTING_FEN, decode

# Morphy vs. Duke Karl / Count Isouard, Paris 1858.
OPERA_GAME = """
[Event "Paris"]
[Site "Paris FRA"]
[Date "1858.??.??"]
[Round "?"]
[White "Paul Morphy"]
[Black "Duke Karl / Count Isouard"]
[Result "1-0"]

1. e4 e5 2. Nf3 d6 3. d4 Bg4 {This is a weak move already.} 4. dxe5 Bxf3
5. Qxf3 dxe5 6. Bc4 Nf6 7. Qb3 Qe7 8. Nc3 c6 9. Bg5 b5 10. Nxb5 cxb5
11. Bxb5+ Nbd7 12. O-O-O Rd8 13. Rxd7 Rxd7 14. Rd1 Qe6 15. Bxd7+ Nxd7
16. Qb8+ Nxb8 17. Rd8# 1-0
"""

OPERA_GAME_FINAL_LAYOUT = "1n1Rkb1r/p4ppp/4q3/4p1B1/4P3/8/PPP2PPP/2K5"


@pytest.fixture
def start_board() -> Board:
    """Board in the standard starting position, no recorder attached."""
    return Board.from_grid(decode(STARTING_FEN))


@pytest.fixture
def opera_game() -> str:
    return OPERA_GAME


@pytest.fixture
def opera_final_layout() -> str:
    return OPERA_GAME_FINAL_LAYOUT
