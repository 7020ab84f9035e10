"""Tests for MoveResolver: source search, pins and special moves."""

import pytest

from chesstrail.core.board import Board
from chesstrail.core.enums import Color
from chesstrail.core.errors import IllegalMoveError
from chesstrail.core.notation import decode, parse_san
from chesstrail.core.resolver import MoveResolver, Pin
from chesstrail.core.transitions import TransitionRecorder


def _setup(layout: str) -> tuple[Board, MoveResolver, TransitionRecorder]:
    board = Board.from_grid(decode(layout))
    recorder = TransitionRecorder()
    board.recorder = recorder
    return board, MoveResolver(board), recorder


def _play(layout: str, san: str, color: Color = Color.WHITE) -> list[str]:
    _, resolver, recorder = _setup(layout)
    resolver.play(parse_san(san), color)
    return recorder.commit().forward_wire


def _source(layout: str, san: str, color: Color = Color.WHITE) -> str:
    _, resolver, _ = _setup(layout)
    return resolver.resolve_source(parse_san(san), color)


START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


class TestOpeningMoves:
    def test_knight(self) -> None:
        assert _play(START, "Nf3") == ["m:63:g1:f3"]
        assert _play(START, "Nf6", Color.BLACK) == ["m:7:g8:f6"]

    def test_pawn_single_and_double_push(self) -> None:
        assert _play(START, "e3") == ["m:53:e2:e3"]
        assert _play(START, "e4") == ["m:53:e2:e4"]
        assert _play(START, "c5", Color.BLACK) == ["m:11:c7:c5"]

    def test_pawn_cannot_jump_three(self) -> None:
        with pytest.raises(IllegalMoveError):
            _play(START, "e5")

    def test_pawn_push_blocked(self) -> None:
        with pytest.raises(IllegalMoveError, match="occupied"):
            _play("4k3/8/8/8/4p3/4P3/8/4K3", "e4")

    def test_blocked_bishop(self) -> None:
        with pytest.raises(IllegalMoveError):
            _play(START, "Bc4")

    def test_nonsense_move_raises(self) -> None:
        with pytest.raises(IllegalMoveError, match="Illegal move"):
            _play(START, "Qh5")


class TestDisambiguation:
    def test_file(self) -> None:
        layout = "3k4/8/8/8/8/8/8/R6R"
        assert _source(layout, "Rd1") == "a1"
        assert _source(layout, "Rhd1") == "h1"
        assert _source(layout, "Rad1") == "a1"

    def test_rank(self) -> None:
        layout = "4k3/8/8/R7/8/8/8/R3K3"
        assert _source(layout, "R1a3") == "a1"
        assert _source(layout, "R5a3") == "a5"

    def test_full_square(self) -> None:
        layout = "4k3/8/8/8/8/8/8/R3K2R"
        assert _source(layout, "Ra1b1") == "a1"

    def test_full_square_must_hold_piece(self) -> None:
        with pytest.raises(IllegalMoveError, match="no white rook on b1"):
            _source("4k3/8/8/8/8/8/8/R3K2R", "Rb1c1")

    def test_wrong_disambiguator_raises(self) -> None:
        with pytest.raises(IllegalMoveError):
            _source("3k4/8/8/8/8/8/8/R6R", "Rcd1")

    def test_scan_stops_at_first_piece(self) -> None:
        # The d-rook is hidden behind the e1 king.
        with pytest.raises(IllegalMoveError):
            _source("3k4/8/8/8/8/8/8/3RK2R", "Rdf1")


class TestPins:
    def test_absolute_pin_found(self) -> None:
        board, resolver, _ = _setup("4q2k/8/8/8/8/8/4R3/4K3")
        assert resolver.find_absolute_pin("e2", Color.WHITE) == Pin("e1", "e8")
        assert board["e2"] is not None

    def test_no_pin_without_slider(self) -> None:
        _, resolver, _ = _setup("4n2k/8/8/8/8/8/4R3/4K3")
        assert resolver.find_absolute_pin("e2", Color.WHITE) is None

    def test_pinned_piece_cannot_leave_line(self) -> None:
        with pytest.raises(IllegalMoveError):
            _play("4q2k/8/8/8/8/8/4R3/4K3", "Rd2")

    def test_pinned_piece_moves_along_line(self) -> None:
        assert _play("4q2k/8/8/8/8/8/4R3/4K3", "Re5") == ["m:53:e2:e5"]

    def test_pinned_piece_captures_pinner(self) -> None:
        assert _play("4q2k/8/8/8/8/8/4R3/4K3", "Rxe8") == ["r:5", "m:53:e2:e8"]

    def test_pinned_knight_is_skipped(self) -> None:
        assert _source("4r2k/8/8/8/8/7N/4N3/4K3", "Nf4") == "h3"

    def test_pin_allows(self) -> None:
        pin = Pin("e1", "e8")
        assert pin.allows("e5")
        assert pin.allows("e8")
        assert not pin.allows("d2")


class TestSpecialMoves:
    def test_castle_kingside(self) -> None:
        assert _play("4k3/8/8/8/8/8/8/4K2R", "O-O") == ["m:61:e1:g1", "m:64:h1:f1"]

    def test_castle_queenside_black(self) -> None:
        ops = _play("r3k3/8/8/8/8/8/8/4K3", "O-O-O", Color.BLACK)
        assert ops == ["m:5:e8:c8", "m:1:a8:d8"]

    def test_castle_without_rook_raises(self) -> None:
        with pytest.raises(IllegalMoveError, match="rook"):
            _play("4k3/8/8/8/8/8/8/4K3", "O-O")

    def test_pawn_capture(self) -> None:
        assert _play("4k3/8/8/3p4/4P3/8/8/4K3", "exd5") == ["r:28", "m:37:e4:d5"]

    def test_en_passant(self) -> None:
        _, resolver, recorder = _setup("4k3/8/8/3pP3/8/8/8/4K3")
        resolver.play(parse_san("exd6"), Color.WHITE)
        transition = recorder.commit()
        assert transition.forward_wire == ["r:28", "m:29:e5:d6"]
        assert transition.backward_wire == ["m:29:d6:e5", "a:28:p:d5"]

    def test_capture_into_empty_square_without_victim(self) -> None:
        with pytest.raises(IllegalMoveError, match="pawn"):
            _play("4k3/8/8/4P3/8/8/8/4K3", "exd6")

    def test_promotion(self) -> None:
        board, resolver, recorder = _setup("4k3/P7/8/8/8/8/8/4K3")
        resolver.play(parse_san("a8=Q"), Color.WHITE)
        transition = recorder.commit()
        assert transition.forward_wire == ["m:9:a7:a8", "r:9", "a:65:Q:a8"]
        assert transition.backward_wire == ["r:65", "a:9:P:a8", "m:9:a8:a7"]
        piece = board["a8"]
        assert piece is not None and piece.symbol == "Q" and piece.id == 65

    def test_black_capture_promotion(self) -> None:
        ops = _play("4k3/8/8/8/8/8/1p6/R3K3", "bxa1=N", Color.BLACK)
        assert ops == ["r:57", "m:50:b2:a1", "r:50", "a:65:n:a1"]


class TestOccupiedDestination:
    def test_piece_cannot_land_on_own_piece(self) -> None:
        with pytest.raises(IllegalMoveError, match="e2 holds a white piece"):
            _play(START, "Ne2")

    def test_black_piece_cannot_land_on_own_piece(self) -> None:
        with pytest.raises(IllegalMoveError, match="holds a black piece"):
            _play(START, "Qd7", Color.BLACK)

    def test_board_untouched_after_rejection(self) -> None:
        board, resolver, recorder = _setup(START)
        with pytest.raises(IllegalMoveError):
            resolver.play(parse_san("Ne2"), Color.WHITE)
        assert recorder.pending == ()
        assert board == Board.from_grid(decode(START))

    def test_castle_onto_occupied_king_square(self) -> None:
        with pytest.raises(IllegalMoveError, match="g1 is occupied"):
            _play(START, "O-O")

    def test_castle_onto_occupied_rook_square(self) -> None:
        with pytest.raises(IllegalMoveError, match="f1 is occupied"):
            _play("4k3/8/8/8/8/8/8/4KB1R", "O-O")

    def test_queenside_castle_onto_occupied_square(self) -> None:
        with pytest.raises(IllegalMoveError, match="occupied"):
            _play("r2qk3/8/8/8/8/8/8/4K3", "O-O-O", Color.BLACK)


class TestDoublePush:
    def test_only_from_starting_rank(self) -> None:
        with pytest.raises(IllegalMoveError):
            _play("4k3/8/8/8/8/4P3/8/4K3", "e5")

    def test_single_step_from_advanced_rank(self) -> None:
        assert _play("4k3/8/8/8/8/4P3/8/4K3", "e4") == ["m:45:e3:e4"]

    def test_black_only_from_starting_rank(self) -> None:
        with pytest.raises(IllegalMoveError):
            _play("4k3/8/3p4/8/8/8/8/4K3", "d4", Color.BLACK)
        assert _play("4k3/3p4/8/8/8/8/8/4K3", "d5", Color.BLACK) == ["m:12:d7:d5"]
