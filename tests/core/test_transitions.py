"""Tests for transition ops, wire form and the transition log."""

import pytest

from chesstrail.core.enums import OpKind
from chesstrail.core.transitions import (
    AddOp,
    MoveOp,
    RemoveOp,
    Transition,
    TransitionLog,
    TransitionRecorder,
    op_from_wire,
)


class TestOps:
    def test_wire_forms(self) -> None:
        assert AddOp(65, "Q", "a8").wire == "a:65:Q:a8"
        assert RemoveOp(9, "P", "a8").wire == "r:9"
        assert MoveOp(53, "e2", "e4").wire == "m:53:e2:e4"

    def test_inverses(self) -> None:
        assert AddOp(65, "Q", "a8").inverse() == RemoveOp(65, "Q", "a8")
        assert RemoveOp(9, "P", "a8").inverse() == AddOp(9, "P", "a8")
        assert MoveOp(53, "e2", "e4").inverse() == MoveOp(53, "e4", "e2")

    def test_remove_without_square_cannot_invert(self) -> None:
        with pytest.raises(ValueError, match="Cannot invert"):
            RemoveOp(9).inverse()

    def test_kind_tags(self) -> None:
        assert AddOp(1, "K", "e1").kind == OpKind.ADD
        assert RemoveOp(1).kind == OpKind.REMOVE
        assert MoveOp(1, "e1", "e2").kind == OpKind.MOVE


class TestWireParsing:
    def test_parse_each_kind(self) -> None:
        assert op_from_wire("a:65:Q:a8") == AddOp(65, "Q", "a8")
        assert op_from_wire("r:9") == RemoveOp(9)
        assert op_from_wire("m:53:e2:e4") == MoveOp(53, "e2", "e4")

    @pytest.mark.parametrize("text", ["", "x:1", "m:1:e2", "a:q:Q:a8", "r"])
    def test_invalid_wire_raises(self, text: str) -> None:
        with pytest.raises(ValueError, match="Invalid transition op"):
            op_from_wire(text)


class TestTransition:
    def test_backward_undoes_in_reverse_order(self) -> None:
        # Promotion: pawn advances, is removed, a queen appears.
        transition = Transition.from_ops(
            [MoveOp(9, "a7", "a8"), RemoveOp(9, "P", "a8"), AddOp(65, "Q", "a8")]
        )
        assert transition.forward_wire == ["m:9:a7:a8", "r:9", "a:65:Q:a8"]
        assert transition.backward_wire == ["r:65", "a:9:P:a8", "m:9:a8:a7"]

    def test_castling_is_one_transition(self) -> None:
        transition = Transition.from_ops([MoveOp(61, "e1", "g1"), MoveOp(64, "h1", "f1")])
        assert transition.backward == (MoveOp(64, "f1", "h1"), MoveOp(61, "g1", "e1"))

    def test_immutable(self) -> None:
        transition = Transition.from_ops([MoveOp(1, "a8", "a7")])
        with pytest.raises(AttributeError):
            transition.forward = ()  # type: ignore[misc]


class TestRecorder:
    def test_commit_merges_pending_ops(self) -> None:
        recorder = TransitionRecorder()
        recorder.record(RemoveOp(28, "p", "d5"))
        recorder.record(MoveOp(29, "e5", "d6"))
        transition = recorder.commit()
        assert len(recorder.log) == 1
        assert recorder.log[0] is transition
        assert transition.forward_wire == ["r:28", "m:29:e5:d6"]
        assert transition.backward_wire == ["m:29:d6:e5", "a:28:p:d5"]
        assert recorder.pending == ()

    def test_discard(self) -> None:
        recorder = TransitionRecorder()
        recorder.record(MoveOp(1, "a8", "a7"))
        recorder.discard()
        assert recorder.pending == ()
        assert len(recorder.log) == 0

    def test_log_wire_dump(self) -> None:
        log = TransitionLog()
        log.append(Transition.from_ops([MoveOp(63, "g1", "f3")]))
        assert log.wire() == [{"forward": ["m:63:g1:f3"], "backward": ["m:63:f3:g1"]}]
        assert [t.forward_wire for t in log] == [["m:63:g1:f3"]]
