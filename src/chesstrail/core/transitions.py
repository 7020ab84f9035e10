"""Reversible board ops and the per-half-move transition log.

Every board mutation made while compiling a game is captured as an op.
All ops caused by one notated move are merged into a single
:class:`Transition`, whose backward list is derived once, at record time,
by inverting the forward list in reverse order (Command pattern).

Wire form, as consumed by renderers::

    a:<id>:<symbol>:<square>    add a piece
    r:<id>                      remove a piece
    m:<id>:<from>:<to>          move a piece
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

from chesstrail.core.enums import OpKind


@dataclass(frozen=True, slots=True)
class AddOp:
    piece_id: int
    symbol: str
    square: str

    kind = OpKind.ADD

    def inverse(self) -> RemoveOp:
        return RemoveOp(self.piece_id, self.symbol, self.square)

    @property
    def wire(self) -> str:
        return f"a:{self.piece_id}:{self.symbol}:{self.square}"


@dataclass(frozen=True, slots=True)
class RemoveOp:
    """Remove a piece.

    Symbol and square are kept so the inverse can put the piece back; the
    wire form only needs the id.
    """

    piece_id: int
    symbol: str = ""
    square: str = ""

    kind = OpKind.REMOVE

    def inverse(self) -> AddOp:
        if not self.symbol or not self.square:
            raise ValueError(f"Cannot invert remove op without symbol/square: {self!r}")
        return AddOp(self.piece_id, self.symbol, self.square)

    @property
    def wire(self) -> str:
        return f"r:{self.piece_id}"


@dataclass(frozen=True, slots=True)
class MoveOp:
    piece_id: int
    from_square: str
    to_square: str

    kind = OpKind.MOVE

    def inverse(self) -> MoveOp:
        return MoveOp(self.piece_id, self.to_square, self.from_square)

    @property
    def wire(self) -> str:
        return f"m:{self.piece_id}:{self.from_square}:{self.to_square}"


Op: TypeAlias = AddOp | RemoveOp | MoveOp


def op_from_wire(text: str) -> Op:
    """Parse a colon-delimited op, e.g. ``'m:13:e2:e4'``."""
    parts = text.split(":")
    try:
        kind = OpKind(parts[0])
        piece_id = int(parts[1])
    except (ValueError, IndexError):
        raise ValueError(f"Invalid transition op: {text!r}") from None

    if kind == OpKind.ADD and len(parts) == 4:
        return AddOp(piece_id, parts[2], parts[3])
    if kind == OpKind.REMOVE and len(parts) == 2:
        return RemoveOp(piece_id)
    if kind == OpKind.MOVE and len(parts) == 4:
        return MoveOp(piece_id, parts[2], parts[3])
    raise ValueError(f"Invalid transition op: {text!r}")


@dataclass(frozen=True, slots=True)
class Transition:
    """Forward and backward op lists for one half-move."""

    forward: tuple[Op, ...]
    backward: tuple[Op, ...]

    @classmethod
    def from_ops(cls, ops: Sequence[Op]) -> Transition:
        forward = tuple(ops)
        backward = tuple(op.inverse() for op in reversed(forward))
        return cls(forward, backward)

    @property
    def forward_wire(self) -> list[str]:
        return [op.wire for op in self.forward]

    @property
    def backward_wire(self) -> list[str]:
        return [op.wire for op in self.backward]


class TransitionLog:
    """Append-only sequence of transitions indexed by half-move.

    Entry ``n`` takes the position after half-move ``n`` to the position
    after half-move ``n + 1`` (entry 0 leaves the initial position).
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[Transition] = []

    def append(self, transition: Transition) -> None:
        self._entries.append(transition)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Transition:
        return self._entries[index]

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionLog):
            return NotImplemented
        return self._entries == other._entries

    def wire(self) -> list[dict[str, list[str]]]:
        """Plain-data dump of the whole log in wire form."""
        return [
            {"forward": t.forward_wire, "backward": t.backward_wire}
            for t in self._entries
        ]


@dataclass
class TransitionRecorder:
    """Collects the ops of the half-move being compiled.

    Board primitives call :meth:`record`; the resolver calls
    :meth:`commit` once the whole notated move has been executed.
    """

    log: TransitionLog = field(default_factory=TransitionLog)
    _pending: list[Op] = field(default_factory=list, init=False, repr=False)

    def record(self, op: Op) -> None:
        self._pending.append(op)

    @property
    def pending(self) -> tuple[Op, ...]:
        return tuple(self._pending)

    def commit(self) -> Transition:
        """Seal the pending ops as the next half-move's transition."""
        transition = Transition.from_ops(self._pending)
        self._pending = []
        self.log.append(transition)
        return transition

    def discard(self) -> None:
        self._pending = []
