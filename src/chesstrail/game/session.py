"""GameSession — compiles a game once, then replays it by half-move.

Construction runs the compile pass: the layout is decoded into a board,
every SAN token is resolved and executed, and each half-move's board
mutations are sealed into the transition log.  The board is then reset
to the initial position and only moves again when a caller navigates.

Renderers subscribe through :class:`SessionEvents` and receive the ops of
each applied transition in wire form.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesstrail.core.board import Board
from chesstrail.core.enums import Color
from chesstrail.core.errors import IllegalMoveError
from chesstrail.core.notation import (
    HEADER_KEYS,
    STARTING_FEN,
    Annotation,
    AnnotationToken,
    decode_annotation,
    encode,
    parse_layout,
    parse_san,
    tokenize,
)
from chesstrail.core.resolver import MoveResolver
from chesstrail.core.transitions import Op, TransitionLog, TransitionRecorder
from chesstrail.game.config import SessionOptions

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

TransitionCallback = Callable[[list[str], int], None]  # wire ops, new cursor
CursorCallback = Callable[[int], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_transition: list[TransitionCallback] = field(default_factory=list)
    on_cursor_changed: list[CursorCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """One game: initial layout, resolved moves and a replay cursor.

    Every session owns its board, log and cursor; nothing is shared
    between instances.  Methods are meant to be called from one thread.
    """

    __slots__ = (
        "_options",
        "_events",
        "_layout",
        "_board",
        "_headers",
        "_moves",
        "_annotations",
        "_transitions",
        "_result",
        "_cursor",
    )

    def __init__(
        self,
        layout: str = STARTING_FEN,
        movetext: str | None = None,
        *,
        options: SessionOptions | None = None,
        events: SessionEvents | None = None,
    ) -> None:
        self._options = options if options is not None else SessionOptions()
        self._events = events if events is not None else SessionEvents()
        self._layout = parse_layout(layout)
        self._board = Board.from_grid(self._layout.grid, self._options.first_promoted_id)
        self._headers: dict[str, str] = {key: "" for key in HEADER_KEYS}
        self._moves: list[str] = []
        self._annotations: dict[int, list[Annotation]] = {}
        self._transitions = TransitionLog()
        self._result = "*"
        self._cursor = 0

        if movetext is not None:
            self._compile(movetext)

    # ── Compile pass ─────────────────────────────────────────────────────

    def _compile(self, movetext: str) -> None:
        parsed = tokenize(movetext)
        structured = self._options.json_annotations
        recorder = TransitionRecorder(self._transitions)
        resolver = MoveResolver(self._board)
        color = self.first_to_move

        self._board.recorder = recorder
        try:
            for token in parsed.tokens:
                if isinstance(token, AnnotationToken):
                    payload = decode_annotation(
                        parsed.annotations[token.index], structured=structured
                    )
                    self._merge_annotation(len(self._moves), payload)
                    continue

                halfmove = len(self._moves) + 1
                try:
                    resolver.play(parse_san(token.san), color)
                except IllegalMoveError as exc:
                    raise IllegalMoveError(
                        f"{exc} at half-move {halfmove} ({self._format(halfmove, token.san)})",
                        token=token.san,
                        halfmove=halfmove,
                    ) from exc
                recorder.commit()
                self._moves.append(token.san)
                color = color.opposite
        finally:
            self._board.recorder = None

        self._board.reset()
        self._headers = parsed.headers
        self._result = parsed.result
        _LOGGER.debug(
            "Compiled %d half-moves, %d annotations", len(self._moves), len(self._annotations)
        )

    # ── Navigation ───────────────────────────────────────────────────────

    def step_forward(self) -> bool:
        """Advance one half-move. Returns ``False`` at the end of the game."""
        if self._cursor >= len(self._transitions):
            return False
        transition = self._transitions[self._cursor]
        self._cursor += 1
        self._apply(transition.forward)
        return True

    def step_backward(self) -> bool:
        """Retreat one half-move. Returns ``False`` at the initial position."""
        if self._cursor <= 0:
            return False
        self._cursor -= 1
        self._apply(self._transitions[self._cursor].backward)
        return True

    def seek_to(self, halfmove: int) -> bool:
        """Replay whole transitions until the cursor equals *halfmove*.

        Targets outside ``0..halfmove_count`` are ignored.
        """
        if not 0 <= halfmove <= len(self._transitions):
            _LOGGER.debug("Ignoring seek to %d (game has %d half-moves)", halfmove, len(self))
            return False
        while self._cursor > halfmove:
            self.step_backward()
        while self._cursor < halfmove:
            self.step_forward()
        return True

    def seek_start(self) -> None:
        self.seek_to(0)

    def seek_end(self) -> None:
        self.seek_to(len(self._transitions))

    # ── Annotations ──────────────────────────────────────────────────────

    def current_annotation(self) -> Annotation:
        """Annotation attached to the cursor position.

        Unannotated positions give ``""`` in text mode and ``[]`` in
        structured mode.
        """
        payloads = self._annotations.get(self._cursor)
        if payloads is None:
            return [] if self._options.json_annotations else ""
        return self._combine(payloads)

    def add_annotation(self, annotation: Annotation) -> None:
        """Attach *annotation* to the cursor position, after any existing one."""
        self._merge_annotation(self._cursor, annotation)

    def _merge_annotation(self, halfmove: int, annotation: Annotation) -> None:
        self._annotations.setdefault(halfmove, []).append(annotation)

    def _combine(self, payloads: list[Annotation]) -> Annotation:
        """Value exposed for one half-move; structured payloads are copied."""
        if not self._options.json_annotations:
            return self._options.annotation_separator.join(str(p) for p in payloads)
        if len(payloads) == 1:
            return copy.deepcopy(payloads[0])
        return copy.deepcopy(payloads)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def halfmove_count(self) -> int:
        return len(self._transitions)

    def __len__(self) -> int:
        return len(self._transitions)

    @property
    def is_at_start(self) -> bool:
        return self._cursor == 0

    @property
    def is_at_end(self) -> bool:
        return self._cursor == len(self._transitions)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def options(self) -> SessionOptions:
        return self._options

    @property
    def events(self) -> SessionEvents:
        return self._events

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def result(self) -> str:
        return self._result

    @property
    def moves(self) -> list[str]:
        return list(self._moves)

    @property
    def annotations(self) -> dict[int, Annotation]:
        return {n: self._combine(payloads) for n, payloads in self._annotations.items()}

    @property
    def transitions(self) -> TransitionLog:
        return self._transitions

    @property
    def first_to_move(self) -> Color:
        return self._layout.active_color

    def current_layout(self) -> str:
        """FEN placement field of the position at the cursor."""
        return encode(self._board.symbols())

    def move_at(self, halfmove: int | None = None) -> str | None:
        """SAN of the move that led to *halfmove* (default: the cursor)."""
        n = self._cursor if halfmove is None else halfmove
        if not 1 <= n <= len(self._moves):
            return None
        return self._moves[n - 1]

    def formatted_move_at(self, halfmove: int | None = None) -> str | None:
        """Numbered move text, e.g. ``"3. Bb5"`` or ``"3... Nf6"``."""
        n = self._cursor if halfmove is None else halfmove
        san = self.move_at(n)
        if san is None:
            return None
        return self._format(n, san)

    # ── Internal ─────────────────────────────────────────────────────────

    def _format(self, halfmove: int, san: str) -> str:
        ply = halfmove + (1 if self.first_to_move == Color.BLACK else 0)
        number = self._layout.fullmove_number + (ply - 1) // 2
        dots = "..." if ply % 2 == 0 else "."
        return f"{number}{dots} {san}"

    def _apply(self, ops: tuple[Op, ...]) -> None:
        self._board.apply(ops)
        wire = [op.wire for op in ops]
        for cb in self._events.on_transition:
            cb(wire, self._cursor)
        for cb in self._events.on_cursor_changed:
            cb(self._cursor)


def initialize(
    layout: str = STARTING_FEN,
    movetext: str | None = None,
    *,
    options: SessionOptions | None = None,
    events: SessionEvents | None = None,
) -> GameSession:
    """Build a :class:`GameSession`; compile errors propagate unchanged."""
    return GameSession(layout, movetext, options=options, events=events)
