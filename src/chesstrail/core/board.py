"""Board - live 8x8 grid of identified pieces with recorded mutations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import TypeAlias

from chesstrail.core.enums import Color, PieceType
from chesstrail.core.errors import IllegalMoveError
from chesstrail.core.piece import Piece
from chesstrail.core.transitions import AddOp, MoveOp, Op, RemoveOp, TransitionRecorder
from chesstrail.core.types import to_coord, to_square

Grid: TypeAlias = Sequence[Sequence[str]]
Snapshot: TypeAlias = tuple[tuple[Piece | None, ...], ...]

EMPTY = "-"
FIRST_PROMOTED_ID = 64


def initial_piece_id(row: int, col: int) -> int:
    """Id of the piece that starts on (*row*, *col*): 1 for a8 ... 64 for h1."""
    return (col + 1) + row * 8


class Board:
    """Mutable board keyed by algebraic square.

    Mutations made through :meth:`place`, :meth:`relocate` and
    :meth:`clear` are reported to the attached recorder so they can be
    replayed later.  :meth:`apply` replays ops without recording them.
    """

    __slots__ = ("_grid", "_locations", "_initial", "_next_id", "_first_id", "recorder")

    def __init__(self, first_promoted_id: int = FIRST_PROMOTED_ID) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        # piece id -> square, kept in step with the grid.
        self._locations: dict[int, str] = {}
        self._initial: Snapshot = self.snapshot()
        self._first_id = first_promoted_id
        self._next_id = first_promoted_id
        self.recorder: TransitionRecorder | None = None

    # -- Factory ------------------------------------------------------------

    @classmethod
    def from_grid(cls, grid: Grid, first_promoted_id: int = FIRST_PROMOTED_ID) -> Board:
        """Build a board from a decoded layout grid (``'-'`` = empty)."""
        board = cls(first_promoted_id)
        for row, cells in enumerate(grid):
            for col, cell in enumerate(cells):
                if cell == EMPTY:
                    continue
                piece = Piece(initial_piece_id(row, col), cell)
                board._put(to_square(row, col), piece)
        board._initial = board.snapshot()
        return board

    # -- Element access -----------------------------------------------------

    def __getitem__(self, square: str) -> Piece | None:
        row, col = to_coord(square)
        return self._grid[row][col]

    def at(self, row: int, col: int) -> Piece | None:
        return self._grid[row][col]

    def is_empty(self, square: str) -> bool:
        return self[square] is None

    def find(self, piece_id: int) -> str | None:
        """Square currently holding the piece with *piece_id*."""
        return self._locations.get(piece_id)

    def pieces(self) -> Iterator[tuple[str, Piece]]:
        """(square, piece) pairs in layout order, a8 → h1."""
        for row in range(8):
            for col in range(8):
                piece = self._grid[row][col]
                if piece is not None:
                    yield to_square(row, col), piece

    def king_square(self, color: Color) -> str | None:
        for square, piece in self.pieces():
            if piece.is_a(color, PieceType.KING):
                return square
        return None

    def snapshot(self) -> Snapshot:
        """Immutable copy of the grid, suitable for equality checks."""
        return tuple(tuple(row) for row in self._grid)

    def symbols(self) -> list[list[str]]:
        """Grid of FEN letters in the same shape the layout decoder returns."""
        return [[str(p) if p else EMPTY for p in row] for row in self._grid]

    @property
    def initial_snapshot(self) -> Snapshot:
        return self._initial

    # -- Recorded primitives ------------------------------------------------

    def mint_id(self) -> int:
        """Fresh id for a piece created mid-game (promotion)."""
        self._next_id += 1
        return self._next_id

    def place(self, piece_id: int, symbol: str, square: str) -> None:
        if not self.is_empty(square):
            raise IllegalMoveError(f"Cannot place {symbol!r} on occupied square {square}")
        self._put(square, Piece(piece_id, symbol))
        self._record(AddOp(piece_id, symbol, square))

    def relocate(self, from_square: str, to_square: str) -> None:
        """Move the piece on *from_square*; a piece on *to_square* is captured."""
        piece = self[from_square]
        if piece is None:
            raise IllegalMoveError(f"No piece on {from_square} to move to {to_square}")
        if not self.is_empty(to_square):
            self.clear(to_square)
        self._take(from_square)
        self._put(to_square, piece)
        self._record(MoveOp(piece.id, from_square, to_square))

    def clear(self, square: str) -> None:
        piece = self[square]
        if piece is None:
            raise IllegalMoveError(f"No piece on {square} to remove")
        self._take(square)
        self._record(RemoveOp(piece.id, piece.symbol, square))

    # -- Replay -------------------------------------------------------------

    def apply(self, ops: Iterable[Op]) -> None:
        """Apply *ops* in order without recording them."""
        for op in ops:
            if isinstance(op, AddOp):
                self._put(op.square, Piece(op.piece_id, op.symbol))
            elif isinstance(op, RemoveOp):
                square = op.square or self._locations[op.piece_id]
                self._take(square)
            else:
                piece = self._take(op.from_square)
                self._put(op.to_square, piece)

    def reset(self) -> None:
        """Restore the initial position, ids and promotion counter included."""
        self._grid = [list(row) for row in self._initial]
        self._locations = {
            piece.id: square for square, piece in self.pieces()
        }
        self._next_id = self._first_id

    # -- Internal -----------------------------------------------------------

    def _put(self, square: str, piece: Piece) -> None:
        row, col = to_coord(square)
        if self._grid[row][col] is not None:
            raise ValueError(f"Square {square} is already occupied")
        if piece.id in self._locations:
            raise ValueError(f"Piece id {piece.id} is already on the board")
        self._grid[row][col] = piece
        self._locations[piece.id] = square

    def _take(self, square: str) -> Piece:
        row, col = to_coord(square)
        piece = self._grid[row][col]
        if piece is None:
            raise ValueError(f"No piece on {square}")
        self._grid[row][col] = None
        del self._locations[piece.id]
        return piece

    def _record(self, op: Op) -> None:
        if self.recorder is not None:
            self.recorder.record(op)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
