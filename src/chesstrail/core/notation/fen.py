"""FEN layout decoding, validation and encoding."""

from __future__ import annotations

import re
from dataclasses import dataclass

from chesstrail.core.enums import Color
from chesstrail.core.errors import FormatError
from chesstrail.core.piece import PIECE_LETTERS

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

EMPTY = "-"

_FEN_RE = re.compile(
    r"\s*([rnbqkpRNBQKP1-8]+/){7}([rnbqkpRNBQKP1-8]+)"
    r"\s[bw-]\s(([kqKQ]{1,4})|(-))\s(([a-h][1-8])|(-))\s\d+\s\d+\s*"
)
_FIELD_SPLIT_RE = re.compile(r"/|\s+")


@dataclass(frozen=True, slots=True)
class LayoutInfo:
    """Decoded placement plus the optional FEN fields a replay cares about."""

    grid: tuple[tuple[str, ...], ...]
    active_color: Color = Color.WHITE
    fullmove_number: int = 1


def validate(layout: str) -> bool:
    """Whether *layout* matches the full six-field FEN grammar."""
    return _FEN_RE.fullmatch(layout) is not None


def decode(layout: str) -> list[list[str]]:
    """Decode the placement field of *layout* into an 8x8 grid.

    Row 0 is rank 8.  Empty squares are ``'-'``; pieces keep their FEN
    letter.  Trailing FEN fields, if any, are ignored.
    """
    fields = _FIELD_SPLIT_RE.split(layout.strip())
    if len(fields) < 8:
        raise FormatError(f"Invalid FEN board (must contain 8 ranks): {layout!r}")

    grid: list[list[str]] = []
    for rank_text in fields[:8]:
        row: list[str] = []
        for ch in rank_text:
            if ch in "12345678":
                row.extend(EMPTY * int(ch))
            elif ch in PIECE_LETTERS:
                row.append(ch)
            else:
                raise FormatError(f"Invalid FEN character {ch!r}: {layout!r}")
        if len(row) != 8:
            raise FormatError(f"Invalid FEN rank width {rank_text!r}: {layout!r}")
        grid.append(row)
    return grid


def parse_layout(layout: str) -> LayoutInfo:
    """Decode *layout* and pick up side to move and move number if present."""
    grid = decode(layout)
    parts = layout.split()

    active_color = Color.WHITE
    if len(parts) > 1:
        if parts[1] == "b":
            active_color = Color.BLACK
        elif parts[1] not in ("w", "-"):
            raise FormatError(f"Invalid FEN side-to-move field: {parts[1]!r}")

    fullmove_number = 1
    if len(parts) > 5:
        if not parts[5].isdigit() or int(parts[5]) < 1:
            raise FormatError(f"Invalid FEN fullmove number: {parts[5]!r}")
        fullmove_number = int(parts[5])

    return LayoutInfo(
        grid=tuple(tuple(row) for row in grid),
        active_color=active_color,
        fullmove_number=fullmove_number,
    )


def encode(grid: list[list[str]]) -> str:
    """Placement field for a grid of FEN letters (``'-'`` = empty)."""
    rows: list[str] = []
    for cells in grid:
        empty = 0
        row = ""
        for cell in cells:
            if cell == EMPTY:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += cell
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
