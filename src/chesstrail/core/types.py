"""Square names and grid coordinate helpers.

Grid layout (matches the order of a FEN placement field):
    row 0 = rank 8, row 7 = rank 1
    col 0 = file a, col 7 = file h

    e4 -> (4, 4), a8 -> (0, 0), h1 -> (7, 7)
"""

from __future__ import annotations

from typing import TypeAlias

Coord: TypeAlias = tuple[int, int]  # (row, col), both 0–7

FILES = "abcdefgh"
RANKS = "12345678"


def file_to_col(file: str) -> int:
    """Column index for a file letter, e.g. 'c' → 2."""
    return ord(file) - ord("a")


def col_to_file(col: int) -> str:
    """File letter for a column index, e.g. 2 → 'c'."""
    return chr(ord("a") + col)


def rank_to_row(rank: str | int) -> int:
    """Row index for a rank, e.g. '8' → 0."""
    return 8 - int(rank)


def row_to_rank(row: int) -> str:
    """Rank digit for a row index, e.g. 0 → '8'."""
    return str(8 - row)


def to_coord(square: str) -> Coord:
    """Grid coordinate for an algebraic square, e.g. 'e4' → (4, 4)."""
    return rank_to_row(square[1]), file_to_col(square[0])


def to_square(row: int, col: int) -> str:
    """Algebraic square for a grid coordinate, e.g. (4, 4) → 'e4'."""
    return col_to_file(col) + row_to_rank(row)


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def parse_square(name: str) -> str:
    """Validate a square name and return it unchanged."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return name


def squares_between(start: str, end: str) -> list[str]:
    """Squares on the straight or diagonal segment from *start* to *end*.

    Both end points are included. Each step moves one row and/or one
    column towards *end*.
    """
    row, col = to_coord(start)
    end_row, end_col = to_coord(end)
    squares = [to_square(row, col)]
    while (row, col) != (end_row, end_col):
        if row < end_row:
            row += 1
        elif row > end_row:
            row -= 1
        if col < end_col:
            col += 1
        elif col > end_col:
            col -= 1
        squares.append(to_square(row, col))
    return squares
