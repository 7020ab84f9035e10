"""Command-line entry point.

Compiles a PGN game (from a file or stdin) and prints its headers, the
numbered move list, the board at a given half-move, or the transition log
in wire form.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

from chesstrail.core.errors import ChessTrailError
from chesstrail.core.notation import STARTING_FEN
from chesstrail.game import GameSession, SessionOptions

_LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesstrail",
        description="Replay a PGN main line as reversible board transitions",
    )
    parser.add_argument(
        "pgn",
        nargs="?",
        help="PGN file to read (default: stdin)",
    )
    parser.add_argument("--fen", default=STARTING_FEN, help="Initial layout (FEN)")
    parser.add_argument(
        "--ply",
        type=int,
        default=None,
        help="Print the board after this many half-moves",
    )
    parser.add_argument(
        "--json-annotations",
        action="store_true",
        help="Treat brace comments as JSON documents",
    )
    parser.add_argument(
        "--transitions",
        action="store_true",
        help="Dump the transition log as JSON wire ops",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _read_movetext(path: str | None, stdin: TextIO) -> str:
    if path is None:
        return stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _print_summary(session: GameSession, out: TextIO) -> None:
    for key, value in session.headers.items():
        if value:
            print(f"{key}: {value}", file=out)
    for n in range(1, session.halfmove_count + 1):
        print(session.formatted_move_at(n), file=out)
    print(f"Result: {session.result}", file=out)


def main(argv: list[str] | None = None, *, stdin: TextIO | None = None, out: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    stdin = sys.stdin if stdin is None else stdin
    out = sys.stdout if out is None else out

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        movetext = _read_movetext(args.pgn, stdin)
        session = GameSession(
            args.fen,
            movetext,
            options=SessionOptions(json_annotations=args.json_annotations),
        )
    except (OSError, ChessTrailError) as exc:
        _LOGGER.debug("Compile failed", exc_info=True)
        print(f"chesstrail: {exc}", file=sys.stderr)
        return 1

    if args.transitions:
        json.dump(session.transitions.wire(), out, indent=2)
        print(file=out)
        return 0

    if args.ply is not None:
        if not session.seek_to(args.ply):
            print(
                f"chesstrail: ply {args.ply} outside 0..{session.halfmove_count}",
                file=sys.stderr,
            )
            return 1
        if args.ply:
            print(session.formatted_move_at(), file=out)
        print(repr(session.board), file=out)
        annotation = session.current_annotation()
        if annotation:
            print(annotation, file=out)
        return 0

    _print_summary(session, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
