"""PGN movetext tokenizer.

Splits a game into its seven-tag header, the raw brace annotations and an
ordered stream of main-line tokens.  No chess rules are applied here.
"""

from __future__ import annotations

import re

from chesstrail.core.errors import ParseError
from chesstrail.core.notation.annotations import unescape
from chesstrail.core.notation.models import AnnotationToken, MoveToken, ParsedMovetext, Token

HEADER_KEYS: tuple[str, ...] = ("Event", "Site", "Date", "Round", "White", "Black", "Result")

PGN_RESULT_TOKENS = frozenset({"1-0", "0-1", "1/2-1/2", "*"})

_HEADER_TAG_RE = re.compile(r'\[\s*\w+\s+"(?:[^"\\]|\\.)*"\s*\]')
_ANNOTATION_RE = re.compile(r"\{((?:\\\}|[^}])*)\}")
_PLACEHOLDER_RE = re.compile(r"^annotation-(\d+)$")
_MOVE_NUMBER_RE = re.compile(r"^(\d+)\.+(.*)$")
_NAG_RE = re.compile(r"^\$\d+$")
_SAN_TOKEN_RE = re.compile(
    r"^(?:[NBRQK][a-h]?[1-8]?x?[a-h][1-8]"
    r"|(?:[a-h]x)?[a-h][1-8](?:=?[NBRQ])?"
    r"|O-O(?:-O)?|0-0(?:-0)?)[+#!?]*$"
)


def _header_re(key: str) -> re.Pattern[str]:
    return re.compile(r"\[\s*" + re.escape(key) + r'\s+"((?:[^"\\]|\\.)*)"\s*\]')


_HEADER_RES: dict[str, re.Pattern[str]] = {key: _header_re(key) for key in HEADER_KEYS}


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace (line breaks included) to single spaces."""
    return " ".join(text.split())


def extract_headers(text: str) -> dict[str, str]:
    """The seven recognised header values; absent tags map to ``""``."""
    headers: dict[str, str] = {}
    for key, pattern in _HEADER_RES.items():
        match = pattern.search(text)
        raw = match.group(1) if match else ""
        headers[key] = raw.replace('\\"', '"').replace("\\\\", "\\")
    return headers


def pluck_annotations(text: str) -> tuple[str, list[str]]:
    """Replace brace comments with placeholders.

    Returns the rewritten text and the unescaped comment texts, indexed
    by placeholder number.
    """
    annotations: list[str] = []

    def _pluck(match: re.Match[str]) -> str:
        annotations.append(unescape(match.group(1)))
        return f" annotation-{len(annotations) - 1} "

    return _ANNOTATION_RE.sub(_pluck, text), annotations


def _is_move_start(word: str) -> bool:
    if _MOVE_NUMBER_RE.match(word):
        return True
    return _SAN_TOKEN_RE.match(word) is not None


def tokenize(movetext: str) -> ParsedMovetext:
    """Split *movetext* into headers, tokens and annotation texts.

    Raises :class:`ParseError` if no move can be found.
    """
    text = normalize_whitespace(movetext)
    text, annotations = pluck_annotations(text)
    headers = extract_headers(text)
    text = _HEADER_TAG_RE.sub(" ", text)

    words = text.split()
    start = next((i for i, word in enumerate(words) if _is_move_start(word)), None)
    if start is None:
        raise ParseError("no movetext found")
    body = words[start:]

    tokens: list[Token] = []
    result = "*"
    for word in body:
        number = _MOVE_NUMBER_RE.match(word)
        if number is not None:
            word = number.group(2)
            if not word:
                continue

        if word in PGN_RESULT_TOKENS:
            result = word
            continue

        if _NAG_RE.match(word):
            continue

        placeholder = _PLACEHOLDER_RE.match(word)
        if placeholder is not None:
            tokens.append(AnnotationToken(int(placeholder.group(1))))
            continue

        tokens.append(MoveToken(word))

    if result == "*" and headers["Result"] in PGN_RESULT_TOKENS:
        result = headers["Result"]

    return ParsedMovetext(
        headers=headers,
        tokens=tuple(tokens),
        annotations=tuple(annotations),
        result=result,
    )
