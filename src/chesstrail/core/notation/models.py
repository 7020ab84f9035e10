"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class MoveToken:
    """A SAN token from the main line."""

    san: str


@dataclass(frozen=True, slots=True)
class AnnotationToken:
    """Placeholder left where a brace comment used to be."""

    index: int

    @property
    def placeholder(self) -> str:
        return f"annotation-{self.index}"


Token: TypeAlias = MoveToken | AnnotationToken


@dataclass(slots=True)
class ParsedMovetext:
    """Headers, ordered tokens and raw annotation texts of one game."""

    headers: dict[str, str]
    tokens: tuple[Token, ...]
    annotations: tuple[str, ...] = ()
    result: str = "*"

    @property
    def sans(self) -> list[str]:
        return [t.san for t in self.tokens if isinstance(t, MoveToken)]
