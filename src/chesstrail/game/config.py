"""Per-session options."""

from __future__ import annotations

from dataclasses import dataclass

from chesstrail.core.board import FIRST_PROMOTED_ID


@dataclass(frozen=True, slots=True)
class SessionOptions:
    """Immutable knobs for a :class:`~chesstrail.game.session.GameSession`.

    Args:
        json_annotations: Parse brace comments as JSON documents.
        first_promoted_id: Counter seed for ids of promoted pieces; the
            first promotion gets ``first_promoted_id + 1``.  Must stay
            above the initial id range (1–64).
        annotation_separator: Joins text annotations that land on the
            same half-move.
    """

    json_annotations: bool = False
    first_promoted_id: int = FIRST_PROMOTED_ID
    annotation_separator: str = ", "

    def __post_init__(self) -> None:
        if self.first_promoted_id < FIRST_PROMOTED_ID:
            raise ValueError(
                f"first_promoted_id must be >= {FIRST_PROMOTED_ID}, got {self.first_promoted_id}"
            )
