"""Data models exchanged with an external analysis engine."""

from __future__ import annotations

from dataclasses import dataclass

from chessnote.core.move import Move
from chessnote.settings import AnnotatorSettings


@dataclass(slots=True, frozen=True)
class AnalysisLimits:
    """Constraints for one analysis request."""

    depth: int = 18
    lines: int = 5
    time_limit_ms: int | None = None

    @classmethod
    def from_settings(cls, settings: AnnotatorSettings) -> AnalysisLimits:
        return cls(
            depth=settings.analysis_depth,
            lines=settings.analysis_lines,
            time_limit_ms=settings.analysis_time_ms,
        )


@dataclass(slots=True, frozen=True)
class PrincipalVariation:
    """One engine line as reported: UCI moves, score from the mover's view."""

    rank: int
    depth: int
    score_cp: int
    moves: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class EngineLine:
    """Engine line ready for display.

    ``score_cp`` is from White's point of view; ``san_line`` is numbered
    movetext such as ``"12... Nf6 13. Bg5"``.
    """

    rank: int
    depth: int
    score_cp: int
    first_move: Move | None
    san_line: str

    @property
    def score_pawns(self) -> float:
        return self.score_cp / 100.0
