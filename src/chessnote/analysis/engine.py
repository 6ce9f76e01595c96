"""Analysis engine protocol."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessnote.analysis.models import AnalysisLimits, PrincipalVariation
    from chessnote.core.position import Position

CancelCheck = Callable[[], bool]


class IAnalysisEngine(Protocol):
    """Anything that can produce ranked principal variations for a position."""

    def analyse(
        self,
        position: Position,
        limits: AnalysisLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> list[PrincipalVariation]: ...
