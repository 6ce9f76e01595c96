"""Engine analysis APIs: principal-variation conversion and the Qt worker."""

from chessnote.analysis.engine import CancelCheck, IAnalysisEngine
from chessnote.analysis.lines import (
    MATE_SCORE_CP,
    line_from_uci,
    lines_from_pvs,
    parse_uci_info,
    uci_to_move,
)
from chessnote.analysis.models import AnalysisLimits, EngineLine, PrincipalVariation

__all__ = [
    "MATE_SCORE_CP",
    "AnalysisLimits",
    "CancelCheck",
    "EngineLine",
    "IAnalysisEngine",
    "PrincipalVariation",
    "line_from_uci",
    "lines_from_pvs",
    "parse_uci_info",
    "uci_to_move",
]
