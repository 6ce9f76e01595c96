"""Qt bridge to run engine analysis in a worker thread."""

from __future__ import annotations

import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessnote.analysis.engine import IAnalysisEngine
from chessnote.analysis.lines import lines_from_pvs
from chessnote.analysis.models import AnalysisLimits
from chessnote.core.position import Position
from chessnote.settings import AnnotatorSettings


class AnalysisWorker(QObject):
    """Thread-affine worker that turns engine output into SAN lines on demand."""

    lines_ready = pyqtSignal(int, object)  # request id, list[EngineLine]
    analysis_cancelled = pyqtSignal(int)
    analysis_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits")

    def __init__(
        self,
        engine: IAnalysisEngine,
        *,
        settings: AnnotatorSettings | None = None,
    ) -> None:
        super().__init__()
        self._engine = engine
        self._limits = AnalysisLimits.from_settings(settings or AnnotatorSettings())
        self._cancel_event = threading.Event()

    @property
    def limits(self) -> AnalysisLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_lines(self, position_obj: object, request_id: int) -> None:
        """Analyse *position_obj* and emit the resulting engine lines."""
        if not isinstance(position_obj, Position):
            self.analysis_error.emit(request_id, "Engine received invalid position")
            return

        self._cancel_event.clear()
        try:
            pvs = self._engine.analyse(
                position_obj,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            self.analysis_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.analysis_cancelled.emit(request_id)
            return

        self.lines_ready.emit(request_id, lines_from_pvs(position_obj, pvs))

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current analysis."""
        self._cancel_event.set()

    @pyqtSlot(int, int)
    def set_limits(self, depth: int, lines: int) -> None:
        """Update depth and MultiPV count (takes effect on the next request)."""
        self._limits = AnalysisLimits(
            depth=depth, lines=lines, time_limit_ms=self._limits.time_limit_ms
        )
