"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from chessnote.core.notation import STARTING_FEN, parse_san, position_from_fen
from chessnote.core.position import Position

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

PlayFn = Callable[..., Position]


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton Qt application for signal-based tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def play() -> PlayFn:
    """Return a helper that plays SAN moves from a FEN (default: start)."""

    def _play(*sans: str, fen: str = STARTING_FEN) -> Position:
        pos = position_from_fen(fen)
        for san in sans:
            pos = pos.apply_move(parse_san(pos, san))
        return pos

    return _play
