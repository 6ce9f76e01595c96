"""AnnotatorSettings: user-configurable options for analysis and PGN output."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AnnotatorSettings:
    """All user-configurable settings."""

    # Engine analysis
    analysis_depth: int = 18
    analysis_lines: int = 5  # MultiPV
    analysis_time_ms: int | None = None

    # PGN output
    complete_str_tags: bool = True
    castle_with_letter_o: bool = True
