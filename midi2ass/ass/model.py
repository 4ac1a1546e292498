from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TimedSyllable:
    cs: int
    text: str


@dataclass(frozen=True, slots=True)
class SubtitleLine:
    start_cs: int
    end_cs: int
    style: str
    text: str
