from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

# midi default when a file carries no tempo event: 120 BPM
DEFAULT_TEMPO = 500_000


class RowKind(Enum):
    HEADER = "Header"
    TEMPO = "Tempo"
    NOTE_ON = "Note_on_c"
    NOTE_OFF = "Note_off_c"
    OTHER = ""


@dataclass(frozen=True, slots=True)
class MidiRow:
    kind: RowKind
    track: int
    tick: int
    values: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MidiHeader:
    ticks_per_quarter: int


@dataclass(frozen=True, slots=True)
class TempoSetting:
    us_per_quarter: int = DEFAULT_TEMPO


@dataclass(frozen=True, slots=True)
class NoteEvent:
    on: bool
    tick: int


@dataclass(frozen=True, slots=True)
class MidiTiming:
    header: MidiHeader | None
    tempo: TempoSetting
    events: tuple[NoteEvent, ...]

    def note_pairs(self) -> Iterator[tuple[int, int]]:
        """
        Pair events by position: 1st+2nd, 3rd+4th, ...
        A trailing unmatched event is dropped.
        """
        ev = self.events
        for i in range(0, len(ev) - 1, 2):
            yield ev[i].tick, ev[i + 1].tick
