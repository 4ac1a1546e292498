from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from midi2ass.lyrics.parse import Syllable, count_timed
from midi2ass.timing.durations import Duration

from .model import TimedSyllable


@dataclass(frozen=True, slots=True)
class AlignmentReport:
    notes: int
    syllables: int

    @property
    def ok(self) -> bool:
        return self.notes == self.syllables


def _take(it: Iterator[Duration], row: list[TimedSyllable]) -> int:
    # rests in front of the next note become empty leading syllables
    for d in it:
        if d.rest:
            row.append(TimedSyllable(cs=d.cs, text=""))
            continue
        return d.cs
    return 0


def align(lines: list[list[Syllable]], durations: Iterable[Duration]) -> list[list[TimedSyllable]]:
    """
    Merge syllables and durations by position.

    Counts are not checked: missing durations become 0, surplus ones are
    dropped. Use check_alignment() to detect a mismatch.
    """
    it = iter(durations)
    out: list[list[TimedSyllable]] = []
    for line in lines:
        row: list[TimedSyllable] = []
        for syl in line:
            if not syl.timed:
                row.append(TimedSyllable(cs=0, text=syl.text))
                continue
            cs = _take(it, row)
            row.append(TimedSyllable(cs=cs, text=syl.text))
        out.append(row)
    return out


def check_alignment(lines: list[list[Syllable]], durations: Iterable[Duration]) -> AlignmentReport:
    notes = sum(1 for d in durations if not d.rest)
    return AlignmentReport(notes=notes, syllables=count_timed(lines))
