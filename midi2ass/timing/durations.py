from __future__ import annotations

from dataclasses import dataclass, field
import math

from midi2ass.errors import MissingHeaderError
from midi2ass.midi.model import MidiTiming

# centiseconds = ticks * tempo / (CS_DIVISOR * ticks_per_quarter)
CS_DIVISOR = 10_000


@dataclass(frozen=True, slots=True)
class Duration:
    cs: int
    rest: bool = False


@dataclass(frozen=True, slots=True)
class DurationResult:
    durations: tuple[Duration, ...]
    remainder: float

    @property
    def notes(self) -> tuple[int, ...]:
        return tuple(d.cs for d in self.durations if not d.rest)

    @property
    def total_cs(self) -> int:
        return sum(d.cs for d in self.durations)


@dataclass(slots=True)
class DurationCalculator:
    """
    Turns alternating note on/off ticks into whole-centisecond durations.

    Every computed value keeps its fractional part in ``remainder`` and
    feeds it into the next one, so the emitted integers never drift more
    than one centisecond from real time. A note's duration is held back
    until the next note-on decides whether the gap in between is a real
    rest or jitter to be folded into the note.
    """

    ticks_per_quarter: int
    tempo: int
    remainder: float = field(default=0.0, init=False)
    _pending: float | None = field(default=None, init=False)
    _last_on: int = field(default=0, init=False)
    _last_off: int = field(default=0, init=False)
    _out: list[Duration] = field(default_factory=list, init=False)

    @property
    def cs_per_tick(self) -> float:
        return self.tempo / (CS_DIVISOR * self.ticks_per_quarter)

    @property
    def gap_threshold(self) -> float:
        # 1.5 x a 32nd note
        quarter_cs = self.tempo / CS_DIVISOR
        return quarter_cs / 8 * 1.5

    def _cs(self, ticks: int) -> float:
        # multiply before dividing: whole centiseconds stay exact
        return ticks * self.tempo / (CS_DIVISOR * self.ticks_per_quarter)

    def note_on(self, tick: int) -> None:
        gap = self._cs(tick - self._last_off) + self.remainder
        self._last_on = tick

        absorb = gap <= self.gap_threshold
        if self._pending is None and absorb:
            # nothing to absorb into yet; the lead-in rides on the first note
            self.remainder = gap
            return

        self.remainder = gap % 1
        if self._pending is not None:
            # the pending fraction is already inside gap via remainder
            prev = math.floor(self._pending)
            if absorb:
                prev = math.floor(prev + gap)
            self._out.append(Duration(prev))
            self._pending = None
        if not absorb:
            self._out.append(Duration(math.floor(gap), rest=True))

    def note_off(self, tick: int) -> None:
        note = self._cs(tick - self._last_on) + self.remainder
        self.remainder = note % 1
        self._pending = note
        self._last_off = tick

    def finish(self) -> DurationResult:
        if self._pending is not None:
            self._out.append(Duration(math.floor(self._pending)))
            self._pending = None
        return DurationResult(durations=tuple(self._out), remainder=self.remainder)


def compute_durations(timing: MidiTiming) -> DurationResult:
    if timing.header is None or timing.header.ticks_per_quarter <= 0:
        raise MissingHeaderError("MIDI rows carry no usable Header (ticks per quarter note)")
    calc = DurationCalculator(
        ticks_per_quarter=timing.header.ticks_per_quarter,
        tempo=timing.tempo.us_per_quarter,
    )
    for on_tick, off_tick in timing.note_pairs():
        calc.note_on(on_tick)
        calc.note_off(off_tick)
    return calc.finish()
