from __future__ import annotations

import logging
from typing import Iterable

from .model import MidiHeader, MidiRow, MidiTiming, NoteEvent, RowKind, TempoSetting

logger = logging.getLogger(__name__)

# positions inside MidiRow.values (field index minus 3)
_HEADER_DIVISION = 2
_TEMPO_VALUE = 0


def _int_at(values: tuple[str, ...], i: int) -> int | None:
    try:
        return int(values[i])
    except (IndexError, ValueError):
        return None


def extract_timing(rows: Iterable[MidiRow]) -> MidiTiming:
    """
    Header comes from the first Header row, tempo from the last Tempo row.
    Note rows are kept in input order; on/off alternation is not checked.
    """
    header: MidiHeader | None = None
    tempo = TempoSetting()
    seen_tempo = False
    events: list[NoteEvent] = []

    for row in rows:
        if row.kind is RowKind.HEADER:
            if header is None:
                ticks = _int_at(row.values, _HEADER_DIVISION)
                if ticks is not None:
                    header = MidiHeader(ticks_per_quarter=ticks)
        elif row.kind is RowKind.TEMPO:
            us = _int_at(row.values, _TEMPO_VALUE)
            if us is None:
                continue
            if seen_tempo and us != tempo.us_per_quarter:
                logger.debug("Tempo %d at tick %d overrides %d", us, row.tick, tempo.us_per_quarter)
            tempo = TempoSetting(us_per_quarter=us)
            seen_tempo = True
        elif row.kind is RowKind.NOTE_ON:
            events.append(NoteEvent(on=True, tick=row.tick))
        elif row.kind is RowKind.NOTE_OFF:
            events.append(NoteEvent(on=False, tick=row.tick))

    if not seen_tempo:
        logger.debug("No tempo row, using %d us per quarter", tempo.us_per_quarter)

    return MidiTiming(header=header, tempo=tempo, events=tuple(events))
