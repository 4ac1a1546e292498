from __future__ import annotations

from typing import Iterable

from .model import MidiRow, RowKind

# midicsv layout: track, tick, marker, values...
_MARKERS = {k.value: k for k in RowKind if k is not RowKind.OTHER}

_OTHER = MidiRow(kind=RowKind.OTHER, track=0, tick=0)


def classify_row(line: str) -> MidiRow:
    """
    Turn one midicsv line into a tagged row.

    Note_on_c with velocity 0 is a note-off. Blank lines, comments and rows
    that do not look like ``track, tick, marker, ...`` are OTHER.
    """
    fields = [f.strip() for f in line.split(",")]
    if len(fields) < 3:
        return _OTHER

    kind = _MARKERS.get(fields[2])
    if kind is None:
        return _OTHER

    try:
        track = int(fields[0])
        tick = int(fields[1])
    except ValueError:
        return _OTHER

    values = tuple(fields[3:])
    if kind is RowKind.NOTE_ON and len(values) >= 3 and values[2] == "0":
        kind = RowKind.NOTE_OFF
    return MidiRow(kind=kind, track=track, tick=tick, values=values)


def parse_rows(lines: Iterable[str]) -> list[MidiRow]:
    out: list[MidiRow] = []
    for raw in lines:
        row = classify_row(raw)
        if row.kind is not RowKind.OTHER:
            out.append(row)
    return out
