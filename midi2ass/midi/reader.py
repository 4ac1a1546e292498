"""
Input side: turn a file into midicsv-style text rows.

A ``.mid``/``.midi`` file is decoded with mido; anything else is read as a
midicsv dump.
"""

from __future__ import annotations

import logging
from pathlib import Path

import mido

from midi2ass.errors import MidiReadError

logger = logging.getLogger(__name__)

_SMF_SUFFIXES = (".mid", ".midi")


def rows_from_midi_file(path: Path) -> list[str]:
    try:
        midi = mido.MidiFile(str(path))
    except (OSError, EOFError, ValueError) as e:
        raise MidiReadError(f"Cannot read MIDI file {path}: {e}") from e

    out = [f"0, 0, Header, {midi.type}, {len(midi.tracks)}, {midi.ticks_per_beat}"]
    for track_no, track in enumerate(midi.tracks, start=1):
        abs_tick = 0
        for msg in track:
            abs_tick += msg.time
            if msg.type == "set_tempo":
                out.append(f"{track_no}, {abs_tick}, Tempo, {msg.tempo}")
            elif msg.type == "note_on":
                out.append(f"{track_no}, {abs_tick}, Note_on_c, {msg.channel}, {msg.note}, {msg.velocity}")
            elif msg.type == "note_off":
                out.append(f"{track_no}, {abs_tick}, Note_off_c, {msg.channel}, {msg.note}, {msg.velocity}")

    logger.debug("Decoded %s: %d tracks, %d rows", path, len(midi.tracks), len(out))
    return out


def read_rows(path: Path) -> list[str]:
    if path.suffix.lower() in _SMF_SUFFIXES:
        return rows_from_midi_file(path)
    try:
        # midicsv writes text events as raw bytes; only ASCII fields are parsed
        return path.read_text(encoding="latin-1").splitlines()
    except OSError as e:
        raise MidiReadError(f"Cannot read MIDI rows from {path}: {e}") from e
