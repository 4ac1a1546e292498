from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable

from midi2ass.ass.align import AlignmentReport, align, check_alignment
from midi2ass.ass.compose import compose_lines
from midi2ass.ass.model import SubtitleLine, TimedSyllable
from midi2ass.config import AppConfig
from midi2ass.errors import AlignmentError
from midi2ass.lyrics.parse import parse_lyrics
from midi2ass.midi.extract import extract_timing
from midi2ass.midi.model import MidiTiming
from midi2ass.midi.rows import parse_rows
from midi2ass.timing.durations import DurationResult, compute_durations

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConversionResult:
    timing: MidiTiming
    durations: DurationResult
    syllables: list[list[TimedSyllable]]
    lines: list[SubtitleLine]
    report: AlignmentReport


def build_lines(midi_rows: Iterable[str], lyrics_text: str, cfg: AppConfig) -> ConversionResult:
    """
    rows -> timing -> durations -> syllables -> subtitle lines.
    """
    timing = extract_timing(parse_rows(midi_rows))
    result = compute_durations(timing)

    lyrics = parse_lyrics(lyrics_text, exclude_punctuation=cfg.exclude_punctuation)
    report = check_alignment(lyrics, result.durations)
    if not report.ok:
        msg = f"{report.notes} notes but {report.syllables} syllables; timings will drift"
        if cfg.strict:
            raise AlignmentError(msg)
        logger.warning(msg)

    timed = align(lyrics, result.durations)
    lines = compose_lines(timed, start_s=cfg.start_s, style=cfg.style)
    logger.debug(
        "%d notes, %d rests, %d lines, leftover %.3f cs",
        report.notes,
        len(result.durations) - report.notes,
        len(lines),
        result.remainder,
    )
    return ConversionResult(timing=timing, durations=result, syllables=timed, lines=lines, report=report)
