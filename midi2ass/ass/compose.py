from __future__ import annotations

import re

from .model import SubtitleLine, TimedSyllable

_K_TAG_RE = re.compile(r"\{\\[kK][fo]?\d+\}")


def karaoke_text(syllables: list[TimedSyllable]) -> str:
    return "".join(f"{{\\k{s.cs}}}{s.text}" for s in syllables)


def compose_lines(lines: list[list[TimedSyllable]], start_s: float, style: str) -> list[SubtitleLine]:
    """
    One subtitle line per lyrics line.

    Lines are laid end to end from ``start_s``: each ends after the sum of
    its syllable durations and the next one starts there.
    """
    start = round(start_s * 100)
    out: list[SubtitleLine] = []
    for syllables in lines:
        end = start + sum(s.cs for s in syllables)
        out.append(SubtitleLine(start_cs=start, end_cs=end, style=style, text=karaoke_text(syllables)))
        start = end
    return out


def is_blank(line: SubtitleLine) -> bool:
    return not _K_TAG_RE.sub("", line.text).strip()
