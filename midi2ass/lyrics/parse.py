from __future__ import annotations

from dataclasses import dataclass
import re

DELIMITER = "|"

_PUNCT = ",.;:!?…\"'»”’)]"
# trailing run of punctuation and whitespace
_TAIL_RE = re.compile(r"[\s" + re.escape(_PUNCT) + r"]+$")


@dataclass(frozen=True, slots=True)
class Syllable:
    text: str
    timed: bool = True  # False: zero-duration marker, consumes no note


def _split_punctuation(token: str) -> list[Syllable]:
    m = _TAIL_RE.search(token)
    # whitespace-only tail, or nothing but punctuation: keep as is
    if not m or m.start() == 0 or not m.group().strip():
        return [Syllable(token)]
    return [Syllable(token[: m.start()]), Syllable(m.group(), timed=False)]


def split_line(line: str, exclude_punctuation: bool = False) -> list[Syllable]:
    """
    "Hel|lo, |world" -> ["Hel", "lo, ", "world"]

    A line without syllables is a blank placeholder: one empty syllable that
    still takes a note. With ``exclude_punctuation`` the trailing punctuation
    of a syllable becomes its own untimed marker, so it is not highlighted
    with that syllable.
    """
    line = line.rstrip("\r\n")
    tokens = [t for t in line.split(DELIMITER) if t]
    if not "".join(tokens).strip():
        return [Syllable("")]

    out: list[Syllable] = []
    for tok in tokens:
        if exclude_punctuation:
            out.extend(_split_punctuation(tok))
        else:
            out.append(Syllable(tok))
    return out


def parse_lyrics(text: str, exclude_punctuation: bool = False) -> list[list[Syllable]]:
    return [split_line(raw, exclude_punctuation) for raw in text.splitlines()]


def count_timed(lines: list[list[Syllable]]) -> int:
    return sum(1 for line in lines for s in line if s.timed)
