from __future__ import annotations

from .compose import is_blank
from .model import SubtitleLine

_STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, "
    "Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, "
    "Alignment, MarginL, MarginR, MarginV, Encoding"
)
_EVENT_FORMAT = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"


def format_ass_time(cs: float) -> str:
    # H:MM:SS.CC, truncated rather than rounded
    total = max(int(cs), 0)
    h, rem = divmod(total, 360_000)
    m, rem = divmod(rem, 6_000)
    s, cc = divmod(rem, 100)
    return f"{h}:{m:02d}:{s:02d}.{cc:02d}"


def dialogue(line: SubtitleLine) -> str:
    start = format_ass_time(line.start_cs)
    end = format_ass_time(line.end_cs)
    return f"Dialogue: 0,{start},{end},{line.style},,0,0,0,,{line.text}"


def ass_header(style: str, title: str = "midi2ass") -> str:
    return "\n".join(
        [
            "[Script Info]",
            f"Title: {title}",
            "ScriptType: v4.00+",
            "PlayResX: 1280",
            "PlayResY: 720",
            "WrapStyle: 0",
            "",
            "[V4+ Styles]",
            _STYLE_FORMAT,
            f"Style: {style},Arial,48,&H00FFFFFF,&H000000FF,&H00000000,&H64000000,"
            "-1,0,0,0,100,100,0,0,1,2,0,2,10,10,30,1",
            "",
            "[Events]",
            _EVENT_FORMAT,
        ]
    )


def export_ass(
    lines: list[SubtitleLine],
    style: str,
    keep_blank: bool = False,
    header: bool = True,
) -> str:
    """
    Lines whose text is only karaoke tags and whitespace (rests, blank
    lyrics lines) are dropped unless ``keep_blank``.
    """
    out: list[str] = []
    if header:
        out.append(ass_header(style))
    for line in lines:
        if not keep_blank and is_blank(line):
            continue
        out.append(dialogue(line))
    return "\n".join(out) + ("\n" if out else "")
