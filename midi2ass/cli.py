from __future__ import annotations

from pathlib import Path
import typer

from midi2ass.ass.export import export_ass
from midi2ass.config import load_config, save_config
from midi2ass.errors import Midi2AssError
from midi2ass.logging_setup import setup_logging
from midi2ass.midi.extract import extract_timing
from midi2ass.midi.reader import read_rows, rows_from_midi_file
from midi2ass.midi.rows import parse_rows
from midi2ass.pipeline import build_lines
from midi2ass.timing.durations import DurationCalculator, compute_durations


app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.command()
def convert(
    midi_path: Path = typer.Argument(..., help="midicsv dump or .mid file"),
    lyrics_path: Path = typer.Argument(..., help="Lyrics, syllables split with |"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Output .ass file (default: stdout)"),
    style: str | None = typer.Option(None, "--style", help="ASS style name for every line"),
    start: float | None = typer.Option(None, "--start", help="Start time of the first line (seconds)"),
    punctuation: bool | None = typer.Option(
        None, "--punctuation/--no-punctuation", help="Keep trailing punctuation out of syllable highlight"
    ),
    keep_blank: bool = typer.Option(False, "--keep-blank", help="Keep lines without visible text"),
    no_header: bool = typer.Option(False, "--no-header", help="Only write Dialogue lines"),
    strict: bool = typer.Option(False, "--strict", help="Fail when note and syllable counts differ"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Convert a MIDI melody and a lyrics file to karaoke ASS lines.
    """
    setup_logging(debug, quiet=quiet)
    cfg = load_config()
    if style is not None:
        cfg = cfg.__class__(**{**cfg.__dict__, "style": style})
    if start is not None:
        cfg = cfg.__class__(**{**cfg.__dict__, "start_s": start})
    if punctuation is not None:
        cfg = cfg.__class__(**{**cfg.__dict__, "exclude_punctuation": punctuation})
    if keep_blank:
        cfg = cfg.__class__(**{**cfg.__dict__, "keep_blank": True})
    if no_header:
        cfg = cfg.__class__(**{**cfg.__dict__, "write_header": False})
    if strict:
        cfg = cfg.__class__(**{**cfg.__dict__, "strict": True})

    try:
        midi_rows = read_rows(midi_path)
        lyrics_text = lyrics_path.read_text(encoding="utf-8")
        res = build_lines(midi_rows, lyrics_text, cfg)
    except (Midi2AssError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    data = export_ass(res.lines, style=cfg.style, keep_blank=cfg.keep_blank, header=cfg.write_header)
    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def durations(
    midi_path: Path = typer.Argument(..., help="midicsv dump or .mid file"),
):
    """Print per-note durations (centiseconds) and timing stats."""
    try:
        timing = extract_timing(parse_rows(read_rows(midi_path)))
        res = compute_durations(timing)
    except Midi2AssError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    # compute_durations rejected a missing header
    ticks = timing.header.ticks_per_quarter
    calc = DurationCalculator(ticks_per_quarter=ticks, tempo=timing.tempo.us_per_quarter)
    typer.echo(f"ticks_per_quarter={ticks}")
    typer.echo(f"tempo_us={timing.tempo.us_per_quarter}")
    typer.echo(f"cs_per_tick={calc.cs_per_tick:.6f}")
    typer.echo(f"gap_threshold_cs={calc.gap_threshold:.3f}")
    typer.echo(f"notes={len(res.notes)}")
    typer.echo(f"rests={len(res.durations) - len(res.notes)}")
    typer.echo(f"total_cs={res.total_cs}")
    typer.echo(f"remainder_cs={res.remainder:.6f}")
    for d in res.durations:
        typer.echo(f"{d.cs}\trest" if d.rest else str(d.cs))


@app.command()
def rows(midi_path: Path):
    """Dump midicsv-style rows decoded from a .mid file."""
    try:
        lines = rows_from_midi_file(midi_path)
    except Midi2AssError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    for line in lines:
        typer.echo(line)


@app.command()
def config(
    style: str | None = typer.Option(None, "--style", help="Default ASS style name"),
    start: float | None = typer.Option(None, "--start", help="Default start time (seconds)"),
    punctuation: bool | None = typer.Option(
        None, "--punctuation/--no-punctuation", help="Default punctuation handling"
    ),
):
    """Save default options to config.json."""
    if style is None and start is None and punctuation is None:
        cfg = load_config()
        typer.echo(f"config_dir={cfg.config_dir}")
        typer.echo(f"style={cfg.style}")
        typer.echo(f"start_s={cfg.start_s}")
        typer.echo(f"exclude_punctuation={cfg.exclude_punctuation}")
        return
    path = save_config(style=style, start_s=start, exclude_punctuation=punctuation)
    typer.echo(f"Saved: {path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
