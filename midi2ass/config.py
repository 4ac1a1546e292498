from __future__ import annotations

import json
from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_TRUE = ("1", "true", "True", "yes", "on")


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "midi2ass"
    return Path.home() / ".config" / "midi2ass"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Subtitle output
    style: str
    start_s: float  # offset of the first line, seconds
    write_header: bool
    keep_blank: bool

    # Lyrics splitting
    exclude_punctuation: bool

    # Fail when note and syllable counts differ
    strict: bool


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw in _TRUE


def _read_saved(config_dir: Path) -> dict[str, Any]:
    cfg_path = config_dir / "config.json"
    if not cfg_path.exists():
        return {}
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _start_s(saved: dict[str, Any]) -> float:
    # saved value, then env, then 0.0; unusable values are skipped
    for source, raw in (("config.json", saved.get("start_s")), ("MIDI2ASS_START", os.getenv("MIDI2ASS_START"))):
        if raw is None:
            continue
        try:
            return float(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring start time %r from %s", raw, source)
    return 0.0


def load_config() -> AppConfig:
    # Priority: config.json -> MIDI2ASS_* env -> defaults
    config_dir = _config_dir()
    saved = _read_saved(config_dir)

    style = saved.get("style") or os.getenv("MIDI2ASS_STYLE") or "Default"
    start_s = _start_s(saved)
    if "exclude_punctuation" in saved:
        exclude_punctuation = bool(saved["exclude_punctuation"])
    else:
        exclude_punctuation = _env_bool("MIDI2ASS_PUNCTUATION", False)

    return AppConfig(
        config_dir=config_dir,
        style=str(style),
        start_s=start_s,
        write_header=_env_bool("MIDI2ASS_HEADER", True),
        keep_blank=_env_bool("MIDI2ASS_KEEP_BLANK", False),
        exclude_punctuation=exclude_punctuation,
        strict=_env_bool("MIDI2ASS_STRICT", False),
    )


def save_config(**values: Any) -> Path:
    """Merge ``values`` into config.json, skipping ``None``; returns the file path."""
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = _read_saved(cfg_path.parent)
    for k, v in values.items():
        if v is not None:
            data[k] = v
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return cfg_path
