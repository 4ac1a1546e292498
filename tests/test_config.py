from __future__ import annotations

import pytest

from midi2ass.config import load_config, save_config


@pytest.fixture(autouse=True)
def _clean_env(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for name in ("STYLE", "START", "PUNCTUATION", "HEADER", "KEEP_BLANK", "STRICT"):
        monkeypatch.delenv(f"MIDI2ASS_{name}", raising=False)


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        cfg = load_config()
        assert cfg.config_dir == tmp_path / "midi2ass"
        assert cfg.style == "Default"
        assert cfg.start_s == 0.0
        assert cfg.exclude_punctuation is False
        assert cfg.write_header is True
        assert cfg.keep_blank is False
        assert cfg.strict is False

    def test_env(self, monkeypatch):
        monkeypatch.setenv("MIDI2ASS_STYLE", "Karaoke")
        monkeypatch.setenv("MIDI2ASS_START", "1.25")
        monkeypatch.setenv("MIDI2ASS_PUNCTUATION", "1")
        monkeypatch.setenv("MIDI2ASS_HEADER", "0")
        cfg = load_config()
        assert cfg.style == "Karaoke"
        assert cfg.start_s == 1.25
        assert cfg.exclude_punctuation is True
        assert cfg.write_header is False


class TestSaveConfig:
    def test_save_and_load(self, tmp_path):
        path = save_config(style="Top", start_s=2.5, exclude_punctuation=True)
        assert path == tmp_path / "midi2ass" / "config.json"
        cfg = load_config()
        assert (cfg.style, cfg.start_s, cfg.exclude_punctuation) == ("Top", 2.5, True)

    def test_saved_values_win_over_env(self, monkeypatch):
        save_config(style="Top")
        monkeypatch.setenv("MIDI2ASS_STYLE", "Env")
        monkeypatch.setenv("MIDI2ASS_START", "3")
        cfg = load_config()
        assert cfg.style == "Top"
        assert cfg.start_s == 3.0

    def test_none_values_are_not_saved(self):
        save_config(style="Top")
        save_config(style=None, start_s=1.0)
        cfg = load_config()
        assert (cfg.style, cfg.start_s) == ("Top", 1.0)

    def test_broken_file_ignored(self, tmp_path):
        (tmp_path / "midi2ass").mkdir()
        (tmp_path / "midi2ass" / "config.json").write_text("{nope", encoding="utf-8")
        assert load_config().style == "Default"


class TestBadStartTime:
    @pytest.mark.parametrize("value", ["null", '"soon"', "[1]"])
    def test_bad_saved_start_falls_back_to_env(self, tmp_path, monkeypatch, value):
        (tmp_path / "midi2ass").mkdir()
        (tmp_path / "midi2ass" / "config.json").write_text(
            '{"start_s": %s}' % value, encoding="utf-8"
        )
        monkeypatch.setenv("MIDI2ASS_START", "0.5")
        assert load_config().start_s == 0.5

    def test_bad_env_start_is_ignored(self, monkeypatch):
        monkeypatch.setenv("MIDI2ASS_START", "later")
        assert load_config().start_s == 0.0
