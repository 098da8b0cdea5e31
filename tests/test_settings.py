from __future__ import annotations

import json
import os

import pytest

from chatlink.settings import PROJECT_ROOT, load_settings, settings_from_dict


def _write_config(tmp_path, payload: dict) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_defaults_when_sections_are_missing(tmp_path) -> None:
    settings = load_settings(_write_config(tmp_path, {}))
    assert settings.linker.external_schemes == ("http", "https")
    assert settings.linker.internal_scheme == "osu"
    assert settings.echo.confirm_delay_ms == 250
    assert settings.channels == ()
    assert settings.channel_db_path is None


def test_full_config(tmp_path) -> None:
    path = _write_config(
        tmp_path,
        {
            "linker": {"trusted_hosts": ["OSU.PPY.SH"], "multiplayer_scheme": "mp"},
            "channels": {"names": ["#english"], "db_path": "data/channels.db"},
            "echo": {"confirm_delay_ms": 5000},
            "logging": {"enabled": True},
        },
    )
    settings = load_settings(path)
    assert settings.linker.trusted_hosts == ("osu.ppy.sh",)
    assert settings.linker.multiplayer_scheme == "mp"
    assert settings.channels == ("#english",)
    assert settings.channel_db_path == os.path.join(PROJECT_ROOT, "data/channels.db")
    assert settings.echo.confirm_delay == 5.0
    assert settings.logging == {"enabled": True}


def test_channel_list_shorthand() -> None:
    settings = settings_from_dict({"channels": ["#english", "#japanese"]})
    assert settings.channels == ("#english", "#japanese")


def test_env_var_selects_config(tmp_path, monkeypatch) -> None:
    path = _write_config(tmp_path, {"echo": {"confirm_delay_ms": 1}})
    monkeypatch.setenv("CHATLINK_CONFIG", path)
    assert load_settings().echo.confirm_delay_ms == 1


def test_missing_config_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "missing.json"))


def test_invalid_values_raise(tmp_path) -> None:
    with pytest.raises(ValueError):
        load_settings(_write_config(tmp_path, {"echo": {"confirm_delay_ms": -1}}))
    with pytest.raises(ValueError):
        load_settings(_write_config(tmp_path, {"linker": {"internal_scheme": "o s u"}}))
