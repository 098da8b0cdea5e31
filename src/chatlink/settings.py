"""Configuration loading for chatlink.

All user-editable settings (link schemes, trusted hosts, known channels,
local echo timing, logging) live in a single JSON file for quick edits
without touching Python.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

from chatlink.core.config import DEFAULT_TRUSTED_HOSTS, EchoConfig, LinkerConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

# Default config location; CHATLINK_CONFIG (env or .env) overrides it.
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")
CONFIG_ENV_VAR = "CHATLINK_CONFIG"


@dataclass(frozen=True)
class Settings:
    """Everything the application layer needs, parsed from config.json."""

    linker: LinkerConfig
    echo: EchoConfig
    channels: Tuple[str, ...] = ()
    channel_db_path: Optional[str] = None
    logging: dict = field(default_factory=dict)


def resolve_config_path(config_path: Optional[str] = None) -> str:
    """Pick the explicit path, then CHATLINK_CONFIG, then the project default."""

    if config_path:
        return config_path
    load_dotenv()
    return os.getenv(CONFIG_ENV_VAR) or CONFIG_PATH


def _load_json_config(path: str) -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _build_linker_config(raw: dict) -> LinkerConfig:
    defaults = LinkerConfig()
    return LinkerConfig(
        external_schemes=tuple(raw.get("external_schemes", defaults.external_schemes)),
        internal_scheme=raw.get("internal_scheme", defaults.internal_scheme),
        multiplayer_scheme=raw.get("multiplayer_scheme", defaults.multiplayer_scheme),
        trusted_hosts=tuple(host.lower() for host in raw.get("trusted_hosts", DEFAULT_TRUSTED_HOSTS)),
    )


def _resolve_db_path(db_path: Optional[str]) -> Optional[str]:
    if not db_path:
        return None
    if os.path.isabs(db_path):
        return db_path
    return os.path.join(PROJECT_ROOT, db_path)


def settings_from_dict(config: dict) -> Settings:
    """Build Settings from an already-parsed config mapping."""

    channels_cfg = config.get("channels", {})
    if isinstance(channels_cfg, list):
        # Shorthand: "channels": ["#english", "#japanese"]
        channels_cfg = {"names": channels_cfg}

    echo_cfg = config.get("echo", {})
    return Settings(
        linker=_build_linker_config(config.get("linker", {})),
        echo=EchoConfig(confirm_delay_ms=int(echo_cfg.get("confirm_delay_ms", 250))),
        channels=tuple(channels_cfg.get("names", [])),
        channel_db_path=_resolve_db_path(channels_cfg.get("db_path")),
        logging=config.get("logging", {}),
    )


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Load and validate settings from config.json."""

    return settings_from_dict(_load_json_config(resolve_config_path(config_path)))
