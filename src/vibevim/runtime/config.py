"""Engine configuration resolved from the environment and XDG directories."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

APP_DIR_NAME = "vibevim"
KEYBINDS_FILE_NAME = "keybinds.json"
ENV_PREFIX = "VIBEVIM_"

DEFAULT_TAB_WIDTH = 4
DEFAULT_VIEWPORT_HEIGHT = 24


def config_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """``$XDG_CONFIG_HOME/vibevim``, falling back to ``~/.config/vibevim``."""

    env = os.environ if environ is None else environ
    base = env.get("XDG_CONFIG_HOME")
    if base:
        return Path(base).expanduser() / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def keybinds_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get(f"{ENV_PREFIX}KEYBINDS")
    if override:
        return Path(override).expanduser()
    return config_dir(env) / KEYBINDS_FILE_NAME


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings shared by the editor, the dispatcher and the host adapter."""

    keybinds_path: Path
    tab_width: int = DEFAULT_TAB_WIDTH
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        return cls(
            keybinds_path=keybinds_path(env),
            tab_width=_env_int(env, "TAB_WIDTH", DEFAULT_TAB_WIDTH),
            viewport_height=_env_int(env, "VIEWPORT_HEIGHT", DEFAULT_VIEWPORT_HEIGHT),
        )


__all__ = [
    "APP_DIR_NAME",
    "KEYBINDS_FILE_NAME",
    "EngineConfig",
    "config_dir",
    "keybinds_path",
]
