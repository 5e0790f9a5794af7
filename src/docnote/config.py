"""Render configuration: load and validate config.toml."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Raised when config.toml is malformed or has fields of the wrong type."""


@dataclass(frozen=True)
class RenderConfig:
    """Colors and glyphs used when drawing a note."""

    heading_color: str = "grey70"
    body_color: str = "grey70"
    code_color: str = "white"
    link_color: str = "bright_blue"
    bullet: str = "•"


_RENDER_FIELDS = ("heading_color", "body_color", "code_color", "link_color", "bullet")


def get_config_path() -> Path:
    """Return the path to config.toml, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "docnote" / "config.toml"


def load_config(path: Path) -> RenderConfig:
    """Load render settings from a TOML file.

    Returns the defaults if the file does not exist.
    Raises ConfigError on parse errors or non-string values.
    """
    if not path.exists():
        return RenderConfig()

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    section = data.get("render", {})
    if not isinstance(section, dict):
        msg = f"[render] in {path} must be a table"
        raise ConfigError(msg)

    values: dict[str, str] = {}
    for field in _RENDER_FIELDS:
        if field not in section:
            continue
        value = section[field]
        if not isinstance(value, str):
            msg = f"render.{field} in {path} must be a string, got {type(value).__name__}"
            raise ConfigError(msg)
        values[field] = value
    return RenderConfig(**values)
