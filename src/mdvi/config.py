"""Viewer configuration: load and validate config.toml."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class ConfigError(Exception):
    """Raised when config.toml is malformed or holds invalid values."""


class ImageProtocol(StrEnum):
    """Terminal image protocols the painter can be asked to use."""

    AUTO = "auto"
    HALFBLOCKS = "halfblocks"
    SIXEL = "sixel"
    KITTY = "kitty"
    ITERM2 = "iterm2"


@dataclass
class ViewerConfig:
    """Settings from the ``[viewer]`` table of config.toml."""

    image_protocol: ImageProtocol = ImageProtocol.AUTO
    log_file: Path | None = None


def get_config_path() -> Path:
    """Return the path to config.toml, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "mdvi" / "config.toml"


def load_config(path: Path) -> ViewerConfig:
    """Load viewer settings from a TOML file.

    Returns defaults if the file does not exist.
    Raises ConfigError on parse errors or invalid values.
    """
    if not path.exists():
        return ViewerConfig()

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    viewer = data.get("viewer", {})
    if not isinstance(viewer, dict):
        msg = f"[viewer] in {path} must be a table"
        raise ConfigError(msg)

    config = ViewerConfig()
    if "image_protocol" in viewer:
        raw = viewer["image_protocol"]
        try:
            config.image_protocol = ImageProtocol(raw)
        except ValueError as e:
            choices = ", ".join(p.value for p in ImageProtocol)
            msg = f"Unknown image_protocol {raw!r} in {path} (expected one of: {choices})"
            raise ConfigError(msg) from e
    if viewer.get("log_file"):
        config.log_file = Path(str(viewer["log_file"])).expanduser()
    return config
