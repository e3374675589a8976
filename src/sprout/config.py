"""
Configuration for Sprout.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/sprout/config.toml) if exists
3. Environment variables (SPROUT_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class OutlineConfig:
    """Outline source format settings."""
    indent_width: int = 2
    text_marker: str = " | "  # separates the element head from its text
    comment_prefix: str = "#"


@dataclass
class OutputConfig:
    """Rendering output settings."""
    trailing_newline: bool = True
    limit: int = 0  # max chars of markup printed, 0 = unlimited


@dataclass
class Config:
    """Root config with all settings."""
    outline: OutlineConfig = field(default_factory=OutlineConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sprout" / "config.toml"
    return Path.home() / ".config" / "sprout" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError):
            config = Config()  # fall back to defaults on a broken file

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "outline" in data:
        o = data["outline"]
        if "indent_width" in o:
            config.outline.indent_width = int(o["indent_width"])
        if "text_marker" in o:
            config.outline.text_marker = str(o["text_marker"])
        if "comment_prefix" in o:
            config.outline.comment_prefix = str(o["comment_prefix"])

    if "output" in data:
        out = data["output"]
        if "trailing_newline" in out:
            config.output.trailing_newline = bool(out["trailing_newline"])
        if "limit" in out:
            config.output.limit = int(out["limit"])

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "SPROUT_INDENT_WIDTH": ("outline", "indent_width", int),
        "SPROUT_TEXT_MARKER": ("outline", "text_marker", str),
        "SPROUT_COMMENT_PREFIX": ("outline", "comment_prefix", str),
        "SPROUT_TRAILING_NEWLINE": ("output", "trailing_newline", bool),
        "SPROUT_LIMIT": ("output", "limit", int),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                # Bool needs special handling: "true", "1", "yes" -> True
                converted = val.lower() in ("true", "1", "yes") if conv is bool else conv(val)
                setattr(getattr(config, section), attr, converted)

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
