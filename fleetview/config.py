"""TOML-based dashboard configuration.

Loads ~/.fleetview/defaults.toml (global) and fleetview.toml (project),
merges them, and resolves the result into a frozen Settings record.

Example fleetview.toml:

    [dashboard]
    refresh_interval = 1.5
    storage_path = "~/.config/fleetview/storage.json"

    [log]
    level = "DEBUG"
    console = true
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, TypeAlias

from fleetview.constants import (
    DEFAULT_STORAGE_PATH,
    FLEETVIEW_DIR,
    HOVER_CLOSE_DELAY,
    HOVER_OPEN_DELAY,
    PING_HOURS_DEFAULT,
    PING_HOURS_MAX,
    REFRESH_INTERVAL,
)
from fleetview.core.exceptions import ConfigurationError
from fleetview.observability.logging import LogConfig

RawConfig: TypeAlias = dict[str, Any]

GLOBAL_CONFIG_PATH = FLEETVIEW_DIR / "defaults.toml"
PROJECT_CONFIG_NAME = "fleetview.toml"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved dashboard settings.

    Attributes:
        storage_path: JSON file backing the durable key-value store.
        refresh_interval: Seconds between live-feed polls.
        hover_open_delay: Dwell time before a hover popover opens.
        hover_close_delay: Grace period before a hover popover closes.
        ping_hours_default: Initial ping-history window for expanded rows.
        ping_hours_max: Upper bound of the ping-history picker.
        log: Logging configuration.
    """

    storage_path: Path = DEFAULT_STORAGE_PATH
    refresh_interval: float = REFRESH_INTERVAL
    hover_open_delay: float = HOVER_OPEN_DELAY
    hover_close_delay: float = HOVER_CLOSE_DELAY
    ping_hours_default: int = PING_HOURS_DEFAULT
    ping_hours_max: int = PING_HOURS_MAX
    log: LogConfig = field(default_factory=LogConfig)


def _deep_merge(base: RawConfig, override: RawConfig) -> RawConfig:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> RawConfig:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e


def load_config(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> RawConfig:
    global_cfg = _read_toml(global_path or GLOBAL_CONFIG_PATH)
    project_path = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    project_cfg = _read_toml(project_path)

    merged = _deep_merge(global_cfg, project_cfg)
    merged.setdefault("dashboard", {})
    merged.setdefault("log", {})
    return merged


def _check_keys(section: str, raw: RawConfig, allowed: set[str]) -> None:
    unknown = set(raw) - allowed
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in [{section}]: {', '.join(sorted(unknown))}. "
            f"Valid: {', '.join(sorted(allowed))}"
        )


def _build_settings(raw: RawConfig) -> Settings:
    dashboard = dict(raw["dashboard"])
    log = dict(raw["log"])

    _check_keys("dashboard", dashboard, {f.name for f in fields(Settings)} - {"log"})
    _check_keys("log", log, {f.name for f in fields(LogConfig)})

    if "storage_path" in dashboard:
        dashboard["storage_path"] = Path(dashboard["storage_path"]).expanduser()

    try:
        settings = Settings(**dashboard, log=LogConfig(**log))
    except TypeError as e:
        raise ConfigurationError(str(e)) from e

    if settings.refresh_interval <= 0:
        raise ConfigurationError("refresh_interval must be positive")
    if settings.hover_open_delay < 0 or settings.hover_close_delay < 0:
        raise ConfigurationError("hover delays must not be negative")
    if settings.ping_hours_max < 1:
        raise ConfigurationError("ping_hours_max must be at least 1")
    return settings


def load_settings(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> Settings:
    """Load and validate settings from the global and project TOML files."""
    return _build_settings(load_config(project_dir=project_dir, global_path=global_path))
