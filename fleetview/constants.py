"""Constants shared across fleetview."""

from __future__ import annotations

from pathlib import Path

FLEETVIEW_DIR = Path.home() / ".fleetview"

# Durable storage
THEME_STORAGE_KEY = "fleetview-theme-config"
DEFAULT_STORAGE_PATH = FLEETVIEW_DIR / "storage.json"

# Document side channel
COLOR_THEME_ATTRIBUTE = "data-color-theme"

# Hover intent (seconds)
HOVER_OPEN_DELAY = 3.0
HOVER_CLOSE_DELAY = 0.2

# Live feed
REFRESH_INTERVAL = 2.0

# RPC methods
RPC_GET_VERSION = "common:getVersion"
RPC_GET_LATEST_STATUS = "common:getNodesLatestStatus"

# Ping history picker (hours)
PING_HOURS_DEFAULT = 24
PING_HOURS_MIN = 1
PING_HOURS_MAX = 720
