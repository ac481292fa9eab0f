"""loguru sinks for the dashboard.

fleetview logs through loguru but stays silent until a host turns it on:
run_dashboard() installs the sinks described by Settings.log and removes
them again on shutdown. Every module binds a ``component`` name, and a few
bind the node, RPC method or theme field they act on; the sinks render
those as ``component key=value``.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, TypeAlias

from loguru import logger

logger.disable("fleetview")

LogLevel: TypeAlias = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"]

_DETAIL_KEYS = ("node", "method", "field")

_CONSOLE_FORMAT = (
    "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> "
    "<cyan>{extra[_origin]}</cyan> {message}"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {extra[_origin]} | {message}"


def _origin(record: Any) -> str:
    extra = record["extra"]
    origin = str(extra.get("component", "fleetview"))
    details = " ".join(f"{k}={extra[k]}" for k in _DETAIL_KEYS if k in extra)
    return f"{origin} {details}" if details else origin


@dataclass(frozen=True, slots=True)
class LogConfig:
    """The ``[log]`` section of fleetview.toml.

    The console sink is off by default because it writes to stderr
    underneath the Rich live table.
    """

    level: LogLevel = "INFO"
    file: str = ".fleetview/fleetview.log"  # "" disables the file sink
    console: bool = False
    rotation: str = "10 MB"
    retention: int = 5


def setup_logging(config: LogConfig) -> list[int]:
    """Install the configured sinks. Returns their ids for teardown_logging()."""
    logger.remove()
    logger.configure(patcher=lambda r: r["extra"].update(_origin=_origin(r)))
    logger.enable("fleetview")

    sinks: list[int] = []
    if config.console:
        sinks.append(logger.add(
            sys.stderr,
            level=config.level,
            format=_CONSOLE_FORMAT,
            filter="fleetview",
        ))
    if config.file:
        Path(config.file).parent.mkdir(parents=True, exist_ok=True)
        # The file always keeps debug detail; level only gates the console
        sinks.append(logger.add(
            config.file,
            level="DEBUG",
            format=_FILE_FORMAT,
            rotation=config.rotation,
            retention=config.retention,
            filter="fleetview",
        ))
    return sinks


def teardown_logging(sink_ids: list[int]) -> None:
    for sink_id in sink_ids:
        logger.remove(sink_id)
    logger.disable("fleetview")
