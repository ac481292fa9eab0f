"""RPC-backed collaborators: version query and live feed polling.

The transport itself lives elsewhere; fleetview only needs an object with
an awaitable ``call(method)``. Every failure here degrades the dashboard
instead of crashing it.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from loguru import logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from fleetview.constants import REFRESH_INTERVAL, RPC_GET_LATEST_STATUS, RPC_GET_VERSION
from fleetview.core.exceptions import RPCError

log = logger.bind(component="rpc")


class RPCClient(Protocol):
    async def call(self, method: str) -> Any: ...


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """Build info shown in the version panel."""

    hash: str  # short commit hash, 7 chars
    version: str


def _parse_version(data: Any) -> VersionInfo:
    if not isinstance(data, Mapping):
        raise RPCError(RPC_GET_VERSION, f"expected an object, got {type(data).__name__}")
    return VersionInfo(
        hash=str(data.get("hash") or "")[:7],
        version=str(data.get("version") or ""),
    )


async def fetch_version(
    rpc: RPCClient,
    *,
    attempts: int = 3,
    wait: float = 0.5,
) -> VersionInfo | None:
    """Query build info, retrying briefly.

    Returns None when the query keeps failing or the response is unusable;
    the version panel then renders nothing.
    """

    @retry(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(wait),
        retry=retry_if_exception_type(Exception),
        reraise=True,
    )
    async def _call() -> Any:
        return await rpc.call(RPC_GET_VERSION)

    try:
        return _parse_version(await _call())
    except Exception as e:
        log.bind(method=RPC_GET_VERSION).warning("Failed to fetch version info: {err}", err=e)
        return None


PayloadSink: TypeAlias = Callable[[Mapping[str, Any] | None], object]


class LiveFeedPoller:
    """Polls the latest node status and hands each payload to a sink.

    A failed poll keeps the previous snapshot in place. The first failure
    in a row is logged as a warning, repeats at debug level.

    Example:
        async with LiveFeedPoller(rpc, state.apply_live, interval=2.0):
            await run_ui()
    """

    def __init__(
        self,
        rpc: RPCClient,
        sink: PayloadSink,
        *,
        interval: float = REFRESH_INTERVAL,
    ) -> None:
        self._rpc = rpc
        self._sink = sink
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._failures = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def consecutive_failures(self) -> int:
        return self._failures

    async def poll_once(self) -> bool:
        """Run one poll. Returns True if a payload reached the sink."""
        try:
            payload = await self._rpc.call(RPC_GET_LATEST_STATUS)
        except Exception as e:
            self._failures += 1
            level = "WARNING" if self._failures == 1 else "DEBUG"
            log.bind(method=RPC_GET_LATEST_STATUS).log(
                level, "Live feed poll failed ({n} in a row): {err}", n=self._failures, err=e,
            )
            return False

        if self._failures:
            log.info("Live feed recovered after {n} failed polls", n=self._failures)
        self._failures = 0
        self._sink(payload if isinstance(payload, Mapping) else None)
        return True

    async def run(self) -> None:
        while True:
            await self.poll_once()
            await asyncio.sleep(self._interval)

    def start(self) -> asyncio.Task[None]:
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def __aenter__(self) -> LiveFeedPoller:
        self.start()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.stop()
