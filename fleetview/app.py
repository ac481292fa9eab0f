"""Dashboard entry point: wires collaborators and runs until stopped."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from injector import Injector, Module
from loguru import logger
from rich.console import Console

from fleetview.config import Settings
from fleetview.dashboard.renderer import DashboardRenderer
from fleetview.dashboard.state import DashboardState
from fleetview.module import DashboardModule
from fleetview.observability.logging import setup_logging, teardown_logging
from fleetview.rpc import LiveFeedPoller, RPCClient

log = logger.bind(component="app")


async def run_dashboard(
    rpc: RPCClient,
    roster: Iterable[Mapping[str, Any]],
    *,
    settings: Settings | None = None,
    stop: asyncio.Event | None = None,
    console: Console | None = None,
    modules: Iterable[Module] = (),
) -> DashboardState:
    """Run the live dashboard until ``stop`` is set (or forever).

    Version lookup and live polling failures degrade the view; they never
    end the run.
    """
    settings = settings or Settings()
    handler_ids = setup_logging(settings.log)
    injector = Injector([DashboardModule(settings), *modules])
    state = injector.get(DashboardState)
    state.set_roster(roster)

    renderer = DashboardRenderer(console)
    poller = LiveFeedPoller(rpc, state.apply_live, interval=settings.refresh_interval)
    stop = stop or asyncio.Event()

    log.info("Dashboard starting with {n} nodes", n=len(state.roster))
    try:
        await state.refresh_version(rpc)
        renderer.start(state)
        async with poller:
            await stop.wait()
    finally:
        renderer.stop()
        state.dispose()
        log.info("Dashboard stopped")
        teardown_logging(handler_ids)
    return state
