"""Dashboard renderer.

Manages Rich Live display with auto-refresh.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console, ConsoleOptions, RenderResult
from rich.live import Live

from .components import DashboardLayout

if TYPE_CHECKING:
    from .state import DashboardState


class DashboardRenderable:
    """Rich renderable that builds the dashboard from state on each render.

    Rich Live calls __rich_console__ at refresh_per_second rate.
    We build a fresh ViewModel from state each time.
    """

    def __init__(self, state: DashboardState) -> None:
        self._state = state

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        yield DashboardLayout(self._state.to_view_model()).render()


class DashboardRenderer:
    """Manages Rich Live display.

    Rich Live handles auto-refresh at 4fps. We just pass a
    DashboardRenderable that reads from state on each render.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console
        self._live: Live | None = None

    @property
    def console(self) -> Console:
        if self._live:
            return self._live.console
        return self._console or Console()

    @property
    def active(self) -> bool:
        return self._live is not None

    def start(self, state: DashboardState) -> None:
        """Initialize and start Live display.

        Args:
            state: State that DashboardRenderable reads on each refresh.
        """
        if self._live is not None:
            return
        self._live = Live(
            DashboardRenderable(state),
            console=self._console,
            refresh_per_second=4,
            transient=False,
        )
        self._live.start()

    def stop(self) -> None:
        if self._live:
            self._live.stop()
            self._live = None
