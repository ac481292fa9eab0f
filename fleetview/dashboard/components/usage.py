"""Usage gauge: one percentage rendered in the user's graph design."""

from __future__ import annotations

from rich.text import Text

from fleetview.theme import GraphDesign
from fleetview.usage import clamp_usage, usage_color

# Rich has no plain "orange"
_COLOR_STYLES = {"green": "green", "orange": "dark_orange", "red": "red"}

_CIRCLE_CHARS = "○◔◑◕●"
_BAR_CHARS = "▁▂▃▄▅▆▇█"
_SEGMENTS = 10
_EMPTY_STYLE = "bright_black"


def gauge_style(value: float) -> str:
    return _COLOR_STYLES[usage_color(value)]


class UsageGauge:
    """Renders a usage percentage as circle, progress, bar or plain text.

    Example output (progress): ████░░░░░░ 42.0%
    """

    def __init__(
        self,
        value: float,
        label: str,
        design: GraphDesign = GraphDesign.CIRCLE,
        compact: bool = True,
    ) -> None:
        self._value = clamp_usage(value)
        self._label = label
        self._design = design
        self._compact = compact

    def render(self) -> Text:
        value = self._value
        style = gauge_style(value)
        result = Text()

        match self._design:
            case GraphDesign.MINIMAL:
                result.append(f"{self._label} ", style="dim")
                result.append(f"{value:.1f}%", style=f"{style} bold")
                return result

            case GraphDesign.CIRCLE:
                idx = min(len(_CIRCLE_CHARS) - 1, int(value / 25))
                result.append(_CIRCLE_CHARS[idx], style=style)
                result.append(f" {value:.0f}%", style="bold")

            case GraphDesign.BAR:
                for i in range(_SEGMENTS):
                    char = _BAR_CHARS[min(len(_BAR_CHARS) - 1, i * len(_BAR_CHARS) // _SEGMENTS)]
                    active = value >= (i + 1) * (100 / _SEGMENTS)
                    result.append(char, style=style if active else _EMPTY_STYLE)
                result.append(f" {value:.1f}%", style="bold")

            case GraphDesign.PROGRESS:
                filled = round(value / (100 / _SEGMENTS))
                result.append("█" * filled, style=style)
                result.append("░" * (_SEGMENTS - filled), style=_EMPTY_STYLE)
                result.append(f" {value:.1f}%", style="bold")

        if not self._compact:
            result.append(f" {self._label}", style="dim")
        return result
