"""Display preferences: colour theme, card layout and graph design.

ThemeConfig is an immutable record passed explicitly to every consumer;
each change produces a new record. ConfigStore persists it under one
fixed key and publishes the colour theme as a document attribute.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import StrEnum

from loguru import logger

from fleetview.constants import COLOR_THEME_ATTRIBUTE, THEME_STORAGE_KEY
from fleetview.core.exceptions import ConfigurationError, StorageError
from fleetview.storage import DocumentAttributes, KeyValueStore

log = logger.bind(component="theme")


class ColorTheme(StrEnum):
    DEFAULT = "default"
    OCEAN = "ocean"
    SUNSET = "sunset"
    FOREST = "forest"
    MIDNIGHT = "midnight"
    ROSE = "rose"


class CardLayout(StrEnum):
    CLASSIC = "classic"
    MODERN = "modern"
    MINIMAL = "minimal"
    DETAILED = "detailed"


class GraphDesign(StrEnum):
    CIRCLE = "circle"
    PROGRESS = "progress"
    BAR = "bar"
    MINIMAL = "minimal"


@dataclass(frozen=True, slots=True)
class ThemeConfig:
    """User display preferences. Always fully populated."""

    color_theme: ColorTheme = ColorTheme.DEFAULT
    card_layout: CardLayout = CardLayout.CLASSIC
    graph_design: GraphDesign = GraphDesign.CIRCLE

    def to_json(self) -> str:
        return json.dumps({
            "colorTheme": self.color_theme.value,
            "cardLayout": self.card_layout.value,
            "graphDesign": self.graph_design.value,
        })

    @classmethod
    def from_json(cls, text: str) -> ThemeConfig:
        """Parse a persisted record.

        Raises:
            ValueError: If the text is not a JSON object (including input
                nested too deeply to parse) or holds an unknown enum value.
            KeyError: If a field is missing.
        """
        try:
            raw = json.loads(text)
        except RecursionError:
            raise ValueError("theme config is nested too deeply") from None
        if not isinstance(raw, dict):
            raise ValueError("theme config must be a JSON object")
        return cls(
            color_theme=ColorTheme(raw["colorTheme"]),
            card_layout=CardLayout(raw["cardLayout"]),
            graph_design=GraphDesign(raw["graphDesign"]),
        )


DEFAULT_THEME = ThemeConfig()

_FIELD_TYPES: dict[str, type[StrEnum]] = {
    "color_theme": ColorTheme,
    "card_layout": CardLayout,
    "graph_design": GraphDesign,
}

# Accept the persisted camelCase names too
_FIELD_ALIASES = {
    "colorTheme": "color_theme",
    "cardLayout": "card_layout",
    "graphDesign": "graph_design",
}


class ConfigStore:
    """Loads, saves and updates the ThemeConfig.

    Example:
        store = ConfigStore(JsonFileStore(), DocumentRoot())
        theme = store.load()
        theme = store.set("color_theme", "ocean")
    """

    def __init__(
        self,
        storage: KeyValueStore,
        document: DocumentAttributes | None = None,
        *,
        key: str = THEME_STORAGE_KEY,
    ) -> None:
        self._storage = storage
        self._document = document
        self._key = key
        self._current = DEFAULT_THEME

    @property
    def current(self) -> ThemeConfig:
        return self._current

    def load(self) -> ThemeConfig:
        """Read the persisted record, falling back to defaults.

        Never raises: an absent, unreadable or partial record yields the
        complete default record.
        """
        try:
            stored = self._storage.get(self._key)
        except Exception as e:
            log.warning("Theme storage unavailable, using defaults: {err}", err=e)
            stored = None

        if stored is None:
            config = DEFAULT_THEME
        else:
            try:
                config = ThemeConfig.from_json(stored)
            except (ValueError, KeyError, TypeError) as e:
                log.debug("Discarding malformed theme config: {err}", err=e)
                config = DEFAULT_THEME

        self._current = config
        self._publish(config)
        return config

    def save(self, config: ThemeConfig) -> None:
        """Persist the whole record and publish its colour theme."""
        self._current = config
        try:
            self._storage.set(self._key, config.to_json())
        except (StorageError, OSError) as e:
            log.warning("Theme not persisted: {err}", err=e)
        self._publish(config)

    def set(self, field: str, value: str | StrEnum) -> ThemeConfig:
        """Change one preference; returns the new merged record.

        Raises:
            ConfigurationError: If the field or value is unknown.
        """
        name = _FIELD_ALIASES.get(field, field)
        enum_type = _FIELD_TYPES.get(name)
        if enum_type is None:
            raise ConfigurationError(
                f"Unknown theme field '{field}'. Valid: {', '.join(_FIELD_TYPES)}"
            )
        try:
            member = enum_type(value)
        except ValueError:
            valid = ", ".join(m.value for m in enum_type)
            raise ConfigurationError(
                f"Invalid {name} '{value}'. Valid: {valid}"
            ) from None

        config = replace(self._current, **{name: member})
        log.bind(field=name).debug("Theme -> {value}", value=member.value)
        self.save(config)
        return config

    def _publish(self, config: ThemeConfig) -> None:
        if self._document is not None:
            self._document.set_attribute(COLOR_THEME_ATTRIBUTE, config.color_theme.value)
