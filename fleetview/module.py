"""Dependency injection wiring for the dashboard."""

from __future__ import annotations

from injector import Module, provider, singleton

from fleetview.config import Settings
from fleetview.dashboard.state import DashboardState
from fleetview.storage import DocumentAttributes, DocumentRoot, JsonFileStore, KeyValueStore
from fleetview.theme import ConfigStore


class DashboardModule(Module):
    """DI module providing the dashboard composition root.

    Usage:
        injector = Injector([DashboardModule(load_settings())])
        state = injector.get(DashboardState)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self._settings

    @singleton
    @provider
    def provide_storage(self, settings: Settings) -> KeyValueStore:
        return JsonFileStore(settings.storage_path)

    @singleton
    @provider
    def provide_document(self) -> DocumentAttributes:
        return DocumentRoot()

    @singleton
    @provider
    def provide_config_store(
        self, storage: KeyValueStore, document: DocumentAttributes,
    ) -> ConfigStore:
        return ConfigStore(storage, document)

    @singleton
    @provider
    def provide_state(self, config_store: ConfigStore, settings: Settings) -> DashboardState:
        return DashboardState(
            config_store,
            ping_hours_default=settings.ping_hours_default,
            ping_hours_max=settings.ping_hours_max,
            hover_open_delay=settings.hover_open_delay,
            hover_close_delay=settings.hover_close_delay,
        )
