from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import cast

from badgecount.config import Config
from badgecount.core.store import BadgeStore


class Service:
    """Base class for services backed by the shared badge store."""

    def __init__(self, store: BadgeStore) -> None:
        self.store = store

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""


class Services:
    """Service registry that automatically discovers and initializes services."""

    from badgecount.core.modules.badge.service import BadgeService  # noqa: PLC0415
    from badgecount.core.modules.counter.service import CounterService  # noqa: PLC0415

    badge: BadgeService
    counter: CounterService

    def __init__(self, store: BadgeStore) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("badge", "badgecount.core.modules.badge.service", "BadgeService"),
            ("counter", "badgecount.core.modules.counter.service", "CounterService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(store)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, the badge store, and all service instances."""

    config: Config
    store: BadgeStore
    services: Services

    def __init__(self, config: Config, store: BadgeStore) -> None:
        """Initialize core with config and an already constructed store handle."""
        self.config = config
        self.store = store
        self.services = Services(store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.store.on_start()
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services, then close the store connection pool."""
        await self.services.stop_all()
        await self.store.on_stop()
