"""Shared pytest fixtures."""

import asyncio
from typing import Any
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from badgecount.app import App
from badgecount.config import Config
from badgecount.core.modules.badge.models import INT64_MAX, Badge
from badgecount.core.store import BadgeStore
from badgecount.errors import StoreCorruptError, StoreUnavailableError
from badgecount.web.server import create_fastapi_app


class MemoryBadgeStore(BadgeStore):
    """In-memory badge store for tests.

    Every operation suspends once, like a network round-trip, and then does its
    work without yielding, so an increment is a single atomic step.
    """

    def __init__(self) -> None:
        self.documents: dict[UUID, dict[str, Any]] = {}
        self.unavailable = False
        self.started = False
        self.stopped = False

    async def on_start(self) -> None:
        self.started = True

    async def on_stop(self) -> None:
        self.stopped = True

    async def insert_badge(self, badge: Badge) -> None:
        await self._round_trip()
        self.documents[badge.id] = badge.model_dump()

    async def has_badge(self, badge_id: UUID) -> bool:
        await self._round_trip()
        return badge_id in self.documents

    async def increment_count(self, badge_id: UUID) -> Badge | None:
        await self._round_trip()
        document = self.documents.get(badge_id)
        if document is None:
            return None
        count = document.get("count")
        # Same guard as the MongoDB filter: a count that cannot be incremented is left untouched
        if type(count) is not int or not 0 <= count < INT64_MAX:
            raise StoreCorruptError(f"Badge '{badge_id}' has a count that cannot be incremented")
        document["count"] += 1
        return Badge.model_validate(dict(document))

    async def _round_trip(self) -> None:
        await asyncio.sleep(0)
        if self.unavailable:
            raise StoreUnavailableError("Badge store unavailable")


@pytest.fixture
def config():
    """Configuration that does not read .env files."""
    return Config(database_url="mongodb://localhost:27017/badgecount_test", _env_file=None)


@pytest.fixture
def store():
    return MemoryBadgeStore()


@pytest.fixture
def app(config, store):
    return App(config, store)


@pytest.fixture
def client(app, config):
    """HTTP client running the full FastAPI lifespan against the in-memory store."""
    with TestClient(create_fastapi_app(app, config)) as test_client:
        yield test_client
