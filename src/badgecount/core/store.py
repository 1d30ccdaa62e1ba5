"""Durable storage contract for badges and its MongoDB implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import urlparse
from uuid import UUID

import structlog
from bson.int64 import Int64
from pydantic import ValidationError as PydanticValidationError
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.write_concern import WriteConcern

from badgecount.config import Config
from badgecount.core.db import store_errors
from badgecount.core.modules.badge.models import INT64_MAX, Badge
from badgecount.errors import StoreCorruptError

logger = structlog.get_logger(__name__)

# Only well-formed counts that can still grow are incremented; anything else is left untouched
INCREMENTABLE_COUNT = {"$type": ["int", "long"], "$gte": 0, "$lt": INT64_MAX}


class BadgeStore(ABC):
    """Key → counter mapping with create, existence check and atomic increment.

    Implementations must make ``increment_count`` a single indivisible
    update-and-return against the backing store.
    """

    async def on_start(self) -> None:
        """Prepare the store on application startup."""

    async def on_stop(self) -> None:
        """Release store resources on application shutdown."""

    @abstractmethod
    async def insert_badge(self, badge: Badge) -> None:
        """Durably persist a new badge. Returns only after the write is acknowledged."""

    @abstractmethod
    async def has_badge(self, badge_id: UUID) -> bool:
        """Check whether a badge with this id is registered."""

    @abstractmethod
    async def increment_count(self, badge_id: UUID) -> Badge | None:
        """Atomically add one to the badge count and return the updated badge.

        Returns None without writing anything if the badge is not registered.
        Raises StoreCorruptError without writing anything if the stored count is
        missing, not an integer, negative or already at the 64-bit maximum.
        """


class MongoBadgeStore(BadgeStore):
    """Badge store backed by a MongoDB collection, one document per badge."""

    def __init__(self, client: AsyncMongoClient[dict[str, Any]], database_name: str) -> None:
        self._client = client
        database = client.get_database(database_name)
        # Acknowledged increments must survive a crash of the primary
        self._collection = database.get_collection("badges", write_concern=WriteConcern(w="majority", j=True))

    @classmethod
    def from_config(cls, config: Config) -> MongoBadgeStore:
        """Create the process-wide connection pool from configuration."""
        client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            config.database_url,
            uuidRepresentation="standard",
            tz_aware=True,
            maxPoolSize=config.store_max_pool_size,
            waitQueueTimeoutMS=config.store_pool_wait_timeout_ms,
            serverSelectionTimeoutMS=config.store_server_selection_timeout_ms,
            connectTimeoutMS=config.store_connect_timeout_ms,
            socketTimeoutMS=config.store_socket_timeout_ms,
        )
        return cls(client, urlparse(config.database_url).path[1:])

    async def on_start(self) -> None:
        """Ping the server so a bad connection string fails at startup."""
        with store_errors("ping"):
            await self._client.admin.command("ping")
        logger.debug("badge_store_started", collection=self._collection.full_name)

    async def on_stop(self) -> None:
        await self._client.aclose()

    async def insert_badge(self, badge: Badge) -> None:
        document = badge.to_mongo()
        document["count"] = Int64(badge.count)  # Keep $inc in 64-bit arithmetic from the first view
        with store_errors("insert", badge.id):
            await self._collection.insert_one(document)

    async def has_badge(self, badge_id: UUID) -> bool:
        with store_errors("exists", badge_id):
            document = await self._collection.find_one({"_id": badge_id}, projection={"_id": 1})
        return document is not None

    async def increment_count(self, badge_id: UUID) -> Badge | None:
        with store_errors("increment", badge_id):
            document = await self._collection.find_one_and_update(
                {"_id": badge_id, "count": INCREMENTABLE_COUNT},
                {"$inc": {"count": 1}},
                upsert=False,
                return_document=ReturnDocument.AFTER,
            )
        if document is not None:
            return _to_badge(document)

        # Nothing was written: either the badge is unknown or its count cannot be incremented
        with store_errors("increment", badge_id):
            existing = await self._collection.find_one({"_id": badge_id}, projection={"_id": 1, "count": 1})
        if existing is None:
            return None
        logger.error("badge_store_corrupt", badge_id=badge_id, count=repr(existing.get("count")))
        raise StoreCorruptError(f"Badge '{badge_id}' has a count that cannot be incremented")


def _to_badge(document: dict[str, Any]) -> Badge:
    badge_id = document.get("_id")
    try:
        return Badge.model_validate(document)
    except PydanticValidationError as e:
        logger.error("badge_store_corrupt", badge_id=badge_id, error=str(e))
        raise StoreCorruptError(f"Badge '{badge_id}' is malformed") from e
