from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pymongo.errors import ConnectionFailure, ExecutionTimeout, OperationFailure, PyMongoError, WriteConcernError

from badgecount.errors import StoreCorruptError, StoreUnavailableError
from badgecount.utils import new_badge_id

logger = structlog.get_logger(__name__)

# Server error code for an operator applied to a field of the wrong BSON type
TYPE_MISMATCH = 14


class MongoModel(BaseModel):
    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=new_badge_id)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data


@contextmanager
def store_errors(operation: str, badge_id: UUID | None = None) -> Iterator[None]:
    """Translate pymongo failures raised inside the block into store errors.

    Timeouts, lost connections and pool exhaustion become StoreUnavailableError.
    A type mismatch reported by the server means the stored document is malformed
    and becomes StoreCorruptError.
    """
    try:
        yield
    except (ConnectionFailure, ExecutionTimeout, WriteConcernError) as e:
        # WaitQueueTimeoutError and ServerSelectionTimeoutError are ConnectionFailure subclasses
        logger.warning("badge_store_unavailable", operation=operation, badge_id=badge_id, error=str(e))
        raise StoreUnavailableError(f"Badge store unavailable during {operation}") from e
    except OperationFailure as e:
        if e.code == TYPE_MISMATCH:
            logger.error("badge_store_corrupt", operation=operation, badge_id=badge_id, error=str(e))
            raise StoreCorruptError(f"Badge '{badge_id}' has a malformed count") from e
        logger.warning("badge_store_operation_failed", operation=operation, badge_id=badge_id, code=e.code, error=str(e))
        raise StoreUnavailableError(f"Badge store rejected {operation}") from e
    except PyMongoError as e:
        logger.warning("badge_store_error", operation=operation, badge_id=badge_id, error=str(e))
        raise StoreUnavailableError(f"Badge store failed during {operation}") from e
