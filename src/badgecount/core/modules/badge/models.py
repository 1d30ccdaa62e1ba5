"""Registered badges and their view counters."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from badgecount import utils
from badgecount.core.db import MongoModel

INT64_MAX = 2**63 - 1


class Badge(MongoModel):
    """A named view counter.

    The count only ever changes through the store's atomic increment.
    """

    count: int = Field(0, ge=0, le=INT64_MAX, strict=True)
    label: str | None = None  # Set at registration, immutable afterwards
    created_at: datetime = Field(default_factory=utils.now)


class BadgeView(BaseModel):
    """Registered badge (API representation)."""

    id: UUID = Field(..., description="Badge ID, keep it secret: anyone who knows it can add views")
    label: str | None = Field(None, description="Label stored with the badge")
    view_url: str = Field(..., description="URL of the badge image, each request adds one view")

    @classmethod
    def from_domain(cls, badge: Badge, view_url: str) -> "BadgeView":
        """Create view model from domain model."""
        return cls(id=badge.id, label=badge.label, view_url=view_url)
