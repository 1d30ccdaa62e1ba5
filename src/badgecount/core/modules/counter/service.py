from uuid import UUID

from badgecount.core.core import Service
from badgecount.core.modules.badge.models import Badge
from badgecount.errors import NotFoundError


class CounterService(Service):
    """Service for atomically counting badge views."""

    async def increment(self, badge_id: UUID) -> Badge:
        """Atomically increment the view count and return the updated badge.

        Raises NotFoundError without writing anything if the badge is not registered.
        """
        badge = await self.store.increment_count(badge_id)
        if badge is None:
            raise NotFoundError(f"Badge '{badge_id}' not found")
        return badge

    async def increment_and_get(self, badge_id: UUID) -> int:
        """Atomically increment and return the new view count."""
        badge = await self.increment(badge_id)
        return badge.count
