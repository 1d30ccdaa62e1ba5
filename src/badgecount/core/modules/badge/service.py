from uuid import UUID

import structlog

from badgecount.core.core import Service
from badgecount.core.modules.badge.models import Badge
from badgecount.core.modules.render.renderer import validate_label
from badgecount.errors import BadRequestError

logger = structlog.get_logger(__name__)


def parse_badge_id(raw: str) -> UUID:
    """Parse a badge id from its canonical 8-4-4-4-12 hyphenated form, hex digits in either case."""
    try:
        badge_id = UUID(raw)
    except (TypeError, ValueError):
        raise BadRequestError(f"Invalid badge id: '{raw[:64]}'") from None
    # UUID() also accepts braces, urn:uuid: prefixes and the unhyphenated form
    if str(badge_id) != raw.lower():
        raise BadRequestError(f"Invalid badge id: '{raw[:64]}'")
    return badge_id


class BadgeService(Service):
    """Registry of badge identifiers."""

    async def create_badge(self, label: str | None = None) -> Badge:
        """Register a new badge with a zero count.

        The badge is returned only after the store has acknowledged the write.
        """
        label = label or None
        if label is not None:
            validate_label(label)
        badge = Badge(label=label)
        await self.store.insert_badge(badge)
        logger.info("badge_registered", badge_id=badge.id, label=label)
        return badge

    async def exists(self, badge_id: UUID) -> bool:
        """Check whether a badge is registered. Store failures raise rather than report False."""
        return await self.store.has_badge(badge_id)
