from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from badgecount.config import Config
from badgecount.core.core import Core
from badgecount.core.modules.badge.models import Badge
from badgecount.core.modules.badge.service import parse_badge_id
from badgecount.core.modules.render.models import BadgeOptions, RenderedBadge
from badgecount.core.modules.render.renderer import render_badge, validate_label
from badgecount.core.store import BadgeStore
from badgecount.errors import InternalError, InvalidLabelError, NotFoundError

logger = structlog.get_logger(__name__)


class App:
    """Facade for all badge operations, validates requests before delegating to Core."""

    def __init__(self, config: Config, store: BadgeStore) -> None:
        self._core = Core(config, store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def register_badge(self, label: str | None = None) -> Badge:
        """Register a new badge. Registration does not count as a view."""
        return await self._core.services.badge.create_badge(label)

    async def view_badge(
        self, raw_badge_id: str, label: str | None = None, options: BadgeOptions | None = None
    ) -> RenderedBadge:
        """Count one view of a badge and render the new count.

        The first view of a freshly registered badge renders 1. An explicit label
        overrides the stored one for this image only; an empty label renders the
        count alone.
        """
        badge_id = parse_badge_id(raw_badge_id)
        # Reject bad input before the count is touched
        if label is not None:
            validate_label(label)

        if not await self._core.services.badge.exists(badge_id):
            raise NotFoundError(f"Badge '{badge_id}' not found")

        # Committed from here on, even if the client goes away before the response is sent
        badge = await self._core.services.counter.increment(badge_id)

        try:
            content = render_badge(badge.count, self._resolve_label(badge, label), options)
        except InvalidLabelError:
            raise
        except Exception as e:
            logger.exception("badge_render_failed", badge_id=badge_id, count=badge.count)
            raise InternalError("Failed to render badge") from e

        logger.debug("badge_viewed", badge_id=badge_id, count=badge.count)
        return RenderedBadge(content=content, count=badge.count)

    # === Private resolver methods ===
    def _resolve_label(self, badge: Badge, label: str | None) -> str | None:
        """Pick the label to draw: request override, then stored label, then the configured default."""
        if label is not None:
            return label
        if badge.label is not None:
            return badge.label
        return self._core.config.default_label
