"""Display options accepted when rendering a badge."""

import re
from enum import StrEnum

import structlog
from pydantic import BaseModel, ConfigDict

logger = structlog.get_logger(__name__)

HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

NAMED_COLORS: dict[str, str] = {
    "brightgreen": "#4c1",
    "green": "#97ca00",
    "yellowgreen": "#a4a61d",
    "yellow": "#dfb317",
    "orange": "#fe7d37",
    "red": "#e05d44",
    "blue": "#007ec6",
    "grey": "#555",
    "gray": "#555",
    "lightgrey": "#9f9f9f",
    "lightgray": "#9f9f9f",
    # Semantic aliases
    "success": "#4c1",
    "important": "#fe7d37",
    "critical": "#e05d44",
    "informational": "#007ec6",
    "inactive": "#9f9f9f",
}

SVG_MEDIA_TYPE = "image/svg+xml"

DEFAULT_LABEL_COLOR = "#555"
DEFAULT_MESSAGE_COLOR = "#4c1"


class BadgeStyle(StrEnum):
    """Visual styles, all rendered at the same height."""

    FLAT = "flat"
    FLAT_SQUARE = "flat-square"
    PLASTIC = "plastic"


def normalize_color(value: str | None) -> str | None:
    """Return a color as '#hex', or None if the value is not a recognized color."""
    if value is None:
        return None
    value = value.strip()
    named = NAMED_COLORS.get(value.lower())
    if named is not None:
        return named
    if HEX_COLOR_RE.fullmatch(value):
        return "#" + value.lstrip("#").lower()
    return None


class BadgeOptions(BaseModel):
    """Resolved display options. Colors are always normalized '#hex' strings."""

    style: BadgeStyle = BadgeStyle.FLAT
    label_color: str = DEFAULT_LABEL_COLOR
    message_color: str = DEFAULT_MESSAGE_COLOR

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_query(cls, style: str | None = None, label_color: str | None = None, color: str | None = None) -> "BadgeOptions":
        """Build options from raw request values, falling back to defaults for anything unrecognized."""
        resolved_style = BadgeStyle.FLAT
        if style is not None:
            try:
                resolved_style = BadgeStyle(style)
            except ValueError:
                logger.debug("unknown_badge_style", style=style)

        resolved_label_color = normalize_color(label_color)
        if label_color is not None and resolved_label_color is None:
            logger.debug("unknown_badge_color", color=label_color)

        resolved_message_color = normalize_color(color)
        if color is not None and resolved_message_color is None:
            logger.debug("unknown_badge_color", color=color)

        return cls(
            style=resolved_style,
            label_color=resolved_label_color or DEFAULT_LABEL_COLOR,
            message_color=resolved_message_color or DEFAULT_MESSAGE_COLOR,
        )


class RenderedBadge(BaseModel):
    """Badge image ready to be sent to the client."""

    content: bytes
    count: int
    media_type: str = SVG_MEDIA_TYPE
