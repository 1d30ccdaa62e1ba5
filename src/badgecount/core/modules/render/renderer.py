"""SVG rendering of view-count badges in the shields.io flat convention.

Rendering is a pure function of its arguments: no I/O, no clock and no random
element ids, so identical inputs always produce byte-identical output.
"""

import math
import unicodedata
from dataclasses import dataclass
from html import escape

from badgecount.core.modules.render.metrics import text_width
from badgecount.core.modules.render.models import BadgeOptions, BadgeStyle
from badgecount.errors import InvalidLabelError

BADGE_HEIGHT = 20
HORIZONTAL_PADDING = 5
MAX_LABEL_LENGTH = 64
FONT_FAMILY = "Verdana,Geneva,DejaVu Sans,sans-serif"

# Control, format, surrogate, private-use and unassigned code points
DISALLOWED_LABEL_CATEGORIES = frozenset({"Cc", "Cf", "Cs", "Co", "Cn"})


@dataclass(frozen=True)
class Segment:
    text: str
    color: str
    width: int  # px
    text_length: int  # tenths of px, coordinates inside the text group are scaled by 10


def validate_label(label: str) -> str:
    """Return the label unchanged or raise InvalidLabelError."""
    if len(label) > MAX_LABEL_LENGTH:
        raise InvalidLabelError(f"Label must be at most {MAX_LABEL_LENGTH} characters")
    for char in label:
        if unicodedata.category(char) in DISALLOWED_LABEL_CATEGORIES:
            raise InvalidLabelError("Label contains control characters")
    return label


def format_count(count: int) -> str:
    if count < 0:
        raise ValueError(f"Count must be non-negative, got {count}")
    return str(count)


def make_segment(text: str, color: str) -> Segment:
    """Size a segment from the glyph widths of its text."""
    width = text_width(text)
    return Segment(
        text=text,
        color=color,
        width=math.ceil(width) + 2 * HORIZONTAL_PADDING,
        text_length=math.ceil(width * 10),
    )


def is_light(color: str) -> bool:
    """Whether a '#hex' background needs dark text to stay readable."""
    digits = color.lstrip("#")
    if len(digits) == 3:
        digits = "".join(digit * 2 for digit in digits)
    red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return (299 * red + 587 * green + 114 * blue) / 255000 >= 0.69


def render_badge(count: int, label: str | None = None, options: BadgeOptions | None = None) -> bytes:
    """Render a badge showing the count, preceded by the label when one is given.

    Args:
        count: Non-negative view count, shown in decimal without leading zeros
        label: Text of the left segment; None or empty renders the count alone
        options: Style and colors, defaults to a flat green badge

    Returns:
        UTF-8 encoded SVG document

    Raises:
        InvalidLabelError: If the label contains control characters or is too long
    """
    options = options or BadgeOptions()
    message = format_count(count)

    segments: list[Segment] = []
    if label:
        validate_label(label)
        segments.append(make_segment(label, options.label_color))
    segments.append(make_segment(message, options.message_color))

    total_width = sum(segment.width for segment in segments)
    title = escape(f"{label}: {message}" if label else message)

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{total_width}" height="{BADGE_HEIGHT}" '
        f'role="img" aria-label="{title}">',
        f"<title>{title}</title>",
    ]
    parts.extend(_render_background(options.style, segments, total_width))
    parts.append(
        f'<g text-anchor="middle" font-family="{FONT_FAMILY}" text-rendering="geometricPrecision" font-size="110">'
    )
    offset = 0
    for segment in segments:
        parts.extend(_render_text(options.style, segment, offset))
        offset += segment.width
    parts.append("</g></svg>")
    return "".join(parts).encode("utf-8")


def _render_background(style: BadgeStyle, segments: list[Segment], total_width: int) -> list[str]:
    rects: list[str] = []
    offset = 0
    for segment in segments:
        rects.append(f'<rect x="{offset}" width="{segment.width}" height="{BADGE_HEIGHT}" fill="{segment.color}"/>')
        offset += segment.width

    if style == BadgeStyle.FLAT_SQUARE:
        return ['<g shape-rendering="crispEdges">', *rects, "</g>"]

    if style == BadgeStyle.PLASTIC:
        radius = 4
        gradient = (
            '<linearGradient id="s" x2="0" y2="100%">'
            '<stop offset="0" stop-color="#fff" stop-opacity=".7"/>'
            '<stop offset=".1" stop-color="#aaa" stop-opacity=".1"/>'
            '<stop offset=".9" stop-color="#000" stop-opacity=".3"/>'
            '<stop offset="1" stop-color="#000" stop-opacity=".5"/>'
            "</linearGradient>"
        )
    else:
        radius = 3
        gradient = (
            '<linearGradient id="s" x2="0" y2="100%">'
            '<stop offset="0" stop-color="#bbb" stop-opacity=".1"/>'
            '<stop offset="1" stop-opacity=".1"/>'
            "</linearGradient>"
        )

    return [
        gradient,
        f'<clipPath id="r"><rect width="{total_width}" height="{BADGE_HEIGHT}" rx="{radius}" fill="#fff"/></clipPath>',
        '<g clip-path="url(#r)">',
        *rects,
        f'<rect width="{total_width}" height="{BADGE_HEIGHT}" fill="url(#s)"/>',
        "</g>",
    ]


def _render_text(style: BadgeStyle, segment: Segment, offset: int) -> list[str]:
    # Text coordinates are in tenths of a pixel because of scale(.1)
    center = offset * 10 + segment.width * 5
    text = escape(segment.text)
    if is_light(segment.color):
        fill, shadow = "#333", "#ccc"
    else:
        fill, shadow = "#fff", "#010101"

    parts = []
    if style != BadgeStyle.FLAT_SQUARE:
        parts.append(
            f'<text aria-hidden="true" x="{center}" y="150" fill="{shadow}" fill-opacity=".3" '
            f'transform="scale(.1)" textLength="{segment.text_length}">{text}</text>'
        )
    parts.append(
        f'<text x="{center}" y="140" transform="scale(.1)" fill="{fill}" '
        f'textLength="{segment.text_length}">{text}</text>'
    )
    return parts
