from typing import Annotated

from fastapi import APIRouter, Query, Request, Response
from pydantic import BaseModel, Field

from badgecount.core.modules.badge.models import BadgeView
from badgecount.core.modules.render.models import SVG_MEDIA_TYPE, BadgeOptions
from badgecount.web.deps import AppDep
from badgecount.web.openapi import ErrorResponse

router = APIRouter(tags=["badges"])

# Every view must show the latest count, so neither browsers nor proxies may keep a copy
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


class RegisterBadgeRequest(BaseModel):
    """Request to register a new badge."""

    label: str | None = Field(None, description="Text shown left of the count, defaults to 'visitors' when omitted")

    model_config = {"json_schema_extra": {"examples": [{"label": "visits"}]}}


@router.post(
    "/badges",
    summary="Register badge",
    description="Create a new badge with a zero count. The returned id is the only way to view and count it.",
    operation_id="registerBadge",
    status_code=201,
    responses={
        201: {"description": "Badge registered"},
        400: {"model": ErrorResponse, "description": "Invalid label"},
        503: {"model": ErrorResponse, "description": "Badge store unavailable"},
    },
)
async def register_badge(app: AppDep, request: Request, register_data: RegisterBadgeRequest | None = None) -> BadgeView:
    badge = await app.register_badge(register_data.label if register_data else None)
    return BadgeView.from_domain(badge, view_url=str(request.url_for("view_badge", badge_id=str(badge.id))))


@router.get(
    "/badges/{badge_id}",
    summary="View badge",
    description=(
        "Count one view and return the badge as an SVG image showing the new count. "
        "Optional query parameters customize the appearance of this image only."
    ),
    operation_id="viewBadge",
    response_class=Response,
    responses={
        200: {"description": "Badge image", "content": {SVG_MEDIA_TYPE: {}}},
        400: {"model": ErrorResponse, "description": "Malformed badge id or invalid label"},
        404: {"model": ErrorResponse, "description": "Badge not registered"},
        500: {"model": ErrorResponse, "description": "Stored badge is invalid"},
        503: {"model": ErrorResponse, "description": "Badge store unavailable"},
    },
)
async def view_badge(
    badge_id: str,
    app: AppDep,
    label: Annotated[str | None, Query(description="Label override, empty for a count-only badge")] = None,
    style: Annotated[str | None, Query(description="flat, flat-square or plastic")] = None,
    label_color: Annotated[str | None, Query(alias="labelColor", description="Hex or named color")] = None,
    color: Annotated[str | None, Query(description="Hex or named color of the count")] = None,
    message_color: Annotated[str | None, Query(alias="messageColor", description="Alias of color")] = None,
) -> Response:
    options = BadgeOptions.from_query(style=style, label_color=label_color, color=color or message_color)
    rendered = await app.view_badge(badge_id, label, options)
    return Response(content=rendered.content, media_type=rendered.media_type, headers=NO_CACHE_HEADERS)
