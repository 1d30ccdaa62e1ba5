from badgecount.web.routers.badges import router as badges_router

__all__ = [
    "badges_router",
]
