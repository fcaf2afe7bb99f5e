from bbrecords.web.routers.auth import router as auth_router
from bbrecords.web.routers.heartbeat import router as heartbeat_router
from bbrecords.web.routers.share import router as share_router

__all__ = [
    "auth_router",
    "heartbeat_router",
    "share_router",
]
