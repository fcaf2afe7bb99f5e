"""Middleware that keeps every non-public path behind a staff session."""

from collections.abc import Callable, Iterable
from urllib.parse import urlencode

import structlog
from fastapi import Request
from fastapi.responses import RedirectResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from bbrecords.core.modules.session.models import SESSION_COOKIE_NAME, SessionCredential

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/login"

# Application pages and APIs reachable without a session
PUBLIC_PATH_PREFIXES = (
    LOGIN_PATH,
    "/diagnostics",
    "/share/",
    "/api/share/",
    "/api/cron/heartbeat",
    "/health",
    "/static/",
    "/favicon.ico",
    "/icon",
    "/apple-icon",
)

# Framework-served documentation, never routed through the session check
FRAMEWORK_PATHS = ("/docs", "/redoc", "/openapi.json")


def is_public_path(path: str, prefixes: Iterable[str] = PUBLIC_PATH_PREFIXES) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


def login_redirect_url(path: str) -> str:
    return f"{LOGIN_PATH}?{urlencode({'callbackUrl': path})}"


class RequestGate(BaseHTTPMiddleware):
    """Redirect requests for protected paths to the login page unless they carry a valid session."""

    def __init__(
        self,
        app: ASGIApp,
        validate_session: Callable[[str | None], SessionCredential | None],
        public_prefixes: Iterable[str] = PUBLIC_PATH_PREFIXES,
        excluded_paths: Iterable[str] = FRAMEWORK_PATHS,
    ) -> None:
        super().__init__(app)
        self._validate_session = validate_session
        self._public_prefixes = tuple(public_prefixes)
        self._excluded_paths = frozenset(excluded_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path in self._excluded_paths or is_public_path(path, self._public_prefixes):
            return await call_next(request)

        if self._validate_session(request.cookies.get(SESSION_COOKIE_NAME)) is None:
            logger.debug("request_gate_redirect", path=path)
            return RedirectResponse(login_redirect_url(path), status_code=303)

        return await call_next(request)
