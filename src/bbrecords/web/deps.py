from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from bbrecords.app import App
from bbrecords.core.modules.session.models import SESSION_COOKIE_NAME, SessionToken
from bbrecords.errors import AuthenticationError

cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_token(
    app: Annotated[App, Depends(get_app)],
    session_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> SessionToken:
    """Get and validate the session token from the session cookie."""
    if session_cookie and app.validate_session(session_cookie) is not None:
        return SessionToken(session_cookie)
    raise AuthenticationError


def get_client_key(request: Request) -> str:
    """Identify the caller for login throttling."""
    return request.client.host if request.client else "unknown"


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionTokenDep = Annotated[SessionToken, Depends(get_session_token)]
ClientKeyDep = Annotated[str, Depends(get_client_key)]
