from fastapi import APIRouter, Response
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bbrecords.core.modules.session.models import SESSION_COOKIE_NAME, SESSION_MAX_AGE_SECONDS
from bbrecords.errors import AuthenticationError, ConfigurationError, TooManyAttemptsError
from bbrecords.web.deps import AppDep, ClientKeyDep
from bbrecords.web.error_handlers import NOT_CONFIGURED
from bbrecords.web.gate import LOGIN_PATH

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Shared staff password submitted from the login form."""

    password: str = Field(..., description="Shared application password")
    callback_url: str = Field("/", description="Path to return to after login")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginResult(BaseModel):
    """Outcome of a login attempt."""

    success: bool
    error: str | None = Field(None, description="User-facing reason for a failed login")
    redirect_to: str | None = Field(None, description="Where the client should go after login")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LogoutResult(BaseModel):
    redirect_to: str = LOGIN_PATH

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def safe_callback_url(callback_url: str) -> str:
    """Only allow redirects to local paths."""
    if not callback_url.startswith("/") or callback_url.startswith("//") or "\\" in callback_url:
        return "/"
    return callback_url


@router.post(
    "/login",
    summary="Log in with the shared password",
    description="Verify the shared staff password and set the `bb-session` cookie.",
    operation_id="login",
    response_model_exclude_none=True,
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": LoginResult, "description": "Incorrect password"},
        429: {"model": LoginResult, "description": "Too many failed attempts"},
        500: {"model": LoginResult, "description": "Login is not configured"},
    },
)
async def login(data: LoginRequest, app: AppDep, client: ClientKeyDep, response: Response) -> LoginResult:
    try:
        token = app.login(data.password, client)
    except AuthenticationError as e:
        response.status_code = 401
        return LoginResult(success=False, error=str(e))
    except TooManyAttemptsError as e:
        response.status_code = 429
        return LoginResult(success=False, error=str(e))
    except ConfigurationError:
        response.status_code = 500
        return LoginResult(success=False, error=NOT_CONFIGURED)

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=app.config.production,
        samesite="lax",
        path="/",
        max_age=SESSION_MAX_AGE_SECONDS,
    )
    return LoginResult(success=True, redirect_to=safe_callback_url(data.callback_url))


@router.post(
    "/logout",
    summary="End session",
    description="Delete the session cookie. Sessions are stateless, so nothing is stored server-side.",
    operation_id="logout",
)
async def logout(response: Response) -> LogoutResult:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return LogoutResult()
