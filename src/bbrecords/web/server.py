from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bbrecords.app import App
from bbrecords.config import Config
from bbrecords.errors import ConfigurationError, UserError
from bbrecords.web.error_handlers import configuration_error_handler, general_exception_handler, user_error_handler
from bbrecords.web.gate import FRAMEWORK_PATHS, RequestGate
from bbrecords.web.openapi import set_custom_openapi
from bbrecords.web.routers import auth_router, heartbeat_router, share_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="BB Records API", lifespan=lifespan)
    app.state.app = app_instance
    app.state.config = config

    # Added before CORS so that preflight requests never reach the gate
    app.add_middleware(RequestGate, validate_session=app_instance.validate_session, excluded_paths=FRAMEWORK_PATHS)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(share_router)
    app.include_router(heartbeat_router)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
