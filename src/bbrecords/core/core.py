from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from bbrecords.config import Config

if TYPE_CHECKING:
    from bbrecords.core.modules.heartbeat.service import HeartbeatService
    from bbrecords.core.modules.patient.service import PatientService
    from bbrecords.core.modules.session.service import SessionService
    from bbrecords.core.modules.session.throttle import LoginThrottle
    from bbrecords.core.modules.share.service import ShareService


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry.

    Authentication services are stateless and receive their secrets explicitly,
    database services share the single database handle owned by Core.
    """

    session: SessionService
    share: ShareService
    login_throttle: LoginThrottle
    patient: PatientService
    heartbeat: HeartbeatService

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]]) -> None:
        from bbrecords.core.modules.heartbeat.service import HeartbeatService  # noqa: PLC0415
        from bbrecords.core.modules.patient.service import PatientService  # noqa: PLC0415
        from bbrecords.core.modules.session.service import SessionService  # noqa: PLC0415
        from bbrecords.core.modules.session.throttle import LoginThrottle  # noqa: PLC0415
        from bbrecords.core.modules.session.verifier import SharedPasswordVerifier  # noqa: PLC0415
        from bbrecords.core.modules.share.service import ShareService  # noqa: PLC0415

        self.session = SessionService(config.session_secret, SharedPasswordVerifier(config.app_password))
        self.share = ShareService()
        self.login_throttle = LoginThrottle(config.login_max_attempts, config.login_window_seconds)

        # Order matters: heartbeat reads through the patient service
        self.patient = PatientService(database)
        self.heartbeat = HeartbeatService(database)
        self._services: list[Service] = [self.patient, self.heartbeat]

    def set_core(self, core: Core) -> None:
        """Set core reference for all database services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config) -> None:
        """Create the MongoDB client once for the process lifetime and register services."""
        self.config = config
        self.mongo_client = AsyncMongoClient(config.database_url)
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:] or "bbrecords")
        self.services = Services(config, self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        await self.mongo_client.aclose()
