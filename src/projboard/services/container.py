"""Service container with DI wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from projboard.data.db import Database
from projboard.data.rest import RestProjectStore
from projboard.data.store import SqliteProjectStore
from projboard.services.auth_service import AuthService
from projboard.services.project_service import ProjectService

if TYPE_CHECKING:
    from projboard.config import Config
    from projboard.models.session import SessionContext


@dataclass
class ServiceContainer:
    """Holds all application services. Built once at startup."""

    db: Database
    store: SqliteProjectStore | RestProjectStore
    project_service: ProjectService
    auth_service: AuthService

    @classmethod
    async def create(cls, config: Config) -> ServiceContainer:
        """Async factory that wires all dependencies."""
        db = Database(config.db_path)
        await db.connect()

        store: SqliteProjectStore | RestProjectStore
        if config.uses_remote_api:
            store = RestProjectStore(config.api_base_url, timeout=config.request_timeout)
        else:
            store = SqliteProjectStore(db)

        return cls(
            db=db,
            store=store,
            project_service=ProjectService(store),
            auth_service=AuthService(db),
        )

    def bind_session(self, session: SessionContext | None) -> None:
        """Propagate the signed-in session to adapters that need it."""
        if isinstance(self.store, RestProjectStore):
            self.store.bind_session(session)

    async def close(self) -> None:
        """Shut down all services."""
        await self.db.close()
