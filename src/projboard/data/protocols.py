"""Protocol definitions for data access."""

from __future__ import annotations

from typing import Any, Protocol

from projboard.models.projects import Project, ProjectFields


class DatabaseProtocol(Protocol):
    """Async database interface."""

    async def fetch_all(self, sql: str, params: tuple[Any, ...] = ()) -> list[Any]: ...

    async def fetch_one(self, sql: str, params: tuple[Any, ...] = ()) -> Any | None: ...

    async def write(self, sql: str, params: tuple[Any, ...] = ()) -> int: ...


class ProjectStoreProtocol(Protocol):
    """Remote project store.

    Implementations raise ``TransportError``, ``NotFoundError`` or
    ``ValidationError`` from :mod:`projboard.errors`.
    """

    async def list_projects(self) -> list[Project]: ...

    async def delete_project(self, project_id: str) -> None: ...

    async def create_project(self, fields: ProjectFields) -> Project: ...

    async def update_project(self, project_id: str, fields: ProjectFields) -> Project: ...
