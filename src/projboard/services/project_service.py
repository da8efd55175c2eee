"""Project service wrapping a project store and reporting failures as results."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, TypeVar

from result import Err, Ok, Result

from projboard.errors import ProjectStoreError, TransportError
from projboard.models.projects import Project, ProjectFields

if TYPE_CHECKING:
    from projboard.data.protocols import ProjectStoreProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProjectService:
    """Service for project reads and writes against the remote store."""

    def __init__(self, store: ProjectStoreProtocol) -> None:
        self._store = store

    async def list_projects(self) -> Result[list[Project], ProjectStoreError]:
        """List all projects in store order."""
        return await _call("list projects", self._store.list_projects())

    async def delete_project(self, project_id: str) -> Result[None, ProjectStoreError]:
        return await _call(f"delete project {project_id}", self._store.delete_project(project_id))

    async def create_project(self, fields: ProjectFields) -> Result[Project, ProjectStoreError]:
        return await _call("create project", self._store.create_project(fields))

    async def update_project(
        self, project_id: str, fields: ProjectFields
    ) -> Result[Project, ProjectStoreError]:
        return await _call(
            f"update project {project_id}", self._store.update_project(project_id, fields)
        )


async def _call(action: str, call: Awaitable[T]) -> Result[T, ProjectStoreError]:
    try:
        return Ok(await call)
    except ProjectStoreError as exc:
        logger.warning("Failed to %s: %s", action, exc.message)
        return Err(exc)
    except Exception as exc:
        logger.exception("Unexpected error while trying to %s", action)
        return Err(TransportError(f"Failed to {action}: {exc}"))
