"""Project store backed by the local SQLite database."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import aiosqlite
import pydantic

from projboard.data._row_helpers import row_float, row_str
from projboard.errors import NotFoundError, TransportError, ValidationError
from projboard.models.projects import Project, ProjectFields

if TYPE_CHECKING:
    from projboard.data.protocols import DatabaseProtocol

logger = logging.getLogger(__name__)


class SqliteProjectStore:
    """Implements the project store protocol on the local SQLite database."""

    def __init__(self, db: DatabaseProtocol) -> None:
        self._db = db

    async def list_projects(self) -> list[Project]:
        """Return all projects in insertion order."""
        try:
            rows = await self._db.fetch_all("SELECT * FROM projects ORDER BY created_at, rowid")
        except aiosqlite.Error as exc:
            raise TransportError(f"Failed to list projects: {exc}") from exc
        projects: list[Project] = []
        for row in rows:
            try:
                projects.append(_row_to_project(row))
            except pydantic.ValidationError:
                logger.warning("Skipping malformed project row %s", row["id"])
        return projects

    async def delete_project(self, project_id: str) -> None:
        if await self._write("DELETE FROM projects WHERE id = ?", (project_id,)) == 0:
            raise NotFoundError(project_id)
        logger.debug("Deleted project %s", project_id)

    async def create_project(self, fields: ProjectFields) -> Project:
        project = Project(id=uuid.uuid4().hex, **fields.model_dump())
        now = _now()
        await self._write(
            """INSERT INTO projects
               (id, name, status, deadline, assigned_team_member, budget, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                project.id,
                project.name,
                project.status.value,
                project.deadline.isoformat(),
                project.assigned_team_member,
                project.budget,
                now,
                now,
            ),
        )
        return project

    async def update_project(self, project_id: str, fields: ProjectFields) -> Project:
        updated = await self._write(
            """UPDATE projects
               SET name = ?, status = ?, deadline = ?, assigned_team_member = ?,
                   budget = ?, updated_at = ?
               WHERE id = ?""",
            (
                fields.name,
                fields.status.value,
                fields.deadline.isoformat(),
                fields.assigned_team_member,
                fields.budget,
                _now(),
                project_id,
            ),
        )
        if updated == 0:
            raise NotFoundError(project_id)
        return Project(id=project_id, **fields.model_dump())

    async def _write(self, sql: str, params: tuple[object, ...]) -> int:
        try:
            return await self._db.write(sql, params)
        except aiosqlite.IntegrityError as exc:
            raise ValidationError(f"Invalid project fields: {exc}") from exc
        except aiosqlite.Error as exc:
            raise TransportError(f"Failed to write project: {exc}") from exc


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


def _row_to_project(row: object) -> Project:
    r: dict[str, object] = dict(row)  # type: ignore[arg-type]
    return Project(
        id=row_str(r, "id"),
        name=row_str(r, "name"),
        status=row_str(r, "status", "ACTIVE"),
        deadline=row_str(r, "deadline"),
        assigned_team_member=row_str(r, "assigned_team_member"),
        budget=row_float(r, "budget"),
    )
