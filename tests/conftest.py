"""Shared fixtures for projboard tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import pytest
from result import Err, Ok, Result

from projboard.data.db import Database
from projboard.errors import NotFoundError, ProjectStoreError, TransportError
from projboard.models.projects import Project, ProjectFields, ProjectStatus


def make_project(
    project_id: str,
    name: str = "",
    status: ProjectStatus = ProjectStatus.ACTIVE,
    member: str = "Alice Johnson",
    budget: float = 1000.0,
) -> Project:
    return Project(
        id=project_id,
        name=name or f"Project {project_id}",
        status=status,
        deadline=date(2026, 6, 30),
        assigned_team_member=member,
        budget=budget,
    )


class FakeProjectService:
    """In-memory project service with hooks for failures and slow calls."""

    def __init__(self, projects: list[Project] | None = None) -> None:
        self.projects: list[Project] = list(projects or [])
        self.list_calls = 0
        self.deleted: list[str] = []
        self.fail_list = False
        self.fail_delete_ids: set[str] = set()
        self.raise_delete_ids: set[str] = set()
        self.list_gates: list[asyncio.Event] = []
        self.created: list[ProjectFields] = []
        self.updated: list[tuple[str, ProjectFields]] = []
        self.write_error: ProjectStoreError | None = None

    async def list_projects(self) -> Result[list[Project], ProjectStoreError]:
        self.list_calls += 1
        snapshot = list(self.projects)
        fail = self.fail_list
        if self.list_gates:
            await self.list_gates.pop(0).wait()
        if fail:
            return Err(TransportError("connection refused"))
        return Ok(snapshot)

    async def delete_project(self, project_id: str) -> Result[None, ProjectStoreError]:
        await asyncio.sleep(0)
        if project_id in self.raise_delete_ids:
            raise RuntimeError(f"boom {project_id}")
        if project_id in self.fail_delete_ids:
            return Err(TransportError(f"failed {project_id}"))
        if all(p.id != project_id for p in self.projects):
            return Err(NotFoundError(project_id))
        self.projects = [p for p in self.projects if p.id != project_id]
        self.deleted.append(project_id)
        return Ok(None)

    async def create_project(self, fields: ProjectFields) -> Result[Project, ProjectStoreError]:
        if self.write_error is not None:
            return Err(self.write_error)
        project = Project(id=f"new-{len(self.created) + 1}", **fields.model_dump())
        self.created.append(fields)
        self.projects.append(project)
        return Ok(project)

    async def update_project(
        self, project_id: str, fields: ProjectFields
    ) -> Result[Project, ProjectStoreError]:
        if self.write_error is not None:
            return Err(self.write_error)
        project = Project(id=project_id, **fields.model_dump())
        self.updated.append((project_id, fields))
        self.projects = [project if p.id == project_id else p for p in self.projects]
        return Ok(project)


@pytest.fixture
def twelve_projects() -> list[Project]:
    """Twelve projects, three of them ACTIVE."""
    statuses = (
        [ProjectStatus.ACTIVE] * 3 + [ProjectStatus.ON_HOLD] * 5 + [ProjectStatus.COMPLETED] * 4
    )
    return [make_project(f"p{i:02d}", status=s) for i, s in enumerate(statuses, start=1)]


@pytest.fixture
def fake_service(twelve_projects: list[Project]) -> FakeProjectService:
    return FakeProjectService(twelve_projects)


@pytest.fixture
async def in_memory_db() -> AsyncGenerator[Database]:
    """SQLite in-memory database for fast unit/integration tests."""
    db = Database(Path(":memory:"))
    await db.__aenter__()
    yield db  # type: ignore[misc]
    await db.__aexit__(None, None, None)
