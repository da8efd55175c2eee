"""Tests for the SQLite-backed project store and the project service."""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path

import aiosqlite
import pytest
from result import Err, Ok

from projboard.data.db import SCHEMA_VERSION, Database
from projboard.data.store import SqliteProjectStore
from projboard.errors import NotFoundError, TransportError
from projboard.models.projects import ProjectFields, ProjectStatus
from projboard.services.project_service import ProjectService


def _fields(name: str, **overrides: object) -> ProjectFields:
    values: dict[str, object] = {
        "name": name,
        "status": ProjectStatus.ACTIVE,
        "deadline": date(2026, 3, 1),
        "assigned_team_member": "Bob Smith",
        "budget": 1200.0,
    }
    values.update(overrides)
    return ProjectFields.model_validate(values)


class TestSqliteProjectStore:
    @pytest.mark.asyncio
    async def test_create_list_in_insertion_order(self, in_memory_db: Database) -> None:
        store = SqliteProjectStore(in_memory_db)
        first = await store.create_project(_fields("Alpha"))
        second = await store.create_project(_fields("Beta", status=ProjectStatus.ON_HOLD))
        listed = await store.list_projects()
        assert [p.id for p in listed] == [first.id, second.id]
        assert listed[1].status is ProjectStatus.ON_HOLD
        assert listed[0].deadline == date(2026, 3, 1)
        assert listed[0].budget == 1200.0

    @pytest.mark.asyncio
    async def test_update_and_delete(self, in_memory_db: Database) -> None:
        store = SqliteProjectStore(in_memory_db)
        project = await store.create_project(_fields("Alpha"))
        updated = await store.update_project(project.id, _fields("Alpha v2", budget=99.0))
        assert updated.id == project.id
        listed = await store.list_projects()
        assert listed[0].name == "Alpha v2"
        assert listed[0].budget == 99.0

        await store.delete_project(project.id)
        assert await store.list_projects() == []

    @pytest.mark.asyncio
    async def test_missing_ids_raise_not_found(self, in_memory_db: Database) -> None:
        store = SqliteProjectStore(in_memory_db)
        with pytest.raises(NotFoundError) as exc_info:
            await store.delete_project("nope")
        assert exc_info.value.project_id == "nope"
        with pytest.raises(NotFoundError):
            await store.update_project("nope", _fields("x"))

    @pytest.mark.asyncio
    async def test_failed_write_does_not_undo_concurrent_deletes(
        self, in_memory_db: Database
    ) -> None:
        store = SqliteProjectStore(in_memory_db)
        first, second, third = [await store.create_project(_fields(n)) for n in "ABC"]
        results = await asyncio.gather(
            store.delete_project(first.id),
            in_memory_db.write("UPDATE projects SET budget = -1 WHERE id = ?", (third.id,)),
            store.delete_project(second.id),
            return_exceptions=True,
        )
        assert results[0] is None
        assert isinstance(results[1], aiosqlite.IntegrityError)
        assert results[2] is None
        remaining = await store.list_projects()
        assert [p.id for p in remaining] == [third.id]
        assert remaining[0].budget == 1200.0

    @pytest.mark.asyncio
    async def test_closed_database_is_transport_error_in_service(self, tmp_path: Path) -> None:
        db = Database(tmp_path / "db" / "projects.db")
        await db.connect()
        store = SqliteProjectStore(db)
        await store.create_project(_fields("Alpha"))
        await db.close()
        with pytest.raises(RuntimeError):
            await store.list_projects()
        result = await ProjectService(store).list_projects()
        assert isinstance(result, Err)
        assert isinstance(result.err_value, TransportError)

    @pytest.mark.asyncio
    async def test_schema_version_recorded(self, tmp_path: Path) -> None:
        path = tmp_path / "projects.db"
        async with Database(path) as db:
            row = await db.fetch_one("SELECT value FROM app_meta WHERE key = 'schema_version'")
            assert row is not None
            assert int(row["value"]) == SCHEMA_VERSION
            await SqliteProjectStore(db).create_project(_fields("Kept"))
        async with Database(path) as db:
            assert len(await SqliteProjectStore(db).list_projects()) == 1


class FailingStore:
    async def list_projects(self) -> list:
        raise TransportError("HTTP 503")

    async def delete_project(self, project_id: str) -> None:
        raise NotFoundError(project_id)

    async def create_project(self, fields: ProjectFields) -> None:
        raise ValueError("unexpected")

    async def update_project(self, project_id: str, fields: ProjectFields) -> None:
        raise TransportError("timeout")


class TestProjectService:
    @pytest.mark.asyncio
    async def test_wraps_store_results(self, in_memory_db: Database) -> None:
        svc = ProjectService(SqliteProjectStore(in_memory_db))
        created = await svc.create_project(_fields("Alpha"))
        assert isinstance(created, Ok)
        listed = await svc.list_projects()
        assert isinstance(listed, Ok)
        assert listed.ok_value[0].id == created.ok_value.id
        deleted = await svc.delete_project(created.ok_value.id)
        assert isinstance(deleted, Ok)
        missing = await svc.delete_project(created.ok_value.id)
        assert isinstance(missing, Err)
        assert isinstance(missing.err_value, NotFoundError)

    @pytest.mark.asyncio
    async def test_errors_become_err_values(self) -> None:
        svc = ProjectService(FailingStore())  # type: ignore[arg-type]
        listed = await svc.list_projects()
        assert isinstance(listed, Err)
        assert listed.err_value.message == "HTTP 503"

        deleted = await svc.delete_project("p1")
        assert isinstance(deleted, Err)
        assert isinstance(deleted.err_value, NotFoundError)

        created = await svc.create_project(_fields("x"))
        assert isinstance(created, Err)
        assert isinstance(created.err_value, TransportError)
        assert "unexpected" in created.err_value.message

        updated = await svc.update_project("p1", _fields("x"))
        assert isinstance(updated, Err)
