"""CLI and entrypoint tests."""

from __future__ import annotations

import asyncio
import runpy
from pathlib import Path

from typer.testing import CliRunner

from projboard.cli import app
from projboard.data.db import Database
from projboard.data.store import SqliteProjectStore
from projboard.models.projects import Project


def _stored_projects(cache_dir: Path) -> list[Project]:
    async def load() -> list[Project]:
        async with Database(cache_dir / "projects.db") as db:
            return await SqliteProjectStore(db).list_projects()

    return asyncio.run(load())


def _invoke(cache_dir: Path, *args: str, input: str | None = None):  # type: ignore[no-untyped-def]
    return CliRunner().invoke(app, ["--cache-dir", str(cache_dir), *args], input=input)


def test_cli_without_args_shows_help() -> None:
    result = CliRunner().invoke(app, [])
    assert "Usage" in result.output


def test_list_requires_seeded_account(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "list")
    assert result.exit_code == 1
    assert "Sign-in failed" in result.output


def test_seed_list_and_stats(tmp_path: Path) -> None:
    seeded = _invoke(tmp_path, "seed", "--projects", "12")
    assert seeded.exit_code == 0, seeded.output
    assert "Demo account ready: admin@hr-pro.com" in seeded.output
    assert "Created 12 sample project(s)." in seeded.output

    again = _invoke(tmp_path, "seed")
    assert again.exit_code == 0
    assert len(_stored_projects(tmp_path)) == 12

    stats = _invoke(tmp_path, "stats")
    assert stats.exit_code == 0
    assert "Total Projects: 12" in stats.output
    assert "Active: 4" in stats.output

    listing = _invoke(tmp_path, "list")
    assert "Showing 1 to 10 of 12 results  [1] 2" in listing.output

    active = _invoke(tmp_path, "list", "--status", "ACTIVE")
    assert "Showing 1 to 4 of 4 results" in active.output

    paged = _invoke(tmp_path, "--page-size", "5", "list", "--page", "3")
    assert "Showing 11 to 12 of 12 results" in paged.output


def test_add_edit_and_delete_flow(tmp_path: Path) -> None:
    assert _invoke(tmp_path, "seed", "--projects", "12").exit_code == 0

    added = _invoke(
        tmp_path, "add", "--name", "Quarterly Review", "--deadline", "2026-12-31",
        "--member", "Dana Cole", "--budget", "500",
    )
    assert added.exit_code == 0, added.output
    assert "Project saved." in added.output

    created = next(p for p in _stored_projects(tmp_path) if p.name == "Quarterly Review")
    edited = _invoke(tmp_path, "edit", created.id, "--name", "Annual Review", "--budget", "750")
    assert edited.exit_code == 0, edited.output
    updated = next(p for p in _stored_projects(tmp_path) if p.id == created.id)
    assert updated.name == "Annual Review"
    assert updated.budget == 750
    assert updated.assigned_team_member == "Dana Cole"

    found = _invoke(tmp_path, "list", "--search", "annual")
    assert "Annual Review" in found.output

    declined = _invoke(tmp_path, "delete", created.id, input="n\n")
    assert "Cancelled." in declined.output
    assert len(_stored_projects(tmp_path)) == 13

    deleted = _invoke(tmp_path, "delete", created.id, "--yes")
    assert deleted.exit_code == 0, deleted.output
    assert "Deleted 1 project(s). 12 remaining." in deleted.output

    bulk = _invoke(tmp_path, "delete-all", "--status", "ACTIVE", "--yes")
    assert bulk.exit_code == 0, bulk.output
    assert "Deleted 4 project(s). 8 remaining." in bulk.output
    assert all(p.status != "ACTIVE" for p in _stored_projects(tmp_path))

    nothing = _invoke(tmp_path, "delete-all", "--status", "ACTIVE", "--yes")
    assert "No projects match the filters." in nothing.output


def test_delete_several_ids_and_unknown_ids(tmp_path: Path) -> None:
    assert _invoke(tmp_path, "seed", "--projects", "3").exit_code == 0
    ids = [p.id for p in _stored_projects(tmp_path)]

    unknown = _invoke(tmp_path, "delete", "missing", "--yes")
    assert unknown.exit_code == 1
    assert "Unknown project id(s): missing" in unknown.output

    result = _invoke(tmp_path, "delete", ids[0], ids[1], "--yes")
    assert result.exit_code == 0, result.output
    assert "Deleted 2 project(s). 1 remaining." in result.output
    assert [p.id for p in _stored_projects(tmp_path)] == [ids[2]]

    missing_edit = _invoke(tmp_path, "edit", "missing", "--name", "x")
    assert missing_edit.exit_code == 1


def test_python_module_entrypoint_invokes_cli_app(monkeypatch) -> None:
    called = {"count": 0}

    def fake_app() -> None:
        called["count"] += 1

    monkeypatch.setattr("projboard.cli.app", fake_app)
    runpy.run_module("projboard.__main__", run_name="__main__")
    assert called["count"] == 1
