"""Typer CLI for projboard: list, edit and bulk-delete projects."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from result import Err

from projboard.config import Config
from projboard.data.seed import DEMO_EMAIL, DEMO_PASSWORD
from projboard.models.dashboard import DeleteOutcome, FilterState, StatusFilter
from projboard.models.projects import ProjectStatus
from projboard.models.session import CurrentUser, SessionContext

if TYPE_CHECKING:
    from projboard.dashboard.controller import DashboardController
    from projboard.services.container import ServiceContainer

app = typer.Typer(
    name="projboard",
    help="Project dashboard: list, filter, edit and bulk-delete projects.",
    no_args_is_help=True,
)

DEFAULT_EMAIL = DEMO_EMAIL
DEFAULT_PASSWORD = DEMO_PASSWORD


@dataclass
class CliState:
    config: Config
    email: str = DEFAULT_EMAIL
    password: str = DEFAULT_PASSWORD
    token: str = ""


@app.callback()
def main(
    ctx: typer.Context,
    cache_dir: Annotated[
        Path | None,
        typer.Option("--cache-dir", help="Directory holding the local project database"),
    ] = None,
    api_url: Annotated[
        str,
        typer.Option("--api-url", envvar="PROJBOARD_API_URL", help="Use a remote project API"),
    ] = "",
    email: Annotated[str, typer.Option("--email", help="Account to sign in with")] = DEFAULT_EMAIL,
    password: Annotated[
        str, typer.Option("--password", envvar="PROJBOARD_PASSWORD", help="Account password")
    ] = DEFAULT_PASSWORD,
    token: Annotated[
        str, typer.Option("--token", envvar="PROJBOARD_TOKEN", help="Bearer token for --api-url")
    ] = "",
    page_size: Annotated[int, typer.Option("--page-size", min=1, help="Projects per page")] = 10,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Configure logging and the shared CLI state."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = Config(api_base_url=api_url, items_per_page=page_size)
    if cache_dir is not None:
        config = Config(cache_dir=cache_dir, api_base_url=api_url, items_per_page=page_size)
    ctx.obj = CliState(config=config, email=email, password=password, token=token)


@app.command("list")
def list_projects(
    ctx: typer.Context,
    status: Annotated[StatusFilter, typer.Option("--status", help="Status filter")] = (
        StatusFilter.ALL
    ),
    search: Annotated[str, typer.Option("--search", help="Match name or team member")] = "",
    page: Annotated[int, typer.Option("--page", min=1, help="Page to show")] = 1,
) -> None:
    """Show stats and one page of projects."""
    asyncio.run(_list(ctx.obj, status, search, page))


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show workspace-wide project statistics."""
    asyncio.run(_stats(ctx.obj))


@app.command()
def add(
    ctx: typer.Context,
    name: Annotated[str, typer.Option("--name", help="Project name")],
    deadline: Annotated[datetime, typer.Option("--deadline", formats=["%Y-%m-%d"])],
    status: Annotated[ProjectStatus, typer.Option("--status")] = ProjectStatus.ACTIVE,
    member: Annotated[str, typer.Option("--member", help="Assigned team member")] = "",
    budget: Annotated[float, typer.Option("--budget", min=0)] = 0.0,
) -> None:
    """Create a project."""
    fields: dict[str, object] = {
        "name": name,
        "status": status,
        "deadline": deadline.date(),
        "assigned_team_member": member,
        "budget": budget,
    }
    asyncio.run(_save(ctx.obj, None, fields))


@app.command()
def edit(
    ctx: typer.Context,
    project_id: Annotated[str, typer.Argument(help="Project id")],
    name: Annotated[str | None, typer.Option("--name")] = None,
    deadline: Annotated[datetime | None, typer.Option("--deadline", formats=["%Y-%m-%d"])] = None,
    status: Annotated[ProjectStatus | None, typer.Option("--status")] = None,
    member: Annotated[str | None, typer.Option("--member")] = None,
    budget: Annotated[float | None, typer.Option("--budget", min=0)] = None,
) -> None:
    """Update fields of an existing project."""
    changes: dict[str, object] = {
        "name": name,
        "status": status,
        "deadline": deadline.date() if deadline else None,
        "assigned_team_member": member,
        "budget": budget,
    }
    asyncio.run(_save(ctx.obj, project_id, {k: v for k, v in changes.items() if v is not None}))


@app.command()
def delete(
    ctx: typer.Context,
    project_ids: Annotated[list[str], typer.Argument(help="Ids of projects to delete")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete the given projects as one batch."""
    asyncio.run(_delete(ctx.obj, project_ids, yes))


@app.command("delete-all")
def delete_all(
    ctx: typer.Context,
    status: Annotated[StatusFilter, typer.Option("--status")] = StatusFilter.ALL,
    search: Annotated[str, typer.Option("--search")] = "",
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete every project in the filtered view."""
    asyncio.run(_delete_all(ctx.obj, status, search, yes))


@app.command()
def seed(
    ctx: typer.Context,
    projects: Annotated[int, typer.Option("--projects", min=0, help="Sample projects")] = 0,
) -> None:
    """Provision the demo account and optional sample projects."""
    asyncio.run(_seed(ctx.obj, projects))


@asynccontextmanager
async def _dashboard(state: CliState) -> AsyncIterator[DashboardController]:
    """Open services, sign in and yield a loaded dashboard controller."""
    from projboard.dashboard.controller import DashboardController
    from projboard.services.container import ServiceContainer

    services = await ServiceContainer.create(state.config)
    try:
        session = await _sign_in(services, state)
        services.bind_session(session)
        controller = DashboardController(
            services.project_service,
            session=session,
            items_per_page=state.config.items_per_page,
        )
        await controller.refresh()
        if controller.error:
            typer.echo(f"Error: {controller.error}", err=True)
            raise typer.Exit(code=1)
        try:
            yield controller
        finally:
            controller.end_session()
            if not state.config.uses_remote_api:
                await services.auth_service.sign_out(session)
    finally:
        await services.close()


async def _sign_in(services: ServiceContainer, state: CliState) -> SessionContext:
    if state.config.uses_remote_api:
        return SessionContext(user=CurrentUser(id="", email=state.email), token=state.token)
    result = await services.auth_service.sign_in(state.email, state.password)
    if isinstance(result, Err):
        typer.echo(f"Sign-in failed: {result.err_value}. Run 'projboard seed' first?", err=True)
        raise typer.Exit(code=1)
    return result.ok_value


async def _list(state: CliState, status: StatusFilter, search: str, page: int) -> None:
    from projboard.ui.render import render_view

    async with _dashboard(state) as controller:
        controller.set_filter(FilterState(status_filter=status, search_query=search))
        controller.set_page(page)
        for line in render_view(controller.view):
            typer.echo(line)


async def _stats(state: CliState) -> None:
    from projboard.ui.render import render_stats

    async with _dashboard(state) as controller:
        typer.echo(render_stats(controller.view.stats))


async def _save(state: CliState, project_id: str | None, fields: dict[str, object]) -> None:
    async with _dashboard(state) as controller:
        if project_id is None:
            controller.open_add()
        else:
            project = controller.project(project_id)
            if project is None or not controller.open_edit(project_id):
                typer.echo(f"Project {project_id} not found", err=True)
                raise typer.Exit(code=1)
            fields = {**project.fields().model_dump(), **fields}
        if not await controller.save_project(fields):
            typer.echo(f"Error: {controller.editor.error}", err=True)
            raise typer.Exit(code=1)
        typer.echo("Project saved.")


async def _delete(state: CliState, project_ids: list[str], yes: bool) -> None:
    async with _dashboard(state) as controller:
        missing = [pid for pid in project_ids if controller.project(pid) is None]
        if missing:
            typer.echo(f"Unknown project id(s): {', '.join(missing)}", err=True)
            raise typer.Exit(code=1)
        if len(project_ids) == 1:
            controller.request_delete(project_ids[0])
        else:
            for pid in dict.fromkeys(project_ids):
                controller.toggle_select(pid)
            controller.request_delete_selected()
        await _confirm_and_run(controller, yes)


async def _delete_all(state: CliState, status: StatusFilter, search: str, yes: bool) -> None:
    async with _dashboard(state) as controller:
        controller.set_filter(FilterState(status_filter=status, search_query=search))
        if not controller.request_delete_all():
            typer.echo("No projects match the filters.")
            return
        await _confirm_and_run(controller, yes)


async def _confirm_and_run(controller: DashboardController, yes: bool) -> None:
    pending = controller.deletes.pending
    if pending is None:
        return
    count = len(pending.target_ids)
    if not yes and not typer.confirm(f"Delete {count} project(s)?"):
        controller.cancel_delete()
        typer.echo("Cancelled.")
        return
    outcome = await controller.confirm_delete()
    if outcome is DeleteOutcome.FAILURE:
        typer.echo(f"Error: {controller.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Deleted {count} project(s). {len(controller.projects)} remaining.")


async def _seed(state: CliState, projects: int) -> None:
    from projboard.data.seed import ensure_demo_account, seed_projects
    from projboard.services.container import ServiceContainer

    services = await ServiceContainer.create(state.config)
    try:
        account = await ensure_demo_account(services.auth_service)
        if isinstance(account, Err):
            typer.echo(f"Error: {account.err_value}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Demo account ready: {account.ok_value.email}")
        if projects:
            created = await seed_projects(services.store, projects)
            typer.echo(f"Created {created} sample project(s).")
    finally:
        await services.close()
