"""Plain-text rendering of the dashboard view for the terminal."""

from __future__ import annotations

from projboard.models.dashboard import DashboardView, ProjectStats
from projboard.models.projects import Project
from projboard.ui.formatting import format_budget, format_currency, format_date, status_label

_COLUMNS = ("", "Name", "Status", "Deadline", "Team Member", "Budget")


def render_stats(stats: ProjectStats) -> str:
    return (
        f"Total Projects: {stats.total}  Active: {stats.active}  "
        f"On Hold: {stats.on_hold}  Completed: {stats.completed}  "
        f"Total Budget: {format_budget(stats.total_budget)}"
    )


def render_table(projects: list[Project], selected: set[str] | None = None) -> list[str]:
    """Render projects as aligned text rows, marking selected ids with ``*``."""
    if not projects:
        return ["No projects found"]
    selected = selected or set()
    rows = [_COLUMNS] + [
        (
            "*" if p.id in selected else " ",
            p.name,
            status_label(p.status),
            format_date(p.deadline),
            p.assigned_team_member,
            format_currency(p.budget),
        )
        for p in projects
    ]
    widths = [max(len(row[i]) for row in rows) for i in range(len(_COLUMNS))]
    return ["  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip() for row in rows]


def render_pager(view: DashboardView) -> str:
    if view.total_filtered == 0:
        return "Showing 0 results"
    links = " ".join(
        "…" if n is None else (f"[{n}]" if n == view.current_page else str(n))
        for n in view.page_numbers
    )
    summary = f"Showing {view.first_item} to {view.last_item} of {view.total_filtered} results"
    return f"{summary}  {links}" if view.page_count > 1 else summary


def render_view(view: DashboardView) -> list[str]:
    lines = [render_stats(view.stats), ""]
    lines.extend(render_table(view.visible_items, set(view.selection.page_selected_ids)))
    lines.extend(["", render_pager(view)])
    if view.error:
        lines.append(f"Error: {view.error}")
    return lines
