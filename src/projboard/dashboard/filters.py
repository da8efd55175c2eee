"""Status filter and free-text search over a project collection."""

from __future__ import annotations

from collections.abc import Sequence

from projboard.models.dashboard import StatusFilter
from projboard.models.projects import Project


def filter_projects(
    projects: Sequence[Project],
    status_filter: StatusFilter | str = StatusFilter.ALL,
    search_query: str = "",
) -> list[Project]:
    """Return the projects matching both the status filter and the search text.

    The search is a case-insensitive substring match on the project name or
    the assigned team member. A blank query matches everything; otherwise the
    query is matched as typed, surrounding spaces included. Relative order is
    preserved.
    """
    status_filter = StatusFilter(status_filter)
    filtered = list(projects)
    if status_filter is not StatusFilter.ALL:
        filtered = [p for p in filtered if status_filter.matches(p.status)]
    if search_query.strip():
        text = search_query.lower()
        filtered = [
            p
            for p in filtered
            if text in p.name.lower() or text in p.assigned_team_member.lower()
        ]
    return filtered
