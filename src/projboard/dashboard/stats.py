"""Workspace-wide project statistics."""

from __future__ import annotations

from collections.abc import Iterable

from projboard.models.dashboard import ProjectStats
from projboard.models.projects import Project, ProjectStatus


def aggregate_stats(projects: Iterable[Project]) -> ProjectStats:
    """Count projects by status and sum their budgets.

    Always called with the full collection; the current filter never affects
    the summary.
    """
    stats = ProjectStats()
    for project in projects:
        stats.total += 1
        stats.total_budget += project.budget
        match project.status:
            case ProjectStatus.ACTIVE:
                stats.active += 1
            case ProjectStatus.ON_HOLD:
                stats.on_hold += 1
            case ProjectStatus.COMPLETED:
                stats.completed += 1
    return stats
