"""Pydantic models for projboard."""

from projboard.models.dashboard import (
    DashboardView,
    DeleteOutcome,
    DeletePhase,
    DeleteScope,
    EditorState,
    FilterState,
    PendingDelete,
    ProjectStats,
    SelectionView,
    StatusFilter,
)
from projboard.models.projects import Project, ProjectFields, ProjectStatus
from projboard.models.session import CurrentUser, SessionContext

__all__ = [
    "CurrentUser",
    "DashboardView",
    "DeleteOutcome",
    "DeletePhase",
    "DeleteScope",
    "EditorState",
    "FilterState",
    "PendingDelete",
    "Project",
    "ProjectFields",
    "ProjectStats",
    "ProjectStatus",
    "SelectionView",
    "SessionContext",
    "StatusFilter",
]
