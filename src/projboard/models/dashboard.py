"""View-state models for the project dashboard."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from projboard.models.projects import Project, ProjectStatus


class StatusFilter(StrEnum):
    """Status filter choices, including the catch-all ``ALL``."""

    ALL = "ALL"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"

    def matches(self, status: ProjectStatus) -> bool:
        return self is StatusFilter.ALL or self.value == status.value


class FilterState(BaseModel):
    """Current status filter and free-text search."""

    model_config = ConfigDict(frozen=True)

    status_filter: StatusFilter = StatusFilter.ALL
    search_query: str = ""


class ProjectStats(BaseModel):
    """Workspace-wide project counts and budget total."""

    total: int = 0
    active: int = 0
    on_hold: int = 0
    completed: int = 0
    total_budget: float = 0.0


class DeletePhase(StrEnum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    IN_FLIGHT = "in_flight"
    SETTLED = "settled"


class DeleteOutcome(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"


class DeleteScope(StrEnum):
    """What the user asked to delete."""

    SINGLE = "single"
    SELECTED = "selected"
    ALL = "all"


class PendingDelete(BaseModel):
    """A committed delete batch awaiting confirmation or in flight."""

    model_config = ConfigDict(frozen=True)

    target_ids: tuple[str, ...]
    scope: DeleteScope


class SelectionView(BaseModel):
    """Selection as it should be rendered for the current page."""

    page_selected_ids: list[str] = Field(default_factory=list)
    all_page_selected: bool = False
    selected_count: int = 0


class EditorState(BaseModel):
    """Add/edit project form state."""

    open: bool = False
    editing: Project | None = None
    saving: bool = False
    error: str | None = None


class DashboardView(BaseModel):
    """Everything the rendering layer needs for one frame."""

    visible_items: list[Project] = Field(default_factory=list)
    stats: ProjectStats = Field(default_factory=ProjectStats)
    filter_state: FilterState = Field(default_factory=FilterState)
    current_page: int = 1
    page_count: int = 1
    page_numbers: list[int | None] = Field(default_factory=list)
    total_filtered: int = 0
    first_item: int = 0
    last_item: int = 0
    selection: SelectionView = Field(default_factory=SelectionView)
    delete_mode: bool = False
    delete_phase: DeletePhase = DeletePhase.IDLE
    pending_delete: PendingDelete | None = None
    loading: bool = False
    refreshing: bool = False
    error: str | None = None
    editor: EditorState = Field(default_factory=EditorState)
