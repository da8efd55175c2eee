"""Dashboard controller, the single owner of the project collection view state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING

import pydantic
from result import Err

from projboard.dashboard.bulk_delete import BulkDeleteCoordinator
from projboard.dashboard.filters import filter_projects
from projboard.dashboard.pagination import PageSlice, clamp_page, page_numbers, paginate
from projboard.dashboard.selection import SelectionTracker
from projboard.dashboard.stats import aggregate_stats
from projboard.models.dashboard import (
    DashboardView,
    DeleteOutcome,
    DeleteScope,
    EditorState,
    FilterState,
    SelectionView,
    StatusFilter,
)
from projboard.models.projects import Project, ProjectFields

if TYPE_CHECKING:
    from projboard.models.session import CurrentUser, SessionContext
    from projboard.services.protocols import ProjectServiceProtocol

logger = logging.getLogger(__name__)

REFRESH_ERROR = "Failed to load projects. Please try again."


class DashboardController:
    """Holds the project collection and derives the dashboard view from it.

    Every mutation goes through one of the public entry points; the view is
    recomputed from scratch on each read of :attr:`view`. Refreshes carry a
    sequence number so that a slow, older response can never replace data
    from a newer one.
    """

    def __init__(
        self,
        service: ProjectServiceProtocol,
        session: SessionContext | None = None,
        items_per_page: int = 10,
    ) -> None:
        if items_per_page < 1:
            msg = f"items_per_page must be positive, got {items_per_page}"
            raise ValueError(msg)
        self._service = service
        self._session = session
        self._items_per_page = items_per_page

        self._projects: list[Project] = []
        self._filter = FilterState()
        self._page = 1
        self._selection = SelectionTracker()
        self._delete_mode = False
        self._editor = EditorState()
        self._error: str | None = None

        self._loaded = False
        self._loading = False
        self._refreshing = False
        self._issued_seq = 0
        self._applied_seq = 0
        # Bumped by end_session; work started under an older epoch is dropped.
        self._epoch = 0
        self._batch_epoch = 0

        self._deletes = BulkDeleteCoordinator(service.delete_project, self._refresh_after_delete)
        self._listeners: list[Callable[[], None]] = []

    # -- read side -----------------------------------------------------------

    @property
    def session(self) -> SessionContext | None:
        return self._session

    @property
    def current_user(self) -> CurrentUser | None:
        return self._session.user if self._session else None

    @property
    def projects(self) -> list[Project]:
        return list(self._projects)

    @property
    def filter_state(self) -> FilterState:
        return self._filter

    @property
    def current_page(self) -> int:
        return self._page

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @property
    def selection(self) -> SelectionTracker:
        return self._selection

    @property
    def deletes(self) -> BulkDeleteCoordinator:
        return self._deletes

    @property
    def delete_mode(self) -> bool:
        return self._delete_mode

    @property
    def editor(self) -> EditorState:
        return self._editor

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def filtered(self) -> list[Project]:
        return filter_projects(
            self._projects, self._filter.status_filter, self._filter.search_query
        )

    def project(self, project_id: str) -> Project | None:
        return next((p for p in self._projects if p.id == project_id), None)

    def page_slice(self) -> PageSlice[Project]:
        return paginate(self.filtered, self._page, self._items_per_page)

    @property
    def view(self) -> DashboardView:
        filtered = self.filtered
        page = paginate(filtered, self._page, self._items_per_page)
        page_ids = [p.id for p in page.items]
        return DashboardView(
            visible_items=page.items,
            stats=aggregate_stats(self._projects),
            filter_state=self._filter,
            current_page=self._page,
            page_count=page.page_count,
            page_numbers=page_numbers(self._page, page.page_count),
            total_filtered=len(filtered),
            first_item=page.first_item,
            last_item=page.last_item,
            selection=SelectionView(
                page_selected_ids=self._selection.selected_in(page_ids),
                all_page_selected=self._selection.all_selected(page_ids),
                selected_count=len(self._selection.selected_in(p.id for p in filtered)),
            ),
            delete_mode=self._delete_mode,
            delete_phase=self._deletes.phase,
            pending_delete=self._deletes.pending,
            loading=self._loading,
            refreshing=self._refreshing,
            error=self._error,
            editor=self._editor.model_copy(),
        )

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- filtering and paging -------------------------------------------------

    def set_filter(self, new_filter: FilterState) -> None:
        self._filter = new_filter
        self._page = 1
        self._notify()

    def set_status_filter(self, status_filter: StatusFilter | str) -> None:
        status = StatusFilter(status_filter)
        self.set_filter(self._filter.model_copy(update={"status_filter": status}))

    def set_search_query(self, query: str) -> None:
        self.set_filter(self._filter.model_copy(update={"search_query": query}))

    def set_page(self, page: int) -> None:
        self._page = clamp_page(page, len(self.filtered), self._items_per_page)
        self._notify()

    def next_page(self) -> None:
        self.set_page(self._page + 1)

    def previous_page(self) -> None:
        self.set_page(self._page - 1)

    # -- collection ------------------------------------------------------------

    async def refresh(self) -> bool:
        """Re-fetch the collection; returns ``True`` if this call's data was applied.

        On failure the previous collection stays in place and :attr:`error`
        is set. Responses older than the newest applied one are dropped.
        """
        self._issued_seq += 1
        seq = self._issued_seq
        if self._loaded:
            self._refreshing = True
        else:
            self._loading = True
        self._notify()

        result = await self._service.list_projects()

        if seq == self._issued_seq:
            self._loading = False
            self._refreshing = False
        if seq < self._applied_seq:
            logger.debug("Discarding stale refresh #%d (applied #%d)", seq, self._applied_seq)
            self._notify()
            return False

        if isinstance(result, Err):
            logger.warning("Refresh #%d failed: %s", seq, result.err_value)
            self._error = REFRESH_ERROR
            self._notify()
            return False

        self._applied_seq = seq
        self._projects = _unique_by_id(result.ok_value)
        self._loaded = True
        self._error = None
        self._clamp_page()
        self._notify()
        return True

    # -- selection ---------------------------------------------------------------

    def toggle_select(self, project_id: str) -> bool:
        selected = self._selection.toggle(project_id)
        self._notify()
        return selected

    def select_all_current_page(self) -> bool:
        page_ids = [p.id for p in self.page_slice().items]
        selected = self._selection.select_all_on_page(page_ids)
        self._notify()
        return selected

    def enter_delete_mode(self) -> bool:
        """Show selection checkboxes for deleting from the filtered view."""
        if not self.filtered:
            return False
        self._delete_mode = True
        self._selection.clear()
        self._notify()
        return True

    def cancel_delete_mode(self) -> None:
        self._delete_mode = False
        self._selection.clear()
        self._notify()

    # -- deletion ------------------------------------------------------------------

    def request_delete(self, project_id: str) -> bool:
        if self.project(project_id) is None:
            return False
        return self._begin_delete([project_id], DeleteScope.SINGLE)

    def request_delete_selected(self) -> bool:
        filtered_ids = [p.id for p in self.filtered]
        targets = self._selection.selected_in(filtered_ids)
        scope = DeleteScope.ALL if len(targets) == len(filtered_ids) else DeleteScope.SELECTED
        return self._begin_delete(targets, scope)

    def request_delete_all(self) -> bool:
        return self._begin_delete([p.id for p in self.filtered], DeleteScope.ALL)

    def cancel_delete(self) -> bool:
        cancelled = self._deletes.cancel()
        if cancelled:
            self._notify()
        return cancelled

    async def confirm_delete(self) -> DeleteOutcome | None:
        """Execute the batch awaiting confirmation.

        If the session ends while the batch is in flight, the outcome is still
        returned but neither the post-delete refresh nor the settlement touches
        the (already torn down) view state.
        """
        self._batch_epoch = self._epoch
        outcome = await self._deletes.confirm()
        if outcome is None:
            return None
        if self._batch_epoch != self._epoch:
            logger.info("Session ended during bulk delete; skipping settlement")
            return outcome
        if outcome is DeleteOutcome.SUCCESS:
            self._selection.clear()
            self._delete_mode = False
        else:
            self._error = self._deletes.error
        self._notify()
        return outcome

    async def _refresh_after_delete(self) -> bool:
        if self._batch_epoch != self._epoch:
            return False
        return await self.refresh()

    def _begin_delete(self, target_ids: Iterable[str], scope: DeleteScope) -> bool:
        started = self._deletes.begin(target_ids, scope)
        if started:
            self._notify()
        return started

    # -- editing --------------------------------------------------------------------

    def open_add(self) -> None:
        self._editor = EditorState(open=True)
        self._notify()

    def open_edit(self, project_id: str) -> bool:
        project = self.project(project_id)
        if project is None:
            return False
        self._editor = EditorState(open=True, editing=project)
        self._notify()
        return True

    def close_editor(self) -> bool:
        if not self._editor.open or self._editor.saving:
            return False
        self._editor = EditorState()
        self._notify()
        return True

    async def save_project(self, fields: ProjectFields | Mapping[str, object]) -> bool:
        """Create or update the project in the editor, then refresh on success."""
        if not self._editor.open:
            return False
        try:
            values = (
                fields if isinstance(fields, ProjectFields) else ProjectFields.model_validate(fields)
            )
        except pydantic.ValidationError as exc:
            self._editor = self._editor.model_copy(update={"error": _validation_message(exc)})
            self._notify()
            return False

        editing = self._editor.editing
        self._editor = self._editor.model_copy(update={"saving": True, "error": None})
        self._notify()
        if editing is None:
            result = await self._service.create_project(values)
        else:
            result = await self._service.update_project(editing.id, values)

        if isinstance(result, Err):
            self._editor = self._editor.model_copy(
                update={"saving": False, "error": result.err_value.message}
            )
            self._notify()
            return False

        self._editor = EditorState()
        await self.refresh()
        return True

    # -- session --------------------------------------------------------------------

    def reset(self) -> None:
        """Drop session-scoped view state (filter, page, selection, dialogs)."""
        self._filter = FilterState()
        self._page = 1
        self._selection.clear()
        self._delete_mode = False
        self._deletes.cancel()
        self._editor = EditorState()
        self._error = None
        self._notify()

    def end_session(self) -> None:
        """Tear down on sign-out: forget the session and the cached collection."""
        self.reset()
        self._session = None
        self._projects = []
        self._loaded = False
        self._loading = False
        self._refreshing = False
        # Any refresh or delete batch still in flight belongs to the old session.
        self._epoch += 1
        self._issued_seq += 1
        self._applied_seq = self._issued_seq
        self._notify()

    # -- internals --------------------------------------------------------------------

    def _clamp_page(self) -> None:
        self._page = clamp_page(self._page, len(self.filtered), self._items_per_page)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()


def _unique_by_id(projects: Iterable[Project]) -> list[Project]:
    seen: set[str] = set()
    unique: list[Project] = []
    for project in projects:
        if project.id in seen:
            logger.warning("Dropping duplicate project id %s from collection", project.id)
            continue
        seen.add(project.id)
        unique.append(project)
    return unique


def _validation_message(exc: pydantic.ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)
