"""Selection of project ids for bulk actions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class SelectionTracker:
    """Set of selected project ids.

    Ids may outlive the view they were selected in; callers render only
    :meth:`selected_in` for the ids they currently show.
    """

    def __init__(self) -> None:
        self._selected: set[str] = set()

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._selected

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    def is_selected(self, project_id: str) -> bool:
        return project_id in self._selected

    def toggle(self, project_id: str) -> bool:
        """Flip membership of ``project_id``; returns the new membership."""
        if project_id in self._selected:
            self._selected.discard(project_id)
            return False
        self._selected.add(project_id)
        return True

    def all_selected(self, page_ids: Sequence[str]) -> bool:
        return bool(page_ids) and all(pid in self._selected for pid in page_ids)

    def select_all_on_page(self, page_ids: Sequence[str]) -> bool:
        """Select every id on the page, or deselect them if all already are.

        Returns ``True`` when the page ended up selected.
        """
        if self.all_selected(page_ids):
            self._selected.difference_update(page_ids)
            return False
        self._selected.update(page_ids)
        return bool(page_ids)

    def selected_in(self, ids: Iterable[str]) -> list[str]:
        """Selected ids among ``ids``, in the order given."""
        return [pid for pid in ids if pid in self._selected]

    def clear(self) -> None:
        self._selected.clear()
