"""Coordinates confirmed, concurrent deletion of a batch of projects."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeAlias

from result import Err, Result

from projboard.errors import ProjectStoreError
from projboard.models.dashboard import DeleteOutcome, DeletePhase, DeleteScope, PendingDelete

logger = logging.getLogger(__name__)

DeleteOne: TypeAlias = Callable[[str], Awaitable[Result[None, ProjectStoreError]]]
Refresh: TypeAlias = Callable[[], Awaitable[object]]


class BulkDeleteCoordinator:
    """State machine for one bulk delete at a time.

    ``IDLE -> CONFIRMING -> IN_FLIGHT -> SETTLED``. The target ids are frozen
    when the batch is requested. Every delete in the batch is issued at once;
    the batch fails as a whole if any of them fails, and the collection is
    refreshed exactly once after all of them have finished.
    """

    def __init__(self, delete_one: DeleteOne, refresh: Refresh) -> None:
        self._delete_one = delete_one
        self._refresh = refresh
        self._phase = DeletePhase.IDLE
        self._pending: PendingDelete | None = None
        self._outcome: DeleteOutcome | None = None
        self._error: str | None = None

    @property
    def phase(self) -> DeletePhase:
        return self._phase

    @property
    def pending(self) -> PendingDelete | None:
        return self._pending

    @property
    def outcome(self) -> DeleteOutcome | None:
        """Outcome of the last settled batch."""
        return self._outcome

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def dialog_open(self) -> bool:
        return self._phase in (DeletePhase.CONFIRMING, DeletePhase.IN_FLIGHT)

    @property
    def in_flight(self) -> bool:
        return self._phase is DeletePhase.IN_FLIGHT

    def begin(self, target_ids: Iterable[str], scope: DeleteScope) -> bool:
        """Ask for confirmation of a batch; rejected while another is in flight."""
        if self._phase is DeletePhase.IN_FLIGHT:
            logger.info("Ignoring delete request while a batch is in flight")
            return False
        ids = tuple(dict.fromkeys(target_ids))
        if not ids:
            return False
        self._pending = PendingDelete(target_ids=ids, scope=scope)
        self._phase = DeletePhase.CONFIRMING
        return True

    def cancel(self) -> bool:
        """Dismiss the confirmation without deleting anything."""
        if self._phase is not DeletePhase.CONFIRMING:
            return False
        self._pending = None
        self._phase = DeletePhase.IDLE
        return True

    async def confirm(self) -> DeleteOutcome | None:
        """Run the pending batch; returns ``None`` if nothing awaits confirmation."""
        if self._phase is not DeletePhase.CONFIRMING or self._pending is None:
            return None
        batch = self._pending
        self._phase = DeletePhase.IN_FLIGHT
        self._error = None
        logger.info("Deleting %d project(s) (%s)", len(batch.target_ids), batch.scope)

        results = await asyncio.gather(
            *(self._delete_one(pid) for pid in batch.target_ids),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException | Err)]
        if failures:
            outcome = DeleteOutcome.FAILURE
            self._error = _failure_message(batch, len(failures))
            logger.warning(
                "Bulk delete failed for %d of %d project(s)", len(failures), len(batch.target_ids)
            )
        else:
            outcome = DeleteOutcome.SUCCESS

        try:
            await self._refresh()
        finally:
            self._outcome = outcome
            self._pending = None
            self._phase = DeletePhase.SETTLED
        return outcome


def _failure_message(batch: PendingDelete, failed: int) -> str:
    if len(batch.target_ids) == 1:
        return "Failed to delete project. Please try again."
    if failed == len(batch.target_ids):
        return "Failed to delete projects. Please try again."
    return "Failed to delete some projects. Please try again."
