"""Explicit command dispatch into the dashboard controller."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from projboard.ui.async_bridge import schedule

if TYPE_CHECKING:
    from projboard.dashboard.controller import DashboardController

logger = logging.getLogger(__name__)


class Command(StrEnum):
    REFRESH = "refresh"
    SET_STATUS_FILTER = "set_status_filter"
    SET_SEARCH_QUERY = "set_search_query"
    SET_PAGE = "set_page"
    NEXT_PAGE = "next_page"
    PREVIOUS_PAGE = "previous_page"
    TOGGLE_SELECT = "toggle_select"
    SELECT_ALL_PAGE = "select_all_current_page"
    ENTER_DELETE_MODE = "enter_delete_mode"
    CANCEL_DELETE_MODE = "cancel_delete_mode"
    REQUEST_DELETE = "request_delete"
    REQUEST_DELETE_SELECTED = "request_delete_selected"
    REQUEST_DELETE_ALL = "request_delete_all"
    CONFIRM_DELETE = "confirm_delete"
    CANCEL_DELETE = "cancel_delete"
    OPEN_ADD = "open_add"
    OPEN_EDIT = "open_edit"
    CLOSE_EDITOR = "close_editor"
    SAVE_PROJECT = "save_project"


class CommandDispatcher:
    """Routes UI commands to controller entry points.

    Synchronous entry points run immediately and their return value is
    passed back. Coroutine entry points are scheduled on the running loop and
    the task is returned.
    """

    def __init__(self, controller: DashboardController) -> None:
        self._controller = controller
        self._handlers: dict[Command, Callable[..., Any]] = {
            command: getattr(controller, command.value) for command in Command
        }

    @property
    def controller(self) -> DashboardController:
        return self._controller

    def dispatch(self, command: Command | str, *args: Any) -> Any:
        handler = self._handlers[Command(command)]
        logger.debug("Dispatching %s%r", command, args)
        if inspect.iscoroutinefunction(handler):
            return schedule(handler(*args))
        return handler(*args)

    async def run(self, command: Command | str, *args: Any) -> Any:
        """Dispatch and wait for the command to finish."""
        outcome = self.dispatch(command, *args)
        if isinstance(outcome, asyncio.Task):
            return await outcome
        return outcome
