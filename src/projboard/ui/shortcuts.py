"""Keyboard shortcut adapter translating key events into dashboard commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from projboard.ui.commands import Command

if TYPE_CHECKING:
    from projboard.ui.commands import CommandDispatcher


@dataclass(frozen=True)
class KeyEvent:
    key: str
    ctrl: bool = False
    meta: bool = False

    @property
    def command_modifier(self) -> bool:
        """Ctrl on Linux/Windows, Cmd on macOS."""
        return self.ctrl or self.meta


SHORTCUTS: tuple[tuple[str, str], ...] = (
    ("Ctrl/Cmd + K", "Add new project"),
    ("Ctrl/Cmd + /", "Show keyboard shortcuts"),
    ("Esc", "Close dialogs"),
)


class ShortcutHandler:
    """Maps key events to commands; owns only the help overlay flag."""

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        self._dispatcher = dispatcher
        self.help_visible = False

    def handle(self, event: KeyEvent) -> bool:
        """Handle one key press; returns ``True`` if it was consumed."""
        key = event.key.lower()
        if event.command_modifier and key == "k":
            self._dispatcher.dispatch(Command.OPEN_ADD)
            return True
        if event.command_modifier and key == "/":
            self.help_visible = not self.help_visible
            return True
        if key == "escape":
            self._dispatcher.dispatch(Command.CLOSE_EDITOR)
            self._dispatcher.dispatch(Command.CANCEL_DELETE)
            self.help_visible = False
            return True
        return False
