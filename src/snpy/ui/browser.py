"""Directory browser prompt with inline folder creation."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from snpy.errors import InvalidBasePath, IOFailure, TargetAlreadyExists
from snpy.filesystem import create_directory_at, normalize_path
from snpy.models import SELECT_BACK_PATH, SELECT_THIS_PATH, KeyEvent

from .panel_builder import MAX_VISIBLE_ITEMS
from .prompts import ChoiceMachine, Outcome, Resolved, Suspended, TextMachine

if TYPE_CHECKING:
    from .base import FileSystem

logger = logging.getLogger("snpy.browser")


def is_plain_name(name: str) -> bool:
    """A single path component, so a new folder lands inside the current one."""
    if name in (os.curdir, os.pardir):
        return False
    return not any(sep and sep in name for sep in (os.sep, os.altsep))


class DirectoryBrowser(ChoiceMachine):
    """Walk down from ``base_path`` and pick a folder.

    Choices are rebuilt from the filesystem on every keystroke: the
    select marker, ".." when away from home, then the subdirectories.
    Space asks for a new folder name and moves into the created folder.

    Args:
        message: Question shown above the path
        base_path: Home directory; the browser never goes above it
        fs: Filesystem to list and create folders in
        on_error: Shows a failure to the user (and pauses)
    """

    footer = "(Enter to select, Space to create new folder, Backspace to go up)"

    def __init__(
        self,
        message: str,
        base_path: str,
        fs: FileSystem,
        on_error: Callable[[str], None],
        max_visible: int = MAX_VISIBLE_ITEMS,
        show_hints: bool = True,
    ):
        super().__init__(message, [SELECT_THIS_PATH], max_visible, show_hints)
        self.base_path = normalize_path(base_path)
        if not fs.is_directory(self.base_path):
            raise InvalidBasePath(base_path)
        self.current_path = self.base_path
        self.fs = fs
        self.on_error = on_error
        self.unreadable = False

    @property
    def at_home(self) -> bool:
        return self.current_path == self.base_path

    def current_choices(self) -> list[str]:
        choices = [SELECT_THIS_PATH]
        if not self.at_home:
            choices.append(SELECT_BACK_PATH)
        try:
            subdirectories = self.fs.list_subdirectories(self.current_path)
        except OSError as e:
            logger.warning("Cannot list %s: %s", self.current_path, e)
            self.unreadable = True
            return choices
        self.unreadable = False
        return choices + subdirectories

    def header_lines(self) -> list[str]:
        lines = [self.message, f"Current path: {self.current_path}"]
        if self.unreadable:
            lines.append("(cannot read this folder)")
        return lines

    def prefix(self, index: int, choice: str) -> str:
        if choice == SELECT_THIS_PATH:
            return ""
        if choice == SELECT_BACK_PATH and index == 1 and not self.at_home:
            return "📂 "
        return "📁 "

    def handle(self, event: KeyEvent) -> Outcome | None:
        if self.move(event):
            return None

        if event.name == "space":
            return Suspended(
                TextMachine(
                    "Enter new folder name",
                    header=[self.message, f"Current path: {self.current_path}"],
                )
            )

        if event.name == "backspace":
            if not self.at_home:
                self.go_up()
            return None

        if event.name == "return":
            choices = self.current_choices()
            self.clamp_cursor(choices)
            selected = choices[self.cursor]
            if self.highlighted is not None and selected != self.highlighted:
                # the folder changed under the cursor; redraw before acting
                return None
            if self.cursor == 0:
                return Resolved(self.current_path)
            if self.cursor == 1 and not self.at_home:
                self.go_up()
            else:
                self.enter(self.fs.join_path(self.current_path, selected))
        return None

    def go_up(self) -> None:
        self.current_path = self.fs.parent_path(self.current_path)
        self.cursor = 0

    def enter(self, path: str) -> None:
        """Move into ``path`` if it can be listed; otherwise report and stay."""
        try:
            self.fs.list_subdirectories(path)
        except OSError as e:
            logger.warning("Cannot open %s: %s", path, e)
            self.on_error("\nCannot open folder!\n")
            return
        self.current_path = path
        self.cursor = 0

    def resume(self, value: Any) -> Outcome | None:
        """Create the folder named by the nested prompt and move into it."""
        if not value:
            return None
        if not is_plain_name(value):
            self.on_error("\nInvalid folder name!\n")
            return None
        try:
            new_path = create_directory_at(self.fs, self.current_path, value)
        except TargetAlreadyExists:
            self.on_error("\nFolder already exists!\n")
            return None
        except IOFailure:
            self.on_error("\nFailed to create folder!\n")
            return None
        self.current_path = new_path
        self.cursor = 0
        return None
