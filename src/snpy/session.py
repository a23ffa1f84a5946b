"""Session facade: runs prompts, prints messages, writes generated files."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from snpy.config import Config
from snpy.errors import IOFailure, TargetAlreadyExists, UnsupportedPromptKind
from snpy.filesystem import LocalFileSystem, create_directory_at, write_file_at
from snpy.models import (
    CheckboxPrompt,
    ConfirmPrompt,
    DirectoryPrompt,
    InputPrompt,
    ListPrompt,
    PromptResult,
    PromptSpec,
    prompt_from_dict,
)
from snpy.ui.browser import DirectoryBrowser
from snpy.ui.prompts import (
    CheckboxMachine,
    ChoiceMachine,
    ConfirmMachine,
    NumberedChoiceMachine,
    PromptMachine,
    PromptStack,
    TextMachine,
)

if TYPE_CHECKING:
    from snpy.ui.base import FileSystem, TerminalIO

logger = logging.getLogger("snpy.session")

T = TypeVar("T")


class Snpy:
    """One interactive session on one terminal.

    Example:
        with Snpy() as snpy:
            name = snpy.run(InputPrompt("name", "Component name", "Component"))
            target = snpy.run(DirectoryPrompt("dir", "Target directory"))
            snpy.make_template(target, f"{name}.ts", "...")
    """

    def __init__(
        self,
        terminal: TerminalIO | None = None,
        fs: FileSystem | None = None,
        config: Config | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or Config.load()
        if terminal is None:
            from snpy.ui.terminal import RichTerminal

            terminal = RichTerminal()
        self.terminal = terminal
        self.fs = fs or LocalFileSystem()
        self._sleep = sleep
        self._stack = PromptStack(terminal)
        self._options: list[PromptSpec] = []

    def __enter__(self) -> Snpy:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.exit()

    @classmethod
    def prompt(cls, callback: Callable[[Snpy], T], **kwargs: Any) -> T:
        """Run ``callback`` with a fresh session and always close the terminal."""
        snpy = cls(**kwargs)
        try:
            return callback(snpy)
        finally:
            snpy.exit()

    # --- Prompts ---

    def run(self, option: PromptSpec | dict[str, Any]) -> PromptResult:
        """Ask one question and return its typed answer.

        Raises:
            UnsupportedPromptKind: If the option is not a known prompt type
            EmptyChoiceList: If a dict option has a select type and no choices
            InvalidBasePath: If a directory prompt's base path is missing
        """
        if isinstance(option, dict):
            option = prompt_from_dict(option)

        machine = self._build_machine(option)
        logger.debug("Running %s prompt '%s'", option.kind.value, option.name)
        try:
            result = self._stack.run(machine)
        except KeyboardInterrupt:
            self.exit()
            raise
        self.terminal.clear_screen()
        return result

    def add_option(self, option: PromptSpec | dict[str, Any]) -> None:
        """Queue a prompt for process()."""
        if isinstance(option, dict):
            option = prompt_from_dict(option)
        self._options.append(option)

    def process(self) -> dict[str, PromptResult]:
        """Run queued prompts in order and return answers keyed by name."""
        responses: dict[str, PromptResult] = {}
        options, self._options = self._options, []
        for option in options:
            responses[option.name] = self.run(option)
        return responses

    def _build_machine(self, option: PromptSpec) -> PromptMachine:
        max_visible = self.config.max_visible
        show_hints = self.config.show_hints

        if isinstance(option, InputPrompt):
            return TextMachine(option.message, option.default)
        if isinstance(option, ConfirmPrompt):
            return ConfirmMachine(option.message, option.default)
        if isinstance(option, ListPrompt):
            cls = NumberedChoiceMachine if option.numbered else ChoiceMachine
            return cls(option.message, option.choices, max_visible, show_hints)
        if isinstance(option, CheckboxPrompt):
            return CheckboxMachine(option.message, option.choices, max_visible, show_hints)
        if isinstance(option, DirectoryPrompt):
            return DirectoryBrowser(
                option.message,
                option.base_path,
                self.fs,
                on_error=self._report_failure,
                max_visible=max_visible,
                show_hints=show_hints,
            )
        raise UnsupportedPromptKind(getattr(option, "kind", type(option).__name__))

    def _report_failure(self, message: str) -> None:
        self.log_error(message)
        self._sleep(self.config.error_pause)

    # --- Messages ---

    def log(self, message: str) -> None:
        self.terminal.write(message, "message")
        self.terminal.new_line()

    def log_success(self, message: str) -> None:
        self.terminal.write(message, "success")
        self.terminal.new_line()

    def log_error(self, message: str) -> None:
        self.terminal.write(message, "error")
        self.terminal.new_line()

    def log_hint(self, message: str) -> None:
        self.terminal.write(message, "hint")
        self.terminal.new_line()

    def log_value(self, key: str, value: Any) -> None:
        """Print ``key: value`` with the value as JSON."""
        self.terminal.write(key, "key")
        self.terminal.write(": ")
        self.terminal.write(json.dumps(value, ensure_ascii=False), "value")
        self.terminal.new_line()

    # --- Files ---

    def make_folder(self, current_path: str, folder_name: str) -> str | None:
        """Create ``current_path/folder_name``. Returns the new path or None."""
        try:
            return create_directory_at(self.fs, current_path, folder_name)
        except TargetAlreadyExists:
            self.log_error("[Snpy-Error] Folder already exists!")
        except IOFailure as e:
            self.log_error(f"[Snpy-Error] Failed to create folder: {e.path}")
        return None

    def make_template(self, dir: str, file_name: str, code: str) -> str | None:
        """Write ``code`` to ``dir/file_name`` unless that file exists.

        Returns:
            The written path, or None if nothing was written
        """
        try:
            return write_file_at(self.fs, dir, file_name, code)
        except TargetAlreadyExists as e:
            self.log_error(f"[Snpy-Error] File already exists: {e.path}")
        except IOFailure as e:
            self.log_error(f"[Snpy-Error] Failed to write file: {e.path}")
        return None

    def exit(self) -> None:
        """Close the terminal input."""
        self.terminal.exit()
