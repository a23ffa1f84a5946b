"""Prompt state machines and the stack that feeds them keystrokes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from snpy.models import KeyEvent

from .keys import is_interrupt
from .panel_builder import MAX_VISIBLE_ITEMS, compute_window, format_scroll_indicator, move_cursor

if TYPE_CHECKING:
    from .base import TerminalIO

logger = logging.getLogger("snpy.prompts")


@dataclass(frozen=True)
class Resolved:
    """The prompt is finished with ``value``."""

    value: Any


@dataclass(frozen=True)
class Suspended:
    """The prompt waits for ``prompt`` to finish, then gets its value via resume()."""

    prompt: PromptMachine


Outcome = Union[Resolved, Suspended]


class PromptMachine(ABC):
    """Base for all prompts.

    ``handle`` returns None to keep going (the stack re-renders), or an
    Outcome to finish or to start a nested prompt.
    """

    raw_mode = True

    @abstractmethod
    def render(self, terminal: TerminalIO) -> None: ...

    @abstractmethod
    def handle(self, event: KeyEvent) -> Outcome | None: ...

    def resume(self, value: Any) -> Outcome | None:
        raise RuntimeError(f"{type(self).__name__} does not start nested prompts")


class TextMachine(PromptMachine):
    """Single-line input with a dimmed default shown under the cursor."""

    raw_mode = False

    def __init__(self, message: str, default: str | None = None, header: list[str] | None = None):
        self.prompt = f"{message}: "
        self.default = default or ""
        self.header = header or []
        self.buffer = ""
        self._drawn = False

    def render(self, terminal: TerminalIO) -> None:
        if self._drawn:
            terminal.clear_line()
        else:
            terminal.clear_screen()
            for line in self.header:
                terminal.write(line, "message")
                terminal.new_line()
            self._drawn = True

        terminal.write(self.prompt, "prompt")
        if self.buffer:
            terminal.write(self.buffer)
        else:
            terminal.write(self.default, "default")
            terminal.move_cursor(-len(self.default))

    def handle(self, event: KeyEvent) -> Outcome | None:
        if event.name == "return":
            return Resolved(self.result())
        if event.name == "backspace":
            self.buffer = self.buffer[:-1]
        elif event.is_printable:
            self.accept(event.char)
        return None

    def accept(self, char: str) -> None:
        self.buffer += char

    def result(self) -> Any:
        return self.buffer or self.default


class ConfirmMachine(TextMachine):
    """Yes/no question answered with a single y or n."""

    def __init__(self, message: str, default: bool | None = None):
        default_char = "N" if default is False else "Y"
        choices = "Y/n" if default_char == "Y" else "y/N"
        super().__init__(f"{message} ({choices})", default_char)

    def accept(self, char: str) -> None:
        char = char.lower()
        if char in ("y", "n"):
            self.buffer = char

    def result(self) -> bool:
        return (self.buffer or self.default).lower() == "y"


class ChoiceMachine(PromptMachine):
    """Cursor over a list of labels, drawn through a scrolling window."""

    footer = "(Enter to confirm)"

    def __init__(
        self,
        message: str,
        choices: list[str],
        max_visible: int = MAX_VISIBLE_ITEMS,
        show_hints: bool = True,
    ):
        self.message = message
        self.choices = list(choices)
        self.max_visible = max_visible
        self.show_hints = show_hints
        self.cursor = 0
        self.highlighted: str | None = None

    def current_choices(self) -> list[str]:
        return self.choices

    def clamp_cursor(self, choices: list[str]) -> None:
        """Keep the cursor on an existing row after the list shrank."""
        self.cursor = max(0, min(self.cursor, len(choices) - 1))

    def header_lines(self) -> list[str]:
        return [self.message]

    def prefix(self, index: int, choice: str) -> str:
        return ""

    def render(self, terminal: TerminalIO) -> None:
        choices = self.current_choices()
        self.clamp_cursor(choices)
        self.highlighted = choices[self.cursor]
        window = compute_window(len(choices), self.cursor, self.max_visible)
        above, below = format_scroll_indicator(window)

        terminal.clear_screen()
        for line in self.header_lines():
            terminal.write(line, "message")
            terminal.new_line()

        terminal.write(above, "hint")
        terminal.new_line()
        for index in range(window.start, window.end):
            choice = choices[index]
            label = f"{self.prefix(index, choice)}{choice}"
            if index == self.cursor:
                terminal.write(f"> {label}", "selected")
            else:
                terminal.write(f"  {label}")
            terminal.new_line()
        terminal.write(below, "hint")
        terminal.new_line()

        if self.show_hints:
            terminal.new_line()
            terminal.write(self.footer, "hint")
            terminal.new_line()

    def move(self, event: KeyEvent) -> bool:
        """Apply up/down with wraparound. Returns True if the key was a move."""
        if event.name == "up":
            step = -1
        elif event.name == "down":
            step = 1
        else:
            return False
        self.cursor = move_cursor(self.cursor, len(self.current_choices()), step)
        return True

    def handle(self, event: KeyEvent) -> Outcome | None:
        if self.move(event):
            return None
        if event.name == "return":
            return Resolved(self.choices[self.cursor])
        return None


class NumberedChoiceMachine(ChoiceMachine):
    """ChoiceMachine with 1-based positions in front of each entry."""

    def prefix(self, index: int, choice: str) -> str:
        return f"{index + 1}) "


class CheckboxMachine(ChoiceMachine):
    """Toggle entries with space; resolves to the picked labels in list order."""

    footer = "(Space to select, Enter to confirm)"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.selected: set[int] = set()

    def prefix(self, index: int, choice: str) -> str:
        marker = "⬢" if index in self.selected else "⬡"
        return f"{marker}  "

    def handle(self, event: KeyEvent) -> Outcome | None:
        if self.move(event):
            return None
        if event.name == "space":
            self.selected ^= {self.cursor}
        elif event.name == "return":
            return Resolved([self.choices[i] for i in sorted(self.selected)])
        return None


class PromptStack:
    """Runs one prompt at a time, plus any prompts it nests.

    Only the top machine receives keystrokes. The terminal mode follows
    whichever machine is on top.
    """

    def __init__(self, terminal: TerminalIO):
        self._terminal = terminal
        self._frames: list[PromptMachine] = []

    @property
    def active(self) -> PromptMachine | None:
        return self._frames[-1] if self._frames else None

    @property
    def depth(self) -> int:
        return len(self._frames)

    def run(self, machine: PromptMachine) -> Any:
        """Feed keystrokes to ``machine`` until it resolves.

        Raises:
            RuntimeError: If a prompt is already running on this stack
            KeyboardInterrupt: On Ctrl+C
        """
        if self._frames:
            raise RuntimeError("A prompt is already running")

        self._push(machine)
        try:
            while True:
                self._frames[-1].render(self._terminal)
                event = self._terminal.read_key()
                if is_interrupt(event):
                    raise KeyboardInterrupt

                outcome = self._frames[-1].handle(event)
                while outcome is not None:
                    if isinstance(outcome, Suspended):
                        self._push(outcome.prompt)
                        break
                    self._terminal.new_line()
                    self._pop()
                    if not self._frames:
                        return outcome.value
                    outcome = self._frames[-1].resume(outcome.value)
        finally:
            self._frames.clear()

    def _push(self, machine: PromptMachine) -> None:
        self._frames.append(machine)
        self._terminal.set_raw_mode(machine.raw_mode)
        logger.debug("Prompt %s started (depth %d)", type(machine).__name__, len(self._frames))

    def _pop(self) -> None:
        machine = self._frames.pop()
        logger.debug("Prompt %s resolved", type(machine).__name__)
        if self._frames:
            self._terminal.set_raw_mode(self._frames[-1].raw_mode)
