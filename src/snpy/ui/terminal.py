"""Rich + readchar terminal driver."""

import readchar
from rich.console import Console
from rich.control import Control, ControlType

from snpy.models import KeyEvent

from .keys import INTERRUPT, parse_key

# Style tags used by the prompts, mapped to Rich styles
STYLES: dict[str, str] = {
    "message": "cyan",
    "prompt": "cyan",
    "default": "dim",
    "selected": "bold green",
    "hint": "dim",
    "error": "red",
    "success": "green",
    "key": "yellow",
    "value": "green",
}


class RichTerminal:
    """TerminalIO implementation on a Rich console.

    readchar puts the tty in raw mode for each keystroke, so ``raw_mode``
    only controls cursor visibility here: hidden while picking from a list,
    shown while editing a line.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False)
        self.raw_mode = False
        self.closed = False

    def set_raw_mode(self, enabled: bool) -> None:
        self.raw_mode = enabled
        self.console.show_cursor(not enabled)

    def read_key(self) -> KeyEvent:
        try:
            key = readchar.readkey()
        except KeyboardInterrupt:
            return INTERRUPT
        return parse_key(key)

    def clear_screen(self) -> None:
        self.console.clear()

    def write(self, text: str, style: str | None = None) -> None:
        self.console.print(
            text,
            style=STYLES.get(style, style) if style else None,
            end="",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    def move_cursor(self, columns: int) -> None:
        if columns:
            self.console.control(Control.move(x=columns))

    def clear_line(self) -> None:
        self.console.control(Control(ControlType.CARRIAGE_RETURN, (ControlType.ERASE_IN_LINE, 2)))

    def new_line(self) -> None:
        self.console.print()

    def exit(self) -> None:
        if self.closed:
            return
        self.console.show_cursor(True)
        self.closed = True
