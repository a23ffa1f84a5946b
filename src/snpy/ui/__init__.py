"""UI module."""

from .base import FileSystem, TerminalIO
from .browser import DirectoryBrowser
from .panel_builder import compute_window, format_scroll_indicator
from .prompts import (
    CheckboxMachine,
    ChoiceMachine,
    ConfirmMachine,
    NumberedChoiceMachine,
    PromptStack,
    TextMachine,
)

__all__ = [
    "CheckboxMachine",
    "ChoiceMachine",
    "ConfirmMachine",
    "DirectoryBrowser",
    "FileSystem",
    "NumberedChoiceMachine",
    "PromptStack",
    "TerminalIO",
    "TextMachine",
    "compute_window",
    "format_scroll_indicator",
]
