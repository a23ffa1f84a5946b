"""Data models for snpy prompts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from snpy.errors import EmptyChoiceList, UnsupportedPromptKind

SELECT_THIS_PATH = "[ SELECT THIS PATH ]"
SELECT_BACK_PATH = ".."


class PromptKind(Enum):
    """Prompt types, named as the answer-file generators call them."""

    INPUT = "input"
    CONFIRM = "confirm"
    LIST = "list"
    NLIST = "nlist"
    CHECKBOX = "checkbox"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class InputPrompt:
    """Single-line text input."""

    name: str
    message: str
    default: str | None = None

    kind = PromptKind.INPUT


@dataclass(frozen=True)
class ConfirmPrompt:
    """Yes/no question. A missing default counts as yes."""

    name: str
    message: str
    default: bool | None = None

    kind = PromptKind.CONFIRM


@dataclass(frozen=True)
class ListPrompt:
    """Pick one entry. ``numbered`` prefixes entries with their position."""

    name: str
    message: str
    choices: list[str] = field(default_factory=list)
    numbered: bool = False

    def __post_init__(self) -> None:
        if not self.choices:
            raise EmptyChoiceList(self.name)

    @property
    def kind(self) -> PromptKind:
        return PromptKind.NLIST if self.numbered else PromptKind.LIST


@dataclass(frozen=True)
class CheckboxPrompt:
    """Pick any number of entries."""

    name: str
    message: str
    choices: list[str] = field(default_factory=list)

    kind = PromptKind.CHECKBOX

    def __post_init__(self) -> None:
        if not self.choices:
            raise EmptyChoiceList(self.name)


@dataclass(frozen=True)
class DirectoryPrompt:
    """Browse subdirectories of ``base_path`` and pick one."""

    name: str
    message: str
    base_path: str = "."

    kind = PromptKind.DIRECTORY


PromptSpec = Union[InputPrompt, ConfirmPrompt, ListPrompt, CheckboxPrompt, DirectoryPrompt]
PromptResult = Union[str, bool, list[str]]


def prompt_from_dict(data: Mapping[str, Any]) -> PromptSpec:
    """Build a prompt spec from a loose ``{"type": ..., ...}`` mapping.

    Raises:
        UnsupportedPromptKind: If ``type`` is not a known prompt kind
        EmptyChoiceList: If a select kind has no choices
    """
    raw_kind = data.get("type")
    try:
        kind = PromptKind(raw_kind)
    except ValueError:
        raise UnsupportedPromptKind(raw_kind) from None

    name = data.get("name", "")
    message = data.get("message", "")
    if kind is PromptKind.INPUT:
        default = data.get("default")
        return InputPrompt(name, message, None if default is None else str(default))
    if kind is PromptKind.CONFIRM:
        default = data.get("default")
        return ConfirmPrompt(name, message, None if default is None else bool(default))
    if kind is PromptKind.CHECKBOX:
        return CheckboxPrompt(name, message, list(data.get("choices") or []))
    if kind is PromptKind.DIRECTORY:
        return DirectoryPrompt(name, message, data.get("basePath") or data.get("base_path") or ".")
    return ListPrompt(
        name,
        message,
        list(data.get("choices") or []),
        numbered=kind is PromptKind.NLIST,
    )


@dataclass(frozen=True)
class KeyEvent:
    """One keystroke as the prompts see it.

    ``name`` is one of up, down, return, backspace, space, or None for a
    plain character.
    """

    char: str | None
    name: str | None = None
    ctrl: bool = False
    meta: bool = False

    @property
    def is_printable(self) -> bool:
        return bool(self.char) and not self.ctrl and not self.meta and self.char.isprintable()


@dataclass(frozen=True)
class ViewportWindow:
    """Visible slice ``[start, end)`` of a choice list."""

    start: int
    end: int
    show_top: bool
    show_bottom: bool
