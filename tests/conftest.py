"""Pytest fixtures for snpy tests."""

from collections import deque
from pathlib import Path

import pytest

from snpy.config import Config
from snpy.models import KeyEvent

UP = KeyEvent(char=None, name="up")
DOWN = KeyEvent(char=None, name="down")
ENTER = KeyEvent(char=None, name="return")
BACKSPACE = KeyEvent(char=None, name="backspace")
SPACE = KeyEvent(char=" ", name="space")
CTRL_C = KeyEvent(char="c", ctrl=True)


def typed(text: str) -> list[KeyEvent]:
    """Key events for typing ``text`` character by character."""
    return [KeyEvent(char=c, name="space" if c == " " else None) for c in text]


class FakeTerminal:
    """TerminalIO that replays scripted keys and records everything drawn."""

    def __init__(self, keys=()):
        self.keys = deque(keys)
        self.calls: list[tuple[str, object]] = []
        self.raw_modes: list[bool] = []
        self.closed = False

    def feed(self, *keys: KeyEvent) -> None:
        self.keys.extend(keys)

    def set_raw_mode(self, enabled: bool) -> None:
        self.raw_modes.append(enabled)
        self.calls.append(("raw", enabled))

    def read_key(self) -> KeyEvent:
        if not self.keys:
            raise AssertionError("Prompt asked for more keys than the test scripted")
        return self.keys.popleft()

    def clear_screen(self) -> None:
        self.calls.append(("clear", None))

    def write(self, text: str, style: str | None = None) -> None:
        self.calls.append(("write", (text, style)))

    def move_cursor(self, columns: int) -> None:
        self.calls.append(("move", columns))

    def clear_line(self) -> None:
        self.calls.append(("clear_line", None))

    def new_line(self) -> None:
        self.calls.append(("write", ("\n", None)))

    def exit(self) -> None:
        self.closed = True

    @property
    def text(self) -> str:
        """Everything written, styles dropped."""
        return "".join(payload[0] for kind, payload in self.calls if kind == "write")

    @property
    def screen(self) -> str:
        """Text written since the last clear_screen."""
        last_clear = max(
            (i for i, (kind, _) in enumerate(self.calls) if kind == "clear"),
            default=-1,
        )
        return "".join(
            payload[0] for kind, payload in self.calls[last_clear + 1 :] if kind == "write"
        )

    def styled(self, style: str) -> list[str]:
        return [p[0] for kind, p in self.calls if kind == "write" and p[1] == style]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config at a temp dir and clear the cache around each test."""
    from snpy.config import clear_config_cache

    monkeypatch.setenv("SNPY_CONFIG_DIR", str(tmp_path / ".snpy"))
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(tmp_path / ".snpy")


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def snpy(terminal: FakeTerminal, config: Config, sleeps: list[float]):
    from snpy.session import Snpy

    return Snpy(terminal=terminal, config=config, sleep=sleeps.append)


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with the temp dir as working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
