"""Protocols for the terminal and filesystem the prompts run against."""

from typing import Protocol

from snpy.models import KeyEvent


class TerminalIO(Protocol):
    """Protocol for swappable terminal drivers."""

    def set_raw_mode(self, enabled: bool) -> None:
        """Raw mode reads single keys with the cursor hidden; line mode shows it."""
        ...

    def read_key(self) -> KeyEvent:
        """Block until the next keystroke."""
        ...

    def clear_screen(self) -> None: ...

    def write(self, text: str, style: str | None = None) -> None:
        """Write text without a newline. ``style`` is a style tag, e.g. "hint"."""
        ...

    def move_cursor(self, columns: int) -> None:
        """Move the cursor horizontally; negative moves left."""
        ...

    def clear_line(self) -> None: ...

    def new_line(self) -> None: ...

    def exit(self) -> None:
        """Release the input stream."""
        ...


class FileSystem(Protocol):
    """Protocol for the filesystem calls the prompts make."""

    def list_subdirectories(self, path: str) -> list[str]: ...

    def path_exists(self, path: str) -> bool: ...

    def is_directory(self, path: str) -> bool: ...

    def create_directory(self, path: str) -> None:
        """Create one directory. Raises OSError on failure."""
        ...

    def join_path(self, *parts: str) -> str: ...

    def parent_path(self, path: str) -> str: ...

    def write_file(self, path: str, contents: str) -> None:
        """Write a new file. Raises OSError on failure."""
        ...
