"""Local filesystem access and the no-clobber creation helpers."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from snpy.errors import IOFailure, TargetAlreadyExists

if TYPE_CHECKING:
    from snpy.ui.base import FileSystem

logger = logging.getLogger("snpy.filesystem")


def normalize_path(path: str) -> str:
    """Normalize a navigator path so "." and "./" compare equal."""
    return os.path.normpath(path or ".")


class LocalFileSystem:
    """FileSystem backed by ``os``. Paths stay in normalized string form."""

    def list_subdirectories(self, path: str) -> list[str]:
        with os.scandir(path) as entries:
            return sorted(entry.name for entry in entries if entry.is_dir())

    def path_exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)

    def create_directory(self, path: str) -> None:
        os.mkdir(path)

    def join_path(self, *parts: str) -> str:
        return normalize_path(os.path.join(*parts))

    def parent_path(self, path: str) -> str:
        return normalize_path(os.path.dirname(normalize_path(path)))

    def write_file(self, path: str, contents: str) -> None:
        # "x" refuses to truncate a file that appeared since the existence check
        with open(path, "x", encoding="utf-8") as f:
            f.write(contents)


def create_directory_at(fs: FileSystem, parent: str, name: str) -> str:
    """Create ``parent/name`` and return its path.

    Raises:
        TargetAlreadyExists: If anything already exists at that path
        IOFailure: If the directory could not be created
    """
    new_path = fs.join_path(parent, name)
    if fs.path_exists(new_path):
        raise TargetAlreadyExists(new_path)
    try:
        fs.create_directory(new_path)
    except FileExistsError as e:
        raise TargetAlreadyExists(new_path) from e
    except OSError as e:
        logger.warning("Failed to create directory %s: %s", new_path, e)
        raise IOFailure(new_path, str(e)) from e
    logger.debug("Created directory %s", new_path)
    return new_path


def write_file_at(fs: FileSystem, directory: str, file_name: str, contents: str) -> str:
    """Write ``directory/file_name`` without overwriting and return its path.

    Raises:
        TargetAlreadyExists: If the file already exists
        IOFailure: If the write failed
    """
    file_path = fs.join_path(directory, file_name)
    if fs.path_exists(file_path):
        raise TargetAlreadyExists(file_path)
    try:
        fs.write_file(file_path, contents)
    except FileExistsError as e:
        raise TargetAlreadyExists(file_path) from e
    except OSError as e:
        logger.warning("Failed to write file %s: %s", file_path, e)
        raise IOFailure(file_path, str(e)) from e
    logger.debug("Wrote file %s", file_path)
    return file_path
