"""User settings for prompt layout and error display.

Values come from three layers, later ones winning:

1. Built-in defaults
2. ``config.json`` in the config directory (``SNPY_CONFIG_DIR`` or ``~/.config/snpy``)
3. ``SNPY_<NAME>`` environment variables

Every value is checked when loaded or set, so prompts never see a
zero-row window or a negative pause.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from snpy.errors import ConfigError

logger = logging.getLogger("snpy.config")

_config_cache: Config | None = None


def clear_config_cache() -> None:
    """Forget the loaded config so the next ``Config.load()`` rereads it."""
    global _config_cache
    _config_cache = None


def get_default_config_dir() -> Path:
    config_dir = os.environ.get("SNPY_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "snpy"


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Setting:
    """One user-adjustable value.

    Attributes:
        description: Shown by ``snpy config``
        default: Used when neither the file nor the environment sets it
        parse: Turns command-line or environment text into a value
        accepts: True when a parsed or stored value is usable
        requirement: Says what ``accepts`` wants, for error messages
    """

    description: str
    default: Any
    parse: Callable[[str], Any]
    accepts: Callable[[Any], bool]
    requirement: str


SETTINGS: dict[str, Setting] = {
    "max_visible": Setting(
        "Rows shown at once in list prompts",
        10,
        int,
        lambda v: _is_int(v) and v >= 1,
        "a whole number of at least 1",
    ),
    "error_pause": Setting(
        "Seconds to show a folder creation error",
        1.5,
        float,
        lambda v: _is_number(v) and v >= 0,
        "a number of seconds, 0 or more",
    ),
    "show_hints": Setting(
        "Show key hints under list prompts",
        True,
        _parse_bool,
        lambda v: isinstance(v, bool),
        "true or false",
    ),
}


class Config:
    """Effective settings, readable as attributes (``config.max_visible``)."""

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = config_dir or get_default_config_dir()
        self._config_file = self._config_dir / "config.json"
        # Only what config.json holds; written back by set()
        self._stored: dict[str, Any] = {}
        self._env: dict[str, Any] = {}

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def config_file(self) -> Path:
        return self._config_file

    @classmethod
    def load(cls, config_dir: Path | None = None) -> Config:
        """Read file and environment. The default location is loaded once and cached.

        Raises:
            ConfigError: A stored or environment value is unusable
        """
        global _config_cache

        if _config_cache is not None and config_dir is None:
            return _config_cache

        config = cls(config_dir)
        config._read_file()
        config._read_env()

        if config_dir is None:
            _config_cache = config
        return config

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name not in SETTINGS:
            raise AttributeError(f"Config has no attribute '{name}'")
        if name in self._env:
            return self._env[name]
        return self._stored.get(name, SETTINGS[name].default)

    def get_settings(self) -> list[tuple[str, str, Any]]:
        """Return (name, description, value) for display."""
        return [(name, s.description, getattr(self, name)) for name, s in SETTINGS.items()]

    def set(self, key: str, value: Any) -> Any:
        """Store ``value`` under ``key`` in config.json.

        Text is parsed the way environment values are, so the command line
        can pass ``"5"`` or ``"false"`` directly.

        Returns:
            The value as stored

        Raises:
            ConfigError: Unknown key or unusable value; nothing is written
        """
        self._setting(key)
        if isinstance(value, str):
            value = self._parse(key, value)
        self._check(key, value)
        self._stored[key] = value
        self._save()
        logger.info("Set %s = %r in %s", key, value, self._config_file)
        return value

    @staticmethod
    def _setting(key: str) -> Setting:
        try:
            return SETTINGS[key]
        except KeyError:
            known = ", ".join(SETTINGS)
            raise ConfigError(f"Unknown setting '{key}' (known: {known})") from None

    def _parse(self, key: str, text: str) -> Any:
        try:
            return self._setting(key).parse(text)
        except ValueError:
            raise ConfigError(
                f"Bad value for {key}: {text!r} (expected {SETTINGS[key].requirement})"
            ) from None

    def _check(self, key: str, value: Any) -> None:
        setting = self._setting(key)
        if not setting.accepts(value):
            raise ConfigError(f"Bad value for {key}: {value!r} (expected {setting.requirement})")

    def _read_file(self) -> None:
        if not self._config_file.exists():
            return
        content = self._config_file.read_text()
        if not content.strip():
            return
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            # Unreadable file: fall back to defaults, next set() rewrites it
            logger.warning("Ignoring corrupt %s: %s", self._config_file, e)
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self._config_file)
            return

        for key, value in data.items():
            if key not in SETTINGS:
                logger.debug("Ignoring unknown setting %r in %s", key, self._config_file)
                continue
            try:
                self._check(key, value)
            except ConfigError as e:
                raise ConfigError(f"{e} in {self._config_file}") from None
            self._stored[key] = value

    def _read_env(self) -> None:
        for key in SETTINGS:
            env_key = f"SNPY_{key.upper()}"
            if env_key not in os.environ:
                continue
            try:
                value = self._parse(key, os.environ[env_key])
                self._check(key, value)
            except ConfigError as e:
                raise ConfigError(f"{e} from {env_key}") from None
            self._env[key] = value

    def _save(self) -> None:
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(self._stored, indent=2) + "\n")
