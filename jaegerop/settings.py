"""Process-wide configuration: explicit values, environment variables and a config file."""

from __future__ import annotations

import os
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterator

import yaml

_CONFIG_NAME = ".jaeger-operator"
_CONFIG_EXTENSIONS = ("yaml", "yml", "json")

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    for key, value in data.items():
        full = f"{prefix}{str(key).lower()}"
        yield full, value
        if isinstance(value, Mapping):
            yield from _flatten(value, f"{full}.")


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value in _TRUE_WORDS
    if isinstance(value, (int, float)):
        return value != 0
    return False


class Settings:
    """Key/value configuration store with case-insensitive keys.

    Lookup order: explicitly set values, then environment variables (when
    ``automatic_env`` is on, using the upper-cased key), then the loaded
    configuration file.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._overrides: dict[str, Any] = {}
        self._config: dict[str, Any] = {}
        self.config_file_used: Path | None = None
        self.automatic_env = False

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._overrides[key.lower()] = value

    def _lookup(self, key: str) -> tuple[bool, Any]:
        key = key.lower()
        with self._lock:
            if key in self._overrides:
                return True, self._overrides[key]
            if self.automatic_env:
                env_value = os.environ.get(key.upper())
                if env_value:
                    return True, env_value
            if key in self._config:
                return True, self._config[key]
        return False, None

    def get(self, key: str, default: Any = None) -> Any:
        found, value = self._lookup(key)
        return value if found else default

    def get_str(self, key: str) -> str:
        return _to_str(self.get(key))

    def get_bool(self, key: str) -> bool:
        return _to_bool(self.get(key))

    def is_set(self, key: str) -> bool:
        found, _ = self._lookup(key)
        return found

    def reset(self) -> None:
        with self._lock:
            self._overrides.clear()
            self._config.clear()
            self.config_file_used = None
            self.automatic_env = False

    def load(self, path: str | os.PathLike[str]) -> None:
        """Read a YAML (or JSON) configuration file; nested keys are reachable with dots."""
        path = Path(path)
        with path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError(f"configuration file {path} does not hold a mapping")
        with self._lock:
            self._config = dict(_flatten(data))
            self.config_file_used = path


def init_config(settings: Settings, config_file: str | os.PathLike[str] | None = None) -> Path | None:
    """Enable environment lookups and read the configuration file, if one is found.

    Without an explicit file, ``~/.jaeger-operator.{yaml,yml,json}`` is searched.
    Returns the path of the file that was read, or None.
    """
    if config_file:
        candidates = [Path(config_file)]
    else:
        home = Path.home()
        candidates = [home / f"{_CONFIG_NAME}.{ext}" for ext in _CONFIG_EXTENSIONS]

    settings.automatic_env = True

    for candidate in candidates:
        if not candidate.is_file():
            continue
        try:
            settings.load(candidate)
        except (OSError, ValueError, yaml.YAMLError):
            return None
        print("Using config file:", candidate)
        return candidate
    return None