"""Key-value persistence backends.

The settings store keeps one opaque JSON blob per group under
``{group_id}_settings``. Backends only need ``get``/``set``/``delete`` and
each call is atomic:
- MemoryOptionBackend: in-process dict, for tests and embedding
- JsonFileOptionBackend: one ``<key>.json`` file per option
"""

from __future__ import annotations

import copy
import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from settingsform.logging import get_logger

__all__ = ["OptionBackend", "MemoryOptionBackend", "JsonFileOptionBackend"]

logger = get_logger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


@runtime_checkable
class OptionBackend(Protocol):
    """Persistence provider consumed by the settings store."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryOptionBackend:
    """Option backend holding deep copies in a dict.

    Copies go in and out so callers can never mutate stored state by
    accident.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._options: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any | None:
        if key not in self._options:
            return None
        return copy.deepcopy(self._options[key])

    def set(self, key: str, value: Any) -> None:
        self._options[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._options.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._options)


class JsonFileOptionBackend:
    """Option backend storing each option as ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory and are moved into
    place with ``os.replace`` so readers see the old or the new blob, never a
    partial one.

    Attributes:
        directory: Directory holding the option files.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid option key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("option_written", key=key, path=str(path))

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
