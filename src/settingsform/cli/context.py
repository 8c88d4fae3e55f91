"""CLI context and exit codes for settingsform."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from settingsform.config import SettingsFormConfig

__all__ = ["ExitCode", "CLIContext"]


class ExitCode(IntEnum):
    """Exit codes of the settingsform CLI.

    - 0 for success
    - 1 for failure (invalid schema, rejected import, I/O errors)
    - 2 for usage errors (click's own convention)
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE = 2


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI options and the loaded configuration.

    Attributes:
        config: Loaded configuration.
        config_path: Path given with --config, if any.
        verbosity: Verbosity level (0=default, 1=INFO, 2+=DEBUG).
        quiet: Suppress non-essential output.
    """

    config: SettingsFormConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False
