"""CLI utilities for settingsform.

This module provides CLI-specific utilities including context management
and output formatting.
"""

from __future__ import annotations

from settingsform.cli.context import CLIContext, ExitCode
from settingsform.cli.output import OutputFormat

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
]
