"""CLI commands of settingsform."""

from __future__ import annotations
