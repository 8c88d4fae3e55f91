"""Shared fixtures for CLI command tests.

Common fixtures available from parent conftest.py:
- cli_runner: Click CLI test runner (from tests/conftest.py)
- temp_dir: Temporary directory for test files (from tests/conftest.py)
- clean_env: Clean environment without SETTINGSFORM_ vars (from tests/conftest.py)
- schema_file: Tabbed schema YAML (from tests/fixtures/schemas.py)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture
def cli_config(temp_dir: Path, clean_env: None) -> Path:
    """Config file storing settings under ``temp_dir/store``.

    Also changes into ``temp_dir`` so no project config leaks in.
    """
    os.chdir(temp_dir)
    path = temp_dir / "cli.yaml"
    path.write_text(
        "storage:\n"
        "  backend: file\n"
        f"  directory: {temp_dir / 'store'}\n"
        "transfer:\n"
        "  filename_prefix: backup-\n"
    )
    return path
