"""settingsform exception hierarchy.

All exceptions can be imported from this package:
    from settingsform.exceptions import SchemaError, ForbiddenError
"""

from __future__ import annotations

# Base exception
from settingsform.exceptions.base import SettingsFormError

# Configuration exceptions
from settingsform.exceptions.config import ConfigError

# Field registry exceptions
from settingsform.exceptions.registry import (
    DuplicateStrategyError,
    StrategyNotFoundError,
)

# Schema exceptions
from settingsform.exceptions.schema import KeyDerivationError, SchemaError

# Import/export exceptions
from settingsform.exceptions.transfer import ForbiddenError, InvalidFormatError

# Validation exceptions
from settingsform.exceptions.validation import ValidationFailedError

__all__ = [
    # Base
    "SettingsFormError",
    # Config
    "ConfigError",
    # Registry
    "DuplicateStrategyError",
    "StrategyNotFoundError",
    # Schema
    "KeyDerivationError",
    "SchemaError",
    # Transfer
    "ForbiddenError",
    "InvalidFormatError",
    # Validation
    "ValidationFailedError",
]
