"""Settings persistence.

- backends.py: OptionBackend protocol with memory and JSON-file backends
- cache.py: Store-owned memoization of effective values
- settings_store.py: Defaults/persisted layering, reads and validated writes
"""

from __future__ import annotations

from settingsform.store.backends import (
    JsonFileOptionBackend,
    MemoryOptionBackend,
    OptionBackend,
)
from settingsform.store.cache import EffectiveValueCache, EffectiveValues
from settingsform.store.settings_store import (
    SettingsStore,
    normalize_default,
)

__all__: list[str] = [
    "EffectiveValueCache",
    "EffectiveValues",
    "JsonFileOptionBackend",
    "MemoryOptionBackend",
    "OptionBackend",
    "SettingsStore",
    "normalize_default",
]
