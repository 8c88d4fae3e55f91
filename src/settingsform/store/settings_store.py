"""Settings store.

Maps derived keys to values for one settings group. Effective values are the
schema defaults layered under the persisted blob; writes always replace the
whole blob, so a save either fully happens or leaves storage untouched.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from settingsform.exceptions import ValidationFailedError
from settingsform.hooks import SettingsHooks
from settingsform.logging import get_logger
from settingsform.schema.models import FieldDefinition, SettingsSchema
from settingsform.store.backends import OptionBackend
from settingsform.store.cache import EffectiveValueCache, EffectiveValues
from settingsform.values import is_empty_value

__all__ = ["SettingsStore", "normalize_default"]

logger = get_logger(__name__)


def normalize_default(field: FieldDefinition) -> Any:
    """Default value of ``field`` as it is resolved for reads.

    A field without a default resolves to ``False``; non-empty mapping or
    list defaults are flattened to the list of their values. The result is a
    deep copy and never shares state with the schema.
    """
    default = field.default
    if default is None:
        return False
    if isinstance(default, Mapping) and default:
        return copy.deepcopy(list(default.values()))
    if isinstance(default, (list, tuple)) and default:
        return copy.deepcopy(list(default))
    return copy.deepcopy(default)


class SettingsStore:
    """Reads and writes the values of one settings group.

    Create one store per request: its ``EffectiveValueCache`` memoizes the
    resolved values for the store's lifetime and is only invalidated by
    writes made through this store.

    Attributes:
        schema: The schema whose fields define keys and defaults.
        backend: Persistence provider.
        hooks: Host extension points (validators).
        cache: The store-owned memoization cache.

    Example:
        ```python
        store = SettingsStore(schema, MemoryOptionBackend())
        store.read()["general_title"]          # default until saved
        store.validate_and_persist({"general_title": "Hello"})
        store.read(unprefixed=True)["title"]   # "Hello"
        ```
    """

    def __init__(
        self,
        schema: SettingsSchema,
        backend: OptionBackend,
        hooks: SettingsHooks | None = None,
    ) -> None:
        self.schema = schema
        self.backend = backend
        self.hooks = hooks if hooks is not None else SettingsHooks()
        self.cache = EffectiveValueCache()
        self._log = logger.bind(group_id=schema.group_id)

    @property
    def group_id(self) -> str:
        return self.schema.group_id

    @property
    def option_name(self) -> str:
        return self.schema.option_name

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def defaults(self) -> dict[str, Any]:
        """Derived key -> default for every field of the schema."""
        return {
            self.schema.key_for(section, field): normalize_default(field)
            for section, field in self.schema.iter_fields()
        }

    def persisted(self) -> dict[str, Any]:
        """The raw persisted blob, ``{}`` when nothing valid is stored."""
        stored = self.backend.get(self.option_name)
        if stored is None:
            return {}
        if not isinstance(stored, dict):
            self._log.warning(
                "persisted_settings_not_a_mapping",
                option=self.option_name,
                type=type(stored).__name__,
            )
            return {}
        return stored

    def _resolve(self) -> EffectiveValues:
        cached = self.cache.get(self.group_id)
        if cached is not None:
            return cached

        saved = self.persisted()
        prefixed: dict[str, Any] = {}
        unprefixed: dict[str, Any] = {}
        owners: dict[str, str] = {}
        for section, field in self.schema.iter_fields():
            key = self.schema.key_for(section, field)
            # A stored null counts as unset.
            value = saved.get(key)
            if value is None:
                value = normalize_default(field)
            prefixed[key] = value
            if field.id in owners:
                # Bare ids shared across sections collapse; last one wins.
                self._log.debug(
                    "unprefixed_key_collision",
                    field_id=field.id,
                    previous=owners[field.id],
                    winner=key,
                )
            owners[field.id] = key
            unprefixed[field.id] = value

        resolved = EffectiveValues(prefixed=prefixed, unprefixed=unprefixed)
        self.cache.put(self.group_id, resolved)
        return resolved

    def read(self, unprefixed: bool = False) -> dict[str, Any]:
        """Effective values of every schema field.

        Args:
            unprefixed: Key the result by bare field id instead of derived
                key. Fields sharing an id in different sections collapse and
                the last one in render order wins.

        Returns:
            A deep copy; mutating it, nested values included, does not touch
            the cache.
        """
        resolved = self._resolve()
        return copy.deepcopy(resolved.unprefixed if unprefixed else resolved.prefixed)

    def get(self, key: str, default: Any = False) -> Any:
        """Effective value of one derived key, returned as a copy."""
        resolved = self._resolve()
        if key not in resolved.prefixed:
            return default
        return copy.deepcopy(resolved.prefixed[key])

    def get_setting(
        self, section_id: str, field_id: str, tab_id: str | None = None
    ) -> Any:
        """Persisted value of a field, ``False`` when it was never saved.

        Defaults are not applied; this reads the stored blob only. On a
        tabbed schema a missing ``tab_id`` is taken from the section.

        Raises:
            KeyDerivationError: If the tab id does not fit the schema, e.g.
                an unknown section on a tabbed schema.
        """
        if tab_id is None and self.schema.has_tabs:
            section = self.schema.find_section(section_id)
            if section is not None:
                tab_id = section.tab_id
        key = self.schema.deriver.derive(tab_id, section_id, field_id)
        return copy.deepcopy(self.persisted().get(key, False))

    def get_option(self, field_id: str, default: Any = False) -> Any:
        """Effective value by bare field id, ``default`` when it is empty."""
        value = self._resolve().unprefixed.get(field_id)
        if is_empty_value(value):
            return default
        return copy.deepcopy(value)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def validate_and_persist(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        """Validate submitted values and replace the stored blob with them.

        Values are persisted verbatim after the hooks' validators ran; the
        store performs no per-field coercion.

        Args:
            raw: Raw submitted mapping (derived key -> value).

        Returns:
            The values that were persisted.

        Raises:
            ValidationFailedError: If a validator rejects the input. Storage
                is left unchanged.
        """
        try:
            values = self.hooks.validate(raw)
        except ValidationFailedError as e:
            self._log.info("settings_validation_failed", error=e.message)
            raise
        self.replace(values)
        return values

    def replace(self, values: Mapping[str, Any]) -> None:
        """Atomically replace the whole persisted blob."""
        self.backend.set(self.option_name, dict(values))
        self.cache.invalidate(self.group_id)
        self._log.info("settings_persisted", option=self.option_name, keys=len(values))

    def delete(self) -> None:
        """Remove the persisted blob; reads fall back to defaults."""
        self.backend.delete(self.option_name)
        self.cache.invalidate(self.group_id)
        self._log.info("settings_deleted", option=self.option_name)
