"""Host extension points.

A host customizes one settings instance through ``SettingsHooks``:
- validators: chained over raw submitted values before they are persisted
- field_defaults: attribute defaults merged under every field definition
- before_field / after_field: listeners whose markup wraps a rendered field

Additional field types are registered directly on the ``FieldRegistry``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from settingsform.exceptions import ValidationFailedError
from settingsform.logging import get_logger

if TYPE_CHECKING:
    from settingsform.fields.context import FieldContext

__all__ = ["SettingsHooks", "Validator", "FieldListener"]

logger = get_logger(__name__)

# A validator receives the raw submitted mapping and returns the mapping to
# persist, or raises ValidationFailedError.
Validator = Callable[[dict[str, Any]], Mapping[str, Any]]

# A listener receives the field context and may return extra markup.
FieldListener = Callable[["FieldContext"], str | None]


@dataclass
class SettingsHooks:
    """Extension points of one settings instance.

    Example:
        ```python
        hooks = SettingsHooks()

        @hooks.validator
        def strip_titles(values):
            return {k: v.strip() if isinstance(v, str) else v
                    for k, v in values.items()}

        store = SettingsStore(schema, backend, hooks=hooks)
        ```
    """

    validators: list[Validator] = field(default_factory=list)
    field_defaults: dict[str, Any] = field(default_factory=dict)
    before_field: list[FieldListener] = field(default_factory=list)
    after_field: list[FieldListener] = field(default_factory=list)

    def validator(self, func: Validator) -> Validator:
        """Register a validator; usable as a decorator."""
        self.validators.append(func)
        return func

    def validate(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        """Run every validator in registration order.

        Args:
            raw: Raw submitted values.

        Returns:
            The values to persist.

        Raises:
            ValidationFailedError: If a validator rejects the input or returns
                something that is not a mapping.
        """
        values = dict(raw)
        for func in self.validators:
            result = func(values)
            if not isinstance(result, Mapping):
                name = getattr(func, "__name__", repr(func))
                logger.warning("validator_rejected_input", validator=name)
                raise ValidationFailedError(
                    f"Validator '{name}' did not return a mapping of values"
                )
            values = dict(result)
        return values

    def emit_before(self, ctx: FieldContext) -> str:
        return "".join(listener(ctx) or "" for listener in self.before_field)

    def emit_after(self, ctx: FieldContext) -> str:
        return "".join(listener(ctx) or "" for listener in self.after_field)
