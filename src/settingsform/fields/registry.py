"""Field registry.

Maps field type tags to rendering strategies. The registry is populated at
startup (``create_default_registry`` registers the built-in types) and hosts
add their own types with ``register``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from markupsafe import Markup

from settingsform.exceptions import DuplicateStrategyError, StrategyNotFoundError
from settingsform.fields.context import FieldContext
from settingsform.logging import get_logger

__all__ = ["FieldStrategy", "FieldRegistry", "create_default_registry"]

logger = get_logger(__name__)


class FieldStrategy(Protocol):
    """Renders one field type.

    A strategy receives the field context and the registry (so composite
    types such as ``group`` can render nested fields) and returns markup.
    """

    def __call__(self, ctx: FieldContext, registry: FieldRegistry) -> Markup: ...


class FieldRegistry:
    """Registry of field strategies keyed by type tag.

    Example:
        ```python
        registry = create_default_registry()

        @registry.register("slider")
        def render_slider(ctx, registry):
            return Markup('<input type="range" name="{}" value="{}">').format(
                ctx.name, ctx.value
            )

        registry.render(ctx)          # markup, or "" for unknown types
        registry.resolve("unknown")   # None
        ```
    """

    def __init__(self) -> None:
        self._strategies: dict[str, FieldStrategy] = {}

    def register(
        self,
        field_type: str,
        strategy: FieldStrategy | None = None,
        *,
        replace: bool = False,
    ) -> FieldStrategy | Callable[[FieldStrategy], FieldStrategy]:
        """Register a strategy, directly or as a decorator.

        Args:
            field_type: Type tag the strategy renders.
            strategy: The strategy (None when used as a decorator).
            replace: Allow overriding an already registered type.

        Raises:
            DuplicateStrategyError: If the type is taken and ``replace`` is False.
            TypeError: If the strategy is not callable.
        """
        if strategy is None:

            def decorator(func: FieldStrategy) -> FieldStrategy:
                self._register_impl(field_type, func, replace=replace)
                return func

            return decorator

        self._register_impl(field_type, strategy, replace=replace)
        return strategy

    def _register_impl(
        self, field_type: str, strategy: FieldStrategy, *, replace: bool
    ) -> None:
        if not callable(strategy):
            raise TypeError(
                f"Strategy for '{field_type}' must be callable. "
                f"Got {type(strategy).__name__} instead."
            )
        if field_type in self._strategies and not replace:
            raise DuplicateStrategyError(field_type)
        self._strategies[field_type] = strategy

    def resolve(self, field_type: str) -> FieldStrategy | None:
        """Strategy for ``field_type``, or None when there is none."""
        return self._strategies.get(field_type)

    def get(self, field_type: str) -> FieldStrategy:
        """Strategy for ``field_type``.

        Raises:
            StrategyNotFoundError: If the type is not registered.
        """
        strategy = self.resolve(field_type)
        if strategy is None:
            raise StrategyNotFoundError(field_type, self.list_types())
        return strategy

    def has(self, field_type: str) -> bool:
        return field_type in self._strategies

    def list_types(self) -> list[str]:
        return sorted(self._strategies)

    def render(self, ctx: FieldContext) -> Markup:
        """Render ``ctx`` with its type's strategy; unknown types render nothing."""
        strategy = self.resolve(ctx.type)
        if strategy is None:
            logger.debug("field_strategy_missing", field_type=ctx.type, field_id=ctx.id)
            return Markup("")
        return Markup(strategy(ctx, self))


def create_default_registry() -> FieldRegistry:
    """A registry with every built-in field type registered."""
    from settingsform.fields.builtin import register_builtin_strategies

    registry = FieldRegistry()
    register_builtin_strategies(registry)
    return registry
