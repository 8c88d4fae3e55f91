"""settingsform - declarative settings forms.

Build a schema, back it with a store, render it and move the values in and
out as JSON:

    schema = load_schema("settings.yaml")
    store = SettingsStore(schema, JsonFileOptionBackend(".settingsform"))
    html = FormRenderer(schema, store, create_default_registry()).render_form()
"""

from __future__ import annotations

__version__ = "0.1.0"

from settingsform.exceptions import SettingsFormError  # noqa: E402
from settingsform.fields import (  # noqa: E402
    FieldContext,
    FieldRegistry,
    create_default_registry,
)
from settingsform.hooks import SettingsHooks  # noqa: E402
from settingsform.render import FormRenderer  # noqa: E402
from settingsform.schema import (  # noqa: E402
    SettingsSchema,
    build_schema,
    derive_key,
    load_schema,
)
from settingsform.store import (  # noqa: E402
    JsonFileOptionBackend,
    MemoryOptionBackend,
    SettingsStore,
)
from settingsform.tokens import SingleUseTokenService  # noqa: E402
from settingsform.transfer import SettingsTransfer  # noqa: E402
from settingsform.visibility import (  # noqa: E402
    VisibilityEvaluator,
    compile_visibility,
)

__all__ = [
    "__version__",
    "FieldContext",
    "FieldRegistry",
    "FormRenderer",
    "JsonFileOptionBackend",
    "MemoryOptionBackend",
    "SettingsFormError",
    "SettingsHooks",
    "SettingsSchema",
    "SettingsStore",
    "SettingsTransfer",
    "SingleUseTokenService",
    "VisibilityEvaluator",
    "build_schema",
    "compile_visibility",
    "create_default_registry",
    "derive_key",
    "load_schema",
]
