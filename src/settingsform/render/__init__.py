"""Form rendering orchestration."""

from __future__ import annotations

from settingsform.render.form import FormRenderer

__all__: list[str] = ["FormRenderer"]
