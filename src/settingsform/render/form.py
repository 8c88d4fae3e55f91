"""Form renderer.

Walks the schema in render order and asks the field registry for the markup
of every field. The renderer only assembles: titles with their help links,
row classes, visibility classes and the tab/section containers.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from markupsafe import Markup

from settingsform.config import RenderConfig, SettingsFormConfig
from settingsform.fields.context import FieldContext
from settingsform.fields.registry import FieldRegistry
from settingsform.hooks import SettingsHooks
from settingsform.logging import get_logger
from settingsform.schema.keys import field_name
from settingsform.schema.models import (
    FieldDefinition,
    SectionDefinition,
    SettingsSchema,
    TabDefinition,
)
from settingsform.store.settings_store import SettingsStore
from settingsform.templating import render_template
from settingsform.tokens import (
    EXPORT_ACTION,
    IMPORT_ACTION,
    SingleUseTokenService,
    TokenService,
)
from settingsform.visibility.compiler import compile_visibility

__all__ = ["FormRenderer"]

logger = get_logger(__name__)


class FormRenderer:
    """Renders the settings form of one schema.

    Attributes:
        schema: The schema to render.
        store: Source of the current (effective) values.
        registry: Field strategies by type.
        hooks: Field default overrides and before/after field listeners.
        tokens: Issues the tokens embedded in export/import fields.
        config: Render options.

    Example:
        ```python
        renderer = FormRenderer(schema, store, create_default_registry())
        html = renderer.render_form()
        ```
    """

    def __init__(
        self,
        schema: SettingsSchema,
        store: SettingsStore,
        registry: FieldRegistry,
        hooks: SettingsHooks | None = None,
        tokens: TokenService | None = None,
        config: SettingsFormConfig | None = None,
    ) -> None:
        self.schema = schema
        self.store = store
        self.registry = registry
        self.hooks = hooks if hooks is not None else store.hooks
        self.tokens = tokens if tokens is not None else SingleUseTokenService()
        self.config: RenderConfig = (
            config.render if config is not None else RenderConfig()
        )

    # -------------------------------------------------------------------------
    # Form and tabs
    # -------------------------------------------------------------------------

    def render_form(self, action: str = "") -> Markup:
        """The complete ``<form>`` with tab links, sections and save button."""
        markup = render_template(
            "form/form.html.j2",
            group_id=self.schema.group_id,
            action=action,
            tab_links=self.render_tab_links(),
            sections=self.render_sections(),
            show_save_button=self.config.show_save_button,
            save_label=self.config.save_label,
        )
        logger.debug(
            "form_rendered",
            group_id=self.schema.group_id,
            fields=len(self.schema.field_keys()),
        )
        return markup

    def _visible_tabs(self) -> list[TabDefinition]:
        return [
            tab for tab in self.schema.tabs if self.schema.tab_has_sections(tab.id)
        ]

    def render_tab_links(self) -> Markup:
        """Navigation for tabbed schemas; tabs without sections are skipped."""
        if not self.schema.has_tabs or not self.config.show_tab_links:
            return Markup("")

        links = []
        for index, tab in enumerate(self._visible_tabs()):
            css_class = (tab.css_class + compile_visibility(tab).css_classes()).strip()
            links.append(
                {
                    "id": tab.id,
                    "title": tab.title,
                    "css_class": css_class,
                    "active": index == 0,
                }
            )
        return render_template(
            "form/tab_links.html.j2", links=links, save_label=self.config.save_label
        )

    def render_sections(self) -> Markup:
        """All sections, inside ``tab-{id}`` containers when the schema has tabs."""
        if not self.schema.has_tabs:
            return render_template(
                "form/tabless.html.j2",
                sections=[self.render_section(s) for s in self.schema.sections],
            )

        visible = self._visible_tabs()
        active_id = visible[0].id if visible else None
        containers = [
            render_template(
                "form/tab.html.j2",
                tab=tab,
                active=tab.id == active_id,
                sections=[
                    self.render_section(s) for s in self.schema.sections_for_tab(tab.id)
                ],
            )
            for tab in self.schema.tabs
        ]
        return Markup("").join(containers)

    # -------------------------------------------------------------------------
    # Sections and fields
    # -------------------------------------------------------------------------

    def render_section(self, section: SectionDefinition) -> Markup:
        """Section heading, intro (visibility span, description) and field rows."""
        rows = [
            {
                "title": self.render_title(field),
                "row_class": "hidden" if field.type == "hidden" else "",
                "markup": self.render_field(section, field),
            }
            for field in section.fields
        ]
        return render_template(
            "form/section.html.j2",
            section=section,
            visibility_class=compile_visibility(section).css_classes().strip(),
            rows=rows,
        )

    def render_title(self, field: FieldDefinition) -> Markup:
        """Field title with its tooltip, or subtitle with its help link."""
        tooltip = Markup("")
        subtitle = Markup(field.subtitle)
        link = field.link
        if link is not None and link.url:
            anchor = render_template("form/link.html.j2", link=link)
            if link.type == "tooltip":
                tooltip = anchor
            elif subtitle:
                subtitle = subtitle + Markup("<br/><br/>") + anchor
            else:
                subtitle = anchor
        return render_template(
            "form/title.html.j2", title=field.title, tooltip=tooltip, subtitle=subtitle
        )

    def field_context(
        self, section: SectionDefinition, field: FieldDefinition
    ) -> FieldContext:
        """Render context of a top-level field."""
        key = self.schema.key_for(section, field)
        ctx = FieldContext.from_definition(
            field,
            id=key,
            name=field_name(self.schema.group_id, key),
            value=self.store.get(key),
            group_id=self.schema.group_id,
            extra_class=compile_visibility(field).css_classes(),
            defaults=self.hooks.field_defaults,
        )
        extras = self._extras(ctx.type)
        if not extras:
            return ctx
        return ctx.derive(options={**ctx.options, **extras})

    def render_field(
        self, section: SectionDefinition, field: FieldDefinition
    ) -> Markup:
        """Markup of one field, wrapped in the hooks' before/after output."""
        ctx = self.field_context(section, field)
        before = Markup(self.hooks.emit_before(ctx))
        after = Markup(self.hooks.emit_after(ctx))
        return before + self.registry.render(ctx) + after

    def _extras(self, field_type: str) -> dict[str, Any]:
        extras: dict[str, Any] = {}
        if field_type == "export":
            extras["export_url"] = self.export_url()
        elif field_type == "import":
            extras["import_token"] = self.tokens.issue(IMPORT_ACTION)
        elif field_type == "group" and self.hooks.field_defaults:
            extras["field_defaults"] = dict(self.hooks.field_defaults)
        return extras

    def export_url(self) -> str:
        """Export endpoint URL carrying a fresh export token."""
        base = self.config.export_url
        query = urlencode(
            {
                "token": self.tokens.issue(EXPORT_ACTION),
                "group_id": self.schema.group_id,
            }
        )
        separator = "&" if "?" in base else "?"
        return f"{base}{separator}{query}"
