"""Jinja2 environment shared by the field strategies and the form renderer.

Templates live in the ``settingsform.templates`` package. Autoescaping is
on: stored values and choice labels are always escaped, while descriptions,
subtitles and custom output are host-authored markup rendered ``|safe``.
"""

from __future__ import annotations

from functools import cache
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined
from markupsafe import Markup

__all__ = ["get_environment", "render_template"]


@cache
def get_environment() -> Environment:
    """The package-wide template environment (created on first use)."""
    return Environment(
        loader=PackageLoader("settingsform", "templates"),
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(name: str, **context: Any) -> Markup:
    """Render a template such as ``fields/input.html.j2`` to safe markup.

    Raises:
        TemplateNotFound: If no template has that name.
    """
    template = get_environment().get_template(name)
    return Markup(template.render(**context))
