"""Form markup templates.

This package contains the Jinja2 templates behind the renderer:
- fields/: one template per built-in field type (group rows included)
- form/: form wrapper, tab links, tab containers, sections and titles

Templates are HTML with autoescaping (.html.j2).
"""

from __future__ import annotations
