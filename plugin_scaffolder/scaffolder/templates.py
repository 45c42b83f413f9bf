"""Jinja2 template rendering for package scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``plugin_scaffolder/scaffolder/templates/`` directory and renders them with
the data planned for each generated file.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .naming import normalize, to_camel, to_pascal


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for package scaffolding.

    The renderer loads ``.j2`` template files from a configurable
    template directory.  Autoescaping is off: output is TypeScript, JSON and
    Markdown, and user text reaching templates is escaped by the entity
    builder instead.  Undefined variables raise, so a template/data mismatch
    fails the run rather than writing a silently broken file.

    Args:
        template_dir: Template root; defaults to the bundled templates.
        filters: Extra Jinja2 filters, merged over the built-in ones.
        globals: Extra template globals (e.g. ``dependency_version``).
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        *,
        filters: Mapping[str, Callable[..., Any]] | None = None,
        globals: Mapping[str, Any] | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["slugify"] = normalize
        self.env.filters["pascal_case"] = to_pascal
        self.env.filters["camel_case"] = to_camel
        self.env.filters["json_text"] = _json_text_filter
        if filters:
            self.env.filters.update(filters)
        if globals:
            self.env.globals.update(globals)

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"new-rule/rule.ts.j2"``).
            context: Variables available inside the template.

        Raises:
            jinja2.TemplateNotFound: If the template does not exist.
            jinja2.TemplateError: On any other rendering failure.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

_TEMPLATE_ESCAPE = re.compile(r"\\([\\`])")


def _json_text_filter(value: str) -> str:
    """Render text escaped by ``escape_description`` as a JSON string literal.

    The backslash escapes are undone first; ``json.dumps`` applies its own.
    """
    return json.dumps(_TEMPLATE_ESCAPE.sub(r"\1", value), ensure_ascii=False)
