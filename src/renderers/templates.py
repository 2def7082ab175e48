"""Jinja2 template rendering for framework renderers.

Provides the TemplateRenderer class which loads ``.j2`` templates from an
ordered list of directories under ``src/renderers/templates/``.  The first
directory that contains a template wins, so a framework can override any
shared template (or another framework's template) just by shipping a file of
the same name.

Text that ends up in generated source always goes through one of the escaping
filters registered here:

* ``js_string`` turns a value into a double-quoted JavaScript string literal
  with ``< > & { }`` written as ``\\uXXXX`` escapes, so the literal is inert in
  JSX, Svelte, Astro, Vue and Angular templates alike.
* ``bind`` wraps that literal in the framework's expression syntax
  (``{"..."}`` or ``{{ "..." }}``).
* ``attr`` escapes a value for a static HTML attribute.
* ``template_literal`` escapes markup for embedding in a JS/TS backtick string.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound
from markupsafe import escape

from src.utils import slugify, to_kebab, to_pascal


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

TEMPLATE_ROOT = Path(__file__).parent / "templates"

# Supported expression-binding styles for text nodes.
BINDING_STYLES = ("jsx", "mustache")

_JS_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "{": "\\u007b",
    "}": "\\u007d",
}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for one framework.

    Args:
        search_dirs: Template directory names under ``TEMPLATE_ROOT``, most
            specific first (e.g. ``["nextjs", "react", "shared"]``).
        binding: Text-binding style, ``"jsx"`` or ``"mustache"``.
        globals: Extra globals made available to every template.
        template_root: Override for the template root directory.
    """

    def __init__(
        self,
        search_dirs: Sequence[str],
        binding: str = "jsx",
        globals: dict[str, Any] | None = None,
        template_root: str | Path | None = None,
    ) -> None:
        if binding not in BINDING_STYLES:
            raise ValueError(f"Unknown binding style {binding!r}; expected one of {BINDING_STYLES}")
        root = Path(template_root) if template_root is not None else TEMPLATE_ROOT
        self.search_dirs = [root / name for name in search_dirs]
        self.binding = binding
        self.env = Environment(
            loader=FileSystemLoader([str(d) for d in self.search_dirs]),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["slugify"] = slugify
        self.env.filters["pascal"] = to_pascal
        self.env.filters["kebab"] = to_kebab
        self.env.filters["js_string"] = js_string
        self.env.filters["attr"] = attr
        self.env.filters["template_literal"] = template_literal
        self.env.filters["bind"] = self._bind
        self.env.globals.update(globals or {})
        self._known: set[str] | None = None

    def _bind(self, value: Any) -> str:
        return bind(value, self.binding)

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the search directories (e.g.
                ``"pages/home.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- Utility -----------------------------------------------------------

    def has_template(self, template_path: str) -> bool:
        """Return ``True`` if *template_path* resolves in any search directory."""
        if self._known is None:
            self._known = set(self.list_templates())
        return template_path in self._known

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all template paths visible through the loader."""
        names = self.env.list_templates(extensions=["j2"])
        return sorted(n for n in names if n.startswith(prefix))

    def source_of(self, template_path: str) -> Path:
        """Return the file that *template_path* resolves to."""
        for directory in self.search_dirs:
            candidate = directory / template_path
            if candidate.is_file():
                return candidate
        raise TemplateNotFound(template_path)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def js_string(value: Any) -> str:
    """Return *value* as an inert double-quoted JavaScript string literal."""
    literal = json.dumps("" if value is None else str(value))
    return "".join(_JS_ESCAPES.get(ch, ch) for ch in literal)


def bind(value: Any, style: str = "jsx") -> str:
    """Wrap *value* as a text expression in the given binding style."""
    literal = js_string(value)
    if style == "mustache":
        return "{{ " + literal + " }}"
    return "{" + literal + "}"


def attr(value: Any) -> str:
    """Escape *value* for a double-quoted static HTML attribute."""
    escaped = str(escape("" if value is None else str(value)))
    return escaped.replace("{", "&#123;").replace("}", "&#125;")


def template_literal(value: Any) -> str:
    """Escape *value* for use inside a JavaScript template literal."""
    text = "" if value is None else str(value)
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")
