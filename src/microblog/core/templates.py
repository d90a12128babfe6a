"""Jinja templates used to wrap rendered posts and the page that hosts them."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jinja2
from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError, meta

from .exceptions import TemplateError


__all__ = [
    "DEFAULT_POST_TEMPLATE",
    "PAGE_PLACEHOLDERS",
    "POST_PLACEHOLDERS",
    "PageTemplate",
    "PostTemplate",
    "default_post_template",
]


POST_PLACEHOLDERS = frozenset({"heading", "dt_posted", "content"})
PAGE_PLACEHOLDERS = frozenset({"posts"})

DEFAULT_POST_TEMPLATE = """
<div class="blog-post">
    <h2>{{ heading }}</h2>
    <span class="dt-posted">{{ dt_posted }}</span>
    {{ content }}
</div>
"""


def _build_environment() -> Environment:
    # Heading and body are already HTML; escaping them would mangle the markup.
    return Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


_ENVIRONMENT = _build_environment()


def _compile(source: str, *, name: str, allowed: Iterable[str]) -> Template:
    try:
        parsed = _ENVIRONMENT.parse(source)
    except TemplateSyntaxError as exc:
        raise TemplateError(f"could not parse template {name}: {exc}") from exc

    unknown = sorted(set(meta.find_undeclared_variables(parsed)) - set(allowed))
    if unknown:
        names = ", ".join(unknown)
        raise TemplateError(f"template {name} references undefined placeholders: {names}")

    # No loader is configured, so included or inherited templates cannot resolve.
    referenced = sorted(str(ref) for ref in meta.find_referenced_templates(parsed))
    if referenced:
        names = ", ".join(referenced)
        raise TemplateError(f"template {name} references other templates: {names}")

    try:
        return _ENVIRONMENT.from_string(source)
    except TemplateSyntaxError as exc:  # pragma: no cover - parse already succeeded
        raise TemplateError(f"could not parse template {name}: {exc}") from exc


def _read_template(path: str | Path) -> str:
    target = Path(path)
    try:
        return target.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateError(f"could not read template file {target}: {exc}") from exc


@dataclass(frozen=True, slots=True)
class _BoundTemplate:
    source: str
    name: str
    _template: Template = field(repr=False, compare=False)

    def _render(self, context: Mapping[str, Any]) -> str:
        try:
            return self._template.render(context)
        except (jinja2.TemplateError, TypeError, ValueError) as exc:
            raise TemplateError(f"could not render template {self.name}: {exc}") from exc


@dataclass(frozen=True, slots=True)
class PostTemplate(_BoundTemplate):
    """Template wrapping a single post's heading, date and body."""

    @classmethod
    def from_string(cls, source: str, *, name: str = "<string>") -> PostTemplate:
        """Compile an inline template."""
        template = _compile(source, name=name, allowed=POST_PLACEHOLDERS)
        return cls(source=source, name=name, _template=template)

    @classmethod
    def from_file(cls, path: str | Path) -> PostTemplate:
        """Compile a template stored on disk; behaves exactly like the inline form."""
        return cls.from_string(_read_template(path), name=str(path))

    def render(self, *, heading: str, dt_posted: str, content: str) -> str:
        """Substitute the three post placeholders."""
        return self._render({"heading": heading, "dt_posted": dt_posted, "content": content})


@dataclass(frozen=True, slots=True)
class PageTemplate(_BoundTemplate):
    """Template wrapping the concatenated posts into a full HTML page."""

    @classmethod
    def from_string(cls, source: str, *, name: str = "<string>") -> PageTemplate:
        template = _compile(source, name=name, allowed=PAGE_PLACEHOLDERS)
        return cls(source=source, name=name, _template=template)

    @classmethod
    def from_file(cls, path: str | Path) -> PageTemplate:
        return cls.from_string(_read_template(path), name=str(path))

    def render(self, *, posts: str) -> str:
        return self._render({"posts": posts})


def default_post_template() -> PostTemplate:
    """Return the built-in post template."""
    return PostTemplate.from_string(DEFAULT_POST_TEMPLATE, name="<default>")
