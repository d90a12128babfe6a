"""Single Markdown post rendered into an HTML fragment.

Architecture
: `BlogPost` points at a Markdown file and reads it on every render, so edits
  between builds are always picked up. It never holds a registry handle; when
  tracking is enabled it asks its `RegistryPool` for the handle of the
  directory it lives in.
: `RenderedPost` records what a render produced so callers can report on it
  without parsing the HTML back.

Usage Example
:
    >>> from pathlib import Path
    >>> from tempfile import TemporaryDirectory
    >>> from microblog.api.post import BlogPost
    >>> with TemporaryDirectory() as tmpdir:
    ...     source = Path(tmpdir) / "001_hello.md"
    ...     _ = source.write_text("## Hello\\nFirst post.")
    ...     post = BlogPost.from_path(source, template="<h2>{{ heading }}</h2>{{ content }}")
    ...     post.render_html()
    '<h2>Hello</h2><p>First post.</p>'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import TextIO

from ..core.dates import format_date, today
from ..core.diagnostics import DiagnosticEmitter, NullEmitter
from ..core.exceptions import PostNotFoundError
from ..core.extraction import extract_document
from ..core.templates import PostTemplate, default_post_template
from ..registry import RegistryPool


__all__ = ["BlogPost", "RenderedPost", "resolve_template"]


def resolve_template(
    template: PostTemplate | str | None = None,
    template_file: str | Path | None = None,
) -> PostTemplate:
    """Pick the post template from an inline string, a file, or the default."""
    if template is not None and template_file is not None:
        raise ValueError("Pass either an inline template or a template file, not both.")
    if isinstance(template, PostTemplate):
        return template
    if template is not None:
        return PostTemplate.from_string(template)
    if template_file is not None:
        return PostTemplate.from_file(template_file)
    return default_post_template()


@dataclass(frozen=True, slots=True)
class RenderedPost:
    """Outcome of rendering one post."""

    name: str
    path: Path
    heading: str
    content: str
    dt_posted: date
    html: str


@dataclass(slots=True)
class BlogPost:
    """Markdown file rendered as one blog entry."""

    path: Path
    template: PostTemplate = field(default_factory=default_post_template)
    tracking: bool = False
    pool: RegistryPool | None = field(default=None, repr=False)
    emitter: DiagnosticEmitter = field(default_factory=NullEmitter, repr=False)

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        template: PostTemplate | str | None = None,
        template_file: str | Path | None = None,
        tracking: bool = False,
        pool: RegistryPool | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> BlogPost:
        """Create a post after checking that its Markdown file exists.

        Tracked posts need the `RegistryPool` shared by every post of their
        directory; `Blog.from_directory` supplies one.
        """
        source = Path(path)
        if not source.is_file():
            raise PostNotFoundError(source)
        if tracking and pool is None:
            raise ValueError("A tracked post needs a registry pool.")
        return cls(
            path=source,
            template=resolve_template(template, template_file),
            tracking=tracking,
            pool=pool,
            emitter=emitter if emitter is not None else NullEmitter(),
        )

    @property
    def name(self) -> str:
        """File name used as the post's key in the publication registry."""
        return self.path.name

    @property
    def directory(self) -> Path:
        return self.path.parent

    def markdown(self) -> str:
        """Return the current Markdown source of the post."""
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise PostNotFoundError(self.path) from exc

    def publication_date(self, tracking: bool | None = None) -> date:
        """Resolve the date shown on the post.

        Without tracking this is today's date, recomputed on every call. With
        tracking the registry of the post's directory is consulted and, on the
        very first render, stamped with today's date.
        """
        if not (self.tracking if tracking is None else tracking):
            return today()

        if self.pool is None:
            raise ValueError(f"Post {self.name} has no registry pool to track its date.")
        registry = self.pool.acquire(self.directory)
        stored = registry.get(self.name)
        if stored is not None:
            return stored

        stamped = registry.set(self.name)
        self.emitter.event(
            "publication_date_assigned",
            {"post": self.name, "date": format_date(stamped)},
        )
        return stamped

    def render(self, tracking: bool | None = None) -> RenderedPost:
        """Render the post, returning the HTML alongside its parts."""
        document = extract_document(self.markdown())
        dt_posted = self.publication_date(tracking)
        html = self.template.render(
            heading=document.heading,
            dt_posted=format_date(dt_posted),
            content=document.content,
        )
        self.emitter.event("post_rendered", {"post": self.name, "date": format_date(dt_posted)})
        return RenderedPost(
            name=self.name,
            path=self.path,
            heading=document.heading,
            content=document.content,
            dt_posted=dt_posted,
            html=html,
        )

    def render_html(self, tracking: bool | None = None) -> str:
        """Render the post and return only its HTML fragment."""
        return self.render(tracking).html

    def write_html(self, stream: TextIO, tracking: bool | None = None) -> None:
        """Render the post into ``stream``; nothing is written when rendering fails."""
        stream.write(self.render_html(tracking))

