"""Render every post of a blog directory into one HTML string.

Architecture
: `Blog` is an ordered collection of `BlogPost` objects built from the
  ``*.md`` files of one directory, sorted by file name. Prefix file names
  (``001_``, ``002_``...) to control the order.
: Two rendering modes are offered. `render_posts` walks the posts one after
  the other and stops at the first failure. `render_posts_concurrently`
  submits one task per post to a thread pool, stores each result in the slot
  matching the post's index, and only joins the slots once every task has
  finished, so completion order never leaks into the output.
: Either way a failure aborts the whole batch: no partial HTML is returned and
  the caller receives a `PostRenderError` naming the post.

Usage Example
:
    >>> from pathlib import Path
    >>> from tempfile import TemporaryDirectory
    >>> from microblog.api.blog import Blog
    >>> with TemporaryDirectory() as tmpdir:
    ...     for index, title in enumerate(["One", "Two"], start=1):
    ...         _ = (Path(tmpdir) / f"00{index}.md").write_text(f"## {title}\\nBody {index}.")
    ...     blog = Blog.from_directory(tmpdir, template="{{ heading }}:{{ content }}|")
    ...     blog.render_posts() == blog.render_posts_concurrently()
    True
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
import logging
from pathlib import Path

from ..core.diagnostics import DiagnosticEmitter, NullEmitter
from ..core.exceptions import CollectionError, PostRenderError
from ..core.settings import BlogSettings
from ..core.templates import PostTemplate
from ..registry import RegistryPool
from .post import BlogPost, RenderedPost, resolve_template


__all__ = ["Blog"]


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Blog:
    """Ordered posts sharing one directory, template, and registry pool."""

    directory: Path
    posts: list[BlogPost] = field(default_factory=list)
    max_workers: int | None = None

    @classmethod
    def from_directory(
        cls,
        directory: str | Path,
        *,
        template: PostTemplate | str | None = None,
        template_file: str | Path | None = None,
        tracking: bool = False,
        pool: RegistryPool | None = None,
        emitter: DiagnosticEmitter | None = None,
        max_workers: int | None = None,
    ) -> Blog:
        """Collect the Markdown posts of ``directory``.

        Every post receives the same template, tracking flag, emitter and
        registry pool, so they all share the directory's single registry.
        """
        root = Path(directory)
        if not root.exists():
            raise CollectionError(f"directory {root} does not exist")
        if not root.is_dir():
            raise CollectionError(f"{root} must be a directory")

        sources = sorted(
            (candidate for candidate in root.glob("*.md") if candidate.is_file()),
            key=lambda candidate: candidate.name,
        )
        if not sources:
            raise CollectionError(f"there must be at least one .md file in {root}")

        post_template = resolve_template(template, template_file)
        shared_pool = pool if pool is not None else RegistryPool()
        shared_emitter = emitter if emitter is not None else NullEmitter()
        posts = [
            BlogPost(
                path=source,
                template=post_template,
                tracking=tracking,
                pool=shared_pool,
                emitter=shared_emitter,
            )
            for source in sources
        ]
        logger.debug("Collected %d posts from %s", len(posts), root)
        return cls(directory=root, posts=posts, max_workers=max_workers)

    @classmethod
    def from_settings(
        cls,
        directory: str | Path,
        settings: BlogSettings,
        *,
        pool: RegistryPool | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> Blog:
        """Build a blog configured by a `BlogSettings` instance."""
        if pool is None:
            pool = RegistryPool(
                settings.backend, filename=settings.registry_filename, emitter=emitter
            )
        return cls.from_directory(
            directory,
            template_file=settings.post_template,
            tracking=settings.tracking,
            pool=pool,
            emitter=emitter,
            max_workers=settings.max_workers,
        )

    def __iter__(self) -> Iterator[BlogPost]:
        return iter(self.posts)

    def __len__(self) -> int:
        return len(self.posts)

    def render(self, *, concurrent: bool = False) -> list[RenderedPost]:
        """Render all posts, returning the per-post records in blog order."""
        if concurrent:
            return self._render_concurrently()
        return self._render_sequentially()

    def render_posts(self) -> str:
        """Render posts one at a time and concatenate their HTML."""
        return _join(self._render_sequentially())

    def render_posts_concurrently(self) -> str:
        """Render posts on a thread pool; output matches `render_posts`."""
        return _join(self._render_concurrently())

    def _render_sequentially(self) -> list[RenderedPost]:
        rendered: list[RenderedPost] = []
        for post in self.posts:
            try:
                rendered.append(post.render())
            except Exception as exc:
                raise PostRenderError(post, exc) from exc
        return rendered

    def _render_concurrently(self) -> list[RenderedPost]:
        slots: list[RenderedPost | None] = [None] * len(self.posts)
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="microblog-render"
        ) as executor:
            futures: list[Future[RenderedPost]] = [
                executor.submit(post.render) for post in self.posts
            ]
            wait(futures)

        failures: list[tuple[BlogPost, BaseException]] = []
        for index, (post, future) in enumerate(zip(self.posts, futures)):
            error = future.exception()
            if error is not None:
                failures.append((post, error))
                continue
            slots[index] = future.result()

        if failures:
            for post, error in failures[1:]:
                logger.debug("Also failed to render %s: %s", post.path, error)
            post, error = failures[0]
            raise PostRenderError(post, error) from error

        return [slot for slot in slots if slot is not None]


def _join(rendered: Sequence[RenderedPost]) -> str:
    return "".join(post.html for post in rendered)
