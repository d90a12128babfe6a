"""Assemble a static single-page site from an asset tree and a blog directory."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
import shutil

from bs4 import BeautifulSoup

from ..core.diagnostics import DiagnosticEmitter
from ..core.exceptions import SiteBuildError
from ..core.settings import BlogSettings
from ..core.templates import PageTemplate
from ..registry import RegistryPool
from .blog import Blog
from .post import RenderedPost


__all__ = [
    "INDEX_FILENAME",
    "PAGE_TEMPLATE_SUFFIX",
    "TEMPLATE_SUFFIX",
    "SiteBuildResult",
    "build_site",
    "find_page_template",
    "format_html",
    "publish_assets",
]


logger = logging.getLogger(__name__)


TEMPLATE_SUFFIX = ".tmpl"
PAGE_TEMPLATE_SUFFIX = ".html.tmpl"
INDEX_FILENAME = "index.html"


@dataclass(slots=True)
class SiteBuildResult:
    """Summary of a completed site build."""

    index_path: Path
    posts: list[RenderedPost] = field(default_factory=list)


def publish_assets(source: Path, destination: Path, *, force: bool = False) -> None:
    """Hard-link the asset tree ``source`` into ``destination``.

    Template files (``*.tmpl``) are skipped. A non-empty destination is only
    replaced when ``force`` is set.
    """
    if not source.is_dir():
        raise SiteBuildError(f"{source} is not a directory")

    if destination.exists():
        if not destination.is_dir():
            raise SiteBuildError(f"{destination} exists and is not a directory")
        if any(destination.iterdir()) and not force:
            raise SiteBuildError(
                f"directory {destination} is not empty. use flag force to overwrite"
            )
        try:
            shutil.rmtree(destination)
        except OSError as exc:
            raise SiteBuildError(f"could not remove directory {destination}: {exc}") from exc

    try:
        shutil.copytree(
            source,
            destination,
            ignore=shutil.ignore_patterns(f"*{TEMPLATE_SUFFIX}"),
            copy_function=os.link,
        )
    except (OSError, shutil.Error) as exc:
        raise SiteBuildError(
            f"could not link the contents of {source} into {destination}: {exc}"
        ) from exc
    logger.debug("Published assets from %s to %s", source, destination)


def find_page_template(source: Path) -> Path:
    """Return the single ``*.html.tmpl`` page template of ``source``."""
    matches = sorted(source.glob(f"*{PAGE_TEMPLATE_SUFFIX}"))
    if len(matches) != 1:
        raise SiteBuildError(
            f"expected exactly 1 template file (*{PAGE_TEMPLATE_SUFFIX}) in {source}, "
            f"got {len(matches)}"
        )
    return matches[0]


def format_html(html: str) -> str:
    """Pretty-print an HTML document."""
    return BeautifulSoup(html, "html.parser").prettify()


def build_site(
    source_dir: str | Path,
    blog_dir: str | Path,
    output_dir: str | Path,
    *,
    force: bool = False,
    settings: BlogSettings | None = None,
    pool: RegistryPool | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> SiteBuildResult:
    """Publish assets, render the blog, and write ``index.html``.

    Publication tracking follows ``settings`` and is enabled by default so
    repeated builds keep each post's first publication date.
    """
    source = Path(source_dir)
    output = Path(output_dir)
    settings = settings or BlogSettings(tracking=True)

    publish_assets(source, output, force=force)

    if pool is None:
        with RegistryPool(
            settings.backend, filename=settings.registry_filename, emitter=emitter
        ) as owned_pool:
            blog = Blog.from_settings(blog_dir, settings, pool=owned_pool, emitter=emitter)
            rendered = blog.render(concurrent=settings.concurrent)
    else:
        blog = Blog.from_settings(blog_dir, settings, pool=pool, emitter=emitter)
        rendered = blog.render(concurrent=settings.concurrent)
    posts_html = "".join(post.html for post in rendered)

    page = PageTemplate.from_file(find_page_template(source))
    document = format_html(page.render(posts=posts_html))

    index_path = output / INDEX_FILENAME
    try:
        index_path.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise SiteBuildError(f"could not write formatted html to {index_path}: {exc}") from exc

    logger.info("Wrote %d posts to %s", len(rendered), index_path)
    return SiteBuildResult(index_path=index_path, posts=rendered)
