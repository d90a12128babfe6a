"""High-level API for rendering posts, blogs and sites."""

from __future__ import annotations

from .blog import Blog
from .post import BlogPost, RenderedPost, resolve_template
from .site import SiteBuildResult, build_site, publish_assets


__all__ = [
    "Blog",
    "BlogPost",
    "RenderedPost",
    "SiteBuildResult",
    "build_site",
    "publish_assets",
    "resolve_template",
]
