"""Primary public API for microblog."""

from __future__ import annotations

from microblog.api import (
    Blog,
    BlogPost,
    RenderedPost,
    SiteBuildResult,
    build_site,
    publish_assets,
)
from microblog.core.dates import format_date, today
from microblog.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from microblog.core.exceptions import (
    CollectionError,
    DuplicateEntryError,
    ExtractionError,
    MicroblogError,
    MultipleHeadingsError,
    NoHeadingError,
    NoParagraphsError,
    PostNotFoundError,
    PostRenderError,
    RegistryError,
    RegistryStorageError,
    SettingsError,
    SiteBuildError,
    TemplateError,
    UnsupportedBackendError,
    UnsupportedBlockError,
)
from microblog.core.extraction import ExtractedDocument, extract_document
from microblog.core.settings import BlogSettings, RegistryBackend, load_settings
from microblog.core.templates import DEFAULT_POST_TEMPLATE, PageTemplate, PostTemplate
from microblog.registry import PublicationRegistry, RegistryPool, SqliteRegistry
from microblog.version import get_version


__version__ = get_version()


__all__ = [
    "DEFAULT_POST_TEMPLATE",
    "Blog",
    "BlogPost",
    "BlogSettings",
    "CollectionError",
    "DiagnosticEmitter",
    "DuplicateEntryError",
    "ExtractedDocument",
    "ExtractionError",
    "LoggingEmitter",
    "MicroblogError",
    "MultipleHeadingsError",
    "NoHeadingError",
    "NoParagraphsError",
    "NullEmitter",
    "PageTemplate",
    "PostNotFoundError",
    "PostRenderError",
    "PostTemplate",
    "PublicationRegistry",
    "RegistryBackend",
    "RegistryError",
    "RegistryPool",
    "RegistryStorageError",
    "RenderedPost",
    "SettingsError",
    "SiteBuildError",
    "SiteBuildResult",
    "SqliteRegistry",
    "TemplateError",
    "UnsupportedBackendError",
    "UnsupportedBlockError",
    "__version__",
    "build_site",
    "extract_document",
    "format_date",
    "load_settings",
    "publish_assets",
    "today",
]
