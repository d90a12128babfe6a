"""Custom exception hierarchy for the post rendering pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - type checking only
    from microblog.api.post import BlogPost


__all__ = [
    "CollectionError",
    "DuplicateEntryError",
    "ExtractionError",
    "MarkdownConversionError",
    "MicroblogError",
    "MultipleHeadingsError",
    "NoHeadingError",
    "NoParagraphsError",
    "PostNotFoundError",
    "PostRenderError",
    "RegistryError",
    "RegistryStorageError",
    "SettingsError",
    "SiteBuildError",
    "TemplateError",
    "UnsupportedBackendError",
    "UnsupportedBlockError",
]


class MicroblogError(RuntimeError):
    """Base exception for every failure raised by microblog."""


class MarkdownConversionError(MicroblogError):
    """Raised when Markdown cannot be converted into HTML."""


class ExtractionError(MicroblogError):
    """Raised when a post does not have the heading/paragraph shape we render."""


class MultipleHeadingsError(ExtractionError):
    """Raised when a post declares more than one heading."""

    def __init__(self) -> None:
        super().__init__("more than one heading in blog post")


class NoHeadingError(ExtractionError):
    """Raised when a post has no heading at all."""

    def __init__(self) -> None:
        super().__init__("no heading found")


class NoParagraphsError(ExtractionError):
    """Raised when a post has a heading but nothing to show beneath it."""

    def __init__(self) -> None:
        super().__init__("no paragraphs in blog post")


class UnsupportedBlockError(ExtractionError):
    """Raised when a top-level block is neither a heading nor a paragraph."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"unexpected top-level block <{tag}>")
        self.tag = tag


class TemplateError(MicroblogError):
    """Raised when a post or page template cannot be loaded or rendered."""


class SettingsError(MicroblogError):
    """Raised when a settings file cannot be read or validated."""


class RegistryError(MicroblogError):
    """Base exception for publication registry failures."""


class RegistryStorageError(RegistryError):
    """Raised when the backing store is unreachable or corrupt."""


class DuplicateEntryError(RegistryError):
    """Raised when a publication date is set twice for the same post."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"post '{name}' already has a publication date; fetch it instead of setting it"
        )
        self.name = name


class UnsupportedBackendError(RegistryError):
    """Raised when no registry implementation exists for the requested backend."""


class PostNotFoundError(MicroblogError):
    """Raised when the Markdown source of a post does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"file {path} does not exist")
        self.path = path


class CollectionError(MicroblogError):
    """Raised when a blog directory cannot be turned into a collection of posts."""


class PostRenderError(MicroblogError):
    """Raised by the collection renderer when one of its posts fails."""

    def __init__(self, post: BlogPost, cause: BaseException) -> None:
        super().__init__(f"could not render html for post {post.path}: {cause}")
        self.post = post


class SiteBuildError(MicroblogError):
    """Raised when the static site cannot be assembled."""
