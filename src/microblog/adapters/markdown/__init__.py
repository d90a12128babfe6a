"""Markdown conversion utilities for microblog."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from threading import Lock
from typing import Any

import markdown

from microblog.core.exceptions import MarkdownConversionError


__all__ = [
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "MarkdownConversionError",
    "deduplicate_markdown_extensions",
    "render_markdown",
]


# Fenced code and tables are enabled so they surface as their own blocks
# instead of being folded into paragraphs.
DEFAULT_MARKDOWN_EXTENSIONS = [
    "fenced_code",
    "tables",
    "microblog.extensions.link_target:LinkTargetExtension",
]


class _MarkdownCacheEntry:
    __slots__ = ("lock", "processor")

    def __init__(self, processor: Any) -> None:
        self.processor = processor
        self.lock = Lock()


_MARKDOWN_CACHE: dict[tuple[str, ...], _MarkdownCacheEntry] = {}
_MARKDOWN_CACHE_GUARD = Lock()


def deduplicate_markdown_extensions(values: Iterable[str]) -> list[str]:
    """Remove duplicate extensions while preserving order and case."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


def render_markdown(source: str, extensions: Sequence[str] | None = None) -> str:
    """Convert Markdown source into an HTML string.

    Processors are cached per extension set and guarded by a lock, since a
    ``markdown.Markdown`` instance keeps per-document state while converting.
    """
    active = extensions if extensions is not None else DEFAULT_MARKDOWN_EXTENSIONS
    extensions_key = tuple(deduplicate_markdown_extensions(active))
    entry = _resolve_markdown_entry(extensions_key)

    try:
        with entry.lock:
            processor = entry.processor
            processor.reset()
            return processor.convert(source)
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to convert Markdown source: {exc}") from exc


def _resolve_markdown_entry(extensions_key: tuple[str, ...]) -> _MarkdownCacheEntry:
    entry = _MARKDOWN_CACHE.get(extensions_key)
    if entry is not None:
        return entry
    with _MARKDOWN_CACHE_GUARD:
        entry = _MARKDOWN_CACHE.get(extensions_key)
        if entry is None:
            entry = _MarkdownCacheEntry(_build_markdown_processor(extensions_key))
            _MARKDOWN_CACHE[extensions_key] = entry
    return entry


def _build_markdown_processor(extensions_key: tuple[str, ...]) -> markdown.Markdown:
    try:
        return markdown.Markdown(extensions=list(extensions_key))
    except Exception as exc:  # pragma: no cover - library-controlled
        raise MarkdownConversionError(f"Failed to initialize Markdown processor: {exc}") from exc
