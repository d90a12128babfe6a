"""Isolate the heading and paragraphs of a Markdown post.

Architecture
: Python-Markdown renders the source to HTML and BeautifulSoup turns that HTML
  back into a tree. Each top-level element becomes a `Block` tagged with one of
  the closed set of `BlockKind` values.
: BeautifulSoup is only used to locate and classify blocks. The HTML carried by
  a block is sliced from the renderer output, so entities and void elements
  come out exactly as Python-Markdown wrote them.
: `extract_document` walks the blocks once and handles every kind explicitly;
  `BlockKind.OTHER` is always a failure, never a fallthrough.

Usage Example
:
    >>> from microblog.core.extraction import extract_document
    >>> document = extract_document("## Hello\\nSome *text*.")
    >>> document.heading
    'Hello'
    >>> document.content
    '<p>Some <em>text</em>.</p>'
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
import re

from bs4 import BeautifulSoup, NavigableString, Tag

from microblog.adapters.markdown import render_markdown

from .exceptions import (
    MultipleHeadingsError,
    NoHeadingError,
    NoParagraphsError,
    UnsupportedBlockError,
)


__all__ = [
    "Block",
    "BlockKind",
    "ExtractedDocument",
    "extract_document",
    "iter_blocks",
]


_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_WRAPPED_RE = re.compile(
    r"^<(?P<tag>[A-Za-z0-9]+)\b[^>]*>(?P<inner>.*)</(?P=tag)>$", re.DOTALL
)


class BlockKind(str, Enum):
    """Classification of a top-level Markdown block."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Block:
    """Top-level node of a parsed post."""

    kind: BlockKind
    tag: str
    html: str

    @property
    def inner_html(self) -> str:
        """Return the block's HTML without its wrapper tag."""
        match = _WRAPPED_RE.match(self.html)
        if match is None or match.group("tag").lower() != self.tag:
            return self.html
        return match.group("inner")


@dataclass(frozen=True, slots=True)
class ExtractedDocument:
    """Heading and body of a post, both already rendered to HTML."""

    heading: str
    paragraphs: tuple[str, ...]

    @property
    def content(self) -> str:
        """Concatenate paragraphs in source order without separators."""
        return "".join(self.paragraphs)


def _classify(node: Tag | NavigableString, html: str) -> Block:
    if isinstance(node, Tag):
        name = node.name.lower()
        if name in _HEADING_TAGS:
            return Block(BlockKind.HEADING, name, html)
        if name == "p":
            return Block(BlockKind.PARAGRAPH, name, html)
        return Block(BlockKind.OTHER, name, html)
    return Block(BlockKind.OTHER, "#text", html)


def _source_offset(node: Tag | NavigableString, line_starts: Sequence[int]) -> int | None:
    if not isinstance(node, Tag) or node.sourceline is None or node.sourcepos is None:
        return None
    return line_starts[node.sourceline - 1] + node.sourcepos


def iter_blocks(source: str, extensions: Sequence[str] | None = None) -> Iterator[Block]:
    """Yield the classified top-level blocks of a Markdown document."""
    html = render_markdown(source, extensions)
    soup = BeautifulSoup(html, "html.parser")
    # Block separators emitted by the renderer are plain whitespace.
    nodes = [
        node
        for node in soup.contents
        if not (isinstance(node, NavigableString) and not node.strip())
    ]
    line_starts = [0, *(match.end() for match in re.finditer("\n", html))]
    offsets = [_source_offset(node, line_starts) for node in nodes]

    for index, node in enumerate(nodes):
        start = offsets[index]
        if start is None:
            yield _classify(node, str(node))
            continue
        # A block runs until the next top-level tag starts.
        end = next((offset for offset in offsets[index + 1 :] if offset is not None), len(html))
        yield _classify(node, html[start:end].rstrip())


def extract_document(
    source: str, extensions: Sequence[str] | None = None
) -> ExtractedDocument:
    """Return the single heading and the paragraphs of ``source``.

    Raises `MultipleHeadingsError`, `NoHeadingError`, `UnsupportedBlockError`
    or `NoParagraphsError` when the post does not have exactly one heading,
    at least one paragraph, and nothing else.
    """
    headings: list[Block] = []
    paragraphs: list[Block] = []
    for block in iter_blocks(source, extensions):
        match block.kind:
            case BlockKind.HEADING:
                headings.append(block)
                if len(headings) > 1:
                    raise MultipleHeadingsError()
            case BlockKind.PARAGRAPH:
                paragraphs.append(block)
            case BlockKind.OTHER:
                raise UnsupportedBlockError(block.tag)

    if not headings:
        raise NoHeadingError()
    if not paragraphs:
        raise NoParagraphsError()

    return ExtractedDocument(
        heading=headings[0].inner_html,
        paragraphs=tuple(block.html for block in paragraphs),
    )
