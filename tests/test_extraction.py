from __future__ import annotations

import pytest

from microblog.adapters.markdown import render_markdown
from microblog.core.exceptions import (
    ExtractionError,
    MultipleHeadingsError,
    NoHeadingError,
    NoParagraphsError,
    UnsupportedBlockError,
)
from microblog.core.extraction import BlockKind, extract_document, iter_blocks


def test_extracts_heading_and_paragraphs() -> None:
    document = extract_document("## Hello\n\nFirst paragraph.\n\nSecond paragraph.")

    assert document.heading == "Hello"
    assert document.paragraphs == ("<p>First paragraph.</p>", "<p>Second paragraph.</p>")
    assert document.content == "<p>First paragraph.</p><p>Second paragraph.</p>"


def test_paragraph_may_directly_follow_heading_line() -> None:
    document = extract_document("## Hello\nSome text with a [link](https://example.com).")

    assert document.heading == "Hello"
    assert len(document.paragraphs) == 1
    assert '<a href="https://example.com" target="_blank">link</a>' in document.content


@pytest.mark.parametrize("count", [1, 2, 5])
def test_paragraph_count_matches_source(count: int) -> None:
    body = "\n\n".join(f"Paragraph {index}." for index in range(count))
    document = extract_document(f"# Title\n\n{body}\n")

    assert len(document.paragraphs) == count
    assert list(document.paragraphs) == [
        f"<p>Paragraph {index}.</p>" for index in range(count)
    ]


def test_heading_keeps_inline_markup() -> None:
    document = extract_document("### Hello *brave* [world](https://example.com)\n\nBody.")

    assert document.heading == (
        'Hello <em>brave</em> <a href="https://example.com" target="_blank">world</a>'
    )


def test_setext_heading_is_recognised() -> None:
    document = extract_document("Title\n=====\n\nBody text.")

    assert document.heading == "Title"
    assert document.paragraphs == ("<p>Body text.</p>",)


def test_paragraph_may_precede_heading() -> None:
    document = extract_document("Intro.\n\n## Heading\n\nOutro.")

    assert document.heading == "Heading"
    assert document.paragraphs == ("<p>Intro.</p>", "<p>Outro.</p>")


def test_missing_heading_fails() -> None:
    with pytest.raises(NoHeadingError):
        extract_document("Just a paragraph.\n\nAnd another one.")


def test_empty_document_has_no_heading() -> None:
    with pytest.raises(NoHeadingError):
        extract_document("")


@pytest.mark.parametrize(
    "source",
    [
        "# One\n\nText.\n\n# Two\n\nMore text.",
        "## One\n## Two\n\nText.",
    ],
)
def test_multiple_headings_fail(source: str) -> None:
    with pytest.raises(MultipleHeadingsError):
        extract_document(source)


def test_heading_without_paragraphs_fails() -> None:
    with pytest.raises(NoParagraphsError):
        extract_document("## Lonely heading\n")


@pytest.mark.parametrize(
    ("source", "tag"),
    [
        ("## Title\n\n- one\n- two", "ul"),
        ("## Title\n\n1. one\n2. two", "ol"),
        ("## Title\n\n```\ncode\n```", "pre"),
        ("## Title\n\n> quoted", "blockquote"),
        ("## Title\n\nText.\n\n***", "hr"),
        ("## Title\n\n| a | b |\n|---|---|\n| 1 | 2 |", "table"),
    ],
)
def test_unsupported_blocks_fail(source: str, tag: str) -> None:
    with pytest.raises(UnsupportedBlockError) as excinfo:
        extract_document(source)

    assert excinfo.value.tag == tag
    assert isinstance(excinfo.value, ExtractionError)


def test_iter_blocks_classifies_every_top_level_node() -> None:
    blocks = list(iter_blocks("## Title\n\nText.\n\n- item"))

    assert [block.kind for block in blocks] == [
        BlockKind.HEADING,
        BlockKind.PARAGRAPH,
        BlockKind.OTHER,
    ]
    assert [block.tag for block in blocks] == ["h2", "p", "ul"]
    assert blocks[0].inner_html == "Title"
    assert blocks[1].html == "<p>Text.</p>"


def test_block_html_is_the_renderer_output() -> None:
    document = extract_document("## Fish &amp; Chips\n\nFish&nbsp;chips &copy; line  \nbreak")

    assert document.heading == "Fish &amp; Chips"
    assert document.paragraphs == ("<p>Fish&nbsp;chips &copy; line<br />\nbreak</p>",)


def test_block_html_matches_rendered_markdown() -> None:
    source = "# Title\n\nOne &lt;tag&gt;.\n\nTwo  \nlines with café."

    blocks = list(iter_blocks(source))

    assert "\n".join(block.html for block in blocks) == render_markdown(source)
