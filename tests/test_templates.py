from __future__ import annotations

from pathlib import Path

import pytest

from microblog.core.exceptions import TemplateError
from microblog.core.templates import (
    DEFAULT_POST_TEMPLATE,
    PageTemplate,
    PostTemplate,
    default_post_template,
)


def test_default_template_wraps_post_in_blog_post_div() -> None:
    html = default_post_template().render(
        heading="Hello", dt_posted="2024-01-01", content="<p>Body.</p>"
    )

    assert '<div class="blog-post">' in html
    assert "<h2>Hello</h2>" in html
    assert '<span class="dt-posted">2024-01-01</span>' in html
    assert "<p>Body.</p>" in html


def test_placeholders_are_not_escaped() -> None:
    template = PostTemplate.from_string("{{ heading }}|{{ content }}")

    html = template.render(
        heading="<em>Hi</em>", dt_posted="2024-01-01", content='<a href="x">y</a>'
    )

    assert html == '<em>Hi</em>|<a href="x">y</a>'


def test_template_file_behaves_like_inline_template(tmp_path: Path) -> None:
    target = tmp_path / "post.tmpl"
    target.write_text(DEFAULT_POST_TEMPLATE, encoding="utf-8")
    values = {"heading": "Title", "dt_posted": "2024-02-03", "content": "<p>x</p>"}

    from_file = PostTemplate.from_file(target)
    inline = PostTemplate.from_string(DEFAULT_POST_TEMPLATE)

    assert from_file.render(**values) == inline.render(**values)
    assert from_file.name == str(target)


def test_template_may_omit_placeholders() -> None:
    template = PostTemplate.from_string("<article>{{ content }}</article>")

    assert template.render(heading="ignored", dt_posted="x", content="<p>y</p>") == (
        "<article><p>y</p></article>"
    )


def test_malformed_template_is_rejected() -> None:
    with pytest.raises(TemplateError, match="could not parse template"):
        PostTemplate.from_string("<h2>{{ heading </h2>")


def test_unknown_placeholder_is_rejected() -> None:
    with pytest.raises(TemplateError, match="author"):
        PostTemplate.from_string("<h2>{{ heading }}</h2><p>{{ author }}</p>")


def test_missing_template_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(TemplateError, match="could not read template file"):
        PostTemplate.from_file(tmp_path / "missing.tmpl")


def test_page_template_accepts_only_posts_placeholder() -> None:
    page = PageTemplate.from_string("<html><body>{{ posts }}</body></html>")

    assert page.render(posts="<p>x</p>") == "<html><body><p>x</p></body></html>"
    with pytest.raises(TemplateError):
        PageTemplate.from_string("{{ heading }}")


@pytest.mark.parametrize(
    "source",
    [
        '{% include "missing.html" %}{{ content }}',
        '{% extends "base.html" %}',
        '{% import "macros.html" as macros %}{{ heading }}',
    ],
)
def test_templates_referencing_other_templates_are_rejected(source: str) -> None:
    with pytest.raises(TemplateError, match="references other templates"):
        PostTemplate.from_string(source)


def test_render_time_failures_become_template_errors() -> None:
    template = PostTemplate.from_string("<h2>{{ heading + 1 }}</h2>")

    with pytest.raises(TemplateError, match="could not render template") as excinfo:
        template.render(heading="Hello", dt_posted="2024-01-01", content="<p>x</p>")

    assert isinstance(excinfo.value.__cause__, TypeError)
