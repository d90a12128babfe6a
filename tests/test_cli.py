from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from microblog.ui.cli import app
from microblog.ui.cli.state import get_cli_state
from microblog.version import get_version


PostWriter = Callable[..., Path]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def site_dirs(tmp_path: Path, write_post: PostWriter, blog_dir: Path) -> dict[str, Path]:
    source = tmp_path / "src"
    source.mkdir()
    (source / "index.html.tmpl").write_text(
        "<html><body>{{ posts }}</body></html>", encoding="utf-8"
    )
    write_post("001_hello.md", "## Hello\nSome text with a [link](https://example.com).")
    write_post("002_again.md", "## Again\n\nMore text.")
    return {"source": source, "blog": blog_dir, "output": tmp_path / "build"}


def _build_args(dirs: dict[str, Path], *extra: str) -> list[str]:
    return [
        "build",
        "-i",
        str(dirs["source"]),
        "-b",
        str(dirs["blog"]),
        "-o",
        str(dirs["output"]),
        *extra,
    ]


def _flatten(text: str) -> str:
    return " ".join(text.split())


def test_build_writes_site(runner: CliRunner, site_dirs: dict[str, Path]) -> None:
    result = runner.invoke(app, _build_args(site_dirs))

    assert result.exit_code == 0, result.output
    index = site_dirs["output"] / "index.html"
    assert 'target="_blank"' in index.read_text(encoding="utf-8")
    assert "001_hello.md" in result.output
    assert "Wrote 2 posts" in result.output
    assert (site_dirs["blog"] / "blog.sqlite").is_file()


def test_build_refuses_non_empty_output(runner: CliRunner, site_dirs: dict[str, Path]) -> None:
    assert runner.invoke(app, _build_args(site_dirs)).exit_code == 0

    again = runner.invoke(app, _build_args(site_dirs))
    forced = runner.invoke(app, _build_args(site_dirs, "-f"))

    assert again.exit_code == 1
    assert "use flag force to overwrite" in _flatten(again.output)
    assert forced.exit_code == 0, forced.output


def test_build_reports_invalid_post(
    runner: CliRunner, site_dirs: dict[str, Path], write_post: PostWriter
) -> None:
    write_post("003_broken.md", "Just a paragraph.")

    result = runner.invoke(app, _build_args(site_dirs))

    assert result.exit_code == 1
    assert "no heading found" in _flatten(result.output)
    assert not (site_dirs["output"] / "index.html").exists()


def test_build_without_tracking(runner: CliRunner, site_dirs: dict[str, Path]) -> None:
    result = runner.invoke(app, _build_args(site_dirs, "--no-tracking"))

    assert result.exit_code == 0, result.output
    assert not (site_dirs["blog"] / "blog.sqlite").exists()


def test_build_with_template_and_concurrency(
    runner: CliRunner, site_dirs: dict[str, Path], tmp_path: Path
) -> None:
    template = tmp_path / "post.tmpl"
    template.write_text('<section class="entry">{{ heading }}</section>', encoding="utf-8")

    result = runner.invoke(
        app,
        _build_args(site_dirs, "-t", str(template), "--concurrent", "--workers", "2"),
    )

    assert result.exit_code == 0, result.output
    html = (site_dirs["output"] / "index.html").read_text(encoding="utf-8")
    assert html.count('class="entry"') == 2
    assert "blog-post" not in html


def test_build_reads_settings_file(
    runner: CliRunner, site_dirs: dict[str, Path], tmp_path: Path
) -> None:
    config = tmp_path / "microblog.yml"
    config.write_text("tracking: false\nconcurrent: true\n", encoding="utf-8")

    result = runner.invoke(app, _build_args(site_dirs, "--config", str(config)))

    assert result.exit_code == 0, result.output
    assert not (site_dirs["blog"] / "blog.sqlite").exists()


def test_build_rejects_invalid_settings_file(
    runner: CliRunner, site_dirs: dict[str, Path], tmp_path: Path
) -> None:
    config = tmp_path / "microblog.yml"
    config.write_text("colour: blue\n", encoding="utf-8")

    result = runner.invoke(app, _build_args(site_dirs, "--config", str(config)))

    assert result.exit_code == 1
    assert "Invalid settings" in _flatten(result.output)


def test_verbose_build_records_events(runner: CliRunner, site_dirs: dict[str, Path]) -> None:
    get_cli_state().events.clear()

    result = runner.invoke(app, _build_args(site_dirs, "-v"))

    assert result.exit_code == 0, result.output
    state = get_cli_state()
    assert len(state.consume_events("post_rendered")) == 2
    # The build summary already consumed the stamping events.
    assert state.consume_events("publication_date_assigned") == []


def test_version_option(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == get_version()


def test_summary_flags_posts_stamped_by_this_build(
    runner: CliRunner, site_dirs: dict[str, Path], write_post: PostWriter
) -> None:
    first = runner.invoke(app, _build_args(site_dirs))
    write_post("003_later.md", "## Later\n\nAdded after the first build.")
    second = runner.invoke(app, _build_args(site_dirs, "-f"))

    assert first.exit_code == 0, first.output
    assert "Newly stamped posts: 2" in first.output
    assert second.exit_code == 0, second.output
    assert "Newly stamped posts: 1" in second.output
    lines = second.output.splitlines()
    assert any(line.startswith("003_later.md\t") and line.endswith("\tnew") for line in lines)
    assert not any(line.startswith("001_hello.md\t") and line.endswith("\tnew") for line in lines)
