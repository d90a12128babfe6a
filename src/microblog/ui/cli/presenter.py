"""Rich-aware presenters for CLI output."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich import box
from rich.table import Table
from rich.text import Text
import typer

from microblog.api.site import SiteBuildResult
from microblog.core.dates import format_date

from .state import CLIState


if TYPE_CHECKING:  # pragma: no cover - typing only
    from rich.console import Console


def _get_console(state: CLIState) -> Console | None:
    """Return the stdout console when it is attached to a terminal."""
    console = state.console
    if console.is_terminal:
        return console
    return None


def _format_path(path: Path) -> str:
    """Format a path relative to the current working directory for display."""
    resolved = path.resolve()
    try:
        return str(resolved.relative_to(Path.cwd()))
    except ValueError:
        return str(resolved)


def present_build_summary(state: CLIState, result: SiteBuildResult) -> None:
    """List rendered posts with their publication dates and the written page.

    Posts stamped for the first time during this build are flagged as new.
    """
    index_location = _format_path(result.index_path)
    stamped = {
        str(event.get("post"))
        for event in state.consume_events("publication_date_assigned")
    }
    console = _get_console(state)
    if console is None:
        for post in result.posts:
            marker = "\tnew" if post.name in stamped else ""
            typer.echo(f"{post.name}\t{format_date(post.dt_posted)}\t{post.heading}{marker}")
        if stamped:
            typer.echo(f"Newly stamped posts: {len(stamped)}")
        typer.echo(f"Wrote {len(result.posts)} posts to {index_location}")
        return

    table = Table(
        title=f"Built {index_location}",
        box=box.SQUARE,
        header_style="bold cyan",
    )
    table.add_column("Post", style="cyan")
    table.add_column("Published", style="magenta", no_wrap=True)
    table.add_column("Heading")
    table.add_column("New", style="green", justify="center")
    for post in result.posts:
        table.add_row(
            post.name,
            format_date(post.dt_posted),
            Text(post.heading),
            "✓" if post.name in stamped else "",
        )
    console.print(table)


__all__ = ["present_build_summary"]
