"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

SourceDirOption = Annotated[
    Path,
    typer.Option(
        "--source",
        "-i",
        help="Source directory with the page template (*.html.tmpl) and other assets.",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

BlogDirOption = Annotated[
    Path,
    typer.Option(
        "--blog",
        "-b",
        help="Directory that contains blog posts as Markdown files.",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML settings file; command-line flags take precedence.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

TemplateOption = Annotated[
    Path | None,
    typer.Option(
        "--template",
        "-t",
        help="Path to an HTML template for generated blog posts.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        rich_help_panel=RENDERING_PANEL,
    ),
]

ConcurrentOption = Annotated[
    bool | None,
    typer.Option(
        "--concurrent/--sequential",
        help="Render posts on a thread pool or one after the other.",
        show_default=False,
        rich_help_panel=RENDERING_PANEL,
    ),
]

WorkersOption = Annotated[
    int | None,
    typer.Option(
        "--workers",
        min=1,
        help="Maximum number of rendering threads in concurrent mode.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

NoTrackingOption = Annotated[
    bool,
    typer.Option(
        "--no-tracking",
        help="Stamp every post with today's date instead of its stored publication date.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

OutputDirOption = Annotated[
    Path,
    typer.Option(
        "--output",
        "-o",
        help="Output directory for generated files.",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Overwrite output directory contents.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
