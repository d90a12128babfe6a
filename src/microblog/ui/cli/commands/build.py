"""Implementation of the ``microblog build`` command."""

from __future__ import annotations

from pathlib import Path

import typer

from microblog.api.site import build_site
from microblog.core.exceptions import MicroblogError
from microblog.core.settings import BlogSettings, load_settings

from .._options import (
    BlogDirOption,
    ConcurrentOption,
    ConfigOption,
    DebugOption,
    ForceOption,
    NoTrackingOption,
    OutputDirOption,
    SourceDirOption,
    TemplateOption,
    VerboseOption,
    WorkersOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_build_summary
from ..state import debug_enabled, emit_error, set_cli_state


def _resolve_settings(
    config: Path | None,
    *,
    template: Path | None,
    concurrent: bool | None,
    workers: int | None,
    no_tracking: bool,
) -> BlogSettings:
    if config is None:
        base = BlogSettings(tracking=True)
    else:
        base = load_settings(config)
        # Site builds track publication dates unless the file says otherwise.
        if "tracking" not in base.model_fields_set:
            base = base.model_copy(update={"tracking": True})

    return base.merged(
        {
            "post_template": template,
            "concurrent": concurrent,
            "max_workers": workers,
            "tracking": False if no_tracking else None,
        }
    )


def build(
    source: SourceDirOption = Path("src"),
    blog: BlogDirOption = Path("blog"),
    output: OutputDirOption = Path("build"),
    force: ForceOption = False,
    template: TemplateOption = None,
    config: ConfigOption = None,
    concurrent: ConcurrentOption = None,
    workers: WorkersOption = None,
    no_tracking: NoTrackingOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Render the blog posts and assemble the site into the output directory."""
    state = set_cli_state(verbosity=verbose, debug=debug)

    try:
        settings = _resolve_settings(
            config,
            template=template,
            concurrent=concurrent,
            workers=workers,
            no_tracking=no_tracking,
        )
        result = build_site(
            source,
            blog,
            output,
            force=force,
            settings=settings,
            emitter=CliEmitter(state),
        )
    except MicroblogError as exc:
        if debug_enabled():
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    present_build_summary(state, result)


__all__ = ["build"]
