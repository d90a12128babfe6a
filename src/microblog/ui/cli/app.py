"""Typer application wiring for the microblog CLI."""

from __future__ import annotations

from typing import Annotated

import typer

from microblog.ui.cli.commands.build import build
from microblog.version import get_version

from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Render a directory of Markdown posts into a single-page site.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


@app.callback()
def _root(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the installed version and exit.",
            callback=_print_version,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Render a directory of Markdown posts into a single-page site."""


app.command("build")(build)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
