"""Command-line interface for rendering check reports."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from .aggregate import ResultAggregate
from .collector import collect_results
from .config import load_settings
from .exceptions import CheckReportError
from .footer import build_footer
from .loader import load_results
from .markers import EmojiMarker
from .utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="check-report",
    help="Aggregate per-application check results into a pull request report.",
    no_args_is_help=True,
)

err_console = Console(stderr=True)


@app.callback()
def main() -> None:
    """Aggregate per-application check results into a pull request report."""


@app.command(name="render")
def render(
    results_file: Annotated[
        Path,
        typer.Argument(help="YAML or JSON file with per-application check results"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to this file"),
    ] = None,
    commit_sha: Annotated[
        str,
        typer.Option("--commit-sha", help="Commit the checks ran against"),
    ] = "",
    label_filter: Annotated[
        str | None,
        typer.Option("--label-filter", help="Environment label filter shown in the footer"),
    ] = None,
    debug_info: Annotated[
        bool | None,
        typer.Option("--debug-info/--no-debug-info", help="Show pod, duration and build in the footer"),
    ] = None,
    fail_on: Annotated[
        str | None,
        typer.Option("--fail-on", help="Exit 1 when the worst state is at least this severe"),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", help="Number of parallel producers"),
    ] = None,
    progress: Annotated[
        bool,
        typer.Option("--progress", help="Show a progress bar while collecting"),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Path to check-report.yaml", exists=True),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARN, ERROR)"),
    ] = None,
) -> None:
    """Render a results file into a markdown report."""
    start = datetime.now(tz=timezone.utc)

    try:
        settings = load_settings(
            config_path,
            label_filter=label_filter,
            show_debug_info=debug_info,
            fail_on=fail_on,
            max_workers=workers,
            log_level=log_level,
        )
    except CheckReportError as e:
        err_console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(code=2) from e

    configure_logging(settings.log_level)
    logger = get_logger("cli")

    try:
        document = load_results(results_file)
    except CheckReportError as e:
        logger.error("results_load_failed", **e.to_dict())
        err_console.print(f"[bold red]Error:[/bold red] {e.message}")
        raise typer.Exit(code=2) from e

    aggregate = ResultAggregate(results_file.stem, 0, 0, EmojiMarker())
    checks = {
        name: (lambda name=name: document.results_for(name))
        for name in document.applications
    }
    outcome = collect_results(
        aggregate,
        checks,
        suppress_when_done=document.suppressed,
        max_workers=settings.max_workers,
        show_progress=progress,
    )
    for failure in outcome.failed:
        err_console.print(
            f"[yellow]Warning:[/yellow] results for {failure.application} incomplete: {failure.error}"
        )

    aggregate.set_footer(
        build_footer(
            settings.run_metadata(),
            start,
            commit_sha,
            label_filter=settings.label_filter,
            show_debug_info=settings.show_debug_info,
        )
    )
    report = aggregate.build_comment(settings.report_format())

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report, encoding="utf-8")
        err_console.print(f"[green]Report written to:[/green] {output}")
    else:
        typer.echo(report, nl=False)

    state = aggregate.worst_state()
    logger.info(
        "report_rendered",
        applications=len(aggregate.applications()),
        worst_state=state.bare_string(),
        fail_on=settings.fail_on.bare_string(),
    )
    if state >= settings.fail_on:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
