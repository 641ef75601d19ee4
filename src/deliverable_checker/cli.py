"""Console script for deliverable_checker."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config.loader import ConfigLoader
from .config.models import CheckerConfig
from .grading.llm import MissingCredentialError
from .pipeline import DeliverablePipeline, StudentReport
from .processing.extractor import ExtractionError
from .processing.filenames import InvalidStudentIdentifierError
from .processing.parser import ParseError
from .utils.logging import setup_logging

app = typer.Typer(
    help="Extract, validate and grade student web-project deliverables.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


@dataclass
class State:
    config_file: Path | None = None


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a YAML config file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file."),
):
    """Extract, validate and grade student web-project deliverables."""
    setup_logging(level=logging.DEBUG if verbose else logging.INFO, log_file=log_file)
    ctx.obj = State(config_file=config)


@app.command()
def extract(
    ctx: typer.Context,
    archive_file: Path = typer.Argument(..., help="Submission archive (ZIP, TAR or RAR)."),
    destination_dir: Path = typer.Argument(..., help="Directory to create deliverables in."),
):
    """Extract a submission archive into per-student deliverables."""
    config = _load_config(ctx)

    with _pipeline(config) as pipeline:
        result = _guard(pipeline.extract, archive_file, destination_dir)

    console.print(
        f"[green]✅ Extracted {len(result.student_ids)} deliverable(s) "
        f"into {escape(str(result.deliverables_dir))}[/green]"
    )


@app.command()
def validate(
    ctx: typer.Context,
    destination_dir: Path = typer.Argument(..., help="Directory holding deliverables/."),
    with_ai: bool = typer.Option(False, "--with-ai", help="Write AI-generated validation feedback."),
    finalize: bool = typer.Option(False, "--finalize", help="Also copy validation feedback to final.txt."),
):
    """Validate every deliverable with the W3C validator."""
    if finalize and not with_ai:
        err_console.print("[red]Error:[/red] --finalize requires --with-ai.")
        raise typer.Exit(code=2)

    config = _load_config(ctx)
    if with_ai:
        _require_api_key(config)

    with _pipeline(config, with_ai=with_ai, finalize=finalize) as pipeline:
        reports = _guard(pipeline.validate, destination_dir)

    _print_reports(reports)
    console.print("[green]✅ Finished validating deliverables.[/green]")


@app.command()
def grade(
    ctx: typer.Context,
    destination_dir: Path = typer.Argument(..., help="Directory holding deliverables/."),
    description_file: Path = typer.Argument(..., help="Assignment description (PDF or text)."),
    criteria_file: Path = typer.Argument(..., help="Grading criteria (PDF or text)."),
):
    """Write AI grading feedback for every deliverable."""
    config = _load_config(ctx)
    _require_api_key(config)

    with _pipeline(config) as pipeline:
        reports = _guard(pipeline.grade, destination_dir, description_file, criteria_file)

    _print_reports(reports)
    console.print("[green]✅ Finished grading deliverables.[/green]")


@app.command()
def run(
    ctx: typer.Context,
    archive_file: Path = typer.Argument(..., help="Submission archive (ZIP, TAR or RAR)."),
    destination_dir: Path = typer.Argument(..., help="Directory to create deliverables in."),
    with_ai: bool = typer.Option(False, "--with-ai", help="Use AI for validation feedback and grading."),
    description_file: Optional[Path] = typer.Option(
        None, "--description", help="Assignment description (PDF or text)."
    ),
    criteria_file: Optional[Path] = typer.Option(None, "--criteria", help="Grading criteria (PDF or text)."),
):
    """Extract, validate and optionally grade in one go."""
    if (description_file is None) != (criteria_file is None):
        err_console.print("[red]Error:[/red] --description and --criteria must be given together.")
        raise typer.Exit(code=2)
    if description_file is not None and not with_ai:
        err_console.print("[red]Error:[/red] grading requires --with-ai.")
        raise typer.Exit(code=2)

    config = _load_config(ctx)
    if with_ai:
        _require_api_key(config)

    with _pipeline(config, with_ai=with_ai, finalize=with_ai) as pipeline:
        reports = _guard(
            pipeline.run,
            archive_file,
            destination_dir,
            description_file,
            criteria_file,
        )

    _print_reports(reports)
    if with_ai:
        console.print("[green]✅ Finished extracting, validating, and grading deliverables.[/green]")
    else:
        console.print("[green]✅ Finished extracting and validating deliverables.[/green]")


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _load_config(ctx: typer.Context) -> CheckerConfig:
    state: State = ctx.obj or State()
    try:
        return ConfigLoader().load(state.config_file)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _require_api_key(config: CheckerConfig) -> None:
    if not config.llm.api_key:
        err_console.print("[red]Error:[/red] OPENAI_API_KEY environment variable is not set.")
        raise typer.Exit(code=1)


def _pipeline(config: CheckerConfig, with_ai: bool = False, finalize: bool = False) -> DeliverablePipeline:
    try:
        return DeliverablePipeline(config, with_ai=with_ai, finalize=finalize)
    except MissingCredentialError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _guard(func, *args):
    """Run a pipeline step, turning fatal errors into an exit status."""
    try:
        return func(*args)
    except (ExtractionError, InvalidStudentIdentifierError) as e:
        err_console.print(f"[red]Error extracting file:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except ParseError as e:
        err_console.print(f"[red]Error reading document:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except OSError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        err_console.print("Interrupted by user")
        raise typer.Exit(code=130)


def _print_reports(reports: list[StudentReport]) -> None:
    table = Table(title="Deliverables")
    table.add_column("Student")
    table.add_column("Issues", justify="right")
    table.add_column("Feedback")
    table.add_column("Status")

    for report in reports:
        table.add_row(
            escape(report.student_id),
            str(len(report.issues)),
            ", ".join(p.name for p in report.feedback_files) or "-",
            f"[red]{escape(report.error)}[/red]" if report.failed else "[green]ok[/green]",
        )

    console.print(table)

    failed = [r.student_id for r in reports if r.failed]
    if failed:
        err_console.print(f"[yellow]Failed students:[/yellow] {escape(', '.join(failed))}")


if __name__ == "__main__":
    app()
