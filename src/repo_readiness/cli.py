"""CLI app definition and the assess command."""

import os
from datetime import datetime
from enum import Enum
from typing import Annotated

import typer
from rich.table import Table

from repo_readiness.assessor import CategoryResult, assess_complexity
from repo_readiness.config import CATEGORY_TITLE, DEFAULT_WORKERS
from repo_readiness.report import format_json_report, format_markdown_report
from repo_readiness.utils import configure_logging, console, err_console
from repo_readiness.version import get_version


class OutputFormat(str, Enum):
    markdown = "markdown"
    json = "json"


def _version_callback(value: bool):
    if value:
        console.print(get_version())
        raise typer.Exit()


def _resolve_directory(path: str) -> str:
    """Expand ~ and return an absolute, normalized path."""
    return os.path.normpath(os.path.abspath(os.path.expanduser(path)))


def _print_summary(result: CategoryResult) -> None:
    """Print a one-row score table to the console."""
    table = Table(title="Assessment Summary")
    table.add_column("Category")
    table.add_column("Score", justify="right")
    table.add_column("Grade", justify="center")
    table.add_row(CATEGORY_TITLE, f"{result.score}/{result.max_score}", result.grade)
    console.print(table)


app = typer.Typer(
    help="Score a repository on structural signals that affect how easily it can be reasoned about.",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """Repository readiness analyzer."""


@app.command()
def assess(
    path: Annotated[str, typer.Argument(help="Path to the repository to assess")],
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Report format")
    ] = OutputFormat.markdown,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Write the report to this file instead of stdout")
    ] = "",
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show detailed output during assessment")
    ] = False,
    workers: Annotated[
        int, typer.Option(min=1, help="Threads used to scan files")
    ] = DEFAULT_WORKERS,
    log_file: Annotated[
        str, typer.Option(help="Also append log lines to this file")
    ] = "",
) -> None:
    """Assess code complexity and dependencies for a repository."""
    configure_logging(verbose=verbose, log_file=log_file or None)

    repo_path = _resolve_directory(path)
    if not os.path.isdir(repo_path):
        err_console.print(f"Error: Directory not found: {repo_path}", style="bold red")
        raise typer.Exit(code=1)

    repo_name = os.path.basename(repo_path)
    result = assess_complexity(repo_path, workers=workers)

    if output_format == OutputFormat.json:
        report = format_json_report(result, repo_name)
    else:
        report = format_markdown_report(result, repo_name, repo_path, generated_at=datetime.now())

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(report if report.endswith("\n") else report + "\n")
        except OSError as exc:
            err_console.print(f"Error: Cannot write report to {output}: {exc.strerror or exc}", style="bold red")
            raise typer.Exit(code=1)
        _print_summary(result)
        console.print(f"Report saved to: {os.path.abspath(output)}", style="green")
    else:
        typer.echo(report, nl=not report.endswith("\n"))
