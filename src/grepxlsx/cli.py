"""Command line interface for grep-xlsx."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from grepxlsx.config import OutputFormat, SearchMode, SearchRequest
from grepxlsx.engine.openpyxl_engine import OpenpyxlEngine
from grepxlsx.errors import GrepXlsxError, UsageError
from grepxlsx.report import Reporter
from grepxlsx.search.searcher import Searcher


err_console = Console(stderr=True)
app = typer.Typer(help="grep-xlsx - search Excel workbooks for text", add_completion=False)


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_request(
    directory: Path,
    text: str,
    *,
    json_output: bool,
    only_hit: bool,
    verbose: bool,
) -> SearchRequest:
    if not text:
        raise UsageError("--text is required")
    return SearchRequest(
        text=text,
        root_dir=directory,
        mode=SearchMode.DETAILED if verbose else SearchMode.SUMMARY,
        only_hit=only_hit,
        output_format=OutputFormat.JSON if json_output else OutputFormat.TEXT,
    )


@app.command()
def grep(
    ctx: typer.Context,
    directory: Path = typer.Option(Path("."), "--dir", help="Directory to search recursively"),
    text: str = typer.Option("", "--text", help="Text to search for"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    only_hit: bool = typer.Option(
        True, "--only-hit/--no-only-hit", help="Show only sheets that contain the text"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Report every matching cell"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Search every .xlsx workbook under a directory for TEXT."""
    _setup_logging(debug)
    try:
        request = _build_request(
            directory,
            text,
            json_output=json_output,
            only_hit=only_hit,
            verbose=verbose,
        )
    except UsageError:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=2)

    reporter = Reporter(request.output_format)
    try:
        with OpenpyxlEngine() as engine:
            Searcher(engine, request, reporter, base_dir=Path.cwd()).run()
    except GrepXlsxError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from exc
