"""Command line interface for local search."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from localsearch.config import AppConfig, load_config
from localsearch.engine import build_or_load_index, save_index
from localsearch.index.search import Searcher
from localsearch.index.indexer import Indexer


console = Console()
app = typer.Typer(help="Local search - TF-IDF search over your XML and PDF documents")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_config(config_file: Optional[Path], index_file: Optional[Path]) -> AppConfig:
    try:
        config = load_config(config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if index_file is not None:
        config.index_path = index_file
    return config


@app.command()
def index(
    roots: Optional[List[Path]] = typer.Argument(
        None, help="Directories to index. Defaults to the configured ones.", resolve_path=True
    ),
    index_file: Path = typer.Option(None, "--index-file", help="Index file path"),
    config_file: Path = typer.Option(None, "--config", help="TOML config file"),
    sequential: bool = typer.Option(False, "--sequential", help="Walk directories on one thread"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rebuild the index from scratch and save it."""
    _setup_logging(verbose)
    config = _load_config(config_file, index_file)
    directories = list(roots) if roots else config.document_directories
    if not directories:
        raise typer.BadParameter("No document directories configured")

    resolved_index = config.resolve_index_path(Path.cwd())
    console.print(f"Indexing into [bold]{resolved_index}[/bold]...")

    indexer = Indexer(parallel=config.parallel and not sequential)
    documents = indexer.index(directories)
    save_index(documents, resolved_index)

    stats = indexer.stats
    console.print(
        f"Indexed: {stats.indexed}, unsupported: {stats.unsupported}, "
        f"encrypted: {stats.encrypted}, failed: {stats.failed}, "
        f"unreadable directories: {len(stats.failed_directories)}"
    )


@app.command()
def search(
    text: str = typer.Argument(..., help="Query text"),
    index_file: Path = typer.Option(None, "--index-file", help="Index file path"),
    config_file: Path = typer.Option(None, "--config", help="TOML config file"),
    limit: int = typer.Option(20, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rank indexed documents against a query."""
    _setup_logging(verbose)
    config = _load_config(config_file, index_file)
    resolved_index = config.resolve_index_path(Path.cwd())

    try:
        documents = build_or_load_index(
            config.document_directories, resolved_index, parallel=config.parallel
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    results = Searcher(documents).search(text, limit=limit)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Rank")
    table.add_column("Document")
    for rank, path in enumerate(results, start=1):
        table.add_row(str(rank), path)
    console.print(table)
