from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import ReportConfig, load_config
from .data.collect import collect_players
from .data.table import CommaSplitter, QuotedSplitter, TableLoader
from .errors import FieldConversionFailure, LoadFailure
from .data.players import players_frame
from .models.stats import buckets_frame, compute_all
from .report import render_report
from .utils.io import save_df

app = typer.Typer(help="FIFA player dataset statistics CLI")
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_config(
    config: Optional[Path],
    data_dir: Optional[Path],
    jobs: Optional[int],
    quoted: bool,
    include_last_row: bool,
) -> ReportConfig:
    cfg = load_config(config)
    if data_dir is not None:
        cfg.data_dir = data_dir
    if jobs is not None:
        cfg.jobs = jobs
    if quoted:
        cfg.quoted = True
    if include_last_row:
        cfg.drop_last_row = False
    return cfg


def _loader(cfg: ReportConfig) -> TableLoader:
    splitter = QuotedSplitter() if cfg.quoted else CommaSplitter()
    return TableLoader(splitter=splitter, encoding=cfg.encoding, errors=cfg.encoding_errors)


def _collect(cfg: ReportConfig):
    try:
        return collect_players(cfg.dataset_paths(), _loader(cfg), cfg.extraction(), jobs=cfg.jobs)
    except FieldConversionFailure as e:
        print(f"[red]Bad player record:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def report(
    config: Optional[Path] = typer.Option(None, help="JSON config file"),
    data_dir: Optional[Path] = typer.Option(None, help="Directory holding the dataset CSVs"),
    jobs: Optional[int] = typer.Option(None, help="Load datasets in parallel with N threads"),
    quoted: bool = typer.Option(False, "--quoted", help="Honor quoted fields when splitting lines"),
    include_last_row: bool = typer.Option(False, help="Also read the final line of each file as a player"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Print position, age, overall and nationality stats for every dataset."""
    _setup_logging(verbose)
    cfg = _resolve_config(config, data_dir, jobs, quoted, include_last_row)
    players, elapsed_ms = _collect(cfg)
    stats = [compute_all(label, ps) for label, ps in players.items()]
    console.print(render_report(elapsed_ms, stats), end="", markup=False, highlight=False, emoji=False, soft_wrap=True)


@app.command()
def export(
    out: Path = typer.Option(Path("stats_out"), help="Output directory for CSV tables"),
    config: Optional[Path] = typer.Option(None, help="JSON config file"),
    data_dir: Optional[Path] = typer.Option(None, help="Directory holding the dataset CSVs"),
    jobs: Optional[int] = typer.Option(None, help="Load datasets in parallel with N threads"),
    include_last_row: bool = typer.Option(False, help="Also read the final line of each file as a player"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Write the player list and position/age/overall tables for every dataset to CSV."""
    _setup_logging(verbose)
    cfg = _resolve_config(config, data_dir, jobs, False, include_last_row)
    players, _ = _collect(cfg)
    for label, ps in players.items():
        stats = compute_all(label, ps)
        slug = label.lower().replace(" ", "")
        path = out / f"{slug}_players.csv"
        save_df(players_frame(ps), path)
        print(f"Saved {len(ps)} players to {escape(str(path))}")
        for name, buckets in (("positions", stats.positions), ("ages", stats.ages), ("overalls", stats.overalls)):
            path = out / f"{slug}_{name}.csv"
            save_df(buckets_frame(buckets), path)
            print(f"Saved {len(buckets)} rows to {escape(str(path))}")


@app.command()
def shape(
    path: Path = typer.Argument(..., help="CSV file"),
    quoted: bool = typer.Option(False, "--quoted", help="Honor quoted fields when splitting lines"),
):
    """Print the inferred column and line count of a file."""
    loader = TableLoader(splitter=QuotedSplitter() if quoted else CommaSplitter())
    try:
        table = loader.load(path)
    except LoadFailure as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    print(f"{table.num_columns} columns x {table.num_lines} lines")
    table.release()


@app.command()
def cell(
    path: Path = typer.Argument(..., help="CSV file"),
    column: int = typer.Argument(..., help="1-based column"),
    row: int = typer.Argument(..., help="1-based row"),
):
    """Print a single cell; out-of-range coordinates print an empty line."""
    try:
        table = TableLoader().load(path)
    except LoadFailure as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    console.print(table.read_cell(column, row), markup=False, highlight=False, emoji=False, soft_wrap=True)
    table.release()


if __name__ == "__main__":
    app()
