"""Typer CLI for the strand matcher.

Usage:
    # Rank every strand file, table on stdout
    strand-matcher -b data.bim -s strand_archives/

    # Verbose progress, 8 workers, table to a file
    strand-matcher -b data.bim -s strand_archives/ -v -j 8 -o matches.tsv

    # Also copy the 3 best strand files into the current directory
    strand-matcher -b data.bim -s strand_archives/ -n 3
"""

import queue
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from strand_matcher import __version__
from strand_matcher.config import Config
from strand_matcher.exceptions import ArchiveError, EmptyIndexError, NoCandidatesError
from strand_matcher.index import VariantIndex
from strand_matcher.logging_config import setup_logging
from strand_matcher.main import run_match
from strand_matcher.models import DuplicatePolicy, MatchReport
from strand_matcher.progress import ProgressListener, ScanEvent
from strand_matcher.writers.extract import extract_top_candidates
from strand_matcher.writers.report import ReportWriter
from strand_matcher.writers.table import write_table

app = typer.Typer(
    name="strand-matcher",
    help="Guess the genotyping chip of a PLINK .bim file from a directory of strand archives",
    add_completion=False,
)

# Status messages go to stderr so the result table can be piped
console = Console(stderr=True)


def _scan(config: Config, index: VariantIndex) -> MatchReport:
    """Run the scan, with a progress bar when verbose."""
    if not config.verbose:
        return run_match(config, index=index)

    events: queue.Queue[ScanEvent | None] = queue.Queue()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        with ProgressListener(events, progress=progress):
            return run_match(config, events=events, index=index)


@app.command()
def match(
    bim: Annotated[
        Path,
        typer.Option(
            "--bim", "-b",
            help="PLINK .bim file (may be gzipped)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    strand_dir: Annotated[
        Path,
        typer.Option(
            "--strand-dir", "-s",
            help="Directory containing the strand .zip archives",
            exists=True,
            file_okay=False,
            dir_okay=True,
            readable=True,
        ),
    ],
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers", "-j",
            help="Number of worker threads (default: CPU count)",
            min=1,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Be verbose and print progress",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output", "-o",
            help="Write the result table to this file (default: stdout)",
            dir_okay=False,
        ),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            help="Omit the header line of the result table",
        ),
    ] = False,
    report_file: Annotated[
        Path | None,
        typer.Option(
            "--report-file",
            help="Also write a JSON report with raw counts and excluded candidates",
            dir_okay=False,
        ),
    ] = None,
    extract_top: Annotated[
        int,
        typer.Option(
            "--extract-top", "-n",
            help="Copy the N best matching strand files to --extract-dir",
            min=0,
        ),
    ] = 0,
    extract_dir: Annotated[
        Path | None,
        typer.Option(
            "--extract-dir",
            help="Destination of extracted strand files (default: current directory)",
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    duplicates: Annotated[
        DuplicatePolicy,
        typer.Option(
            "--duplicates",
            help="Which definition of a repeated variant ID in the .bim file is kept",
        ),
    ] = DuplicatePolicy.LAST,
    count_malformed: Annotated[
        bool,
        typer.Option(
            "--count-malformed",
            help="Count unparsable strand file lines in the record total",
        ),
    ] = False,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            help="Write a detailed log file to this directory",
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
) -> None:
    """Rank strand files by how well they match a PLINK .bim file.

    For each strand file the table reports the share of strand records
    whose ID is in the .bim file, the share of those with the same
    position, and, among ID+position matches, the share with identical
    alleles, complemented alleles and palindromic (A/T, C/G) alleles.

    Example usage:

        strand-matcher -b data.bim -s strand_archives/ -j 8 -o matches.tsv
    """
    log_file = setup_logging(verbose=verbose, log_dir=log_dir)

    config = Config(
        query_file=bim,
        strand_dir=strand_dir,
        workers=workers,
        verbose=verbose,
        output_file=output,
        header=not no_header,
        report_file=report_file,
        extract_top=extract_top,
        extract_dir=extract_dir,
        duplicate_policy=duplicates,
        count_malformed_records=count_malformed,
        log_dir=log_dir,
    )

    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[red]ERROR:[/red] {error}")
        raise typer.Exit(code=1)

    if verbose:
        console.print(f"[bold]Strand Matcher[/bold] v{__version__}", style="blue")
        console.print(f"Bim filename:     {config.query_file}")
        console.print(f"Strand directory: {config.strand_dir}")
        console.print(f"Workers:          {config.workers}")
        if log_file:
            console.print(f"Log file:         {log_file}")
        console.print()

    report_writer = ReportWriter(config) if config.report_file else None

    try:
        index = VariantIndex.load(config.query_file, config.duplicate_policy)
        if verbose:
            console.print(f"{len(index):,} variants loaded.")
        report = _scan(config, index)
    except (EmptyIndexError, NoCandidatesError) as e:
        console.print(f"[red]ERROR:[/red] {e}")
        raise typer.Exit(code=1)

    write_table(report.ranked, config.output_file, header=config.header)

    if report_writer and config.report_file:
        report_writer.write(config.report_file, report)

    if config.extract_top:
        extract_dir = config.extract_dir or Path.cwd()
        try:
            written = extract_top_candidates(
                report.ranked, config.extract_top, extract_dir
            )
        except (ArchiveError, OSError) as e:
            console.print(f"[red]ERROR:[/red] Extraction failed: {e}")
            raise typer.Exit(code=1)
        if verbose:
            for path in written:
                console.print(f"Extracted {path}")

    if verbose:
        console.print(
            f"\n{len(report.ranked)} of {report.candidates_attempted} candidates ranked, "
            f"{len(report.failures)} excluded"
        )
        for failure in report.failures:
            console.print(f"  [yellow]excluded[/yellow] {failure.name}: {failure.message}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
