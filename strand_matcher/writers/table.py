"""Tab-separated result table.

One row per scored candidate, in ranked order:
candidate  name_match_rate  name_pos_match_rate  original_strand_rate
plus_strand_rate  atcg_rate  query_coverage
"""

import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import IO

from strand_matcher.models import RankedResult

COLUMNS = (
    "candidate",
    "name_match_rate",
    "name_pos_match_rate",
    "original_strand_rate",
    "plus_strand_rate",
    "atcg_rate",
    "query_coverage",
)


def format_rows(
    ranked: Iterable[RankedResult],
    header: bool = True,
    precision: int = 6,
) -> Iterator[str]:
    """Format ranked results as tab-separated lines (no trailing newline)."""
    if header:
        yield "\t".join(COLUMNS)
    for result in ranked:
        name, *rates = result.as_row()
        yield "\t".join([name, *(f"{rate:.{precision}f}" for rate in rates)])


def _write(f: IO[str], ranked: Iterable[RankedResult], header: bool) -> None:
    for row in format_rows(ranked, header=header):
        f.write(row + "\n")


def write_table(
    ranked: Iterable[RankedResult],
    output_file: Path | None = None,
    header: bool = True,
) -> None:
    """Write the result table to a file, or to stdout when no file is given.

    Args:
        ranked: Results in ranked order
        output_file: Destination path (None: stdout)
        header: Write the column header line
    """
    if output_file is None:
        _write(sys.stdout, ranked, header)
        return

    with open(output_file, "w") as f:
        _write(f, ranked, header)
