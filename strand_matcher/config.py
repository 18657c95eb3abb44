"""Configuration dataclass for the strand matcher."""

import os
from dataclasses import dataclass
from pathlib import Path

from strand_matcher.models import DuplicatePolicy

# Whether unparsable strand file lines count toward total_records.
# This is the denominator of name_match_rate, so it changes the ranking.
COUNT_MALFORMED_RECORDS = False

# Which definition of a repeated query ID is kept.
DEFAULT_DUPLICATE_POLICY = DuplicatePolicy.LAST

ARCHIVE_SUFFIX = ".zip"
STRAND_SUFFIX = ".strand"


def default_workers() -> int:
    """Number of worker threads when none is configured."""
    return os.cpu_count() or 1


@dataclass
class Config:
    """Configuration for a strand matching run.

    Attributes:
        query_file: Path to PLINK .bim file (may be gzipped)
        strand_dir: Directory holding the strand .zip archives
        workers: Worker threads for scoring (default: CPU count)
        verbose: Report progress while scanning
        output_file: Result table destination (None: stdout)
        header: Write a header line in the result table
        report_file: Optional JSON report path
        extract_top: Number of best candidates to extract (0: none)
        extract_dir: Directory receiving extracted strand files
        duplicate_policy: Which definition of a repeated query ID wins
        count_malformed_records: Count unparsable strand lines in total_records
        archive_suffix: Suffix of archive files in strand_dir
        strand_suffix: Suffix of strand members inside archives
        log_dir: Directory for a rotating log file (None: console only)
    """

    query_file: Path
    strand_dir: Path

    workers: int | None = None
    verbose: bool = False

    # Output options
    output_file: Path | None = None
    header: bool = True
    report_file: Path | None = None
    extract_top: int = 0
    extract_dir: Path | None = None

    # Matching policies
    duplicate_policy: DuplicatePolicy = DEFAULT_DUPLICATE_POLICY
    count_malformed_records: bool = COUNT_MALFORMED_RECORDS

    archive_suffix: str = ARCHIVE_SUFFIX
    strand_suffix: str = STRAND_SUFFIX

    log_dir: Path | None = None

    def __post_init__(self) -> None:
        """Coerce paths and fill defaults."""
        if isinstance(self.query_file, str):
            self.query_file = Path(self.query_file)
        if isinstance(self.strand_dir, str):
            self.strand_dir = Path(self.strand_dir)
        if isinstance(self.output_file, str):
            self.output_file = Path(self.output_file)
        if isinstance(self.report_file, str):
            self.report_file = Path(self.report_file)
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        if isinstance(self.duplicate_policy, str):
            self.duplicate_policy = DuplicatePolicy(self.duplicate_policy)

        if self.workers is None:
            self.workers = default_workers()

        # Extracted files land in the working directory by default
        if self.extract_dir is None:
            self.extract_dir = Path.cwd()
        elif isinstance(self.extract_dir, str):
            self.extract_dir = Path(self.extract_dir)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors: list[str] = []

        if not self.query_file.is_file():
            errors.append(f"BIM file not found: {self.query_file}")

        if not self.strand_dir.is_dir():
            errors.append(f"Strand directory not found: {self.strand_dir}")

        if self.workers is not None and self.workers < 1:
            errors.append(f"workers must be at least 1: {self.workers}")

        if self.extract_top < 0:
            errors.append(f"extract_top must not be negative: {self.extract_top}")

        if self.output_file is not None and not self.output_file.parent.exists():
            errors.append(
                f"Output directory does not exist: {self.output_file.parent}"
            )

        return errors
