"""JSON report writer.

The report keeps the raw counters next to the derived ratios so a run can
be audited, and lists every excluded candidate with its cause.
"""

import json
import tempfile
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path

from strand_matcher import __version__
from strand_matcher.config import Config
from strand_matcher.models import CandidateFailure, MatchReport, RankedResult


@dataclass
class CandidateReport:
    """One ranked candidate for JSON output."""

    rank: int
    candidate: str
    archive: str
    name_match_rate: float
    name_pos_match_rate: float
    original_strand_rate: float
    plus_strand_rate: float
    atcg_rate: float
    query_coverage: float
    name_matches: int
    name_pos_matches: int
    original_strand_matches: int
    plus_strand_matches: int
    atcg_matches: int
    total_records: int
    malformed_records: int

    @classmethod
    def from_result(cls, result: RankedResult) -> "CandidateReport":
        stats = result.stats
        return cls(
            rank=result.rank,
            candidate=result.name,
            archive=str(stats.candidate.archive),
            name_match_rate=result.name_match_rate,
            name_pos_match_rate=result.name_pos_match_rate,
            original_strand_rate=result.original_strand_rate,
            plus_strand_rate=result.plus_strand_rate,
            atcg_rate=result.atcg_rate,
            query_coverage=result.query_coverage,
            name_matches=stats.name_matches,
            name_pos_matches=stats.name_pos_matches,
            original_strand_matches=stats.original_strand_matches,
            plus_strand_matches=stats.plus_strand_matches,
            atcg_matches=stats.atcg_matches,
            total_records=stats.total_records,
            malformed_records=stats.malformed_records,
        )


@dataclass
class FailureReport:
    """One excluded candidate or archive for JSON output."""

    name: str
    archive: str
    member: str | None
    error_kind: str
    message: str

    @classmethod
    def from_failure(cls, failure: CandidateFailure) -> "FailureReport":
        return cls(
            name=failure.name,
            archive=str(failure.archive),
            member=failure.member,
            error_kind=failure.error_kind,
            message=failure.message,
        )


class ReportWriter:
    """Write a MatchReport as JSON.

    Usage:
        writer = ReportWriter(config)
        report = run_match(config)
        writer.write(config.report_file, report)
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.start_time = datetime.now()

    def build(self, report: MatchReport) -> dict:
        """Build the JSON-serializable report dictionary."""
        end_time = datetime.now()
        duration = (end_time - self.start_time).total_seconds()

        metadata = {
            "version": __version__,
            "tool": "strand-matcher",
            "timestamp": end_time.isoformat(),
            "duration_seconds": duration,
            "input_files": {
                "bim_file": str(self.config.query_file),
                "strand_dir": str(self.config.strand_dir),
            },
            "options": {
                "workers": self.config.workers,
                "duplicate_policy": self.config.duplicate_policy.value,
                "count_malformed_records": self.config.count_malformed_records,
            },
        }

        summary = {
            "query_variants": report.query_size,
            "candidates_attempted": report.candidates_attempted,
            "candidates_ranked": len(report.ranked),
            "candidates_excluded": len(report.failures),
            "best_match": report.best.name if report.best else None,
        }

        return {
            "metadata": metadata,
            "summary": summary,
            "results": [asdict(CandidateReport.from_result(r)) for r in report.ranked],
            "failures": [asdict(FailureReport.from_failure(f)) for f in report.failures],
        }

    def write(self, output_path: Path, report: MatchReport) -> None:
        """Write the JSON report atomically (temp file, then rename).

        Args:
            output_path: Path for JSON report file
            report: Results of the run
        """
        report_dict = self.build(report)

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=output_path.parent,
            suffix=".json.tmp",
            delete=False,
        ) as tmp:
            json.dump(report_dict, tmp, indent=2)
            tmp_path = Path(tmp.name)

        tmp_path.replace(output_path)
