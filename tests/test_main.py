"""Tests for run_match orchestration and configuration."""

from pathlib import Path

import pytest

from strand_matcher.config import COUNT_MALFORMED_RECORDS, Config
from strand_matcher.exceptions import EmptyIndexError, NoCandidatesError
from strand_matcher.main import run_match
from strand_matcher.models import DuplicatePolicy


class TestRunMatch:
    """Tests for run_match."""

    def test_ranked_report(self, bim_file: Path, strand_dir: Path) -> None:
        report = run_match(Config(query_file=bim_file, strand_dir=strand_dir))

        assert report.query_size == 5
        assert report.candidates_attempted == 4
        assert report.best is not None
        assert report.best.name == "chipA-b37.strand"
        assert [r.name for r in report.ranked] == [
            "chipA-b37.strand",
            "chipC-b37.strand",
            "chipB-b37.strand",
            "chipD-b37.strand",
        ]
        assert report.failures == []

    def test_failures_collected(self, bim_file: Path, strand_dir: Path) -> None:
        (strand_dir / "0_broken.zip").write_bytes(b"garbage")

        report = run_match(Config(query_file=bim_file, strand_dir=strand_dir))

        assert len(report.ranked) == 4
        assert [f.name for f in report.failures] == ["0_broken.zip"]

    def test_no_candidates(self, bim_file: Path, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        with pytest.raises(NoCandidatesError):
            run_match(Config(query_file=bim_file, strand_dir=empty))

    def test_only_corrupt_archives(self, bim_file: Path, tmp_path: Path) -> None:
        directory = tmp_path / "corrupt"
        directory.mkdir()
        (directory / "broken.zip").write_bytes(b"garbage")

        with pytest.raises(NoCandidatesError, match="1 unreadable"):
            run_match(Config(query_file=bim_file, strand_dir=directory))

    def test_unusable_query(self, tmp_path: Path, strand_dir: Path) -> None:
        bim = tmp_path / "bad.bim"
        bim.write_text("not a bim line\n")

        with pytest.raises(EmptyIndexError):
            run_match(Config(query_file=bim, strand_dir=strand_dir))

    def test_duplicate_policy_applied(self, tmp_path: Path, strand_dir: Path) -> None:
        bim = tmp_path / "dups.bim"
        bim.write_text(
            "1\trs1\t0\t1000\tA\tG\n"
            "1\trs1\t0\t7777\tA\tG\n"
        )

        first = run_match(
            Config(query_file=bim, strand_dir=strand_dir, duplicate_policy="first")
        )
        last = run_match(
            Config(query_file=bim, strand_dir=strand_dir, duplicate_policy="last")
        )

        def chip_a(report):
            return next(r for r in report.ranked if r.name == "chipA-b37.strand")

        assert chip_a(first).stats.name_pos_matches == 1
        assert chip_a(last).stats.name_pos_matches == 0


class TestConfig:
    """Tests for Config defaults and validation."""

    def test_defaults(self, bim_file: Path, strand_dir: Path) -> None:
        config = Config(query_file=str(bim_file), strand_dir=str(strand_dir))

        assert isinstance(config.query_file, Path)
        assert config.workers is not None and config.workers >= 1
        assert config.duplicate_policy == DuplicatePolicy.LAST
        assert config.count_malformed_records is COUNT_MALFORMED_RECORDS
        assert config.extract_dir == Path.cwd()
        assert config.validate() == []

    def test_validate_errors(self, tmp_path: Path) -> None:
        config = Config(
            query_file=tmp_path / "missing.bim",
            strand_dir=tmp_path / "missing",
            workers=0,
            extract_top=-1,
        )

        errors = config.validate()

        assert len(errors) == 4
        assert any("BIM file not found" in e for e in errors)
        assert any("Strand directory not found" in e for e in errors)
