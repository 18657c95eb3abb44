"""Smoke tests for the Typer CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from strand_matcher.cli import app

runner = CliRunner()


def test_table_to_file(bim_file: Path, strand_dir: Path, tmp_path: Path) -> None:
    out = tmp_path / "matches.tsv"

    result = runner.invoke(
        app, ["-b", str(bim_file), "-s", str(strand_dir), "-j", "2", "-o", str(out)]
    )

    assert result.exit_code == 0, result.output
    lines = out.read_text().splitlines()
    assert lines[0].startswith("candidate\tname_match_rate")
    assert lines[1].startswith("chipA-b37.strand\t1.000000")
    assert len(lines) == 5


def test_table_to_stdout(bim_file: Path, strand_dir: Path) -> None:
    result = runner.invoke(app, ["-b", str(bim_file), "-s", str(strand_dir), "--no-header"])

    assert result.exit_code == 0, result.output
    assert "chipA-b37.strand\t1.000000" in result.output
    assert "candidate\tname_match_rate" not in result.output


def test_verbose_with_report_and_extract(
    bim_file: Path, strand_dir: Path, tmp_path: Path
) -> None:
    out = tmp_path / "matches.tsv"
    report = tmp_path / "report.json"
    extract_dir = tmp_path / "best"
    (strand_dir / "broken.zip").write_bytes(b"garbage")

    result = runner.invoke(
        app,
        [
            "-b", str(bim_file),
            "-s", str(strand_dir),
            "-v",
            "-o", str(out),
            "--report-file", str(report),
            "-n", "1",
            "--extract-dir", str(extract_dir),
        ],
    )

    assert result.exit_code == 0, result.output
    assert (extract_dir / "chipA-b37.strand").exists()
    data = json.loads(report.read_text())
    assert data["summary"]["candidates_excluded"] == 1
    assert "broken.zip" in result.output


def test_unusable_bim_fails(tmp_path: Path, strand_dir: Path) -> None:
    bim = tmp_path / "bad.bim"
    bim.write_text("garbage\n")

    result = runner.invoke(app, ["-b", str(bim), "-s", str(strand_dir)])

    assert result.exit_code == 1
    assert "no usable variants" in result.output


def test_no_candidates_fails(bim_file: Path, tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()

    result = runner.invoke(app, ["-b", str(bim_file), "-s", str(empty)])

    assert result.exit_code == 1
    assert "No .strand files" in result.output


def test_missing_bim(tmp_path: Path, strand_dir: Path) -> None:
    result = runner.invoke(app, ["-b", str(tmp_path / "missing.bim"), "-s", str(strand_dir)])

    assert result.exit_code != 0


def test_log_file_written(bim_file: Path, strand_dir: Path, tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"

    result = runner.invoke(
        app,
        ["-b", str(bim_file), "-s", str(strand_dir), "-o", str(tmp_path / "m.tsv"),
         "--log-dir", str(log_dir)],
    )

    assert result.exit_code == 0, result.output
    (log_file,) = log_dir.glob("strand_matcher_*.log")
    assert "Loaded 5 variants" in log_file.read_text()


def test_extract_defaults_to_working_directory(
    bim_file: Path, strand_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    result = runner.invoke(
        app, ["-b", str(bim_file), "-s", str(strand_dir), "-o", "m.tsv", "-n", "2"]
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in workdir.glob("*.strand")) == [
        "chipA-b37.strand",
        "chipC-b37.strand",
    ]
