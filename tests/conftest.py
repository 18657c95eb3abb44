"""Pytest fixtures for strand_matcher tests."""

import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from strand_matcher.logging_config import reset_logging

# Query variants used across the tests
# rs5 is palindromic (A/T)
BIM_TEXT = (
    "1\trs1\t0\t1000\tA\tG\n"
    "1\trs2\t0\t2000\tC\tT\n"
    "2\trs3\t0\t3000\tA\tC\n"
    "2\trs4\t0\t4000\tG\tT\n"
    "3\trs5\t0\t5000\tA\tT\n"
)

# Same IDs, positions and alleles as the query (non-palindromic only)
IDENTICAL_STRAND = (
    "rs1\t1\t1000\t100\t+\tAG\n"
    "rs2\t1\t2000\t100\t+\tCT\n"
    "rs3\t2\t3000\t100\t+\tAC\n"
    "rs4\t2\t4000\t100\t+\tGT\n"
)

# Complemented alleles of the query
COMPLEMENT_STRAND = (
    "rs1\t1\t1000\t100\t-\tTC\n"
    "rs2\t1\t2000\t100\t-\tGA\n"
    "rs3\t2\t3000\t100\t-\tTG\n"
    "rs4\t2\t4000\t100\t-\tCA\n"
)

# Half of the records are unknown to the query
HALF_STRAND = (
    "rs1\t1\t1000\t100\t+\tAG\n"
    "rs2\t1\t2000\t100\t+\tCT\n"
    "rs900\t5\t9000\t100\t+\tAG\n"
    "rs901\t5\t9100\t100\t+\tCT\n"
)

# No record is in the query
UNRELATED_STRAND = (
    "rs700\t1\t100\t100\t+\tAG\n"
    "rs701\t1\t200\t100\t+\tCT\n"
)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Leave logging unconfigured between tests."""
    yield
    reset_logging()


@pytest.fixture
def bim_file(tmp_path: Path) -> Path:
    """Path to the shared query .bim file."""
    path = tmp_path / "query.bim"
    path.write_text(BIM_TEXT)
    return path


@pytest.fixture
def bim_lines() -> list[str]:
    """Raw lines of the shared query .bim file."""
    return BIM_TEXT.splitlines()


def write_archive(
    path: Path,
    members: dict[str, str],
    compression: int = zipfile.ZIP_DEFLATED,
) -> Path:
    """Write a zip archive with the given text members."""
    with zipfile.ZipFile(path, "w", compression=compression) as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def strand_texts() -> dict[str, str]:
    """Strand file contents keyed by match quality."""
    return {
        "identical": IDENTICAL_STRAND,
        "complement": COMPLEMENT_STRAND,
        "half": HALF_STRAND,
        "unrelated": UNRELATED_STRAND,
    }


@pytest.fixture
def make_archive() -> Callable[..., Path]:
    """Factory writing zip archives: make_archive(path, {member: text})."""
    return write_archive


@pytest.fixture
def strand_dir(tmp_path: Path) -> Path:
    """Directory of strand archives with known match quality.

    - a_identical.zip: chipA-b37.strand (perfect match) + a readme
    - b_multi.zip: chipB-b37.strand (half match), chipC-b37.strand (complement)
    - c_unrelated.zip: chipD-b37.strand (no match)
    - notes.txt: not an archive, ignored
    """
    directory = tmp_path / "strands"
    directory.mkdir()

    write_archive(
        directory / "a_identical.zip",
        {"chipA-b37.strand": IDENTICAL_STRAND, "README.txt": "not a strand file\n"},
    )
    write_archive(
        directory / "b_multi.zip",
        {"chipB-b37.strand": HALF_STRAND, "chipC-b37.strand": COMPLEMENT_STRAND},
    )
    write_archive(
        directory / "c_unrelated.zip",
        {"chipD-b37.strand": UNRELATED_STRAND},
    )
    (directory / "notes.txt").write_text("ignored\n")

    return directory
