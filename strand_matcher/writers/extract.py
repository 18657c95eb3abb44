"""Copy the best matching strand files out of their archives."""

import logging
from pathlib import Path, PurePosixPath

from strand_matcher.archive import ArchiveReader
from strand_matcher.models import Candidate, RankedResult

logger = logging.getLogger(__name__)


def _target_name(candidate: Candidate, taken: set[str]) -> str:
    """File name for an extracted member, unique among the names in taken.

    The member's base name is used as is unless an earlier candidate
    already claimed it; then the archive stem is prefixed, then the full
    member path (slashes as underscores), then a counter.
    """
    base = PurePosixPath(candidate.member).name
    flat = candidate.member.strip("/").replace("/", "_")
    options = [base, f"{candidate.archive.stem}_{base}", f"{candidate.archive.stem}_{flat}"]

    for name in options:
        if name not in taken:
            return name

    n = 2
    while f"{options[-1]}.{n}" in taken:
        n += 1
    return f"{options[-1]}.{n}"


def extract_top_candidates(
    ranked: list[RankedResult],
    count: int,
    dest_dir: Path,
) -> list[Path]:
    """Copy the members of the first `count` ranked candidates to dest_dir.

    Member bytes are copied unchanged; directory components of the member
    name are dropped. When two extracted members share a base name, the
    later one is prefixed with its archive name, so no file is overwritten.

    Args:
        ranked: Results in ranked order
        count: Number of candidates to extract
        dest_dir: Destination directory (created if missing)

    Returns:
        Paths of the written files, in ranked order

    Raises:
        ArchiveError: If an archive can no longer be read
    """
    if count <= 0:
        return []

    dest_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    taken: set[str] = set()

    for result in ranked[:count]:
        candidate = result.candidate
        name = _target_name(candidate, taken)
        taken.add(name)
        target = dest_dir / name

        with ArchiveReader.open(candidate.archive) as reader, open(target, "wb") as out:
            reader.copy_member(candidate.member, out)

        logger.info("Extracted %s to %s", candidate.member, target)
        written.append(target)

    return written
