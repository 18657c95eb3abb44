"""I/O utilities for transparent gzip handling.

Query .bim files are often shipped gzipped; smart_open detects compression
from the magic bytes so both forms read the same way.

Example:
    with smart_open(Path("data.bim.gz")) as f:
        for line in f:
            process(line)
"""

import gzip
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

# Gzip magic bytes (first two bytes of gzip file)
GZIP_MAGIC = b"\x1f\x8b"


def is_gzipped(filepath: Path) -> bool:
    """Detect if a file is gzip-compressed.

    Checks magic bytes first, falls back to the extension if the file
    is too small or unreadable.

    Args:
        filepath: Path to file to check

    Returns:
        True if file is gzip-compressed
    """
    try:
        with open(filepath, "rb") as f:
            magic = f.read(2)
            if len(magic) >= 2:
                return magic == GZIP_MAGIC
    except OSError:
        pass

    return filepath.suffix == ".gz"


@contextmanager
def smart_open(filepath: Path) -> Iterator[IO[str]]:
    """Open a text file with automatic gzip detection.

    Args:
        filepath: Path to file (may be .gz or uncompressed)

    Undecodable bytes are replaced, so they only affect their own line.

    Yields:
        Text file handle
    """
    if is_gzipped(filepath):
        f = gzip.open(filepath, "rt", encoding="utf-8", errors="replace")
    else:
        f = open(filepath, "rt", encoding="utf-8", errors="replace")

    try:
        yield f
    finally:
        f.close()


def iter_lines(filepath: Path) -> Iterator[str]:
    """Iterate over lines in a file with gzip auto-detection.

    Lines are stripped of trailing newlines.

    Args:
        filepath: Path to file (may be gzipped)

    Yields:
        Lines from file
    """
    with smart_open(filepath) as f:
        for line in f:
            yield line.rstrip("\r\n")
