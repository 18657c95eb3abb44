"""Read strand files straight out of their .zip archives.

Members are decompressed on demand into a line stream; nothing is
extracted to disk. A ZipFile handle is not shared between threads:
every worker opens its own reader.
"""

import io
import shutil
import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import IO

from strand_matcher.config import ARCHIVE_SUFFIX, STRAND_SUFFIX
from strand_matcher.exceptions import ArchiveError

# Errors zipfile raises for corrupt or unreadable containers
ARCHIVE_OPEN_ERRORS = (zipfile.BadZipFile, OSError, EOFError, ValueError)

# Errors zipfile raises for members it cannot decode: unsupported
# compression methods (NotImplementedError) and encryption (RuntimeError)
MEMBER_OPEN_ERRORS = ARCHIVE_OPEN_ERRORS + (NotImplementedError, RuntimeError)


def find_archives(directory: Path, suffix: str = ARCHIVE_SUFFIX) -> list[Path]:
    """List archive files in a directory (one level, sorted by name).

    Args:
        directory: Directory to scan
        suffix: Archive file suffix (case-insensitive)

    Returns:
        Sorted list of archive paths

    Raises:
        FileNotFoundError: If directory doesn't exist
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Strand directory not found: {directory}")

    suffix = suffix.lower()
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.name.lower().endswith(suffix)
    )


class ArchiveReader:
    """Read-only view of the strand members of one archive.

    Usage:
        with ArchiveReader.open(path) as reader:
            for member in reader.list_members():
                for line in reader.stream_member(member):
                    ...
    """

    def __init__(
        self,
        path: Path,
        archive: zipfile.ZipFile,
        strand_suffix: str = STRAND_SUFFIX,
    ) -> None:
        self.path = path
        self._zip = archive
        self.strand_suffix = strand_suffix.lower()

    @classmethod
    def open(cls, path: Path, strand_suffix: str = STRAND_SUFFIX) -> "ArchiveReader":
        """Open an archive for reading.

        Args:
            path: Path to the .zip archive
            strand_suffix: Suffix identifying strand members

        Returns:
            Open ArchiveReader

        Raises:
            ArchiveError: If the archive is missing, unreadable or corrupt
        """
        try:
            archive = zipfile.ZipFile(path)
        except ARCHIVE_OPEN_ERRORS as e:
            raise ArchiveError(f"Cannot open archive {path.name}: {e}", path=path) from e
        return cls(path, archive, strand_suffix)

    def list_members(self) -> list[str]:
        """Names of the strand members, in archive order.

        Directories and members without the strand suffix are skipped.
        """
        return [
            info.filename
            for info in self._zip.infolist()
            if not info.is_dir() and info.filename.lower().endswith(self.strand_suffix)
        ]

    def _open_member(self, name: str) -> IO[bytes]:
        try:
            return self._zip.open(name)
        except KeyError:
            raise ArchiveError(
                f"No member {name!r} in archive {self.path.name}", path=self.path
            ) from None
        except MEMBER_OPEN_ERRORS as e:
            raise ArchiveError(
                f"Cannot read {name!r} from {self.path.name}: {e}", path=self.path
            ) from e

    def stream_member(self, name: str) -> Iterator[str]:
        """Stream the lines of one member, decompressing as it goes.

        Lines are stripped of trailing newlines. Decompression errors
        (truncated data, bad CRC) surface while iterating.

        Raises:
            ArchiveError: If the member cannot be opened
        """
        raw = self._open_member(name)
        with io.TextIOWrapper(raw, encoding="utf-8", errors="replace") as text:
            for line in text:
                yield line.rstrip("\r\n")

    def copy_member(self, name: str, dest: IO[bytes]) -> None:
        """Copy the raw bytes of one member into a binary file object."""
        with self._open_member(name) as src:
            shutil.copyfileobj(src, dest)

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
