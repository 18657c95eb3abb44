"""Exceptions raised by the strand matcher.

Recoverable errors (ParseError on a single line, ArchiveError on one
archive, ScoreError on one candidate) are recorded and the scan continues.
EmptyIndexError and NoCandidatesError end the run.
"""

from pathlib import Path


class StrandMatcherError(Exception):
    """Base exception for strand matcher errors."""
    pass


class ParseError(StrandMatcherError):
    """Raised when an input line cannot be parsed."""

    def __init__(
        self,
        message: str,
        line_num: int | None = None,
        line: str | None = None,
    ) -> None:
        self.line_num = line_num
        self.line = line
        if line_num is not None:
            message = f"line {line_num}: {message}"
        super().__init__(message)


class EmptyIndexError(ParseError):
    """Raised when the query file yields no usable variants."""
    pass


class ArchiveError(StrandMatcherError):
    """Raised when an archive cannot be opened or read."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class ScoreError(StrandMatcherError):
    """Raised when a candidate's record stream fails while scoring."""

    def __init__(self, message: str, candidate: str | None = None) -> None:
        self.candidate = candidate
        super().__init__(message)


class NoCandidatesError(StrandMatcherError):
    """Raised when the strand directory yields no candidate files."""
    pass
