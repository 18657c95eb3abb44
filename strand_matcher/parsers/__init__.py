"""Line parsers for the query (.bim) and reference (.strand) formats."""

from strand_matcher.parsers.bim import parse_bim_line
from strand_matcher.parsers.strand import is_record_line, parse_strand_line

__all__ = [
    "parse_bim_line",
    "parse_strand_line",
    "is_record_line",
]
