"""Output writers for the result table, JSON report and extracted strand files."""

from strand_matcher.writers.extract import extract_top_candidates
from strand_matcher.writers.report import ReportWriter
from strand_matcher.writers.table import format_rows, write_table

__all__ = ["ReportWriter", "extract_top_candidates", "format_rows", "write_table"]
