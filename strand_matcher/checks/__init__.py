"""Scoring of strand files against the query variants."""

from strand_matcher.checks.scorer import score_candidate, score_records

__all__ = ["score_candidate", "score_records"]
