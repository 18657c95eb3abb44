"""Order scored candidates from best to worst match."""

from collections.abc import Iterable

from strand_matcher.models import MatchStats, RankedResult, ScanOutcome


def _sort_key(stats: MatchStats) -> tuple[float, float]:
    return -stats.name_match_rate, -stats.name_pos_match_rate


def rank_results(results: Iterable[ScanOutcome | MatchStats]) -> list[RankedResult]:
    """Rank candidates by name match rate, then name+position match rate.

    Failed outcomes are dropped. The sort is stable: candidates with equal
    rates keep the order in which they were given (discovery order).

    Args:
        results: Scan outcomes or bare MatchStats, in discovery order

    Returns:
        RankedResults with 1-based ranks, best first
    """
    scored: list[MatchStats] = []
    for result in results:
        if isinstance(result, ScanOutcome):
            if result.stats is None:
                continue
            scored.append(result.stats)
        else:
            scored.append(result)

    ordered = sorted(scored, key=_sort_key)
    return [RankedResult(rank=i, stats=stats) for i, stats in enumerate(ordered, 1)]
