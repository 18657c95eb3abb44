"""Main orchestration for the strand matcher.

Builds the query index, scans every candidate and ranks the results.
Writing the table, the JSON report and extracting files is left to the
caller (see cli.py).
"""

import logging
import queue

from strand_matcher.config import Config
from strand_matcher.exceptions import NoCandidatesError
from strand_matcher.index import VariantIndex
from strand_matcher.models import MatchReport
from strand_matcher.progress import ScanEvent
from strand_matcher.ranking import rank_results
from strand_matcher.scan import ScanCoordinator

logger = logging.getLogger(__name__)


def run_match(
    config: Config,
    events: "queue.Queue[ScanEvent | None] | None" = None,
    index: VariantIndex | None = None,
) -> MatchReport:
    """Rank every strand file in config.strand_dir against config.query_file.

    Args:
        config: Configuration with input paths and policies
        events: Optional queue receiving scan progress events
        index: Prebuilt query index (loaded from config.query_file if None)

    Returns:
        MatchReport with the ranking and every excluded candidate

    Raises:
        FileNotFoundError: If an input path doesn't exist
        EmptyIndexError: If the query file yields no usable variants
        NoCandidatesError: If no strand file is found in any archive
    """
    if index is None:
        index = VariantIndex.load(config.query_file, config.duplicate_policy)

    coordinator = ScanCoordinator(
        index,
        workers=config.workers,
        archive_suffix=config.archive_suffix,
        strand_suffix=config.strand_suffix,
        count_malformed=config.count_malformed_records,
    )

    candidates, archive_failures = coordinator.discover(config.strand_dir, events)
    if not candidates:
        raise NoCandidatesError(
            f"No {config.strand_suffix} files found in {config.strand_dir} "
            f"({len(archive_failures)} unreadable archives)"
        )

    outcomes = coordinator.score_all(candidates, events)

    failures = archive_failures + [o.failure for o in outcomes if o.failure is not None]
    ranked = rank_results(outcomes)

    logger.info(
        "Ranked %d of %d candidates, %d excluded",
        len(ranked),
        len(candidates),
        len(failures),
    )

    return MatchReport(
        ranked=ranked,
        failures=failures,
        query_size=len(index),
        candidates_attempted=len(candidates),
    )
