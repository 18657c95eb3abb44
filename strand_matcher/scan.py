"""Scan every strand file in a directory of archives.

Discovery lists the strand members of every archive (sorted by archive
name, then archive order). Scoring runs one task per member on a thread
pool; outcomes are stored by discovery index, so the result does not
depend on the number of workers or on completion order.
"""

import logging
import queue
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from strand_matcher.archive import ArchiveReader, find_archives
from strand_matcher.checks.scorer import score_candidate
from strand_matcher.config import (
    ARCHIVE_SUFFIX,
    COUNT_MALFORMED_RECORDS,
    STRAND_SUFFIX,
    default_workers,
)
from strand_matcher.exceptions import ArchiveError, ScoreError
from strand_matcher.index import VariantIndex
from strand_matcher.models import Candidate, CandidateFailure, MatchStats, ScanOutcome
from strand_matcher.progress import ScanEvent

logger = logging.getLogger(__name__)


class ScanCoordinator:
    """Run the scorer over every candidate with a bounded thread pool.

    The variant index is shared read-only by all workers; each worker
    opens its own archive handle.

    Usage:
        coordinator = ScanCoordinator(index, workers=8)
        outcomes = coordinator.run(Path("strand_archives"))
    """

    def __init__(
        self,
        index: VariantIndex,
        workers: int | None = None,
        archive_suffix: str = ARCHIVE_SUFFIX,
        strand_suffix: str = STRAND_SUFFIX,
        count_malformed: bool = COUNT_MALFORMED_RECORDS,
    ) -> None:
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be at least 1: {workers}")
        self.index = index
        self.workers = workers or default_workers()
        self.archive_suffix = archive_suffix
        self.strand_suffix = strand_suffix
        self.count_malformed = count_malformed

    def discover(
        self,
        directory: Path,
        events: "queue.Queue[ScanEvent | None] | None" = None,
    ) -> tuple[list[Candidate], list[CandidateFailure]]:
        """Find every strand member in the archives of a directory.

        Unreadable archives are reported as failures and contribute no
        candidates.

        Args:
            directory: Directory holding the archives (not searched recursively)
            events: Optional queue receiving progress events

        Returns:
            Tuple of (candidates in discovery order, archive failures)

        Raises:
            FileNotFoundError: If directory doesn't exist
        """
        candidates: list[Candidate] = []
        failures: list[CandidateFailure] = []

        for archive in find_archives(directory, self.archive_suffix):
            try:
                with ArchiveReader.open(archive, self.strand_suffix) as reader:
                    members = reader.list_members()
            except ArchiveError as e:
                failures.append(
                    CandidateFailure(
                        archive=archive, member=None, error_kind="archive", message=str(e)
                    )
                )
                _emit(events, ScanEvent("rejected", archive.name, str(e)))
                continue

            if not members:
                logger.info("No strand files in %s", archive.name)

            for member in members:
                candidates.append(
                    Candidate(archive=archive, member=member, order=len(candidates))
                )

        return candidates, failures

    def _score(
        self,
        candidate: Candidate,
        events: "queue.Queue[ScanEvent | None] | None",
    ) -> MatchStats:
        _emit(events, ScanEvent("started", candidate.name))
        return score_candidate(
            candidate,
            self.index,
            count_malformed=self.count_malformed,
            strand_suffix=self.strand_suffix,
        )

    def _failed(
        self,
        candidate: Candidate,
        message: str,
        events: "queue.Queue[ScanEvent | None] | None",
    ) -> ScanOutcome:
        failure = CandidateFailure(
            archive=candidate.archive,
            member=candidate.member,
            error_kind="score",
            message=message,
        )
        _emit(events, ScanEvent("failed", candidate.name, message))
        return ScanOutcome(candidate=candidate, failure=failure)

    def score_all(
        self,
        candidates: list[Candidate],
        events: "queue.Queue[ScanEvent | None] | None" = None,
    ) -> list[ScanOutcome]:
        """Score candidates in parallel and wait for all of them.

        Each candidate is attempted exactly once. Any error excludes
        only its own candidate.

        Args:
            candidates: Candidates to score
            events: Optional queue receiving progress events

        Returns:
            One ScanOutcome per candidate, in the order given
        """
        outcomes: list[ScanOutcome | None] = [None] * len(candidates)
        _emit(events, ScanEvent("queued", total=len(candidates)))

        with ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="strand-scan"
        ) as executor:
            futures = {
                executor.submit(self._score, candidate, events): i
                for i, candidate in enumerate(candidates)
            }

            for future in as_completed(futures):
                i = futures[future]
                candidate = candidates[i]
                try:
                    stats = future.result()
                except ScoreError as e:
                    outcomes[i] = self._failed(candidate, str(e), events)
                    continue
                except Exception as e:
                    logger.exception("Unexpected error scoring %s", candidate.name)
                    outcomes[i] = self._failed(
                        candidate, f"{type(e).__name__}: {e}", events
                    )
                    continue

                outcomes[i] = ScanOutcome(candidate=candidate, stats=stats)
                _emit(
                    events,
                    ScanEvent(
                        "finished",
                        candidate.name,
                        f"(name match rate {stats.name_match_rate:.4f})",
                    ),
                )

        # Every future has finished once the executor block exits
        return [outcome for outcome in outcomes if outcome is not None]

    def run(
        self,
        directory: Path,
        events: "queue.Queue[ScanEvent | None] | None" = None,
    ) -> list[ScanOutcome]:
        """Discover and score every candidate in a directory.

        Args:
            directory: Directory holding the strand archives
            events: Optional queue receiving progress events

        Returns:
            Outcomes for all candidates in discovery order, followed by
            one failed outcome (empty member name) per archive that could
            not be opened
        """
        candidates, archive_failures = self.discover(directory, events)
        logger.info(
            "Scoring %d candidates from %s with %d workers",
            len(candidates),
            directory,
            self.workers,
        )
        outcomes = self.score_all(candidates, events)

        for failure in archive_failures:
            outcomes.append(
                ScanOutcome(
                    candidate=Candidate(archive=failure.archive, member="", order=-1),
                    failure=failure,
                )
            )
        return outcomes


def _emit(
    events: "queue.Queue[ScanEvent | None] | None",
    event: ScanEvent,
) -> None:
    if events is not None:
        events.put(event)
