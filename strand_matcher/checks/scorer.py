"""Score one strand file against the query variants.

For every strand record:
1. Look the ID up in the query index -> name match
2. Compare positions -> name+position match
3. For name+position matches, classify the allele pair:
   - Palindromic (A/T, C/G) -> counted as ATCG, strand cannot be told
   - Same alleles as the query -> original strand match
   - Complement of the query alleles -> plus strand match

Allele pairs are compared without regard to allele order, since PLINK
orders alleles by frequency and strand files alphabetically.
"""

import logging
import zipfile
import zlib
from collections.abc import Iterable

from strand_matcher.archive import ArchiveReader
from strand_matcher.config import COUNT_MALFORMED_RECORDS, STRAND_SUFFIX
from strand_matcher.exceptions import ArchiveError, ParseError, ScoreError
from strand_matcher.index import VariantIndex
from strand_matcher.models import Candidate, MatchStats
from strand_matcher.parsers.strand import is_record_line, parse_strand_line
from strand_matcher.utils import complement_pair, is_palindromic, same_alleles

logger = logging.getLogger(__name__)

# Errors raised by a record stream that ends abnormally
STREAM_ERRORS = (OSError, EOFError, zipfile.BadZipFile, zlib.error, ArchiveError)


def score_records(
    candidate: Candidate,
    lines: Iterable[str],
    index: VariantIndex,
    count_malformed: bool = COUNT_MALFORMED_RECORDS,
) -> MatchStats:
    """Accumulate match counters for one strand file.

    Args:
        candidate: Candidate the lines belong to
        lines: Lines of the strand file
        index: Query variant index (read only)
        count_malformed: Count unparsable lines in total_records

    Returns:
        Complete MatchStats for the candidate

    Raises:
        ScoreError: If the line stream fails before its end
    """
    stats = MatchStats(candidate=candidate, query_size=len(index))

    try:
        for line_num, line in enumerate(lines, 1):
            if not is_record_line(line):
                continue

            try:
                record = parse_strand_line(line, line_num)
            except ParseError as e:
                logger.debug("%s: skipping malformed %s", candidate.name, e)
                stats.malformed_records += 1
                if count_malformed:
                    stats.total_records += 1
                continue

            stats.total_records += 1

            variant = index.find(record.id)
            if variant is None:
                continue
            stats.name_matches += 1

            if record.pos != variant.pos:
                continue
            stats.name_pos_matches += 1

            # Palindromic pairs are never used for strand comparisons
            if is_palindromic(*record.alleles):
                stats.atcg_matches += 1
                continue

            if same_alleles(record.alleles, variant.alleles):
                stats.original_strand_matches += 1
            if same_alleles(record.alleles, complement_pair(*variant.alleles)):
                stats.plus_strand_matches += 1
    except STREAM_ERRORS as e:
        raise ScoreError(
            f"Reading {candidate.name} failed after {stats.total_records} records: {e}",
            candidate=candidate.name,
        ) from e

    if stats.malformed_records:
        logger.info(
            "%s: %d malformed lines skipped", candidate.name, stats.malformed_records
        )

    return stats


def score_candidate(
    candidate: Candidate,
    index: VariantIndex,
    count_malformed: bool = COUNT_MALFORMED_RECORDS,
    strand_suffix: str = STRAND_SUFFIX,
) -> MatchStats:
    """Open a candidate's archive and score its strand member.

    Each call opens its own archive handle, so calls are safe to run
    in parallel threads.

    Raises:
        ScoreError: If the archive or the member cannot be read
    """
    try:
        reader = ArchiveReader.open(candidate.archive, strand_suffix)
    except ArchiveError as e:
        raise ScoreError(str(e), candidate=candidate.name) from e

    with reader:
        return score_records(
            candidate,
            reader.stream_member(candidate.member),
            index,
            count_malformed=count_malformed,
        )
