"""In-memory index of the query variants.

The index is built once, before any worker starts, and is never mutated
afterwards, so worker threads share it without locking.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from strand_matcher.config import DEFAULT_DUPLICATE_POLICY
from strand_matcher.exceptions import EmptyIndexError, ParseError
from strand_matcher.io_utils import iter_lines
from strand_matcher.models import DuplicatePolicy, Variant
from strand_matcher.parsers.bim import parse_bim_line

logger = logging.getLogger(__name__)

# Malformed lines logged individually before switching to a summary
MAX_REPORTED_ERRORS = 10


class VariantIndex:
    """Query variants keyed by identifier, with O(1) lookup.

    Use build() or load() to construct; there is no API to add or
    remove variants after construction.

    Attributes:
        errors: ParseErrors for the lines that were skipped
        duplicates: Number of lines repeating an already seen identifier
        duplicate_policy: Which definition of a repeated identifier was kept
    """

    def __init__(
        self,
        variants: dict[str, Variant],
        errors: list[ParseError] | None = None,
        duplicates: int = 0,
        duplicate_policy: DuplicatePolicy = DEFAULT_DUPLICATE_POLICY,
    ) -> None:
        self._by_id = variants
        self.errors: list[ParseError] = errors or []
        self.duplicates = duplicates
        self.duplicate_policy = duplicate_policy

    @classmethod
    def build(
        cls,
        lines: Iterable[str],
        duplicate_policy: DuplicatePolicy = DEFAULT_DUPLICATE_POLICY,
    ) -> "VariantIndex":
        """Build an index from raw BIM lines.

        Malformed lines are recorded and skipped. Blank lines are ignored.

        Args:
            lines: Raw lines of a .bim file
            duplicate_policy: Keep the first or the last definition of a repeated ID

        Returns:
            Populated VariantIndex

        Raises:
            EmptyIndexError: If no line yields a valid variant
        """
        variants: dict[str, Variant] = {}
        errors: list[ParseError] = []
        duplicates = 0
        keep_last = duplicate_policy == DuplicatePolicy.LAST

        for line_num, line in enumerate(lines, 1):
            if not line.strip():
                continue

            try:
                variant = parse_bim_line(line, line_num)
            except ParseError as e:
                if len(errors) < MAX_REPORTED_ERRORS:
                    logger.warning("Skipping malformed BIM %s", e)
                errors.append(e)
                continue

            if variant.id in variants:
                duplicates += 1
                if not keep_last:
                    continue
            variants[variant.id] = variant

        if len(errors) > MAX_REPORTED_ERRORS:
            logger.warning(
                "Skipped %d malformed BIM lines in total", len(errors)
            )

        if not variants:
            raise EmptyIndexError(
                f"no usable variants in query ({len(errors)} malformed lines)"
            )

        if duplicates:
            logger.info(
                "%d duplicate variant IDs in query, keeping the %s definition",
                duplicates,
                duplicate_policy.value,
            )

        return cls(variants, errors, duplicates, duplicate_policy)

    @classmethod
    def load(
        cls,
        filepath: Path,
        duplicate_policy: DuplicatePolicy = DEFAULT_DUPLICATE_POLICY,
    ) -> "VariantIndex":
        """Build an index from a .bim file (plain or gzipped).

        Raises:
            FileNotFoundError: If file doesn't exist
            EmptyIndexError: If the file yields no valid variant
        """
        if not filepath.exists():
            raise FileNotFoundError(f"BIM file not found: {filepath}")

        index = cls.build(iter_lines(filepath), duplicate_policy)
        logger.info("Loaded %d variants from %s", len(index), filepath.name)
        return index

    def find(self, snp_id: str) -> Variant | None:
        """Look up a variant by identifier.

        Args:
            snp_id: Variant identifier (rsID)

        Returns:
            Variant if present, None otherwise
        """
        return self._by_id.get(snp_id)

    def __len__(self) -> int:
        """Return number of variants in the index."""
        return len(self._by_id)

    def __contains__(self, snp_id: object) -> bool:
        return snp_id in self._by_id
