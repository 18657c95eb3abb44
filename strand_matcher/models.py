"""Data models for the strand matcher.

Variants from the query .bim file, records from strand files, and the
per-candidate counters produced by the scorer. Ratios are derived from the
raw counters on access and never stored.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal


class Strand(Enum):
    """Strand orientation annotated in a strand file."""

    PLUS = "+"
    MINUS = "-"
    UNKNOWN = "?"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Strand":
        """Map a strand column value to a Strand ('+', '-', anything else)."""
        if symbol == "+":
            return cls.PLUS
        if symbol == "-":
            return cls.MINUS
        return cls.UNKNOWN


class DuplicatePolicy(str, Enum):
    """Which definition wins when the query repeats an identifier."""

    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True, slots=True)
class Variant:
    """Variant from a PLINK .bim file.

    Attributes:
        id: Variant identifier (rsID), the join key
        chr: Chromosome
        pos: Base pair position
        allele1: First allele
        allele2: Second allele
    """

    id: str
    chr: str
    pos: int
    allele1: str
    allele2: str

    @property
    def alleles(self) -> tuple[str, str]:
        return self.allele1, self.allele2


@dataclass(frozen=True, slots=True)
class StrandRecord:
    """One line of a strand file.

    Attributes:
        id: Variant identifier
        chr: Chromosome
        pos: Base pair position
        strand: Strand orientation of the chip probe
        alleles: Allele pair as annotated
        match_pct: Percentage match of the probe to the genome, if present
    """

    id: str
    chr: str
    pos: int
    strand: Strand
    alleles: tuple[str, str]
    match_pct: float | None = None


@dataclass(frozen=True, slots=True)
class Candidate:
    """A strand file member inside an archive.

    Attributes:
        archive: Path to the archive holding the member
        member: Member name inside the archive
        order: Discovery index, used to keep ranking reproducible
    """

    archive: Path
    member: str
    order: int = 0

    @property
    def name(self) -> str:
        return self.member


def _ratio(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


@dataclass
class MatchStats:
    """Match counters for one candidate strand file.

    Attributes:
        candidate: The scored candidate
        name_matches: Records whose ID is in the query
        name_pos_matches: Records whose ID and position match the query
        original_strand_matches: Of those, non-palindromic records with the query's alleles
        plus_strand_matches: Of those, non-palindromic records with the complemented alleles
        atcg_matches: Of those, records with a palindromic (A/T, C/G) allele pair
        total_records: Records processed
        malformed_records: Lines that could not be parsed
        query_size: Number of variants in the query index
    """

    candidate: Candidate
    name_matches: int = 0
    name_pos_matches: int = 0
    original_strand_matches: int = 0
    plus_strand_matches: int = 0
    atcg_matches: int = 0
    total_records: int = 0
    malformed_records: int = 0
    query_size: int = 0

    @property
    def name(self) -> str:
        return self.candidate.name

    @property
    def name_match_rate(self) -> float:
        return _ratio(self.name_matches, self.total_records)

    @property
    def name_pos_match_rate(self) -> float:
        return _ratio(self.name_pos_matches, self.name_matches)

    @property
    def original_strand_rate(self) -> float:
        return _ratio(self.original_strand_matches, self.name_pos_matches)

    @property
    def plus_strand_rate(self) -> float:
        return _ratio(self.plus_strand_matches, self.name_pos_matches)

    @property
    def atcg_rate(self) -> float:
        return _ratio(self.atcg_matches, self.name_pos_matches)

    @property
    def query_coverage(self) -> float:
        """Fraction of query variants found with matching ID and position."""
        return _ratio(self.name_pos_matches, self.query_size)


@dataclass(frozen=True, slots=True)
class CandidateFailure:
    """Why a candidate (or a whole archive) was excluded from ranking.

    Attributes:
        archive: Archive the failure belongs to
        member: Member name, None when the whole archive failed
        error_kind: "archive" for unreadable containers, "score" for stream failures
        message: Error message
    """

    archive: Path
    member: str | None
    error_kind: Literal["archive", "score"]
    message: str

    @property
    def name(self) -> str:
        if self.member is None:
            return self.archive.name
        return f"{self.archive.name}:{self.member}"


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    """Result of attempting one candidate: stats on success, failure otherwise."""

    candidate: Candidate
    stats: MatchStats | None = None
    failure: CandidateFailure | None = None

    @property
    def ok(self) -> bool:
        return self.stats is not None


@dataclass(frozen=True)
class RankedResult:
    """A scored candidate at its position in the final ranking."""

    rank: int
    stats: MatchStats

    @property
    def name(self) -> str:
        return self.stats.name

    @property
    def candidate(self) -> Candidate:
        return self.stats.candidate

    @property
    def name_match_rate(self) -> float:
        return self.stats.name_match_rate

    @property
    def name_pos_match_rate(self) -> float:
        return self.stats.name_pos_match_rate

    @property
    def original_strand_rate(self) -> float:
        return self.stats.original_strand_rate

    @property
    def plus_strand_rate(self) -> float:
        return self.stats.plus_strand_rate

    @property
    def atcg_rate(self) -> float:
        return self.stats.atcg_rate

    @property
    def query_coverage(self) -> float:
        return self.stats.query_coverage

    def as_row(self) -> tuple[str, float, float, float, float, float, float]:
        """Row of the result table, in column order."""
        return (
            self.name,
            self.name_match_rate,
            self.name_pos_match_rate,
            self.original_strand_rate,
            self.plus_strand_rate,
            self.atcg_rate,
            self.query_coverage,
        )


@dataclass
class MatchReport:
    """Everything a run produced: the ranking and the excluded candidates."""

    ranked: list[RankedResult]
    failures: list[CandidateFailure] = field(default_factory=list)
    query_size: int = 0
    candidates_attempted: int = 0

    @property
    def best(self) -> RankedResult | None:
        return self.ranked[0] if self.ranked else None
