"""Strand file line parser.

Strand files (Will Rayner's chip annotation archives) are whitespace
separated, one probe per line, no header:

SNP_ID     chromosome  position  match%  strand  alleles
rs3094315  1           752566    100     +       AG

Some builds omit the match% column. Alleles are written as two letters
("AG"), slash separated ("A/G") or bracketed ("[A/G]").
"""

from strand_matcher.exceptions import ParseError
from strand_matcher.models import Strand, StrandRecord
from strand_matcher.utils import normalize_chromosome

MIN_COLUMNS = 5
FULL_COLUMNS = 6


def is_record_line(line: str) -> bool:
    """Whether a line holds a record (not blank, not a # comment)."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


def parse_alleles(token: str) -> tuple[str, str]:
    """Split an allele annotation into a pair of upper-case alleles.

    Raises:
        ValueError: If the annotation does not describe exactly two alleles
    """
    token = token.strip("[]").upper()

    if "/" in token:
        parts = token.split("/")
    elif len(token) == 2:
        parts = [token[0], token[1]]
    else:
        raise ValueError(f"cannot read allele pair from {token!r}")

    if len(parts) != 2 or not all(parts):
        raise ValueError(f"cannot read allele pair from {token!r}")

    return parts[0], parts[1]


def parse_strand_line(line: str, line_num: int | None = None) -> StrandRecord:
    """Parse one line of a strand file.

    Args:
        line: Raw line (trailing newline allowed)
        line_num: Line number for error messages

    Returns:
        Parsed StrandRecord

    Raises:
        ParseError: If the line has too few columns, a bad position,
            a bad match percentage or an unreadable allele column
    """
    parts = line.split()

    if len(parts) < MIN_COLUMNS:
        raise ParseError(
            f"expected at least {MIN_COLUMNS} columns, got {len(parts)}",
            line_num=line_num,
            line=line,
        )

    try:
        pos = int(parts[2])
    except ValueError:
        raise ParseError(
            f"non-numeric position {parts[2]!r}", line_num=line_num, line=line
        ) from None

    if pos < 0:
        raise ParseError(f"negative position {pos}", line_num=line_num, line=line)

    match_pct: float | None = None
    if len(parts) >= FULL_COLUMNS:
        try:
            match_pct = float(parts[3])
        except ValueError:
            raise ParseError(
                f"non-numeric match percentage {parts[3]!r}",
                line_num=line_num,
                line=line,
            ) from None
        strand_col, allele_col = parts[4], parts[5]
    else:
        strand_col, allele_col = parts[3], parts[4]

    try:
        alleles = parse_alleles(allele_col)
    except ValueError as e:
        raise ParseError(str(e), line_num=line_num, line=line) from None

    return StrandRecord(
        id=parts[0],
        chr=normalize_chromosome(parts[1]),
        pos=pos,
        strand=Strand.from_symbol(strand_col),
        alleles=alleles,
        match_pct=match_pct,
    )
