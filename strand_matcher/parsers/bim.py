"""PLINK BIM file parser.

BIM file format (tab/space-separated, no header):
chromosome  rsID  genetic_distance  position  allele1  allele2
1           rs123 0                 10000     A        G

Columns beyond the sixth are ignored.
"""

from strand_matcher.exceptions import ParseError
from strand_matcher.models import Variant
from strand_matcher.utils import normalize_chromosome

BIM_COLUMNS = 6


def parse_bim_line(line: str, line_num: int | None = None) -> Variant:
    """Parse one line of a BIM file.

    Args:
        line: Raw line (trailing newline allowed)
        line_num: Line number for error messages

    Returns:
        Parsed Variant

    Raises:
        ParseError: If the line has fewer than 6 columns or a bad position
    """
    parts = line.split()

    if len(parts) < BIM_COLUMNS:
        raise ParseError(
            f"expected {BIM_COLUMNS} columns, got {len(parts)}",
            line_num=line_num,
            line=line,
        )

    try:
        pos = int(parts[3])
    except ValueError:
        raise ParseError(
            f"non-numeric position {parts[3]!r}", line_num=line_num, line=line
        ) from None

    if pos < 0:
        raise ParseError(f"negative position {pos}", line_num=line_num, line=line)

    return Variant(
        id=parts[1],
        chr=normalize_chromosome(parts[0]),
        pos=pos,
        allele1=parts[4].upper(),
        allele2=parts[5].upper(),
    )
