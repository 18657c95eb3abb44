"""Allele and chromosome helpers shared by the parsers and the scorer.

Strand flipping follows the usual tr/ACGT/TGCA/ substitution.
"""

# Complement lookup table for DNA bases
COMPLEMENT: dict[str, str] = {
    "A": "T",
    "T": "A",
    "C": "G",
    "G": "C",
    "N": "N",  # Unknown base stays as N
}

PALINDROMIC_PAIRS: frozenset[tuple[str, str]] = frozenset(
    {("A", "T"), ("T", "A"), ("C", "G"), ("G", "C")}
)


def complement(allele: str) -> str:
    """Get the complement of a DNA allele.

    Multi-base alleles are complemented base by base; indel codes
    such as "I", "D" or "-" are returned unchanged.

    Args:
        allele: DNA allele (A, T, C, G, N or a multi-base string)

    Returns:
        Complementary allele

    Example:
        >>> complement("A")
        "T"
        >>> complement("AG")
        "TC"
    """
    if len(allele) == 1:
        return COMPLEMENT.get(allele, allele)
    if all(base in COMPLEMENT for base in allele):
        return "".join(COMPLEMENT[base] for base in allele)
    return allele


def complement_pair(a1: str, a2: str) -> tuple[str, str]:
    """Get complements of an allele pair.

    Example:
        >>> complement_pair("A", "C")
        ("T", "G")
    """
    return complement(a1), complement(a2)


def is_palindromic(a1: str, a2: str) -> bool:
    """Check if an allele pair is palindromic (A/T or C/G, any order).

    The strand of a palindromic SNP cannot be told from its alleles.

    Example:
        >>> is_palindromic("T", "A")
        True
        >>> is_palindromic("A", "G")
        False
    """
    return (a1, a2) in PALINDROMIC_PAIRS


def sort_alleles(a1: str, a2: str) -> tuple[str, str]:
    """Sort alleles alphabetically.

    Example:
        >>> sort_alleles("G", "A")
        ("A", "G")
    """
    if a1 <= a2:
        return a1, a2
    return a2, a1


def same_alleles(pair1: tuple[str, str], pair2: tuple[str, str]) -> bool:
    """Compare two allele pairs regardless of allele order."""
    return sort_alleles(*pair1) == sort_alleles(*pair2)


def normalize_chromosome(chr_val: str) -> str:
    """Normalize chromosome value to consistent format.

    Handles variations like "chr1" -> "1", "01" -> "1".

    Example:
        >>> normalize_chromosome("chr1")
        "1"
        >>> normalize_chromosome("X")
        "X"
    """
    if chr_val.lower().startswith("chr"):
        chr_val = chr_val[3:]

    if chr_val.isdigit():
        chr_val = str(int(chr_val))

    return chr_val
