"""Tests for allele and chromosome helpers."""

import pytest

from strand_matcher.utils import (
    complement,
    complement_pair,
    is_palindromic,
    normalize_chromosome,
    same_alleles,
    sort_alleles,
)


class TestComplement:
    """Tests for complement functions."""

    @pytest.mark.parametrize(
        "allele,expected",
        [("A", "T"), ("T", "A"), ("C", "G"), ("G", "C"), ("N", "N")],
    )
    def test_single_base(self, allele: str, expected: str) -> None:
        assert complement(allele) == expected

    def test_multi_base(self) -> None:
        assert complement("AGT") == "TCA"

    def test_indel_codes_unchanged(self) -> None:
        assert complement("I") == "I"
        assert complement("D") == "D"
        assert complement("-") == "-"

    def test_pair(self) -> None:
        assert complement_pair("A", "C") == ("T", "G")


class TestPalindromic:
    """Tests for palindromic pair detection."""

    @pytest.mark.parametrize("pair", [("A", "T"), ("T", "A"), ("C", "G"), ("G", "C")])
    def test_palindromic_pairs(self, pair: tuple[str, str]) -> None:
        assert is_palindromic(*pair) is True

    @pytest.mark.parametrize("pair", [("A", "G"), ("C", "T"), ("A", "C"), ("G", "T")])
    def test_non_palindromic_pairs(self, pair: tuple[str, str]) -> None:
        assert is_palindromic(*pair) is False

    def test_indel_not_palindromic(self) -> None:
        assert is_palindromic("I", "D") is False


class TestAlleleComparison:
    """Tests for order-independent allele comparison."""

    def test_sort_alleles(self) -> None:
        assert sort_alleles("G", "A") == ("A", "G")
        assert sort_alleles("A", "G") == ("A", "G")

    def test_same_alleles_any_order(self) -> None:
        assert same_alleles(("A", "G"), ("G", "A"))
        assert same_alleles(("C", "T"), ("C", "T"))

    def test_different_alleles(self) -> None:
        assert not same_alleles(("A", "G"), ("T", "C"))


class TestNormalizeChromosome:
    """Tests for chromosome normalization."""

    def test_chr_prefix(self) -> None:
        assert normalize_chromosome("chr1") == "1"
        assert normalize_chromosome("CHRX") == "X"

    def test_leading_zero(self) -> None:
        assert normalize_chromosome("01") == "1"

    def test_unchanged(self) -> None:
        assert normalize_chromosome("22") == "22"
        assert normalize_chromosome("MT") == "MT"
