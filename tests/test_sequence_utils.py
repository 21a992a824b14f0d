#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Tests for sequence manipulation utilities.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from variaweaver.utils.sequence_utils import (
    all_canonical_dna,
    is_canonical_dna,
    reverse_complement,
)


class TestCanonicalDNA:
    """Test the plain A/C/G/T check."""

    def test_canonical(self):
        assert is_canonical_dna("ACGTTGCA")

    def test_empty_sequence(self):
        assert is_canonical_dna("")

    @pytest.mark.parametrize("sequence", ["ACGN", "acgt", "R", "<DEL>", "*", "A[chr1:5["])
    def test_non_canonical(self, sequence):
        assert not is_canonical_dna(sequence)

    def test_all_canonical(self):
        assert all_canonical_dna(["A", "CG", "TTT"])
        assert not all_canonical_dna(["A", "CN"])


class TestReverseComplement:
    """Test reverse complement function."""

    def test_basic_reverse_complement(self):
        """Test basic reverse complement."""
        sequence = "ATCG"
        rc = reverse_complement(sequence)

        assert rc == "CGAT"

    def test_reverse_complement_palindrome(self):
        """Test palindromic sequence."""
        sequence = "GAATTC"  # EcoRI site (palindrome)
        rc = reverse_complement(sequence)

        assert rc == sequence

    def test_reverse_complement_twice(self):
        """Test that RC(RC(seq)) = seq."""
        sequence = "ATCGATCGATCG"
        rc_rc = reverse_complement(reverse_complement(sequence))

        assert rc_rc == sequence

    def test_reverse_complement_with_n(self):
        """Test handling of N bases."""
        sequence = "ATCGN"
        rc = reverse_complement(sequence)

        assert rc == "NCGAT"

    def test_reverse_complement_lowercase(self):
        assert reverse_complement("acgt") == "acgt"

# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
