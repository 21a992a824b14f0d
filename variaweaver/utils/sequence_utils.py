"""
VariaWeaver v0.1.0

Sequence utility functions for VariaWeaver.

Provides the nucleotide checks used when filtering variant alleles.
"""

from typing import Iterable

CANONICAL_BASES = frozenset('ACGT')


def is_canonical_dna(sequence: str) -> bool:
    """
    Check that a sequence consists only of upper-case A, C, G and T.

    Lower-case bases, IUPAC ambiguity codes, ``N``, symbolic alleles such as
    ``<DEL>`` and breakends all fail the check. The empty string passes.

    Example:
        >>> is_canonical_dna("ACGT")
        True
        >>> is_canonical_dna("ACGN")
        False
    """
    return all(base in CANONICAL_BASES for base in sequence)


def all_canonical_dna(sequences: Iterable[str]) -> bool:
    """True if every sequence passes ``is_canonical_dna``."""
    return all(is_canonical_dna(seq) for seq in sequences)


def reverse_complement(sequence: str) -> str:
    """
    Generate reverse complement of DNA sequence.

    Example:
        >>> reverse_complement("ATCG")
        'CGAT'
    """
    complement_map = {
        'A': 'T', 'T': 'A',
        'G': 'C', 'C': 'G',
        'N': 'N',
        'a': 't', 't': 'a',
        'g': 'c', 'c': 'g',
        'n': 'n'
    }

    return ''.join(complement_map.get(base, base) for base in reversed(sequence))


__all__ = [
    'CANONICAL_BASES',
    'is_canonical_dna',
    'all_canonical_dna',
    'reverse_complement',
]
