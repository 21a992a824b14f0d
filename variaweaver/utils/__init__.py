"""
Utilities module for VariaWeaver.

This module provides small shared helpers:
- Nucleotide checks and reverse complement (sequence_utils)
- Logging configuration for the CLI (logging_setup)
"""

from .sequence_utils import (
    CANONICAL_BASES,
    is_canonical_dna,
    all_canonical_dna,
    reverse_complement,
)
from .logging_setup import configure_logging, resolve_level

__all__ = [
    # Sequences
    "CANONICAL_BASES",
    "is_canonical_dna",
    "all_canonical_dna",
    "reverse_complement",
    # Logging
    "configure_logging",
    "resolve_level",
]
