#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Variant Source — variant records, variant-id derivation, and a pysam-backed
streaming reader that renders each sample's GT field as a genotype string.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Sequence

import pysam

logger = logging.getLogger(__name__)

MISSING_ID = '.'


# ============================================================================
#                           VARIANT RECORDS
# ============================================================================

def make_variant_id(
    chrom: str,
    pos: int,
    ref: str,
    alts: Sequence[str],
    explicit_id: Optional[str] = None,
) -> str:
    """
    Stable identifier for a variant, as embedded in allele-path names.

    The explicit VCF ID is used when present. Otherwise the id is the SHA-1
    hex digest of ``"<chrom>:<pos>:<ref>:<alt1,alt2,...>"``.

    Args:
        chrom: Sequence name
        pos: 0-based position (callers holding VCF positions subtract one)
        ref: Reference allele
        alts: Alternate alleles
        explicit_id: VCF ID column value, or None/'.' when absent
    """
    if explicit_id and explicit_id != MISSING_ID:
        return explicit_id
    key = f"{chrom}:{pos}:{ref}:{','.join(alts)}"
    return hashlib.sha1(key.encode('utf-8')).hexdigest()


@dataclass
class VariantRecord:
    """
    One variant site with per-sample genotype strings.

    Attributes:
        chrom: Sequence name
        pos: 1-based position, as written in VCF
        ref: Reference allele
        alts: Alternate alleles (may be empty for non-variable sites)
        id: Explicit identifier, None when absent
        genotypes: sample name -> genotype string such as ``"0|1"`` or ``"./."``
    """
    chrom: str
    pos: int
    ref: str
    alts: List[str] = field(default_factory=list)
    id: Optional[str] = None
    genotypes: Dict[str, str] = field(default_factory=dict)

    @property
    def alleles(self) -> List[str]:
        """Reference allele followed by the alternates."""
        return [self.ref] + list(self.alts)

    @property
    def zero_based_pos(self) -> int:
        return self.pos - 1

    @property
    def variant_id(self) -> str:
        return make_variant_id(self.chrom, self.zero_based_pos, self.ref, self.alts, self.id)

    def get_genotype(self, sample: str) -> str:
        """
        Genotype string for one sample; a sample with no call reads as ``.``.
        """
        return self.genotypes.get(sample, MISSING_ID)


class VariantSource(Protocol):
    """
    Minimum interface the genotype resolver consumes: sample names plus a
    single-pass iteration over records.
    """

    @property
    def sample_names(self) -> List[str]:
        ...

    def __iter__(self) -> Iterator[VariantRecord]:
        ...


class RecordListSource:
    """Variant source over records already in memory."""

    def __init__(self, sample_names: Iterable[str], records: Iterable[VariantRecord]):
        self._sample_names = list(sample_names)
        self._records = records

    @property
    def sample_names(self) -> List[str]:
        return list(self._sample_names)

    def __iter__(self) -> Iterator[VariantRecord]:
        return iter(self._records)


# ============================================================================
#                           VCF READER
# ============================================================================

def format_genotype(alleles: Optional[Sequence[Optional[int]]], phased: bool) -> str:
    """
    Render a pysam GT tuple as a VCF genotype string.

    Missing alleles (None) become ``.``; a missing GT becomes ``.``.

    Example:
        >>> format_genotype((0, 1), phased=True)
        '0|1'
        >>> format_genotype((None, None), phased=False)
        './.'
    """
    if not alleles:
        return MISSING_ID
    separator = '|' if phased else '/'
    return separator.join(MISSING_ID if a is None else str(a) for a in alleles)


class VcfVariantSource:
    """
    Stream variant records from a VCF/BCF file with pysam.

    Records are produced lazily, one at a time, in file order. Use as a
    context manager so the underlying file is closed.

    Example:
        >>> with VcfVariantSource("calls.vcf.gz") as source:
        ...     for record in source:
        ...         print(record.variant_id, record.get_genotype(source.sample_names[0]))
    """

    def __init__(self, vcf_path: str | Path):
        self.vcf_path = Path(vcf_path)
        if not self.vcf_path.exists():
            raise FileNotFoundError(f"VCF file not found: {self.vcf_path}")
        self._vcf = pysam.VariantFile(str(self.vcf_path))
        self.logger = logging.getLogger(f"{__name__}.VcfVariantSource")
        self.logger.info(
            f"Opened VCF {self.vcf_path} with {len(self.sample_names)} sample(s)"
        )

    @property
    def sample_names(self) -> List[str]:
        return list(self._vcf.header.samples)

    def _convert(self, rec) -> VariantRecord:
        genotypes = {}
        for name in rec.samples:
            sample = rec.samples[name]
            try:
                gt = sample['GT']
            except KeyError:
                gt = None
            genotypes[name] = format_genotype(gt, sample.phased)

        return VariantRecord(
            chrom=rec.chrom,
            pos=rec.pos,
            ref=rec.ref or '',
            alts=list(rec.alts or ()),
            id=rec.id,
            genotypes=genotypes,
        )

    def __iter__(self) -> Iterator[VariantRecord]:
        for rec in self._vcf:
            yield self._convert(rec)

    def close(self):
        self._vcf.close()

    def __enter__(self) -> "VcfVariantSource":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
