#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Genotype Resolver — streams variant records, drops records the sample graph
cannot use, and turns one sample's genotype strings into the set of allele
indices used per variant.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Set
import logging

from ..io_utils.vcf_source import VariantRecord
from ..utils.sequence_utils import all_canonical_dna
from .allele_paths import AllelePathIndex
from .errors import ConfigurationError, ConsistencyError, MalformedGenotypeError

logger = logging.getLogger(__name__)

PHASE_SEPARATORS = ('|', '/')
MISSING_ALLELE = '.'


def parse_genotype(genotype: str, variant_id: Optional[str] = None) -> FrozenSet[int]:
    """
    Distinct allele indices referenced by a genotype string.

    Phased (``|``) and unphased (``/``) separators are treated alike; a
    missing call ``.`` counts as the reference allele 0.

    Raises:
        MalformedGenotypeError: If a token is neither '.' nor a non-negative integer

    Example:
        >>> sorted(parse_genotype("1|0"))
        [0, 1]
        >>> sorted(parse_genotype("./2"))
        [0, 2]
    """
    tokens = [genotype]
    for sep in PHASE_SEPARATORS:
        tokens = [piece for token in tokens for piece in token.split(sep)]

    alleles = set()
    for token in tokens:
        if token == MISSING_ALLELE:
            alleles.add(0)
        elif token and token.isascii() and token.isdigit():
            alleles.add(int(token))
        else:
            raise MalformedGenotypeError(genotype, token, variant_id)
    return frozenset(alleles)


def select_sample(sample_names: List[str], sample: Optional[str] = None) -> str:
    """
    Pick the one sample whose genotypes drive extraction.

    A lone sample is used implicitly; anything else needs an explicit name
    that exists in the source.

    Raises:
        ConfigurationError: No samples, several samples and none chosen, or
            the chosen sample is not in the source
    """
    if not sample_names:
        raise ConfigurationError("Variant source has no samples; cannot resolve genotypes")

    if sample is None:
        if len(sample_names) > 1:
            raise ConfigurationError(
                f"Variant source has {len(sample_names)} samples "
                f"({', '.join(sample_names[:5])}{', ...' if len(sample_names) > 5 else ''}); "
                f"select one explicitly"
            )
        return sample_names[0]

    if sample not in sample_names:
        raise ConfigurationError(f"Sample '{sample}' not found in variant source")
    return sample


def is_usable_record(record: VariantRecord) -> bool:
    """
    True for records the sample graph can use: at least two alleles, all of
    them plain A/C/G/T sequence.
    """
    alleles = record.alleles
    if len(alleles) < 2:
        return False
    return all_canonical_dna(alleles)


@dataclass
class ResolvedGenotypes:
    """
    Outcome of resolving one sample against a variant stream.

    Attributes:
        sample: The sample whose genotypes were read
        used_alleles: variant_id -> allele indices the sample carries
        records_seen: Records read from the source
        records_skipped: Records dropped by the usability filter
        missing_alleles: (variant_id, allele_index) pairs called but with no allele path
    """
    sample: str
    used_alleles: Dict[str, Set[int]] = field(default_factory=dict)
    records_seen: int = 0
    records_skipped: int = 0
    missing_alleles: List[tuple] = field(default_factory=list)

    @property
    def records_used(self) -> int:
        return self.records_seen - self.records_skipped


class GenotypeResolver:
    """
    Resolve one sample's genotypes against an allele-path index.

    The resolver only reads; it returns the used alleles per variant and
    leaves candidate bookkeeping and graph edits to later stages.
    """

    def __init__(self, index: AllelePathIndex, sample_names: Iterable[str],
                 sample: Optional[str] = None, skip_non_acgt: bool = True):
        """
        Initialize the resolver and fix the sample.

        Args:
            index: Allele-path index of the graph
            sample_names: Samples present in the variant source
            sample: Sample to use; required when there are several
            skip_non_acgt: Drop records with alleles outside A/C/G/T

        Raises:
            ConfigurationError: If no single sample can be selected
        """
        self.index = index
        self.sample = select_sample(list(sample_names), sample)
        self.skip_non_acgt = skip_non_acgt
        self.logger = logging.getLogger(f"{__name__}.GenotypeResolver")

    def _usable(self, record: VariantRecord) -> bool:
        if self.skip_non_acgt:
            return is_usable_record(record)
        return len(record.alleles) >= 2

    def resolve(self, records: Iterable[VariantRecord]) -> ResolvedGenotypes:
        """
        Consume the whole record stream.

        Raises:
            ConsistencyError: A usable record's reference allele path is missing
            MalformedGenotypeError: A genotype token cannot be parsed
        """
        result = ResolvedGenotypes(sample=self.sample)

        for record in records:
            result.records_seen += 1

            if not self._usable(record):
                result.records_skipped += 1
                self.logger.debug(
                    f"Skipping {record.chrom}:{record.pos} {record.ref}>{','.join(record.alts)}"
                )
                continue

            variant_id = record.variant_id
            if not self.index.has_reference(variant_id):
                found = (
                    f"only alleles {list(self.index.allele_indices(variant_id))} present"
                    if self.index.has_variant(variant_id) else "no allele paths"
                )
                raise ConsistencyError(
                    variant_id,
                    f"Reference allele path for variant {variant_id} "
                    f"({record.chrom}:{record.pos}) not in graph ({found})",
                )

            alleles = parse_genotype(record.get_genotype(self.sample), variant_id)
            for allele in alleles:
                if not self.index.has_allele(variant_id, allele):
                    self.logger.warning(
                        f"Variant {variant_id}: allele {allele} called but has no allele path "
                        f"(graph has alleles {list(self.index.allele_indices(variant_id))})"
                    )
                    result.missing_alleles.append((variant_id, allele))

            result.used_alleles.setdefault(variant_id, set()).update(alleles)

        self.logger.info(
            f"Resolved {len(result.used_alleles)} variants for sample {self.sample} "
            f"({result.records_seen} records, {result.records_skipped} skipped)"
        )
        return result


# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
