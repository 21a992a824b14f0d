#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Sample Graph Extraction — reduce a graph carrying allele paths to the
subgraph used by one sample's genotype calls.

Stages:
1. Index allele paths (node membership per variant and allele)
2. Resolve the sample's genotypes over the whole variant stream
3. Candidates = allele-path nodes minus nodes of used alleles
4. Prune candidates, cascading to every path that touches them
5. Sweep the allele paths that are left

Every error is raised during stage 2, so a failed run leaves the graph as it
was.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from ..graph_core.data_structures import VariationGraph
from .allele_paths import AllelePathIndex, DEFAULT_ALT_PREFIX, parse_allele_path_name
from .candidates import compute_candidate_nodes
from .genotype import GenotypeResolver
from .pruner import CascadePruner

logger = logging.getLogger(__name__)


@dataclass
class SampleGraphResult:
    """
    Summary of one extraction run.

    Attributes:
        sample: Sample whose genotypes were applied
        records_seen: Variant records read
        records_skipped: Records excluded by the usability filter
        records_used: Records whose genotype was applied
        variants_resolved: Distinct variants with a resolved genotype
        candidate_nodes: Size of the final candidate set
        removed_nodes: Node ids deleted
        removed_paths: Paths deleted because they crossed a deleted node
        swept_allele_paths: Allele paths deleted after pruning
    """
    sample: str
    records_seen: int = 0
    records_skipped: int = 0
    records_used: int = 0
    variants_resolved: int = 0
    candidate_nodes: int = 0
    removed_nodes: List[int] = field(default_factory=list)
    removed_paths: List[str] = field(default_factory=list)
    swept_allele_paths: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sample': self.sample,
            'records_seen': self.records_seen,
            'records_skipped': self.records_skipped,
            'records_used': self.records_used,
            'variants_resolved': self.variants_resolved,
            'candidate_nodes': self.candidate_nodes,
            'nodes_removed': len(self.removed_nodes),
            'paths_removed': len(self.removed_paths),
            'allele_paths_swept': len(self.swept_allele_paths),
        }


def sweep_allele_paths(graph: VariationGraph, prefix: str = DEFAULT_ALT_PREFIX) -> List[str]:
    """Remove every remaining allele path; other paths are untouched."""
    swept = [name for name in graph.path_names() if parse_allele_path_name(name, prefix) is not None]
    for name in swept:
        graph.remove_path(name)
    return swept


def extract_sample_graph(
    graph: VariationGraph,
    variant_source,
    sample: Optional[str] = None,
    alt_path_prefix: str = DEFAULT_ALT_PREFIX,
    skip_non_acgt: bool = True,
    drop_allele_paths: bool = True,
) -> SampleGraphResult:
    """
    Prune ``graph`` in place down to the alleles carried by one sample.

    Args:
        graph: Graph with allele paths; modified in place
        variant_source: Object with ``sample_names`` that iterates VariantRecords
        sample: Sample to use; required if the source has several
        alt_path_prefix: Literal prefix of allele-path names
        skip_non_acgt: Ignore records with alleles outside A/C/G/T
        drop_allele_paths: Remove surviving allele paths after pruning

    Returns:
        SampleGraphResult with counts and the removed elements

    Raises:
        ConfigurationError: No single sample can be selected
        ConsistencyError: A variant's reference allele path is missing
        MalformedGenotypeError: A genotype cannot be parsed
    """
    index = AllelePathIndex.build(graph, prefix=alt_path_prefix)

    resolver = GenotypeResolver(
        index,
        variant_source.sample_names,
        sample=sample,
        skip_non_acgt=skip_non_acgt,
    )
    resolved = resolver.resolve(variant_source)

    candidates = compute_candidate_nodes(index, resolved.used_alleles)
    logger.info(f"{len(candidates)} of {len(index.all_nodes)} allele-path nodes are unused by {resolved.sample}")

    pruned = CascadePruner(graph).prune(candidates.sorted_ids())

    result = SampleGraphResult(
        sample=resolved.sample,
        records_seen=resolved.records_seen,
        records_skipped=resolved.records_skipped,
        records_used=resolved.records_used,
        variants_resolved=len(resolved.used_alleles),
        candidate_nodes=len(candidates),
        removed_nodes=pruned.removed_nodes,
        removed_paths=pruned.removed_paths,
    )

    if drop_allele_paths:
        result.swept_allele_paths = sweep_allele_paths(graph, alt_path_prefix)
        logger.info(f"Removed {len(result.swept_allele_paths)} remaining allele paths")

    return result


# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
