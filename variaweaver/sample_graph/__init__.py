"""
Sample Graph module for VariaWeaver.

This module reduces a graph whose variants are encoded as allele paths to the
subgraph carried by one sample:
- Allele-path name parsing and node index (allele_paths)
- Genotype parsing and per-variant allele resolution (genotype)
- Candidate node bookkeeping (candidates)
- Node and path removal (pruner)
- End-to-end extraction (extractor)
"""

from .errors import (
    SampleGraphError,
    ConfigurationError,
    ConsistencyError,
    MalformedGenotypeError,
)

from .allele_paths import (
    DEFAULT_ALT_PREFIX,
    AllelePathName,
    AllelePathIndex,
    parse_allele_path_name,
    make_allele_path_name,
)

from .genotype import (
    GenotypeResolver,
    ResolvedGenotypes,
    parse_genotype,
    select_sample,
    is_usable_record,
)

from .candidates import CandidateNodeSet, compute_candidate_nodes
from .pruner import CascadePruner, PruneResult
from .extractor import SampleGraphResult, extract_sample_graph, sweep_allele_paths

__all__ = [
    # Errors
    "SampleGraphError",
    "ConfigurationError",
    "ConsistencyError",
    "MalformedGenotypeError",
    # Allele paths
    "DEFAULT_ALT_PREFIX",
    "AllelePathName",
    "AllelePathIndex",
    "parse_allele_path_name",
    "make_allele_path_name",
    # Genotypes
    "GenotypeResolver",
    "ResolvedGenotypes",
    "parse_genotype",
    "select_sample",
    "is_usable_record",
    # Candidates & pruning
    "CandidateNodeSet",
    "compute_candidate_nodes",
    "CascadePruner",
    "PruneResult",
    # Extraction
    "SampleGraphResult",
    "extract_sample_graph",
    "sweep_allele_paths",
]
