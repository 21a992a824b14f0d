"""
VariaWeaver v0.1.0

Candidate node set: nodes considered removable until a called allele claims
them.
"""

from typing import Dict, Iterable, Iterator, List, Set

from .allele_paths import AllelePathIndex


class CandidateNodeSet:
    """Set of removable node ids with bulk seed/release."""

    def __init__(self):
        self._ids: Set[int] = set()

    def seed(self, node_ids: Iterable[int]):
        """Mark nodes as removable."""
        self._ids.update(node_ids)

    def release(self, node_ids: Iterable[int]):
        """Unmark nodes; ids that are not candidates are ignored."""
        self._ids.difference_update(node_ids)

    def sorted_ids(self) -> List[int]:
        return sorted(self._ids)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)


def compute_candidate_nodes(index: AllelePathIndex,
                            used_alleles: Dict[str, Iterable[int]]) -> CandidateNodeSet:
    """
    Nodes on allele paths minus the nodes on any allele path the sample uses.
    """
    candidates = CandidateNodeSet()
    candidates.seed(index.all_nodes)
    for variant_id, alleles in used_alleles.items():
        for allele in alleles:
            candidates.release(index.nodes_for(variant_id, allele))
    return candidates
