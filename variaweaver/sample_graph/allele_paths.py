#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Allele-Path Index — parsing of allele-path names and the per-variant,
per-allele record of which nodes each allele path visits.

Allele paths are named ``<prefix><variant_id>_<allele_index>``, with the
default prefix ``_alt_``. Allele index 0 is the reference allele.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional, Set
import logging

from ..graph_core.data_structures import VariationGraph

logger = logging.getLogger(__name__)

DEFAULT_ALT_PREFIX = "_alt_"
ALLELE_SEPARATOR = "_"
_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class AllelePathName:
    """Decoded allele-path name."""
    variant_id: str
    allele_index: int


def parse_allele_path_name(name: str, prefix: str = DEFAULT_ALT_PREFIX) -> Optional[AllelePathName]:
    """
    Decode an allele-path name, or return None if the name is not one.

    The whole name must match: the literal prefix, a non-empty variant id,
    the separator, and a non-empty run of ASCII digits. The split happens at
    the last separator, so variant ids may themselves contain underscores.

    Example:
        >>> parse_allele_path_name("_alt_rs123_1")
        AllelePathName(variant_id='rs123', allele_index=1)
        >>> parse_allele_path_name("chr1") is None
        True
    """
    if not name.startswith(prefix):
        return None

    body = name[len(prefix):]
    variant_id, sep, suffix = body.rpartition(ALLELE_SEPARATOR)
    if not sep or not variant_id or not suffix:
        return None
    if not all(ch in _DIGITS for ch in suffix):
        return None

    return AllelePathName(variant_id=variant_id, allele_index=int(suffix))


def make_allele_path_name(variant_id: str, allele_index: int, prefix: str = DEFAULT_ALT_PREFIX) -> str:
    """Inverse of ``parse_allele_path_name``."""
    return f"{prefix}{variant_id}{ALLELE_SEPARATOR}{allele_index}"


@dataclass
class AllelePathIndex:
    """
    Node membership of every allele path in a graph.

    Attributes:
        alleles: variant_id -> allele_index -> node ids visited
        path_names: (variant_id, allele_index) -> path name as found in the graph
        all_nodes: every node visited by any allele path
    """
    alleles: Dict[str, Dict[int, FrozenSet[int]]] = field(default_factory=dict)
    path_names: Dict[tuple, str] = field(default_factory=dict)
    all_nodes: FrozenSet[int] = frozenset()

    @classmethod
    def build(cls, graph: VariationGraph, prefix: str = DEFAULT_ALT_PREFIX) -> "AllelePathIndex":
        """
        Scan every path of ``graph`` and index those with allele-path names.

        Every step of a matching path contributes its node, not only the
        first and last. Non-matching paths are ignored.
        """
        buckets: Dict[str, Dict[int, Set[int]]] = {}
        path_names = {}
        all_nodes: Set[int] = set()

        for name in graph.path_names():
            parsed = parse_allele_path_name(name, prefix)
            if parsed is None:
                continue

            visited = {step.node_id for step in graph.get_path(name)}
            bucket = buckets.setdefault(parsed.variant_id, {}).setdefault(parsed.allele_index, set())
            bucket.update(visited)
            path_names[(parsed.variant_id, parsed.allele_index)] = name
            all_nodes.update(visited)

        index = cls(
            alleles={
                vid: {allele: frozenset(nodes) for allele, nodes in by_allele.items()}
                for vid, by_allele in buckets.items()
            },
            path_names=path_names,
            all_nodes=frozenset(all_nodes),
        )
        logger.info(
            f"Indexed {len(path_names)} allele paths over {len(index.alleles)} variants "
            f"({len(index.all_nodes)} nodes)"
        )
        return index

    def has_variant(self, variant_id: str) -> bool:
        return variant_id in self.alleles

    def has_reference(self, variant_id: str) -> bool:
        """True if the reference (allele 0) path of a variant was indexed."""
        return 0 in self.alleles.get(variant_id, {})

    def nodes_for(self, variant_id: str, allele_index: int) -> FrozenSet[int]:
        """Nodes of one allele path; empty if the graph has no such path."""
        return self.alleles.get(variant_id, {}).get(allele_index, frozenset())

    def has_allele(self, variant_id: str, allele_index: int) -> bool:
        return allele_index in self.alleles.get(variant_id, {})

    def allele_indices(self, variant_id: str) -> Iterable[int]:
        return sorted(self.alleles.get(variant_id, {}))

    def __len__(self) -> int:
        return len(self.path_names)


# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
