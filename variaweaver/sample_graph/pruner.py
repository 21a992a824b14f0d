#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Cascade Pruner — deletes candidate nodes together with every path that
visits them.

A path through a deleted node no longer spells a sequence present in the
graph, so it is removed whole rather than cut short. This applies to every
path, allele path or not.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Iterable, List
import logging

from ..graph_core.data_structures import VariationGraph

logger = logging.getLogger(__name__)


@dataclass
class PruneResult:
    """
    Record of a pruning pass.

    Attributes:
        removed_nodes: Node ids deleted, in visiting order
        removed_paths: Path names deleted, in removal order
        absent_nodes: Candidate ids that had no node in the graph
    """
    removed_nodes: List[int] = field(default_factory=list)
    removed_paths: List[str] = field(default_factory=list)
    absent_nodes: List[int] = field(default_factory=list)


class CascadePruner:
    """Remove candidate nodes and the paths that touch them."""

    def __init__(self, graph: VariationGraph):
        self.graph = graph
        self.logger = logging.getLogger(f"{__name__}.CascadePruner")

    def prune(self, node_ids: Iterable[int]) -> PruneResult:
        """
        Visit each node id once, in ascending order: drop every path through
        it, then destroy it and its edges.
        """
        result = PruneResult()

        for node_id in sorted(set(node_ids)):
            for path_name in self.graph.paths_of_node(node_id):
                if self.graph.remove_path(path_name):
                    self.logger.debug(f"Node {node_id} was on path {path_name}")
                    result.removed_paths.append(path_name)

            if self.graph.destroy_node(node_id):
                result.removed_nodes.append(node_id)
            else:
                result.absent_nodes.append(node_id)

        self.logger.info(
            f"Pruned {len(result.removed_nodes)} nodes and {len(result.removed_paths)} paths"
        )
        if result.absent_nodes:
            self.logger.warning(
                f"{len(result.absent_nodes)} candidate nodes were referenced by paths "
                f"but missing from the graph"
            )
        return result


# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
