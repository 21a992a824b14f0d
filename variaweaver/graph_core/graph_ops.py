#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Graph Operations — path retention, path-restricted subgraphs, orphan edge
removal and the other simple edits offered by ``variaweaver mod``.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple
import logging

from .data_structures import VariationGraph, PathStep

logger = logging.getLogger(__name__)


@dataclass
class GraphModOptions:
    """
    Edits to apply to a graph, in the order ``apply_modifications`` runs them.

    Attributes:
        keep_path: Keep only the nodes and edges of this path
        retain_paths: Remove every path not named here
        retain_complement: Invert ``retain_paths`` (keep only unnamed paths)
        drop_paths: Remove all paths
        remove_orphans: Remove edges that reference a missing node
        remove_non_path: Keep only nodes and edges used by some path
        kill_labels: Clear every node sequence
        destroy_node: Remove this node id
    """
    keep_path: Optional[str] = None
    retain_paths: List[str] = field(default_factory=list)
    retain_complement: bool = False
    drop_paths: bool = False
    remove_orphans: bool = False
    remove_non_path: bool = False
    kill_labels: bool = False
    destroy_node: Optional[int] = None

    def is_empty(self) -> bool:
        return not (
            self.keep_path or self.retain_paths or self.retain_complement
            or self.drop_paths or self.remove_orphans or self.remove_non_path
            or self.kill_labels or self.destroy_node is not None
        )


# ============================================================================
# Helpers
# ============================================================================

def _traversed_edge_keys(steps: List[PathStep]) -> Set[Tuple[int, bool, int, bool]]:
    """
    Orientation-aware keys of the edges a path walks along.

    Each hop is recorded in both of its equivalent spellings so that a link
    written in the opposite direction still matches.
    """
    keys = set()
    for prev, nxt in zip(steps, steps[1:]):
        keys.add((prev.node_id, prev.is_reverse, nxt.node_id, nxt.is_reverse))
        keys.add((nxt.node_id, not nxt.is_reverse, prev.node_id, not prev.is_reverse))
    return keys


def _remove_paths_through(graph: VariationGraph, node_id: int) -> List[str]:
    removed = []
    for path_name in graph.paths_of_node(node_id):
        if graph.remove_path(path_name):
            removed.append(path_name)
    return removed


# ============================================================================
# Operations
# ============================================================================

def drop_paths(graph: VariationGraph) -> int:
    """Remove every path. Returns the number removed."""
    count = graph.path_count()
    graph.clear_paths()
    logger.info(f"Dropped {count} paths")
    return count


def retain_paths(
    graph: VariationGraph,
    names: Iterable[str],
    complement: bool = False,
) -> List[str]:
    """
    Remove every path not in ``names`` (or, with ``complement``, every path
    that is in ``names``).

    Returns:
        Names of the removed paths
    """
    wanted = set(names)
    if complement:
        wanted = {name for name in graph.path_names() if name not in wanted}

    removed = [name for name in graph.path_names() if name not in wanted]
    for name in removed:
        graph.remove_path(name)

    logger.info(f"Retained {graph.path_count()} paths, removed {len(removed)}")
    return removed


def keep_path(graph: VariationGraph, name: str) -> Dict[str, int]:
    """
    Restrict the graph to one path: its nodes, the edges it walks, and the
    path itself.

    Raises:
        KeyError: If the path does not exist
    """
    if not graph.has_path(name):
        raise KeyError(f"Path not found in graph: {name}")

    steps = graph.get_path(name)
    on_path = {step.node_id for step in steps}
    walked = _traversed_edge_keys(steps)

    for other in graph.path_names():
        if other != name:
            graph.remove_path(other)

    doomed_nodes = [nid for nid in graph.nodes if nid not in on_path]
    for nid in doomed_nodes:
        graph.destroy_node(nid)

    doomed_edges = [eid for eid, edge in graph.edges.items() if edge.side_key() not in walked]
    for eid in doomed_edges:
        graph.remove_edge(eid)

    stats = {'nodes_removed': len(doomed_nodes), 'edges_removed': len(doomed_edges)}
    logger.info(f"Kept path {name}: removed {stats['nodes_removed']} nodes, "
                f"{stats['edges_removed']} edges")
    return stats


def remove_orphan_edges(graph: VariationGraph) -> int:
    """Remove edges with an endpoint that is not a node of the graph."""
    orphans = [
        eid for eid, edge in graph.edges.items()
        if not graph.has_node(edge.from_id) or not graph.has_node(edge.to_id)
    ]
    for eid in orphans:
        graph.remove_edge(eid)

    # Drop adjacency entries created for missing endpoints
    for nid in [nid for nid in graph.node_edges if nid not in graph.nodes]:
        if not graph.node_edges[nid]:
            del graph.node_edges[nid]

    if orphans:
        logger.info(f"Removed {len(orphans)} orphan edges")
    return len(orphans)


def remove_non_path(graph: VariationGraph) -> Dict[str, int]:
    """Keep only nodes and edges that some path walks over."""
    on_paths = set()
    walked = set()
    for _, steps in graph.iter_paths():
        on_paths.update(step.node_id for step in steps)
        walked |= _traversed_edge_keys(steps)

    doomed_nodes = [nid for nid in graph.nodes if nid not in on_paths]
    for nid in doomed_nodes:
        graph.destroy_node(nid)

    doomed_edges = [eid for eid, edge in graph.edges.items() if edge.side_key() not in walked]
    for eid in doomed_edges:
        graph.remove_edge(eid)

    logger.info(f"Removed {len(doomed_nodes)} non-path nodes and {len(doomed_edges)} non-path edges")
    return {'nodes_removed': len(doomed_nodes), 'edges_removed': len(doomed_edges)}


def kill_labels(graph: VariationGraph) -> int:
    """Clear the sequence of every node."""
    for node in graph.nodes.values():
        node.seq = ""
    return graph.node_count()


def destroy_node(graph: VariationGraph, node_id: int) -> List[str]:
    """
    Remove one node, its edges, and every path through it.

    Returns:
        Names of the removed paths
    """
    removed = _remove_paths_through(graph, node_id)
    if not graph.destroy_node(node_id):
        logger.warning(f"Node {node_id} not found in graph")
    return removed


def apply_modifications(graph: VariationGraph, options: GraphModOptions) -> VariationGraph:
    """
    Apply the requested edits in a fixed order: keep path, retain paths,
    drop paths, remove orphans, remove non-path, kill labels, destroy node.
    """
    if options.keep_path:
        keep_path(graph, options.keep_path)

    if options.retain_paths or options.retain_complement:
        retain_paths(graph, options.retain_paths, complement=options.retain_complement)

    if options.drop_paths:
        drop_paths(graph)

    if options.remove_orphans:
        remove_orphan_edges(graph)

    if options.remove_non_path:
        remove_non_path(graph)

    if options.kill_labels:
        kill_labels(graph)

    if options.destroy_node is not None:
        destroy_node(graph, options.destroy_node)

    return graph


# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
