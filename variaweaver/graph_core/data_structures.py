#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Variation graph data structures: sequence-labeled nodes, bidirected edges
between node ends, and named paths of oriented node steps.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Set, Tuple
from collections import defaultdict
import logging

from ..utils.sequence_utils import reverse_complement

logger = logging.getLogger(__name__)


# ============================================================================
# Nodes, Edges, Steps
# ============================================================================

@dataclass
class GraphNode:
    """
    Node in the variation graph.

    Identifiers are unique integers; the sequence is the forward-strand label.
    """
    id: int
    seq: str

    @property
    def length(self) -> int:
        """Length of the node label in bases."""
        return len(self.seq)


@dataclass
class GraphEdge:
    """
    Edge between two node ends.

    ``from_rev``/``to_rev`` follow GFA link orientation: the edge leaves
    ``from_id`` on its reverse strand when ``from_rev`` is True, and enters
    ``to_id`` on its reverse strand when ``to_rev`` is True.
    """
    id: int
    from_id: int
    to_id: int
    from_rev: bool = False
    to_rev: bool = False
    overlap: str = "0M"

    @property
    def endpoints(self) -> Tuple[int, int]:
        """(from_id, to_id) pair."""
        return self.from_id, self.to_id

    def side_key(self) -> Tuple[int, bool, int, bool]:
        """Orientation-aware identity, as the link is written."""
        return (self.from_id, self.from_rev, self.to_id, self.to_rev)

    def canonical_key(self) -> Tuple[int, bool, int, bool]:
        """
        Same for both spellings of one link: ``1+ -> 2+`` and ``2- -> 1-``
        share a key. Used to reject duplicate links.
        """
        flipped = (self.to_id, not self.to_rev, self.from_id, not self.from_rev)
        return min(self.side_key(), flipped)


@dataclass(frozen=True)
class PathStep:
    """One traversal of a node by a path."""
    node_id: int
    is_reverse: bool = False

    def to_gfa(self) -> str:
        return f"{self.node_id}{'-' if self.is_reverse else '+'}"


# ============================================================================
# Variation Graph
# ============================================================================

@dataclass
class VariationGraph:
    """
    Mutable variation graph with named paths.

    Keeps a node -> path-name index in step with the path collection so that
    ``paths_of_node`` does not scan every path.
    """
    nodes: Dict[int, GraphNode] = field(default_factory=dict)
    edges: Dict[int, GraphEdge] = field(default_factory=dict)
    paths: Dict[str, List[PathStep]] = field(default_factory=dict)
    node_edges: Dict[int, Set[int]] = field(default_factory=lambda: defaultdict(set))
    node_paths: Dict[int, Set[str]] = field(default_factory=lambda: defaultdict(set))
    edge_keys: Dict[Tuple[int, bool, int, bool], int] = field(default_factory=dict)
    _next_edge_id: int = 0

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(self, node: GraphNode):
        """Add a node to the graph, replacing any node with the same id."""
        self.nodes[node.id] = node
        if node.id not in self.node_edges:
            self.node_edges[node.id] = set()

    def has_node(self, node_id: int) -> bool:
        return node_id in self.nodes

    def get_node_sequence(self, node_id: int) -> str:
        return self.nodes[node_id].seq

    def destroy_node(self, node_id: int) -> bool:
        """
        Remove a node and every edge incident to it.

        Paths visiting the node are left alone; callers that need them gone
        remove them first.

        Returns:
            True if the node existed
        """
        if node_id not in self.nodes:
            logger.debug(f"destroy_node: node {node_id} not in graph")
            return False

        for edge_id in list(self.node_edges.get(node_id, ())):
            self.remove_edge(edge_id)

        del self.nodes[node_id]
        self.node_edges.pop(node_id, None)
        return True

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(
        self,
        from_id: int,
        to_id: int,
        from_rev: bool = False,
        to_rev: bool = False,
        overlap: str = "0M",
    ) -> GraphEdge:
        """
        Add an edge between two node ends.

        Endpoints need not exist yet; an edge whose endpoint is missing is an
        orphan and can be removed with ``remove_orphan_edges``. A link that
        already exists, in either spelling, is not added again; the existing
        edge is returned.
        """
        edge = GraphEdge(
            id=self._next_edge_id,
            from_id=from_id,
            to_id=to_id,
            from_rev=from_rev,
            to_rev=to_rev,
            overlap=overlap,
        )
        key = edge.canonical_key()
        if key in self.edge_keys:
            logger.debug(f"add_edge: duplicate link {from_id} -> {to_id} ignored")
            return self.edges[self.edge_keys[key]]

        self._next_edge_id += 1
        self.edges[edge.id] = edge
        self.edge_keys[key] = edge.id
        self.node_edges[from_id].add(edge.id)
        self.node_edges[to_id].add(edge.id)
        return edge

    def remove_edge(self, edge_id: int) -> bool:
        edge = self.edges.pop(edge_id, None)
        if edge is None:
            return False
        self.edge_keys.pop(edge.canonical_key(), None)
        for node_id in edge.endpoints:
            incident = self.node_edges.get(node_id)
            if incident is not None:
                incident.discard(edge_id)
        return True

    def edges_of_node(self, node_id: int) -> List[GraphEdge]:
        return [self.edges[eid] for eid in sorted(self.node_edges.get(node_id, ()))]

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def add_path(self, name: str, steps: Iterable[PathStep]):
        """Add (or replace) a named path."""
        if name in self.paths:
            self.remove_path(name)
        step_list = list(steps)
        self.paths[name] = step_list
        for step in step_list:
            self.node_paths[step.node_id].add(name)

    def path_names(self) -> List[str]:
        """Names of all paths, in insertion order."""
        return list(self.paths.keys())

    def has_path(self, name: str) -> bool:
        return name in self.paths

    def get_path(self, name: str) -> List[PathStep]:
        """
        Ordered steps of a named path.

        Raises:
            KeyError: If no path has this name
        """
        return self.paths[name]

    def remove_path(self, name: str) -> bool:
        """Remove a whole path. Returns False if it was already gone."""
        steps = self.paths.pop(name, None)
        if steps is None:
            return False
        for step in steps:
            on_node = self.node_paths.get(step.node_id)
            if on_node is not None:
                on_node.discard(name)
                if not on_node:
                    del self.node_paths[step.node_id]
        return True

    def paths_of_node(self, node_id: int) -> List[str]:
        """Names of the paths visiting a node, sorted for stable output."""
        return sorted(self.node_paths.get(node_id, ()))

    def iter_paths(self) -> Iterator[Tuple[str, List[PathStep]]]:
        return iter(self.paths.items())

    def clear_paths(self):
        self.paths.clear()
        self.node_paths.clear()

    def path_sequence(self, name: str) -> str:
        """Spell out a path, reverse-complementing reverse steps."""
        parts = []
        for step in self.get_path(name):
            seq = self.get_node_sequence(step.node_id)
            parts.append(reverse_complement(seq) if step.is_reverse else seq)
        return ''.join(parts)

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def path_count(self) -> int:
        return len(self.paths)

    def total_length(self) -> int:
        """Total sequence length of all nodes."""
        return sum(node.length for node in self.nodes.values())


# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
