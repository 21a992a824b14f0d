"""
Graph Core module for VariaWeaver.

This module provides the variation graph and the simple edits applied to it:
- Nodes, bidirected edges and named paths (data_structures)
- Path retention, path-restricted subgraphs, orphan/non-path cleanup (graph_ops)
"""

from .data_structures import (
    GraphNode,
    GraphEdge,
    PathStep,
    VariationGraph,
)

from .graph_ops import (
    GraphModOptions,
    apply_modifications,
    drop_paths,
    retain_paths,
    keep_path,
    remove_orphan_edges,
    remove_non_path,
    kill_labels,
    destroy_node,
)

__all__ = [
    # Data structures
    "GraphNode",
    "GraphEdge",
    "PathStep",
    "VariationGraph",
    # Operations
    "GraphModOptions",
    "apply_modifications",
    "drop_paths",
    "retain_paths",
    "keep_path",
    "remove_orphan_edges",
    "remove_non_path",
    "kill_labels",
    "destroy_node",
]
