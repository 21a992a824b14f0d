#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

GFA I/O — GFA v1 reading and writing of variation graphs (segments, links
and paths) plus a quick file validator.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import IO, TextIO
from dataclasses import dataclass

from ..graph_core.data_structures import VariationGraph, GraphNode, PathStep

logger = logging.getLogger(__name__)


# ============================================================================
#                           GFA RECORDS
# ============================================================================

@dataclass
class GFASegment:
    """Represents a GFA S-line (segment)."""
    node_id: int
    sequence: str

    def to_gfa_line(self) -> str:
        """
        Convert to GFA S-line format.

        Format: S <id> <sequence>

        An empty label is written as '*'.
        """
        return f"S\t{self.node_id}\t{self.sequence or '*'}"


@dataclass
class GFALink:
    """Represents a GFA L-line (link/edge)."""
    from_id: int
    from_orient: str  # '+' or '-'
    to_id: int
    to_orient: str    # '+' or '-'
    overlap: str      # Overlap string (e.g., '0M' for exact adjacency)

    def to_gfa_line(self) -> str:
        """
        Convert to GFA L-line format.

        Format: L <from> <from_orient> <to> <to_orient> <overlap>
        """
        return f"L\t{self.from_id}\t{self.from_orient}\t{self.to_id}\t{self.to_orient}\t{self.overlap}"


@dataclass
class GFAPath:
    """Represents a GFA P-line (named path)."""
    name: str
    steps: list[PathStep]

    def to_gfa_line(self) -> str:
        """
        Convert to GFA P-line format.

        Format: P <name> <id+,id-,...> <overlaps>
        """
        walk = ','.join(step.to_gfa() for step in self.steps)
        return f"P\t{self.name}\t{walk or '*'}\t*"


def _parse_orient(orient: str, line_no: int) -> bool:
    """Return True for a reverse orientation."""
    if orient == '+':
        return False
    if orient == '-':
        return True
    raise ValueError(f"GFA line {line_no}: invalid orientation '{orient}'")


def _parse_node_id(name: str, line_no: int) -> int:
    try:
        return int(name)
    except ValueError as e:
        raise ValueError(
            f"GFA line {line_no}: segment name '{name}' is not an integer node id"
        ) from e


def _parse_path_steps(walk: str, line_no: int) -> list[PathStep]:
    """Parse a P-line segment list such as ``1+,2-,3+``."""
    if walk == '*':
        return []
    steps = []
    for token in walk.split(','):
        if len(token) < 2:
            raise ValueError(f"GFA line {line_no}: malformed path step '{token}'")
        steps.append(PathStep(
            node_id=_parse_node_id(token[:-1], line_no),
            is_reverse=_parse_orient(token[-1], line_no),
        ))
    return steps


# ============================================================================
#                           GFA READER (Graph Import)
# ============================================================================

def read_gfa(handle: TextIO) -> VariationGraph:
    """
    Build a VariationGraph from an open GFA v1 stream.

    Raises:
        ValueError: On non-integer segment names or bad orientations
    """
    graph = VariationGraph()

    for line_no, raw_line in enumerate(handle, 1):
        line = raw_line.rstrip('\n').rstrip('\r')
        if not line or line.startswith('#'):
            continue

        parts = line.split('\t')
        record_type = parts[0]

        if record_type == 'H':
            # Header line
            continue

        elif record_type == 'S':
            # Segment: S <id> <sequence> [tags]
            if len(parts) < 3:
                logger.warning(f"GFA line {line_no}: malformed S-line, skipping")
                continue
            sequence = parts[2] if parts[2] != '*' else ''
            graph.add_node(GraphNode(id=_parse_node_id(parts[1], line_no), seq=sequence))

        elif record_type == 'L':
            # Link: L <from> <from_orient> <to> <to_orient> <overlap>
            if len(parts) < 5:
                logger.warning(f"GFA line {line_no}: malformed L-line, skipping")
                continue
            graph.add_edge(
                from_id=_parse_node_id(parts[1], line_no),
                to_id=_parse_node_id(parts[3], line_no),
                from_rev=_parse_orient(parts[2], line_no),
                to_rev=_parse_orient(parts[4], line_no),
                overlap=parts[5] if len(parts) > 5 else '0M',
            )

        elif record_type == 'P':
            # Path: P <name> <steps> [overlaps]
            if len(parts) < 3:
                logger.warning(f"GFA line {line_no}: malformed P-line, skipping")
                continue
            if graph.has_path(parts[1]):
                logger.warning(f"GFA line {line_no}: duplicate path {parts[1]} replaces earlier one")
            graph.add_path(parts[1], _parse_path_steps(parts[2], line_no))

        # W, C, J and other record types ignored

    return graph


def load_graph_from_gfa(gfa_path: str | Path) -> VariationGraph:
    """
    Load a variation graph from a GFA v1 file.

    Args:
        gfa_path: Path to a GFA v1 file with integer segment names

    Returns:
        A VariationGraph with nodes, edges and paths.

    Raises:
        FileNotFoundError: If gfa_path does not exist.
        ValueError: On malformed GFA lines.
    """
    gfa_path = Path(gfa_path)
    if not gfa_path.exists():
        raise FileNotFoundError(f"GFA file not found: {gfa_path}")

    logger.info(f"Loading graph from GFA: {gfa_path}")

    with open(gfa_path, 'r') as f:
        graph = read_gfa(f)

    logger.info(
        f"Loaded graph: {graph.node_count()} nodes, {graph.edge_count()} edges, "
        f"{graph.path_count()} paths"
    )
    return graph


# ============================================================================
#                       GFA EXPORT FUNCTIONS
# ============================================================================

def write_gfa(graph: VariationGraph, handle: IO[str]) -> dict[str, int]:
    """
    Write a graph as GFA v1 to an open stream.

    Segments are written in ascending id order and paths by name. Links
    whose endpoints are missing from the graph are skipped with a warning.

    Returns:
        Counts of written segments, links and paths
    """
    counts = {'segments': 0, 'links': 0, 'paths': 0}

    handle.write("H\tVN:Z:1.0\n")

    for node_id in sorted(graph.nodes):
        handle.write(GFASegment(node_id, graph.get_node_sequence(node_id)).to_gfa_line() + "\n")
        counts['segments'] += 1

    for edge_id in sorted(graph.edges):
        edge = graph.edges[edge_id]
        if not graph.has_node(edge.from_id) or not graph.has_node(edge.to_id):
            logger.warning(f"Edge {edge_id} references unknown nodes: {edge.from_id} -> {edge.to_id}")
            continue
        link = GFALink(
            from_id=edge.from_id,
            from_orient='-' if edge.from_rev else '+',
            to_id=edge.to_id,
            to_orient='-' if edge.to_rev else '+',
            overlap=edge.overlap,
        )
        handle.write(link.to_gfa_line() + "\n")
        counts['links'] += 1

    for name in sorted(graph.path_names()):
        handle.write(GFAPath(name, graph.get_path(name)).to_gfa_line() + "\n")
        counts['paths'] += 1

    return counts


def export_graph_to_gfa(graph: VariationGraph, output_path: str | Path) -> dict[str, int]:
    """
    Export a variation graph to a GFA v1 file.

    Args:
        graph: Graph to write
        output_path: Path to output GFA file
    """
    output_path = Path(output_path)
    logger.info(f"Exporting graph to GFA: {output_path}")

    with open(output_path, 'w') as f:
        counts = write_gfa(graph, f)

    logger.info(f"GFA export complete: {output_path}")
    logger.info(f"  Segments: {counts['segments']}")
    logger.info(f"  Links: {counts['links']}")
    logger.info(f"  Paths: {counts['paths']}")
    return counts


# ============================================================================
#                           UTILITY FUNCTIONS
# ============================================================================

def validate_gfa_file(gfa_path: str | Path) -> dict[str, int]:
    """
    Validate a GFA file and return basic statistics.

    Args:
        gfa_path: Path to GFA file

    Returns:
        Dict with keys: 'segments', 'links', 'paths', 'version'
    """
    gfa_path = Path(gfa_path)
    stats = {
        'segments': 0,
        'links': 0,
        'paths': 0,
        'version': None
    }

    with open(gfa_path, 'r') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue

            if line.startswith('H'):
                # Header line
                if 'VN:Z:' in line:
                    stats['version'] = line.split('VN:Z:')[1].split()[0]
            elif line.startswith('S'):
                stats['segments'] += 1
            elif line.startswith('L'):
                stats['links'] += 1
            elif line.startswith('P'):
                stats['paths'] += 1

    return stats


# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
