#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Tests for sample graph extraction.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from variaweaver.graph_core.data_structures import GraphNode, PathStep, VariationGraph
from variaweaver.sample_graph import (
    CascadePruner,
    ConfigurationError,
    ConsistencyError,
    MalformedGenotypeError,
    extract_sample_graph,
)

from conftest import SAMPLE, build_allele_graph, make_record, make_source


def _snapshot(graph):
    """Comparable view of a graph's nodes, edges and paths."""
    return (
        {nid: node.seq for nid, node in graph.nodes.items()},
        sorted(edge.side_key() for edge in graph.edges.values()),
        {name: list(steps) for name, steps in graph.paths.items()},
    )


def _v1(genotype):
    return make_record("v1", genotype, pos=5, ref="A", alts=("G",))


def _v2(genotype):
    return make_record("v2", genotype, pos=10, ref="C", alts=("T",))


# ============================================================================
# Reference-only genotypes
# ============================================================================

class TestReferenceOnly:
    def test_alternate_nodes_removed(self, allele_graph):
        result = extract_sample_graph(allele_graph, make_source(_v1("0/0"), _v2("0|0")))

        assert set(allele_graph.nodes) == {1, 2, 4, 5, 7}
        assert result.removed_nodes == [3, 6]

    def test_reference_path_intact(self, allele_graph):
        before = list(allele_graph.get_path("ref"))
        extract_sample_graph(allele_graph, make_source(_v1("0/0"), _v2("0/0")))

        assert allele_graph.path_names() == ["ref"]
        assert allele_graph.get_path("ref") == before
        assert allele_graph.path_sequence("ref") == "ACGTATTGACCCAA"

    def test_edges_of_pruned_nodes_removed(self, allele_graph):
        extract_sample_graph(allele_graph, make_source(_v1("0/0"), _v2("0/0")))

        assert allele_graph.edge_count() == 4
        for edge in allele_graph.edges.values():
            assert allele_graph.has_node(edge.from_id)
            assert allele_graph.has_node(edge.to_id)

    def test_result_counts(self, allele_graph):
        result = extract_sample_graph(allele_graph, make_source(_v1("0/0"), _v2("0/0")))

        assert result.sample == SAMPLE
        assert result.records_seen == 2
        assert result.records_skipped == 0
        assert result.records_used == 2
        assert result.variants_resolved == 2
        assert result.candidate_nodes == 2
        assert sorted(result.removed_paths) == ["_alt_v1_1", "_alt_v2_1"]
        assert sorted(result.swept_allele_paths) == ["_alt_v1_0", "_alt_v2_0"]
        assert result.to_dict()['nodes_removed'] == 2
        assert result.to_dict()['records_used'] == 2


# ============================================================================
# Idempotence
# ============================================================================

class TestIdempotence:
    def test_second_run_without_variants_is_noop(self, allele_graph):
        extract_sample_graph(allele_graph, make_source(_v1("1/1"), _v2("0/1")))
        after_first = _snapshot(allele_graph)

        result = extract_sample_graph(allele_graph, make_source())

        assert _snapshot(allele_graph) == after_first
        assert result.removed_nodes == []
        assert result.removed_paths == []


# ============================================================================
# Genotype semantics
# ============================================================================

class TestGenotypeSemantics:
    def test_all_alleles_called_keeps_variant_nodes(self, allele_graph):
        extract_sample_graph(allele_graph, make_source(_v1("0/1"), _v2("0/0")))

        assert allele_graph.has_node(2)
        assert allele_graph.has_node(3)

    def test_missing_call_same_as_reference(self, allele_graph):
        explicit = build_allele_graph()
        extract_sample_graph(explicit, make_source(_v1("0/0"), _v2("0|1")))
        extract_sample_graph(allele_graph, make_source(_v1("./."), _v2(".|1")))

        assert _snapshot(allele_graph) == _snapshot(explicit)

    def test_phasing_ignored(self, allele_graph):
        unphased = build_allele_graph()
        extract_sample_graph(unphased, make_source(_v1("0/1"), _v2("0/0")))
        extract_sample_graph(allele_graph, make_source(_v1("1|0"), _v2("0|0")))

        assert _snapshot(allele_graph) == _snapshot(unphased)

    def test_haploid_call(self, allele_graph):
        extract_sample_graph(allele_graph, make_source(_v1("1"), _v2("0")))

        assert set(allele_graph.nodes) == {1, 3, 4, 5, 7}
        # "ref" walks node 2, which is gone
        assert not allele_graph.has_path("ref")

    def test_uncalled_variant_loses_all_allele_nodes(self, allele_graph):
        extract_sample_graph(allele_graph, make_source(_v1("0/0")))

        assert not allele_graph.has_node(5)
        assert not allele_graph.has_node(6)

    def test_allele_without_path_releases_nothing(self, allele_graph):
        record = make_record("v1", "2/2", ref="A", alts=("G", "T"))
        extract_sample_graph(allele_graph, make_source(record, _v2("0/0")))

        assert not allele_graph.has_node(2)
        assert not allele_graph.has_node(3)

    def test_repeated_variant_accumulates_alleles(self, allele_graph):
        extract_sample_graph(allele_graph, make_source(_v1("0/0"), _v1("1/1"), _v2("0/0")))

        assert allele_graph.has_node(2)
        assert allele_graph.has_node(3)


# ============================================================================
# Cross-path deletion
# ============================================================================

class TestCrossPathDeletion:
    def test_ordinary_path_through_pruned_node_removed_whole(self, allele_graph):
        # Three-node haplotype path: ordinary node, allele-only node, ordinary node
        allele_graph.add_path("hap1", [PathStep(1), PathStep(3), PathStep(4)])

        result = extract_sample_graph(allele_graph, make_source(_v1("0/0"), _v2("0/0")))

        assert not allele_graph.has_path("hap1")
        assert "hap1" in result.removed_paths
        assert allele_graph.has_node(1)
        assert allele_graph.has_node(4)
        assert allele_graph.paths_of_node(1) == ["ref"]

    def test_shared_path_removed_once(self):
        g = VariationGraph()
        for nid in (1, 2, 3):
            g.add_node(GraphNode(id=nid, seq="A"))
        g.add_path("shared", [PathStep(1), PathStep(2), PathStep(3)])

        result = CascadePruner(g).prune([3, 1])

        assert result.removed_nodes == [1, 3]
        assert result.removed_paths == ["shared"]
        assert set(g.nodes) == {2}

    def test_missing_candidate_node_recorded(self):
        g = VariationGraph()
        g.add_node(GraphNode(id=1, seq="A"))
        g.add_path("dangling", [PathStep(1), PathStep(99)])

        result = CascadePruner(g).prune([99])

        assert result.absent_nodes == [99]
        assert result.removed_paths == ["dangling"]
        assert g.has_node(1)


# ============================================================================
# Concrete scenario: shared flank node
# ============================================================================

class TestSharedNodeScenario:
    @pytest.fixture
    def shared_graph(self):
        g = VariationGraph()
        for nid, seq in [(1, "AC"), (2, "G"), (3, "T")]:
            g.add_node(GraphNode(id=nid, seq=seq))
        g.add_edge(1, 2)
        g.add_edge(1, 3)
        g.add_path("_alt_v1_0", [PathStep(1), PathStep(2)])
        g.add_path("_alt_v1_1", [PathStep(1), PathStep(3)])
        return g

    def test_homozygous_alt(self, shared_graph):
        result = extract_sample_graph(
            shared_graph, make_source(make_record("v1", "1/1", ref="ACG", alts=("ACT",)))
        )

        assert shared_graph.has_node(3)
        assert not shared_graph.has_node(2)
        assert shared_graph.has_node(1)
        assert shared_graph.path_names() == []
        assert result.removed_paths == ["_alt_v1_0"]
        assert result.swept_allele_paths == ["_alt_v1_1"]

    def test_keep_allele_paths(self, shared_graph):
        extract_sample_graph(
            shared_graph,
            make_source(make_record("v1", "1/1", ref="ACG", alts=("ACT",))),
            drop_allele_paths=False,
        )

        assert shared_graph.path_names() == ["_alt_v1_1"]

    def test_ordinary_path_on_shared_node_survives(self, shared_graph):
        shared_graph.add_path("flank", [PathStep(1)])
        extract_sample_graph(
            shared_graph, make_source(make_record("v1", "1/1", ref="ACG", alts=("ACT",)))
        )

        assert shared_graph.has_path("flank")


# ============================================================================
# Failures leave the graph untouched
# ============================================================================

class TestFailures:
    def test_unknown_variant_raises_consistency_error(self, allele_graph):
        before = _snapshot(allele_graph)
        source = make_source(_v1("0/0"), make_record("v9", "0/1", pos=40))

        with pytest.raises(ConsistencyError) as excinfo:
            extract_sample_graph(allele_graph, source)

        assert excinfo.value.variant_id == "v9"
        assert allele_graph.node_count() == 7
        assert allele_graph.path_count() == 5
        assert _snapshot(allele_graph) == before

    def test_missing_reference_path_raises(self, allele_graph):
        allele_graph.remove_path("_alt_v2_0")

        with pytest.raises(ConsistencyError):
            extract_sample_graph(allele_graph, make_source(_v1("0/0"), _v2("0/1")))

        assert allele_graph.node_count() == 7

    def test_malformed_genotype(self, allele_graph):
        before = _snapshot(allele_graph)

        with pytest.raises(MalformedGenotypeError) as excinfo:
            extract_sample_graph(allele_graph, make_source(_v1("0/0"), _v2("0/x")))

        assert excinfo.value.token == "x"
        assert excinfo.value.variant_id == "v2"
        assert _snapshot(allele_graph) == before

    def test_multi_sample_without_selection(self, allele_graph):
        source = make_source(_v1("0/0"), samples=(SAMPLE, "SAMPLE2"))

        with pytest.raises(ConfigurationError):
            extract_sample_graph(allele_graph, source)

        assert allele_graph.node_count() == 7

    def test_multi_sample_with_selection(self, allele_graph):
        records = [
            make_record("v1", "1/1", sample="SAMPLE2"),
            make_record("v2", "0/0", pos=10, ref="C", alts=("T",), sample="SAMPLE2"),
        ]
        source = make_source(*records, samples=(SAMPLE, "SAMPLE2"))

        result = extract_sample_graph(allele_graph, source, sample="SAMPLE2")

        assert result.sample == "SAMPLE2"
        assert set(allele_graph.nodes) == {1, 3, 4, 5, 7}

    def test_unknown_sample(self, allele_graph):
        with pytest.raises(ConfigurationError):
            extract_sample_graph(allele_graph, make_source(_v1("0/0")), sample="NOBODY")


# ============================================================================
# Record filtering
# ============================================================================

class TestRecordFiltering:
    def test_non_acgt_record_skipped(self, allele_graph):
        # Not in the graph, but skipped before the id is looked up
        symbolic = make_record("v9", "1/1", pos=40, ref="A", alts=("<DEL>",))
        ambiguous = make_record("v8", "1/1", pos=50, ref="N", alts=("A",))

        result = extract_sample_graph(
            allele_graph, make_source(symbolic, ambiguous, _v1("0/0"), _v2("0/0"))
        )

        assert result.records_seen == 4
        assert result.records_skipped == 2
        assert result.records_used == 2
        assert result.variants_resolved == 2

    def test_monomorphic_record_skipped(self, allele_graph):
        site = make_record("v9", "0/0", pos=40, ref="A", alts=())

        result = extract_sample_graph(allele_graph, make_source(site, _v1("0/0"), _v2("0/0")))

        assert result.records_skipped == 1

    def test_non_acgt_kept_when_filter_disabled(self, allele_graph):
        symbolic = make_record("v9", "1/1", pos=40, ref="A", alts=("<DEL>",))

        with pytest.raises(ConsistencyError):
            extract_sample_graph(allele_graph, make_source(symbolic), skip_non_acgt=False)

# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
