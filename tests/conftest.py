#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
VariaWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import pytest
from pathlib import Path
import tempfile
import shutil

from variaweaver.graph_core.data_structures import GraphNode, PathStep, VariationGraph
from variaweaver.io_utils.vcf_source import RecordListSource, VariantRecord


SAMPLE = "SAMPLE1"


# Two biallelic SNPs between three flanking nodes:
#
#        ┌─ 2 (A, v1 ref) ─┐       ┌─ 5 (C, v2 ref) ─┐
#   1 ───┤                 ├── 4 ──┤                 ├── 7
#        └─ 3 (G, v1 alt) ─┘       └─ 6 (T, v2 alt) ─┘
#
# Path "ref" walks 1,2,4,5,7; each allele path covers its single node.
ALLELE_GRAPH_GFA = """H\tVN:Z:1.0
S\t1\tACGT
S\t2\tA
S\t3\tG
S\t4\tTTGA
S\t5\tC
S\t6\tT
S\t7\tCCAA
L\t1\t+\t2\t+\t0M
L\t1\t+\t3\t+\t0M
L\t2\t+\t4\t+\t0M
L\t3\t+\t4\t+\t0M
L\t4\t+\t5\t+\t0M
L\t4\t+\t6\t+\t0M
L\t5\t+\t7\t+\t0M
L\t6\t+\t7\t+\t0M
P\tref\t1+,2+,4+,5+,7+\t*
P\t_alt_v1_0\t2+\t*
P\t_alt_v1_1\t3+\t*
P\t_alt_v2_0\t5+\t*
P\t_alt_v2_1\t6+\t*
"""

SINGLE_SAMPLE_VCF = """##fileformat=VCFv4.2
##contig=<ID=chr1,length=100>
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE1
chr1\t5\tv1\tA\tG\t.\t.\t.\tGT\t1|1
chr1\t10\tv2\tC\tT\t.\t.\t.\tGT\t0/0
"""

MULTI_SAMPLE_VCF = """##fileformat=VCFv4.2
##contig=<ID=chr1,length=100>
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE1\tSAMPLE2
chr1\t5\tv1\tA\tG\t.\t.\t.\tGT\t1|1\t0|0
chr1\t10\tv2\tC\tT\t.\t.\t.\tGT\t0/0\t./1
"""


def build_allele_graph() -> VariationGraph:
    """Construct the graph of ALLELE_GRAPH_GFA directly."""
    g = VariationGraph()
    for nid, seq in [(1, "ACGT"), (2, "A"), (3, "G"), (4, "TTGA"),
                     (5, "C"), (6, "T"), (7, "CCAA")]:
        g.add_node(GraphNode(id=nid, seq=seq))

    for src, tgt in [(1, 2), (1, 3), (2, 4), (3, 4), (4, 5), (4, 6), (5, 7), (6, 7)]:
        g.add_edge(src, tgt)

    g.add_path("ref", [PathStep(n) for n in (1, 2, 4, 5, 7)])
    g.add_path("_alt_v1_0", [PathStep(2)])
    g.add_path("_alt_v1_1", [PathStep(3)])
    g.add_path("_alt_v2_0", [PathStep(5)])
    g.add_path("_alt_v2_1", [PathStep(6)])
    return g


def make_record(variant_id, genotype, pos=5, ref="A", alts=("G",), sample=SAMPLE):
    """Variant record with an explicit id and one sample's genotype."""
    return VariantRecord(
        chrom="chr1",
        pos=pos,
        ref=ref,
        alts=list(alts),
        id=variant_id,
        genotypes={sample: genotype},
    )


def make_source(*records, samples=(SAMPLE,)):
    return RecordListSource(list(samples), list(records))


@pytest.fixture
def allele_graph():
    """Fresh copy of the two-SNP allele graph."""
    return build_allele_graph()


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="variaweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def allele_graph_gfa(temp_output_dir):
    path = temp_output_dir / "graph.gfa"
    path.write_text(ALLELE_GRAPH_GFA)
    return path


@pytest.fixture
def single_sample_vcf(temp_output_dir):
    path = temp_output_dir / "calls.vcf"
    path.write_text(SINGLE_SAMPLE_VCF)
    return path


@pytest.fixture
def multi_sample_vcf(temp_output_dir):
    path = temp_output_dir / "cohort.vcf"
    path.write_text(MULTI_SAMPLE_VCF)
    return path


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Drop handlers the CLI installs so later tests do not log to closed streams."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

# VariaWeaver v0.1.0
# Any usage is subject to this software's license.
